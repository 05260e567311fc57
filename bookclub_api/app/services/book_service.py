"""
Business logic for the local book library.

Books are created from the frontend (usually after picking a catalog
search result) and are never updated or deleted.
"""

import logging
import sqlite3
from typing import List

from ..core.db import get_cursor
from ..core.exceptions import NotFoundError, ValidationError
from ..schemas.book import BookCreate, BookRead
from ..schemas.common import CreatedRow


logger = logging.getLogger(__name__)

BOOK_COLUMNS = "id, olid, title, author, description, published, imageUrl, pages, isbn"


class BookService:
    """Queries and inserts on the ``books`` table."""

    @classmethod
    def list_books(cls, conn: sqlite3.Connection) -> List[BookRead]:
        with get_cursor(conn) as cursor:
            rows = cursor.execute(
                f"SELECT {BOOK_COLUMNS} FROM books ORDER BY id"
            ).fetchall()
        return [BookRead.model_validate(dict(row)) for row in rows]

    @classmethod
    def get_book(cls, conn: sqlite3.Connection, book_id: int) -> BookRead:
        with get_cursor(conn) as cursor:
            row = cursor.execute(
                f"SELECT {BOOK_COLUMNS} FROM books WHERE id = ?",
                (book_id,),
            ).fetchone()
        if not row:
            raise NotFoundError("Book not found")
        return BookRead.model_validate(dict(row))

    @classmethod
    def create_book(cls, conn: sqlite3.Connection, data: BookCreate) -> CreatedRow:
        """Insert a book.

        ``title`` must be present and non-empty; nothing is written
        otherwise.  Absent optional fields are stored as empty strings.
        """
        if not data.title:
            raise ValidationError("Missing Title")
        with get_cursor(conn) as cursor:
            cursor.execute(
                "INSERT INTO books (olid, title, author, description, published, imageUrl, pages, isbn) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    data.olid or "",
                    data.title,
                    data.author or "",
                    data.description or "",
                    data.published or "",
                    data.image_url or "",
                    data.pages or "",
                    data.isbn or "",
                ),
            )
            book_id = cursor.lastrowid
            changes = cursor.rowcount
        logger.info("Created book %s (%s)", book_id, data.title)
        return CreatedRow(id=book_id, changes=changes)
