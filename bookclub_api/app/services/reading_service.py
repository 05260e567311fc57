"""
Business logic for a member's reading lists.

A member's *currently reading* list lives in ``member_books``; books
they finished move to ``member_books_history``.  A history row exists
at most once per (book, member) pair.  Both moves between the lists
run as a single transaction.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_cursor
from ..core.exceptions import ValidationError
from ..schemas.book import BookRead


logger = logging.getLogger(__name__)


def _require_pair(book_id: Optional[int], member_id: Optional[int]) -> None:
    if book_id is None or member_id is None:
        raise ValidationError("bookId and memberId are required")


class ReadingService:
    """Currently-reading, history and reported-books lists."""

    @classmethod
    def _books_for_member(cls, conn: sqlite3.Connection, sql: str, member_id: int) -> List[BookRead]:
        with get_cursor(conn) as cursor:
            rows = cursor.execute(sql, (member_id,)).fetchall()
        return [BookRead.model_validate(dict(row)) for row in rows]

    @classmethod
    def currently_reading(cls, conn: sqlite3.Connection, member_id: int) -> List[BookRead]:
        return cls._books_for_member(
            conn,
            "SELECT b.* FROM books b INNER JOIN member_books mb ON b.id = mb.book_id "
            "WHERE mb.member_id = ? ORDER BY mb.id",
            member_id,
        )

    @classmethod
    def history(cls, conn: sqlite3.Connection, member_id: int) -> List[BookRead]:
        return cls._books_for_member(
            conn,
            "SELECT b.* FROM books b INNER JOIN member_books_history mbh ON b.id = mbh.book_id "
            "WHERE mbh.member_id = ? ORDER BY mbh.id",
            member_id,
        )

    @classmethod
    def reported_books(cls, conn: sqlite3.Connection, member_id: int) -> List[BookRead]:
        """Books the member has filed reports on, once per report."""
        return cls._books_for_member(
            conn,
            "SELECT b.* FROM books b INNER JOIN book_reports br ON b.id = br.book_id "
            "WHERE br.member_id = ? ORDER BY br.id",
            member_id,
        )

    @classmethod
    def start_reading(cls, conn: sqlite3.Connection, book_id: int, member_id: int) -> None:
        """Put a book on the member's currently-reading list.

        Re-reading a finished book clears its history row in the same
        transaction.
        """
        _require_pair(book_id, member_id)
        with get_cursor(conn) as cursor:
            cursor.execute(
                "DELETE FROM member_books_history WHERE book_id = ? AND member_id = ?",
                (book_id, member_id),
            )
            cursor.execute(
                "INSERT INTO member_books (book_id, member_id) VALUES (?, ?)",
                (book_id, member_id),
            )
        logger.info("Member %s started reading book %s", member_id, book_id)

    @classmethod
    def move_to_history(cls, conn: sqlite3.Connection, book_id: int, member_id: int) -> None:
        """Move a book from currently-reading to history.

        The copy ignores pairs already in history and the delete removes
        every matching currently-reading row; either both apply or
        neither does.  A pair that is not currently being read is a
        no-op.
        """
        _require_pair(book_id, member_id)
        with get_cursor(conn) as cursor:
            cursor.execute(
                """
                INSERT OR IGNORE INTO member_books_history (book_id, member_id)
                SELECT book_id, member_id
                FROM member_books
                WHERE book_id = ? AND member_id = ?
                """,
                (book_id, member_id),
            )
            copied = cursor.rowcount
            cursor.execute(
                "DELETE FROM member_books WHERE book_id = ? AND member_id = ?",
                (book_id, member_id),
            )
            removed = cursor.rowcount
        logger.info(
            "Moved book %s to history for member %s (copied=%s, removed=%s)",
            book_id, member_id, copied, removed,
        )
