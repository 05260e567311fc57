"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), scoping a unit of work (``get_cursor``),
applying migrations on application start (``init_db``) and the
``get_db`` dependency that hands each request its own connection.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .exceptions import StorageError


logger = logging.getLogger(__name__)


def get_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as given.  Relative paths are resolved
    against the package root.
    """
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # bookclub_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so they can be accessed by
    column name and converted with ``dict(row)``.  The connection may
    be used from FastAPI's worker threads, so the same-thread check is
    disabled; each request still owns its connection exclusively.
    """
    try:
        conn = sqlite3.connect(db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        # Foreign key support is off by default and must be enabled per connection.
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        logger.error("Could not open database %s: %s", db_path, exc)
        raise StorageError(str(exc)) from exc
    return conn


@contextmanager
def get_cursor(conn: sqlite3.Connection) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor for one atomic unit of work.

    Commits when the block exits normally and rolls back on any
    exception.  ``sqlite3.Error`` is re-raised as ``StorageError``.
    """
    cursor = conn.cursor()
    try:
        yield cursor
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        logger.error("Database error, transaction rolled back: %s", exc)
        raise StorageError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()


def get_db(request: Request) -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a connection for the current request."""
    conn = get_connection(get_database_path(request.app.state.settings.database_url))
    try:
        yield conn
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            firebaseUid TEXT UNIQUE,
            name TEXT NOT NULL,
            email TEXT,
            photoUrl TEXT,
            role TEXT,
            team TEXT,
            location TEXT,
            joinDate TEXT,
            status TEXT
        );

        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            olid TEXT,
            title TEXT NOT NULL,
            author TEXT,
            description TEXT,
            published TEXT,
            imageUrl TEXT,
            pages INTEGER,
            isbn TEXT
        );

        CREATE TABLE IF NOT EXISTS member_books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            book_id INTEGER NOT NULL,
            member_id INTEGER NOT NULL,
            FOREIGN KEY(book_id) REFERENCES books(id),
            FOREIGN KEY(member_id) REFERENCES members(id)
        );

        CREATE TABLE IF NOT EXISTS member_books_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            book_id INTEGER NOT NULL,
            member_id INTEGER NOT NULL,
            UNIQUE(book_id, member_id),
            FOREIGN KEY(book_id) REFERENCES books(id),
            FOREIGN KEY(member_id) REFERENCES members(id)
        );

        CREATE TABLE IF NOT EXISTS book_reports (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            book_id INTEGER NOT NULL,
            member_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(book_id) REFERENCES books(id),
            FOREIGN KEY(member_id) REFERENCES members(id)
        );

        CREATE TABLE IF NOT EXISTS book_report_answers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            report_id INTEGER NOT NULL,
            question TEXT NOT NULL,
            answer TEXT,
            FOREIGN KEY(report_id) REFERENCES book_reports(id)
        );
        """,
    ),
    # Migration 2: indices on member lookups and report answers
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_member_books_member_id ON member_books(member_id);
        CREATE INDEX IF NOT EXISTS idx_member_books_history_member_id ON member_books_history(member_id);
        CREATE INDEX IF NOT EXISTS idx_book_reports_member_id ON book_reports(member_id);
        CREATE INDEX IF NOT EXISTS idx_book_reports_book_id ON book_reports(book_id);
        CREATE INDEX IF NOT EXISTS idx_book_report_answers_report_id ON book_report_answers(report_id);
        """,
    ),
    # Migration 3: reports with their answers folded into a JSON array
    (
        3,
        """
        -- answers come back in insertion order; a report without answers gets '[]'.
        CREATE VIEW IF NOT EXISTS book_reports_json AS
        SELECT
            r.id AS id,
            r.book_id AS book_id,
            r.member_id AS member_id,
            r.created_at AS created_at,
            (
                SELECT json_group_array(json_object('question', a.question, 'answer', a.answer))
                FROM book_report_answers a
                WHERE a.report_id = r.id
            ) AS answers
        FROM book_reports r;
        """,
    ),
]


def init_db(db_path: str) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entry of
    ``MIGRATIONS``.  New migrations are appended with an incremented
    version number.
    """
    conn = get_connection(db_path)
    try:
        with get_cursor(conn) as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying migration %s", version)
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
    finally:
        conn.close()
