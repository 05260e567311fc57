"""Tests for connection handling, transactions and migrations."""
from __future__ import annotations

import pytest

from bookclub_api.app.core.db import MIGRATIONS, get_connection, get_cursor, init_db
from bookclub_api.app.core.exceptions import StorageError


def test_init_db_applies_every_migration_once(app_settings):
    init_db(app_settings.database_url)
    init_db(app_settings.database_url)

    conn = get_connection(app_settings.database_url)
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type IN ('table', 'view')")
        }
    finally:
        conn.close()

    assert versions == [version for version, _ in MIGRATIONS]
    assert {
        "members",
        "books",
        "member_books",
        "member_books_history",
        "book_reports",
        "book_report_answers",
        "book_reports_json",
    } <= tables


def test_get_cursor_commits_on_success(conn):
    with get_cursor(conn) as cursor:
        cursor.execute("INSERT INTO books (title) VALUES (?)", ("Persuasion",))

    assert conn.execute("SELECT COUNT(*) FROM books").fetchone()[0] == 1


def test_get_cursor_rolls_back_and_wraps_sqlite_errors(conn):
    with pytest.raises(StorageError):
        with get_cursor(conn) as cursor:
            cursor.execute("INSERT INTO books (title) VALUES (?)", ("Emma",))
            cursor.execute("INSERT INTO books (title) VALUES (NULL)")

    assert conn.execute("SELECT COUNT(*) FROM books").fetchone()[0] == 0


def test_get_cursor_rolls_back_on_other_exceptions(conn):
    with pytest.raises(RuntimeError):
        with get_cursor(conn) as cursor:
            cursor.execute("INSERT INTO books (title) VALUES (?)", ("Emma",))
            raise RuntimeError("stop")

    assert conn.execute("SELECT COUNT(*) FROM books").fetchone()[0] == 0


def test_member_firebase_uid_is_unique(conn):
    conn.execute("INSERT INTO members (name, firebaseUid) VALUES ('a', 'uid-1')")
    conn.commit()
    with pytest.raises(StorageError):
        with get_cursor(conn) as cursor:
            cursor.execute("INSERT INTO members (name, firebaseUid) VALUES ('b', 'uid-1')")


def test_report_view_has_empty_answers_for_bare_report(conn):
    conn.execute("INSERT INTO members (name) VALUES ('Reader')")
    conn.execute("INSERT INTO books (title) VALUES ('Dune')")
    conn.execute("INSERT INTO book_reports (book_id, member_id) VALUES (1, 1)")
    conn.commit()

    row = conn.execute("SELECT answers FROM book_reports_json WHERE id = 1").fetchone()
    assert row["answers"] == "[]"
