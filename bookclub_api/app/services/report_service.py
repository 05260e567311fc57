"""
Business logic for book reports.

A report row and all of its answer rows are written in one
transaction, so a failing answer never leaves an orphaned report.
Reads go through the ``book_reports_json`` view, which folds the
answers of each report into a JSON array.
"""

import json
import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_cursor
from ..core.exceptions import ValidationError
from ..schemas.report import BookReportCreate, BookReportRead


logger = logging.getLogger(__name__)


class ReportService:
    """Submission and listing of book reports."""

    @classmethod
    def _row_to_report(cls, row: sqlite3.Row) -> BookReportRead:
        data = dict(row)
        data["answers"] = json.loads(data["answers"] or "[]")
        return BookReportRead.model_validate(data)

    @classmethod
    def list_reports(
        cls,
        conn: sqlite3.Connection,
        book_id: Optional[int] = None,
        member_id: Optional[int] = None,
    ) -> List[BookReportRead]:
        """List reports, optionally filtered by book and/or member."""
        clauses = []
        params = []
        if book_id is not None:
            clauses.append("book_id = ?")
            params.append(book_id)
        if member_id is not None:
            clauses.append("member_id = ?")
            params.append(member_id)
        sql = "SELECT id, book_id, member_id, created_at, answers FROM book_reports_json"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY id"
        with get_cursor(conn) as cursor:
            rows = cursor.execute(sql, tuple(params)).fetchall()
        return [cls._row_to_report(row) for row in rows]

    @classmethod
    def submit_report(cls, conn: sqlite3.Connection, data: BookReportCreate) -> int:
        """Store a report and its answers; return the new report id."""
        if data.book_id is None or data.member_id is None:
            raise ValidationError("bookId and memberId are required")
        with get_cursor(conn) as cursor:
            cursor.execute(
                "INSERT INTO book_reports (book_id, member_id) VALUES (?, ?)",
                (data.book_id, data.member_id),
            )
            report_id = cursor.lastrowid
            cursor.executemany(
                "INSERT INTO book_report_answers (report_id, question, answer) VALUES (?, ?, ?)",
                [(report_id, a.question, a.answer) for a in data.answers],
            )
        logger.info(
            "Member %s saved report %s on book %s with %d answers",
            data.member_id, report_id, data.book_id, len(data.answers),
        )
        return report_id
