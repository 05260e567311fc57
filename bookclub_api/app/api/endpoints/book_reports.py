"""
Book report endpoints.

``GET /book_reports/{book_id}`` filters by book; reports by member
live under ``/book_reports/member/{member_id}`` so the two lookups
never share a path.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from bookclub_api.app.core.db import get_db
from bookclub_api.app.schemas.report import BookReportCreate, BookReportRead, ReportSaved
from bookclub_api.app.services.report_service import ReportService


router = APIRouter()


@router.get("", response_model=List[BookReportRead])
def list_reports(conn: sqlite3.Connection = Depends(get_db)) -> List[BookReportRead]:
    return ReportService.list_reports(conn)


@router.get("/member/{member_id}", response_model=List[BookReportRead])
def list_reports_for_member(member_id: int, conn: sqlite3.Connection = Depends(get_db)) -> List[BookReportRead]:
    return ReportService.list_reports(conn, member_id=member_id)


@router.get("/{book_id}", response_model=List[BookReportRead])
def list_reports_for_book(book_id: int, conn: sqlite3.Connection = Depends(get_db)) -> List[BookReportRead]:
    return ReportService.list_reports(conn, book_id=book_id)


@router.post("", response_model=ReportSaved, status_code=status.HTTP_201_CREATED)
def submit_report(data: BookReportCreate, conn: sqlite3.Connection = Depends(get_db)) -> ReportSaved:
    """Save a report and all of its answers atomically."""
    report_id = ReportService.submit_report(conn, data)
    return ReportSaved(report_id=report_id)
