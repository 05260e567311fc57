"""
Pydantic schemas for book reports.

A report is a questionnaire a member fills in about a book.  Each
question/answer pair is stored as its own row owned by the report.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import CAMEL_CONFIG


class ReportAnswer(BaseModel):
    question: str
    answer: Optional[str] = None


class BookReportCreate(BaseModel):
    """Schema for submitting a report."""

    model_config = CAMEL_CONFIG

    book_id: Optional[int] = None
    member_id: Optional[int] = None
    answers: List[ReportAnswer] = Field(default_factory=list)


class BookReportRead(BaseModel):
    """A report as exposed by the ``book_reports_json`` view."""

    id: int
    book_id: int
    member_id: int
    created_at: Optional[str] = None
    answers: List[ReportAnswer] = Field(default_factory=list)


class ReportSaved(BaseModel):
    model_config = CAMEL_CONFIG

    message: str = "Report saved"
    report_id: int
