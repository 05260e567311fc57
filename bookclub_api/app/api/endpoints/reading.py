"""
Reading list endpoints.

All ``GET`` routes take the member's local id.  ``POST /member_books``
starts a book and ``POST /move-to-read`` moves it to the member's
history.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends

from bookclub_api.app.core.db import get_db
from bookclub_api.app.schemas.book import BookRead
from bookclub_api.app.schemas.common import SuccessResponse
from bookclub_api.app.schemas.reading import MoveToRead, StartReading
from bookclub_api.app.services.reading_service import ReadingService


router = APIRouter()


@router.get("/member_books/{member_id}", response_model=List[BookRead])
def currently_reading(member_id: int, conn: sqlite3.Connection = Depends(get_db)) -> List[BookRead]:
    return ReadingService.currently_reading(conn, member_id)


@router.get("/member_books_history/{member_id}", response_model=List[BookRead])
def reading_history(member_id: int, conn: sqlite3.Connection = Depends(get_db)) -> List[BookRead]:
    return ReadingService.history(conn, member_id)


@router.get("/member_reported_books/{member_id}", response_model=List[BookRead])
def reported_books(member_id: int, conn: sqlite3.Connection = Depends(get_db)) -> List[BookRead]:
    return ReadingService.reported_books(conn, member_id)


@router.post("/member_books", response_model=SuccessResponse)
def start_reading(data: StartReading, conn: sqlite3.Connection = Depends(get_db)) -> SuccessResponse:
    ReadingService.start_reading(conn, data.book_id, data.member_uid)
    return SuccessResponse()


@router.post("/move-to-read", response_model=SuccessResponse)
def move_to_read(data: MoveToRead, conn: sqlite3.Connection = Depends(get_db)) -> SuccessResponse:
    ReadingService.move_to_history(conn, data.book_id, data.member_id)
    return SuccessResponse()
