"""Endpoints for the local book library."""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends

from bookclub_api.app.core.db import get_db
from bookclub_api.app.schemas.book import BookCreate, BookRead
from bookclub_api.app.schemas.common import CreatedRow
from bookclub_api.app.services.book_service import BookService


router = APIRouter()


@router.get("/books", response_model=List[BookRead])
def list_books(conn: sqlite3.Connection = Depends(get_db)) -> List[BookRead]:
    return BookService.list_books(conn)


@router.get("/books/{book_id}", response_model=BookRead)
def get_book(book_id: int, conn: sqlite3.Connection = Depends(get_db)) -> BookRead:
    return BookService.get_book(conn, book_id)


@router.post("/books", response_model=CreatedRow)
def create_book(data: BookCreate, conn: sqlite3.Connection = Depends(get_db)) -> CreatedRow:
    return BookService.create_book(conn, data)
