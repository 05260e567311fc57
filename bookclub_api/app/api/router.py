"""
Top-level API router.

This router aggregates the domain routers.  Paths are not versioned
because the existing frontend calls them at the root.
"""

from fastapi import APIRouter

from .endpoints import auth, book_reports, books, catalog, members, reading


router = APIRouter()

router.include_router(auth.router, prefix="/api/auth", tags=["auth"])
router.include_router(members.router, tags=["members"])
router.include_router(books.router, tags=["books"])
router.include_router(reading.router, tags=["reading"])
router.include_router(book_reports.router, prefix="/book_reports", tags=["book_reports"])
# Catalog routes live under /api/books, the local library under /books.
router.include_router(catalog.router, prefix="/api/books", tags=["catalog"])
