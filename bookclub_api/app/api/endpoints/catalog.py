"""
Open Library proxy endpoints.

These routes are ``async`` because they only wait on outbound HTTP;
author records for a work are fetched concurrently.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from bookclub_api.app.schemas.catalog import CatalogSearchResult
from bookclub_api.app.services.catalog_service import CatalogGateway, get_catalog_gateway


router = APIRouter()


@router.get("/works/{work_id}/editions.json")
async def get_editions(
    work_id: str,
    gateway: CatalogGateway = Depends(get_catalog_gateway),
) -> Any:
    return await gateway.get_editions(work_id)


@router.get("/works/{work_id}", response_model=Dict[str, Any])
async def get_work(
    work_id: str,
    gateway: CatalogGateway = Depends(get_catalog_gateway),
) -> Dict[str, Any]:
    """Work detail with a ``fullAuthors`` list of author records."""
    return await gateway.get_work_detail(work_id)


@router.get("", response_model=List[CatalogSearchResult])
async def search_books(
    search: Optional[str] = Query(None, description="Free-text query"),
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    gateway: CatalogGateway = Depends(get_catalog_gateway),
) -> List[CatalogSearchResult]:
    """Search the catalog; at least one of the three terms is required."""
    return await gateway.search(search=search, title=title, author=author)
