"""
Gateway to the Open Library catalog.

Three read-only operations are exposed to the frontend: work detail
(with every author's record inlined), a work's editions, and a
search reshaped into small result cards.  All calls are GETs with a
bounded timeout; transport errors and 5xx responses are retried once
after a short backoff.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from fastapi import Request

from ..core.config import Settings
from ..core.exceptions import UpstreamError, ValidationError
from ..schemas.catalog import CatalogSearchResult


logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 20


class CatalogGateway:
    """Open Library client producing this service's record shapes."""

    def __init__(
        self,
        app_settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = app_settings.open_library_url.rstrip("/")
        self.covers_url = app_settings.covers_url.rstrip("/")
        self.timeout = app_settings.http_timeout
        self.retries = app_settings.http_retries
        self.backoff = app_settings.http_retry_backoff
        # Tests pass an httpx.MockTransport here.
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        path: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        attempt = 0
        while True:
            try:
                logger.debug("GET %s%s %s", self.base_url, path, params or "")
                response = await client.get(path, params=params)
            except httpx.TransportError as exc:
                if attempt < self.retries:
                    attempt += 1
                    await asyncio.sleep(self.backoff * 2 ** (attempt - 1))
                    continue
                logger.error("Catalog request %s failed: %s", path, exc)
                raise UpstreamError("Failed to fetch data") from exc

            if response.status_code >= 500 and attempt < self.retries:
                attempt += 1
                await asyncio.sleep(self.backoff * 2 ** (attempt - 1))
                continue
            if response.status_code != 200:
                logger.error("Catalog request %s returned HTTP %s", path, response.status_code)
                raise UpstreamError("Failed to fetch data")
            try:
                return response.json()
            except ValueError as exc:
                logger.error("Catalog request %s returned invalid JSON", path)
                raise UpstreamError("Failed to fetch data") from exc

    async def get_work_detail(self, work_id: str) -> Dict[str, Any]:
        """Fetch a work and add ``fullAuthors``, one record per author reference.

        Author records are fetched concurrently; their order follows
        the order of the work's ``authors`` list.
        """
        if not work_id:
            raise ValidationError("No id found")
        async with self._client() as client:
            detail = await self._get_json(client, f"/works/{work_id}.json")
            if not isinstance(detail, dict):
                raise UpstreamError("Failed to fetch data")
            author_keys = [
                entry["author"]["key"]
                for entry in detail.get("authors") or []
                if isinstance(entry, dict) and isinstance(entry.get("author"), dict) and entry["author"].get("key")
            ]
            detail["fullAuthors"] = list(
                await asyncio.gather(*(self._get_json(client, f"{key}.json") for key in author_keys))
            )
        return detail

    async def get_editions(self, work_id: str) -> Any:
        """Return the work's editions document unmodified."""
        if not work_id:
            raise ValidationError("No id found")
        async with self._client() as client:
            return await self._get_json(client, f"/works/{work_id}/editions.json")

    def _search_params(
        self,
        search: Optional[str],
        title: Optional[str],
        author: Optional[str],
    ) -> Dict[str, str]:
        if not search and not title and not author:
            raise ValidationError("At least one search term required")
        # Free text is only used on its own; title/author take precedence.
        if search and not title and not author:
            return {"q": search}
        params = {}
        if title:
            params["title"] = title
        if author:
            params["author"] = author
        return params

    def _to_result(self, doc: Dict[str, Any]) -> CatalogSearchResult:
        authors = doc.get("author_name")
        cover_id = doc.get("cover_i")
        return CatalogSearchResult(
            title=doc.get("title"),
            author=", ".join(authors) if authors else "Unknown Author",
            cover_url=f"{self.covers_url}/b/id/{cover_id}-M.jpg" if cover_id else None,
            year=doc.get("first_publish_year") or "N/A",
            olid=doc.get("key"),
        )

    async def search(
        self,
        search: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> List[CatalogSearchResult]:
        """Search the catalog and return at most the first 20 results."""
        params = self._search_params(search, title, author)
        async with self._client() as client:
            data = await self._get_json(client, "/search.json", params=params)
        docs = data.get("docs") if isinstance(data, dict) else None
        if not isinstance(docs, list):
            raise UpstreamError("Failed to fetch data")
        return [self._to_result(doc) for doc in docs[:SEARCH_RESULT_LIMIT]]


def get_catalog_gateway(request: Request) -> CatalogGateway:
    """Dependency returning the gateway attached to the application."""
    return request.app.state.catalog_gateway
