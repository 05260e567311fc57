"""Shapes returned by the Open Library gateway."""

from typing import Optional, Union

from pydantic import BaseModel

from .common import CAMEL_CONFIG


class CatalogSearchResult(BaseModel):
    """One search hit, reshaped for a result card on the frontend."""

    model_config = CAMEL_CONFIG

    title: Optional[str] = None
    author: str
    cover_url: Optional[str] = None
    year: Union[int, str]
    olid: Optional[str] = None
