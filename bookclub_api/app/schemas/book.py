"""
Pydantic models for books in the local library.

``olid`` is the Open Library id of the work the book was added from,
if any.  Only ``title`` is required.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from .common import CAMEL_CONFIG


class BookCreate(BaseModel):
    model_config = CAMEL_CONFIG

    title: Optional[str] = Field(None, examples=["Dune"])
    olid: Optional[str] = Field(None, examples=["OL893415W"])
    author: Optional[str] = None
    description: Optional[str] = None
    published: Optional[Union[int, str]] = None
    image_url: Optional[str] = None
    pages: Optional[Union[int, str]] = None
    isbn: Optional[str] = None


class BookRead(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    olid: Optional[str] = None
    title: str
    author: Optional[str] = None
    description: Optional[str] = None
    published: Optional[Union[int, str]] = None
    image_url: Optional[str] = None
    # Stored as given; an absent value is an empty string.
    pages: Optional[Union[int, str]] = None
    isbn: Optional[str] = None
