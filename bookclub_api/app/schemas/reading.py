"""Payloads for moving books between a member's reading lists."""

from typing import Optional

from pydantic import BaseModel, Field

from .common import CAMEL_CONFIG


class StartReading(BaseModel):
    """Body of ``POST /member_books``.

    The frontend sends the member's local id under ``memberUid``.
    """

    model_config = CAMEL_CONFIG

    book_id: Optional[int] = None
    member_uid: Optional[int] = Field(None, description="Local member id")


class MoveToRead(BaseModel):
    """Body of ``POST /move-to-read``."""

    model_config = CAMEL_CONFIG

    book_id: Optional[int] = None
    member_id: Optional[int] = None
