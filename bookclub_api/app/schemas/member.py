"""
Pydantic models for members.

A member is a local profile, optionally linked to a Firebase account
through ``firebaseUid``.  Every field except ``name`` is optional on
creation; the service stores absent values as empty strings.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import CAMEL_CONFIG


class MemberCreate(BaseModel):
    """Schema for creating a member directly (without a login)."""

    model_config = CAMEL_CONFIG

    name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    role: Optional[str] = None
    team: Optional[str] = None
    email: Optional[str] = Field(None, examples=["ada@example.com"])
    location: Optional[str] = None
    join_date: Optional[str] = Field(None, examples=["2024-01-15"])
    photo_url: Optional[str] = None
    status: Optional[str] = None


class MemberRead(BaseModel):
    """Schema for reading a member row."""

    model_config = CAMEL_CONFIG

    id: int
    firebase_uid: Optional[str] = None
    name: str
    email: Optional[str] = None
    photo_url: Optional[str] = None
    role: Optional[str] = None
    team: Optional[str] = None
    location: Optional[str] = None
    join_date: Optional[str] = None
    status: Optional[str] = None


class FirebaseLogin(BaseModel):
    """Payload for ``POST /api/auth/firebase-login``."""

    model_config = CAMEL_CONFIG

    id_token: Optional[str] = None
