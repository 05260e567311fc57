"""
Member endpoints.

``/members/{uid}`` looks a member up by Firebase uid, which is what
the frontend holds after login.  ``/local-members/{member_id}`` looks
a member up by the generated local id.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends

from bookclub_api.app.core.db import get_db
from bookclub_api.app.schemas.common import CreatedRow
from bookclub_api.app.schemas.member import MemberCreate, MemberRead
from bookclub_api.app.services.member_service import MemberService


router = APIRouter()


@router.get("/members", response_model=List[MemberRead])
def list_members(conn: sqlite3.Connection = Depends(get_db)) -> List[MemberRead]:
    return MemberService.list_members(conn)


@router.get("/members/{uid}", response_model=MemberRead)
def get_member_by_uid(uid: str, conn: sqlite3.Connection = Depends(get_db)) -> MemberRead:
    return MemberService.get_by_firebase_uid(conn, uid)


@router.get("/local-members/{member_id}", response_model=MemberRead)
def get_member_by_id(member_id: int, conn: sqlite3.Connection = Depends(get_db)) -> MemberRead:
    return MemberService.get_member(conn, member_id)


@router.post("/members", response_model=CreatedRow)
def create_member(data: MemberCreate, conn: sqlite3.Connection = Depends(get_db)) -> CreatedRow:
    """Create a member directly.  Only ``name`` is required."""
    return MemberService.create_member(conn, data)
