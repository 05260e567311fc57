"""
Business logic for members.

Members are created either by an explicit ``POST /members`` or the
first time a Firebase identity logs in.  They are never updated or
deleted here.  Every method receives the request's SQLite connection
rather than opening its own.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_cursor
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity
from ..schemas.common import CreatedRow
from ..schemas.member import MemberCreate, MemberRead


logger = logging.getLogger(__name__)

MEMBER_COLUMNS = "id, firebaseUid, name, email, photoUrl, role, team, location, joinDate, status"


class MemberService:
    """Queries and inserts on the ``members`` table."""

    @classmethod
    def list_members(cls, conn: sqlite3.Connection) -> List[MemberRead]:
        """Return every member in insertion order."""
        with get_cursor(conn) as cursor:
            rows = cursor.execute(
                f"SELECT {MEMBER_COLUMNS} FROM members ORDER BY id"
            ).fetchall()
        return [MemberRead.model_validate(dict(row)) for row in rows]

    @classmethod
    def get_member(cls, conn: sqlite3.Connection, member_id: int) -> MemberRead:
        """Retrieve a member by generated id or raise ``NotFoundError``."""
        with get_cursor(conn) as cursor:
            row = cursor.execute(
                f"SELECT {MEMBER_COLUMNS} FROM members WHERE id = ?",
                (member_id,),
            ).fetchone()
        if not row:
            raise NotFoundError("Member not found")
        return MemberRead.model_validate(dict(row))

    @classmethod
    def find_by_firebase_uid(cls, conn: sqlite3.Connection, uid: str) -> Optional[MemberRead]:
        with get_cursor(conn) as cursor:
            row = cursor.execute(
                f"SELECT {MEMBER_COLUMNS} FROM members WHERE firebaseUid = ?",
                (uid,),
            ).fetchone()
        if not row or not row["firebaseUid"]:
            return None
        return MemberRead.model_validate(dict(row))

    @classmethod
    def get_by_firebase_uid(cls, conn: sqlite3.Connection, uid: str) -> MemberRead:
        member = cls.find_by_firebase_uid(conn, uid)
        if member is None:
            raise NotFoundError("Member not found")
        return member

    @classmethod
    def create_member(cls, conn: sqlite3.Connection, data: MemberCreate) -> CreatedRow:
        """Insert a member from the direct creation endpoint.

        ``name`` is required.  Every other absent field is stored as an
        empty string.
        """
        if not data.name:
            raise ValidationError("Missing name")
        with get_cursor(conn) as cursor:
            cursor.execute(
                "INSERT INTO members (name, role, team, email, location, joinDate, photoUrl, status) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    data.name,
                    data.role or "",
                    data.team or "",
                    data.email or "",
                    data.location or "",
                    data.join_date or "",
                    data.photo_url or "",
                    data.status or "",
                ),
            )
            member_id = cursor.lastrowid
            changes = cursor.rowcount
        logger.info("Created member %s", member_id)
        return CreatedRow(id=member_id, changes=changes)

    @classmethod
    def login_or_register(cls, conn: sqlite3.Connection, identity: Identity) -> MemberRead:
        """Return the member linked to ``identity``, creating it on first login.

        An existing row is returned as stored, even if the name, email
        or avatar have since changed at the identity provider.  Two first
        logins for the same identity can both miss the lookup; the insert
        then yields to the UNIQUE ``firebaseUid`` and both callers get
        the one row that won.
        """
        member = cls.find_by_firebase_uid(conn, identity.subject_id)
        if member is not None:
            return member

        logger.info("No member for identity %s, creating one", identity.subject_id)
        with get_cursor(conn) as cursor:
            cursor.execute(
                "INSERT INTO members (name, email, photoUrl, firebaseUid) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(firebaseUid) DO NOTHING",
                (
                    identity.name or "",
                    identity.email or "",
                    identity.avatar_url,
                    identity.subject_id,
                ),
            )
            inserted = cursor.rowcount == 1
            row = cursor.execute(
                f"SELECT {MEMBER_COLUMNS} FROM members WHERE firebaseUid = ?",
                (identity.subject_id,),
            ).fetchone()
        if inserted:
            logger.info("Created member %s for identity %s", row["id"], identity.subject_id)
        else:
            logger.info("Member %s for identity %s was created concurrently", row["id"], identity.subject_id)
        return MemberRead.model_validate(dict(row))
