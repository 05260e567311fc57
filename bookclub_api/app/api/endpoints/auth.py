"""
Login endpoint for members authenticated with Firebase.

The frontend signs in with Firebase and posts the resulting ID token.
If the token verifies, the matching local member is returned, and it
is created first if this is the identity's first login.
"""

import sqlite3

from fastapi import APIRouter, Depends

from bookclub_api.app.core.db import get_db
from bookclub_api.app.core.exceptions import ValidationError
from bookclub_api.app.core.identity import FirebaseIdentityVerifier, get_identity_verifier
from bookclub_api.app.schemas.member import FirebaseLogin, MemberRead
from bookclub_api.app.services.member_service import MemberService


router = APIRouter()


@router.post("/firebase-login", response_model=MemberRead)
def firebase_login(
    payload: FirebaseLogin,
    conn: sqlite3.Connection = Depends(get_db),
    verifier: FirebaseIdentityVerifier = Depends(get_identity_verifier),
) -> MemberRead:
    """Verify the ID token and return the member, registering on first login.

    Verification failure ends the request with 401 before the member
    table is touched.
    """
    if not payload.id_token:
        raise ValidationError("ID Token Missing")
    identity = verifier.verify(payload.id_token)
    return MemberService.login_or_register(conn, identity)
