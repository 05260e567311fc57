"""
Identity verification against Firebase Authentication.

The frontend signs members in with Firebase and sends the resulting
ID token to ``POST /api/auth/firebase-login``.  ``FirebaseIdentityVerifier``
checks the token's signature and expiry with the ``firebase-admin``
SDK and returns the verified claims as an :class:`Identity`.  The
Firebase app is initialised lazily on first use so the service can
start (and be tested) without a credentials file.

Routes obtain the verifier through the ``get_identity_verifier``
dependency, which tests override with a fake.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from fastapi import Request
from firebase_admin import auth, credentials
from firebase_admin import exceptions as firebase_exceptions

from .config import Settings
from .exceptions import AuthError, UpstreamError


logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "bookclub"


@dataclass
class Identity:
    """Claims of a verified ID token."""

    subject_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class FirebaseIdentityVerifier:
    """Verify Firebase ID tokens using a service account."""

    def __init__(self, app_settings: Settings) -> None:
        self._credentials_path = app_settings.firebase_credentials
        self._timeout = app_settings.http_timeout
        self._app: Optional[firebase_admin.App] = None
        self._lock = threading.Lock()

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        with self._lock:
            if self._app is None:
                try:
                    self._app = firebase_admin.get_app(FIREBASE_APP_NAME)
                except ValueError:
                    try:
                        cred = credentials.Certificate(self._credentials_path)
                    except (OSError, ValueError) as exc:
                        logger.error("Cannot load Firebase credentials from %s: %s", self._credentials_path, exc)
                        raise UpstreamError("Identity provider is not configured") from exc
                    # httpTimeout bounds the public key fetch done during verification.
                    self._app = firebase_admin.initialize_app(
                        cred,
                        options={"httpTimeout": self._timeout},
                        name=FIREBASE_APP_NAME,
                    )
        return self._app

    def verify(self, token: str) -> Identity:
        """Verify ``token`` and return the identity it asserts.

        Raises ``AuthError`` when the token is missing, malformed,
        expired, revoked or carries an invalid signature, and
        ``UpstreamError`` when Google's signing keys cannot be fetched.
        """
        if not token:
            raise AuthError("Invalid ID Token")
        app = self._get_app()
        try:
            claims = auth.verify_id_token(token, app=app)
        except auth.CertificateFetchError as exc:
            logger.error("Could not fetch Firebase signing keys: %s", exc)
            raise UpstreamError("Identity provider unavailable") from exc
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.warning("Firebase token verification failed: %s", exc)
            raise AuthError("Invalid ID Token") from exc
        return Identity(
            subject_id=claims["uid"],
            email=claims.get("email"),
            name=claims.get("name"),
            avatar_url=claims.get("picture"),
        )


def get_identity_verifier(request: Request) -> FirebaseIdentityVerifier:
    """Dependency returning the verifier attached to the application."""
    return request.app.state.identity_verifier
