"""Shared fixtures: a temporary database, an app bound to it and fakes."""
from __future__ import annotations

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from bookclub_api.app.core.config import Settings
from bookclub_api.app.core.db import get_connection, init_db
from bookclub_api.app.core.exceptions import AuthError
from bookclub_api.app.core.identity import Identity, get_identity_verifier
from bookclub_api.app.main import create_app


class FakeVerifier:
    """Stands in for Firebase: tokens map straight to identities."""

    def __init__(self) -> None:
        self.identities: Dict[str, Identity] = {}
        self.calls = 0

    def add(self, token: str, identity: Identity) -> None:
        self.identities[token] = identity

    def verify(self, token: str) -> Identity:
        self.calls += 1
        try:
            return self.identities[token]
        except KeyError:
            raise AuthError("Invalid ID Token")


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "bookclub-test.db"),
        firebase_credentials=str(tmp_path / "missing-credentials.json"),
        open_library_url="https://openlibrary.test",
        covers_url="https://covers.openlibrary.test",
        http_timeout=2.0,
        http_retries=1,
        http_retry_backoff=0.0,
    )


@pytest.fixture
def conn(app_settings):
    init_db(app_settings.database_url)
    connection = get_connection(app_settings.database_url)
    yield connection
    connection.close()


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def app(app_settings, verifier):
    application = create_app(app_settings)
    application.dependency_overrides[get_identity_verifier] = lambda: verifier
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
