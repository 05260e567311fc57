"""Tests for FirebaseIdentityVerifier with the firebase-admin SDK patched out."""
from __future__ import annotations

import pytest
from firebase_admin import auth as firebase_auth
from firebase_admin.credentials import Certificate

from bookclub_api.app.core import identity as identity_module
from bookclub_api.app.core.exceptions import AuthError, UpstreamError
from bookclub_api.app.core.identity import FirebaseIdentityVerifier, Identity


@pytest.fixture
def firebase_sdk(monkeypatch):
    """Patch app lookup and initialisation; record what the verifier passes in."""
    calls = {"initialize": [], "verify": []}
    firebase_app = object()

    def get_app(name):
        raise ValueError(f"The app {name} does not exist")

    def initialize_app(cred, options=None, name=None):
        calls["initialize"].append((cred, options, name))
        return firebase_app

    monkeypatch.setattr(identity_module.firebase_admin, "get_app", get_app)
    monkeypatch.setattr(identity_module.firebase_admin, "initialize_app", initialize_app)
    monkeypatch.setattr(identity_module.credentials, "Certificate", lambda path: ("cert", path))
    calls["app"] = firebase_app
    return calls


def _verify_with(monkeypatch, firebase_sdk, outcome):
    def verify_id_token(token, app=None):
        firebase_sdk["verify"].append((token, app))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(identity_module.auth, "verify_id_token", verify_id_token)


def test_claims_map_to_identity(app_settings, monkeypatch, firebase_sdk):
    _verify_with(
        monkeypatch,
        firebase_sdk,
        {"uid": "uid-42", "email": "ada@example.com", "name": "Ada", "picture": "https://img/ada.png"},
    )
    verifier = FirebaseIdentityVerifier(app_settings)

    identity = verifier.verify("good-token")

    assert identity == Identity(
        subject_id="uid-42", email="ada@example.com", name="Ada", avatar_url="https://img/ada.png"
    )
    assert firebase_sdk["verify"] == [("good-token", firebase_sdk["app"])]
    [(cred, options, name)] = firebase_sdk["initialize"]
    assert cred == ("cert", app_settings.firebase_credentials)
    assert options == {"httpTimeout": app_settings.http_timeout}
    assert name == identity_module.FIREBASE_APP_NAME


def test_missing_claims_stay_none(app_settings, monkeypatch, firebase_sdk):
    _verify_with(monkeypatch, firebase_sdk, {"uid": "uid-bare"})

    identity = FirebaseIdentityVerifier(app_settings).verify("token")

    assert identity == Identity(subject_id="uid-bare")


def test_firebase_app_is_initialised_once(app_settings, monkeypatch, firebase_sdk):
    _verify_with(monkeypatch, firebase_sdk, {"uid": "uid-1"})
    verifier = FirebaseIdentityVerifier(app_settings)

    verifier.verify("one")
    verifier.verify("two")

    assert len(firebase_sdk["initialize"]) == 1
    assert len(firebase_sdk["verify"]) == 2


@pytest.mark.parametrize("token", ["", None])
def test_empty_token_is_rejected_without_calling_firebase(app_settings, monkeypatch, firebase_sdk, token):
    _verify_with(monkeypatch, firebase_sdk, {"uid": "never"})

    with pytest.raises(AuthError) as excinfo:
        FirebaseIdentityVerifier(app_settings).verify(token)

    assert excinfo.value.message == "Invalid ID Token"
    assert firebase_sdk["verify"] == []
    assert firebase_sdk["initialize"] == []


@pytest.mark.parametrize(
    "error",
    [
        ValueError("Illegal ID token provided"),
        firebase_auth.InvalidIdTokenError("Could not verify token signature"),
        firebase_auth.ExpiredIdTokenError("Token expired", cause=None),
        firebase_auth.RevokedIdTokenError("The Firebase ID token has been revoked"),
    ],
    ids=["malformed", "invalid", "expired", "revoked"],
)
def test_rejected_tokens_raise_auth_error(app_settings, monkeypatch, firebase_sdk, error):
    _verify_with(monkeypatch, firebase_sdk, error)

    with pytest.raises(AuthError) as excinfo:
        FirebaseIdentityVerifier(app_settings).verify("bad-token")

    assert excinfo.value.message == "Invalid ID Token"
    assert excinfo.value.__cause__ is error


def test_key_fetch_failure_is_upstream_error(app_settings, monkeypatch, firebase_sdk):
    error = firebase_auth.CertificateFetchError("Failed to fetch public key certificates", cause=None)
    _verify_with(monkeypatch, firebase_sdk, error)

    with pytest.raises(UpstreamError) as excinfo:
        FirebaseIdentityVerifier(app_settings).verify("token")

    assert excinfo.value.message == "Identity provider unavailable"
    assert excinfo.value.status_code == 500


def test_unreadable_credentials_file_is_upstream_error(app_settings, monkeypatch, firebase_sdk):
    # app_settings points at a credentials file that does not exist.
    monkeypatch.setattr(identity_module.credentials, "Certificate", Certificate)
    _verify_with(monkeypatch, firebase_sdk, {"uid": "never"})

    with pytest.raises(UpstreamError) as excinfo:
        FirebaseIdentityVerifier(app_settings).verify("token")

    assert excinfo.value.message == "Identity provider is not configured"
    assert firebase_sdk["initialize"] == []
    assert firebase_sdk["verify"] == []


def test_malformed_credentials_file_is_upstream_error(app_settings, monkeypatch, firebase_sdk, tmp_path):
    bad_credentials = tmp_path / "service-account.json"
    bad_credentials.write_text('{"type": "authorized_user"}')
    app_settings.firebase_credentials = str(bad_credentials)
    monkeypatch.setattr(identity_module.credentials, "Certificate", Certificate)
    _verify_with(monkeypatch, firebase_sdk, {"uid": "never"})

    with pytest.raises(UpstreamError):
        FirebaseIdentityVerifier(app_settings).verify("token")


def test_existing_firebase_app_is_reused(app_settings, monkeypatch, firebase_sdk):
    existing = object()
    monkeypatch.setattr(identity_module.firebase_admin, "get_app", lambda name: existing)
    _verify_with(monkeypatch, firebase_sdk, {"uid": "uid-1"})

    FirebaseIdentityVerifier(app_settings).verify("token")

    assert firebase_sdk["initialize"] == []
    assert firebase_sdk["verify"] == [("token", existing)]
