"""
Application error taxonomy.

Services raise these exceptions; the handlers registered in
``main.create_app`` turn them into ``{"error": message}`` JSON bodies
with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Required input is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Identity token is missing, malformed, expired or forged."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AppError):
    """The SQLite store rejected a statement or is unreachable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(AppError):
    """An external service (catalog API, identity provider) failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
