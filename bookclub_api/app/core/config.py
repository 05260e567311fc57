"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration apart from the identity
provider's credentials file, which is only read on the first login.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Book Club API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "bookclub.db")

    # Service account JSON used to verify Firebase ID tokens.
    firebase_credentials: str = os.getenv("FIREBASE_CREDENTIALS", "service-account-private.json")

    # Public book catalog (Open Library) endpoints.
    open_library_url: str = os.getenv("OPEN_LIBRARY_URL", "https://openlibrary.org")
    covers_url: str = os.getenv("OPEN_LIBRARY_COVERS_URL", "https://covers.openlibrary.org")

    # Outbound HTTP bounds.  Only idempotent GETs are retried.
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10"))
    http_retries: int = int(os.getenv("HTTP_RETRIES", "1"))
    http_retry_backoff: float = float(os.getenv("HTTP_RETRY_BACKOFF", "0.5"))

    # Comma-separated list of allowed origins for the frontend.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
