"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with a local SQLite file and console logging.  In a
production deployment override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Nuleaf API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty, logs go to the console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "nuleaf.db")

    # Number of documents returned by list endpoints when the client
    # sends no usable ``limit``.
    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "100"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
