"""
Configuration management for the Recipe Finder.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early in both the backend (api/main.py) and
the frontend (streamlit_app/app.py) so .env is loaded before any other code
reads the environment.

In production .env will usually not exist; load_dotenv() then does nothing and
the platform's environment variables are used.

Environment Variables:
- MEALDB_BASE_URL: Optional, defaults to "https://www.themealdb.com/api/json/v1/1"
- MEALDB_TIMEOUT_SECONDS: Optional, per-request timeout, defaults to 10
- MEALDB_MAX_WORKERS: Optional, concurrent lookups per search, defaults to 8
- LOG_LEVEL: Optional, defaults to "INFO"
- BACKEND_URL: Optional, backend URL for the frontend (defaults to http://localhost:8000)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from recipe_finder.connectors.mealdb_connector import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from recipe_finder.search import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)


def load_env_file() -> None:
    """
    Load environment variables from .env at the project root.

    Safe to call multiple times. Existing environment variables take precedence
    over values from the file.
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env on module import
load_env_file()


class MealDBConfig:
    """Configuration for the TheMealDB connector."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the TheMealDB API base URL.

        Returns:
            Base URL without trailing slash
        """
        return os.getenv("MEALDB_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

    @staticmethod
    def get_timeout() -> float:
        """
        Get the per-request timeout in seconds.

        Returns:
            Timeout (default: 10). Invalid or non-positive values fall back to the default.
        """
        raw = os.getenv("MEALDB_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Invalid MEALDB_TIMEOUT_SECONDS=%r, using %s", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        if value <= 0:
            logger.warning("MEALDB_TIMEOUT_SECONDS must be positive, using %s", DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return value

    @staticmethod
    def get_max_workers() -> int:
        """
        Get the maximum number of concurrent ingredient lookups.

        Returns:
            Worker count (default: 8, minimum: 1)
        """
        raw = os.getenv("MEALDB_MAX_WORKERS")
        if not raw:
            return DEFAULT_MAX_WORKERS
        try:
            return max(1, int(raw))
        except ValueError:
            logger.warning("Invalid MEALDB_MAX_WORKERS=%r, using %d", raw, DEFAULT_MAX_WORKERS)
            return DEFAULT_MAX_WORKERS


def get_log_level() -> str:
    """
    Get the logging level name.

    Returns:
        Upper-cased level name (default: "INFO")
    """
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_backend_url() -> str:
    """
    Get the backend API base URL used by the frontend.

    Returns:
        Backend URL with trailing slash removed (default: http://localhost:8000)
    """
    return os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/")
