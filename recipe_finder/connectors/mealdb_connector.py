"""
TheMealDB connector.

This connector talks to TheMealDB's public JSON API (v1, free tier) with
`requests`:
- filter.php?i=<ingredient> for the lookup-by-ingredient operation
- lookup.php?i=<id> for the lookup-by-identifier operation

Both endpoints answer {"meals": [...]} on a match and {"meals": null} when
nothing matches. Some mirrors answer "meals": "None" or an empty list instead;
all three are treated as "no match".

Failures are split into two exceptions because the UI offers different remedies:
- MealDBConnectionError: the service could not be reached (DNS, refused
  connection, timeout)
- MealDBResponseError: the service answered, but with a non-success status or a
  body that is not the expected JSON shape

A single attempt is made per request; callers decide whether to retry.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .base import BaseConnector

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_TIMEOUT_SECONDS = 10.0


class MealDBError(Exception):
    """Base class for TheMealDB connector failures."""


class MealDBConnectionError(MealDBError):
    """
    Exception raised when TheMealDB cannot be reached.

    This exception is raised when:
    - DNS resolution or the TCP connection fails
    - The request times out
    """


class MealDBResponseError(MealDBError):
    """
    Exception raised when TheMealDB answers with something unusable.

    This exception is raised when:
    - The response has a non-success HTTP status (status_code is set)
    - The body is not JSON or not shaped like {"meals": ...}
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MealDBConnector(BaseConnector):
    """
    Connector for TheMealDB.

    Args:
        base_url: API base URL (defaults to the public v1 endpoint)
        timeout: Per-request timeout in seconds
    """
    source = "mealdb"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS

    def search_by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        """
        Look up recipes by ingredient via filter.php.

        The ingredient is percent-encoded with no safe characters, so
        "chicken breast" is sent as "chicken%20breast".

        Raises:
            MealDBConnectionError: If the service cannot be reached.
            MealDBResponseError: On a non-success status or a malformed body.
        """
        url = f"{self.base_url}/filter.php?i={quote(ingredient, safe='')}"
        meals = self._get_meals(url)
        logger.debug("filter.php returned %d meals for ingredient=%r", len(meals), ingredient)
        return meals

    def lookup_by_id(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        """
        Look up one recipe via lookup.php.

        Returns:
            The first record of the response, or None when nothing matched.

        Raises:
            MealDBConnectionError: If the service cannot be reached.
            MealDBResponseError: On a non-success status or a malformed body.
        """
        url = f"{self.base_url}/lookup.php?i={quote(recipe_id, safe='')}"
        meals = self._get_meals(url)
        if not meals:
            logger.debug("lookup.php found no record for id=%r", recipe_id)
            return None
        return meals[0]

    def _get_meals(self, url: str) -> List[Dict[str, Any]]:
        """Issue one GET and return the "meals" list (empty when no match)."""
        try:
            response = requests.get(url, timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise MealDBConnectionError(f"Could not reach TheMealDB at {self.base_url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise MealDBResponseError(f"Request to TheMealDB failed: {e}") from e

        if not response.ok:
            raise MealDBResponseError(
                f"TheMealDB returned HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MealDBResponseError(
                f"TheMealDB returned a non-JSON body for {url}", status_code=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise MealDBResponseError(
                f"Unexpected response format from TheMealDB for {url}: expected an object",
                status_code=response.status_code,
            )

        meals = data.get("meals")
        # "meals": null is the documented no-match answer; some mirrors send "None" or []
        if meals is None or meals == "None" or meals == []:
            return []
        if not isinstance(meals, list):
            raise MealDBResponseError(
                f"Unexpected response format from TheMealDB for {url}: 'meals' is not a list",
                status_code=response.status_code,
            )
        return meals
