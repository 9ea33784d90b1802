"""
Base connector abstract class for recipe service integrations.

This module defines the interface the search aggregator and the detail fetcher
rely on. Connectors return raw upstream dictionaries; mapping into
recipe_finder.models happens in the callers.

All connectors must:
- Provide search_by_ingredient, returning the raw summaries for one ingredient
  (an empty list when nothing matches)
- Provide lookup_by_id, returning the raw detail record or None
- Raise MealDBConnectionError / MealDBResponseError (or subclasses) on failure
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseConnector(ABC):
    """
    Abstract base class for recipe service connectors.

    Attributes:
        source: String identifier for the upstream service (e.g., "mealdb")
    """
    source: str

    @abstractmethod
    def search_by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        """
        Look up recipes that use one ingredient.

        Args:
            ingredient: A single ingredient name (e.g., "chicken")

        Returns:
            Raw recipe summaries in upstream order. Empty list when the service
            reports no match.
        """
        pass

    @abstractmethod
    def lookup_by_id(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        """
        Look up the full record for one recipe.

        Args:
            recipe_id: Recipe identifier

        Returns:
            Raw recipe record, or None if the identifier is unknown.
        """
        pass
