"""
Caller-facing finder state.

FinderState holds what the UI displays: the current query, the result list,
the search error, the selected recipe and its details. It does not perform any
I/O; the caller starts a request with begin_search / select_recipe, runs the
search or fetch, and hands the outcome back with the returned token.

Each start bumps a generation counter. An outcome is applied only if its token
is still the latest one, so a slow response from an earlier request can never
overwrite the state of a newer one.

Usage:
    state = FinderState()
    token = state.begin_search("chicken, tomato")
    if token is not None:
        state.complete_search(token, search_recipes("chicken, tomato"))
"""

import logging
from typing import List, Optional

from recipe_finder.models import (
    DetailOutcome,
    FinderError,
    RecipeDetail,
    RecipeSummary,
    SearchOutcome,
)

logger = logging.getLogger(__name__)


class FinderState:
    """State of one user's search and detail view."""

    def __init__(self) -> None:
        self.query: str = ""
        self.recipes: List[RecipeSummary] = []
        self.search_error: Optional[FinderError] = None
        self.loading: bool = False
        self.has_searched: bool = False

        self.selected: Optional[RecipeSummary] = None
        self.detail: Optional[RecipeDetail] = None
        self.detail_error: Optional[FinderError] = None
        self.detail_loading: bool = False

        self._search_generation = 0
        self._detail_generation = 0

    # --- search -----------------------------------------------------------

    def begin_search(self, query: str) -> Optional[int]:
        """
        Start a new search.

        Returns:
            A token to pass to complete_search, or None for a blank query
            (nothing changes).
        """
        if not query or not query.strip():
            return None

        self._search_generation += 1
        # A new search closes the detail view, so in-flight detail fetches are stale too
        self._detail_generation += 1

        self.query = query
        self.loading = True
        self.has_searched = True
        self.search_error = None
        self.selected = None
        self.detail = None
        self.detail_error = None
        self.detail_loading = False
        return self._search_generation

    def complete_search(self, token: int, outcome: Optional[SearchOutcome]) -> bool:
        """
        Apply a search outcome.

        Returns:
            True if applied, False if the token belongs to a superseded search.
        """
        if token != self._search_generation:
            logger.debug("Discarding stale search result (token=%d, latest=%d)", token, self._search_generation)
            return False

        self.loading = False
        if outcome is None:
            self.recipes = []
        elif outcome.error is not None:
            self.search_error = outcome.error
            self.recipes = []
        else:
            self.search_error = None
            self.recipes = list(outcome.recipes)
        return True

    # --- details ----------------------------------------------------------

    def select_recipe(self, recipe: RecipeSummary) -> Optional[int]:
        """
        Open the detail view for a recipe.

        Returns:
            A token to pass to complete_detail, or None if the recipe has no id.
        """
        if recipe is None or not recipe.id:
            return None

        self._detail_generation += 1
        self.selected = recipe
        self.detail = None
        self.detail_error = None
        self.detail_loading = True
        return self._detail_generation

    def complete_detail(self, token: int, outcome: Optional[DetailOutcome]) -> bool:
        """
        Apply a detail outcome.

        Returns:
            True if applied, False if the detail view was closed or another
            recipe was selected in the meantime.
        """
        if token != self._detail_generation or self.selected is None:
            logger.debug("Discarding stale detail result (token=%d, latest=%d)", token, self._detail_generation)
            return False

        self.detail_loading = False
        if outcome is None:
            return True
        if outcome.error is not None:
            self.detail_error = outcome.error
            self.detail = None
        else:
            self.detail_error = None
            self.detail = outcome.recipe
        return True

    def close_detail(self) -> None:
        """Close the detail view and drop its data."""
        self._detail_generation += 1
        self.selected = None
        self.detail = None
        self.detail_error = None
        self.detail_loading = False

    # --- misc -------------------------------------------------------------

    def reset(self) -> None:
        """Clear everything, as the "search again" action does."""
        self._search_generation += 1
        self.query = ""
        self.recipes = []
        self.search_error = None
        self.loading = False
        self.has_searched = False
        self.close_detail()

    def results_title(self) -> str:
        """Heading for the results grid, e.g. 'Found 3 recipes with "chicken"'."""
        count = len(self.recipes)
        suffix = "" if count == 1 else "s"
        return f'Found {count} recipe{suffix} with "{self.query}"'
