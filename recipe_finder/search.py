"""
Ingredient search aggregation.

This module provides the core search functionality that:
- Parses a comma-separated query into ingredient terms
- Looks up recipes for every term, concurrently when there is more than one
- Waits for every lookup to finish before deciding on success or failure
- Intersects the per-term result lists by recipe id, keeping the order of the
  first term's list

search_recipes is the main entry point. It never raises for upstream failures:
they are logged and returned as a FinderError inside the SearchOutcome, with an
empty recipe list so stale results are never shown next to an error.

Search flow: Streamlit -> GET /search -> search_recipes() -> connector.search_by_ingredient() -> RecipeSummary -> SearchOutcome
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from pydantic import ValidationError

from recipe_finder.models import FinderError, RecipeSummary, SearchOutcome

from .connectors.base import BaseConnector
from .connectors.mealdb_connector import (
    MealDBConnector,
    MealDBConnectionError,
    MealDBResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8

CONNECTIVITY_MESSAGE = "Network error: Please check your internet connection and try again."
UNEXPECTED_MESSAGE = "Sorry, we encountered an error while searching. Please try again in a moment."

# A lookup either yields summaries or the exception that stopped it
LookupResult = Tuple[Optional[List[RecipeSummary]], Optional[Exception]]


def _get_connector() -> BaseConnector:
    """Build the default connector, looked up at call time so tests can patch MealDBConnector."""
    return MealDBConnector()


def parse_ingredient_terms(query: Optional[str]) -> List[str]:
    """
    Split a raw query into ingredient terms.

    Pieces are split on commas and trimmed; empty pieces are dropped. Order is
    kept as typed.

    Examples:
        >>> parse_ingredient_terms(" chicken, , tomato ,")
        ['chicken', 'tomato']
        >>> parse_ingredient_terms("   ")
        []
    """
    if not query:
        return []
    return [piece.strip() for piece in query.split(",") if piece.strip()]


def intersect_by_id(result_lists: Sequence[Sequence[RecipeSummary]]) -> List[RecipeSummary]:
    """
    Keep the recipes that appear in every result list.

    The first list is the base ordering: the output is that list filtered to
    ids present in every list's id set. Each kept id maps to the summary from
    the first list; if it were missing there, the other lists are scanned in
    request order.

    Args:
        result_lists: One list of summaries per ingredient term, in request order

    Returns:
        Recipes common to all lists, in the first list's order

    Examples:
        A -> [X, Y, Z], B -> [Y, Z, W] gives [Y, Z].
    """
    if not result_lists:
        return []

    id_sets = [{recipe.id for recipe in results} for results in result_lists]
    first_list = result_lists[0]
    common_ids = [recipe.id for recipe in first_list if all(recipe.id in ids for ids in id_sets)]

    first_by_id = {}
    for recipe in first_list:
        first_by_id.setdefault(recipe.id, recipe)

    intersected: List[RecipeSummary] = []
    for recipe_id in common_ids:
        recipe = first_by_id.get(recipe_id)
        if recipe is None:
            recipe = next(
                (r for results in result_lists for r in results if r.id == recipe_id),
                None,
            )
        if recipe is not None:
            intersected.append(recipe)
    return intersected


def _lookup_term(connector: BaseConnector, term: str) -> List[RecipeSummary]:
    """Run one lookup-by-ingredient request and map the raw meals to summaries."""
    meals = connector.search_by_ingredient(term)
    try:
        return [RecipeSummary.from_api(meal) for meal in meals]
    except (ValidationError, AttributeError, TypeError) as e:
        raise MealDBResponseError(f"Malformed recipe summary for ingredient {term!r}: {e}") from e


def _run_lookup(connector: BaseConnector, term: str) -> LookupResult:
    try:
        return _lookup_term(connector, term), None
    except Exception as e:
        return None, e


def _collect_lookups(
    connector: BaseConnector,
    terms: List[str],
    max_workers: int,
) -> List[LookupResult]:
    """
    Look up every term and return one (summaries, error) pair per term.

    With more than one term the requests run on a thread pool. Every request is
    waited for, even when an earlier one already failed or came back empty.
    """
    if len(terms) == 1:
        return [_run_lookup(connector, terms[0])]

    workers = max(1, min(len(terms), max_workers))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_run_lookup, connector, term) for term in terms]
        return [future.result() for future in futures]


def _error_from_exception(error: Exception, terms: List[str]) -> FinderError:
    """Map a lookup failure onto the user-facing error categories."""
    if isinstance(error, MealDBConnectionError):
        logger.warning("Search for terms=%r could not reach the recipe service: %s", terms, error)
        return FinderError(kind="connectivity", message=CONNECTIVITY_MESSAGE, terms=terms)

    status_code = getattr(error, "status_code", None)
    if isinstance(error, MealDBResponseError):
        logger.error("Search for terms=%r failed (status=%s): %s", terms, status_code, error)
    else:
        logger.error("Unexpected error searching terms=%r: %s", terms, error, exc_info=error)
    return FinderError(kind="unexpected", message=UNEXPECTED_MESSAGE, status_code=status_code, terms=terms)


def _no_results(query: str, terms: List[str]) -> FinderError:
    if len(terms) == 1:
        message = f'No recipes found with "{query}". Try another ingredient like chicken, tomato, or pasta!'
    else:
        message = f'No recipes found that match all ingredients: "{", ".join(terms)}".'
    return FinderError(kind="no_results", message=message, terms=terms)


def search_recipes(
    query: str,
    connector: Optional[BaseConnector] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Optional[SearchOutcome]:
    """
    Search recipes that use every ingredient in a comma-separated query.

    Args:
        query: Raw user input (e.g., "chicken, tomato")
        connector: Recipe service connector (defaults to MealDBConnector)
        max_workers: Upper bound on concurrent lookups for multi-term queries

    Returns:
        None when the query holds no ingredient terms (nothing is requested).
        Otherwise a SearchOutcome with either:
        - recipes: the single term's results in upstream order, or the
          intersection of all terms' results in the first term's order
        - error: a FinderError with kind "no_results", "connectivity" or
          "unexpected"; recipes is then empty

        When several lookups fail, the first failing term in request order
        decides the error. Failures take precedence over empty matches.

    Examples:
        >>> outcome = search_recipes("chicken, tomato")
        >>> outcome.error is None or outcome.recipes == []
        True
    """
    terms = parse_ingredient_terms(query)
    if not terms:
        logger.debug("Ignoring search with no ingredient terms: query=%r", query)
        return None

    logger.info("Search request: query=%r terms=%r", query, terms)

    if connector is None:
        connector = _get_connector()

    lookups = _collect_lookups(connector, terms, max_workers)

    for term, (_, error) in zip(terms, lookups):
        if error is not None:
            logger.debug("Lookup for term=%r failed: %s", term, error)
            return SearchOutcome(query=query, terms=terms, error=_error_from_exception(error, terms))

    result_lists = [results or [] for results, _ in lookups]
    for term, results in zip(terms, result_lists):
        logger.debug("Term %r matched %d recipes", term, len(results))

    if any(not results for results in result_lists):
        logger.info("No recipes for query=%r (a term had no matches)", query)
        return SearchOutcome(query=query, terms=terms, error=_no_results(query, terms))

    recipes = result_lists[0] if len(terms) == 1 else intersect_by_id(result_lists)

    if not recipes:
        logger.info("No recipes common to all terms for query=%r", query)
        return SearchOutcome(query=query, terms=terms, error=_no_results(query, terms))

    logger.info("Search response size: %d recipes for terms=%r", len(recipes), terms)
    return SearchOutcome(query=query, terms=terms, recipes=recipes)
