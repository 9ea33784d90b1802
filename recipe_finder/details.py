"""
Recipe detail fetching and normalization.

fetch_recipe_details retrieves one full recipe record. The two normalizers turn
the parts of that record that upstream stores awkwardly into renderable lists:
- extract_ingredients: the 20 numbered ingredient/measure slots -> IngredientLine list
- format_instructions: the free-text instructions blob -> ordered list of steps
"""

import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from recipe_finder.models import DetailOutcome, FinderError, IngredientLine, RecipeDetail

from .connectors.base import BaseConnector
from .connectors.mealdb_connector import (
    MealDBConnector,
    MealDBConnectionError,
    MealDBResponseError,
)

logger = logging.getLogger(__name__)

# Only CR, LF and CRLF break steps; other separators stay inside a step
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

CONNECTIVITY_MESSAGE = "Unable to load recipe details. Please check your connection."
UNEXPECTED_MESSAGE = "Sorry, we couldn't load the recipe details. Please try again."
NOT_FOUND_MESSAGE = "Sorry, we couldn't find that recipe. It may have been removed."


def _get_connector() -> BaseConnector:
    return MealDBConnector()


def fetch_recipe_details(
    recipe_id: Optional[str],
    connector: Optional[BaseConnector] = None,
) -> Optional[DetailOutcome]:
    """
    Fetch the full record for one recipe.

    Args:
        recipe_id: Recipe identifier from a RecipeSummary
        connector: Recipe service connector (defaults to MealDBConnector)

    Returns:
        None for an empty identifier (nothing is requested). Otherwise a
        DetailOutcome holding either the RecipeDetail or a FinderError with
        kind "not_found", "connectivity" or "unexpected". The record is returned
        as fetched; use extract_ingredients / format_instructions to render it.
    """
    recipe_id = (recipe_id or "").strip()
    if not recipe_id:
        return None

    if connector is None:
        connector = _get_connector()

    try:
        meal = connector.lookup_by_id(recipe_id)
        if meal is None:
            logger.warning("Recipe %s not found", recipe_id)
            return DetailOutcome(
                recipe_id=recipe_id,
                error=FinderError(kind="not_found", message=NOT_FOUND_MESSAGE),
            )
        recipe = RecipeDetail.from_api(meal)
    except MealDBConnectionError as e:
        logger.warning("Details fetch for %s could not reach the recipe service: %s", recipe_id, e)
        return DetailOutcome(
            recipe_id=recipe_id,
            error=FinderError(kind="connectivity", message=CONNECTIVITY_MESSAGE),
        )
    except MealDBResponseError as e:
        logger.error("Details fetch for %s failed (status=%s): %s", recipe_id, e.status_code, e)
        return DetailOutcome(
            recipe_id=recipe_id,
            error=FinderError(kind="unexpected", message=UNEXPECTED_MESSAGE, status_code=e.status_code),
        )
    except (ValidationError, AttributeError, TypeError) as e:
        logger.error("Malformed detail record for %s: %s", recipe_id, e)
        return DetailOutcome(
            recipe_id=recipe_id,
            error=FinderError(kind="unexpected", message=UNEXPECTED_MESSAGE),
        )

    logger.info("Fetched details for recipe %s (%s)", recipe_id, recipe.name)
    return DetailOutcome(recipe_id=recipe_id, recipe=recipe)


def extract_ingredients(detail: RecipeDetail) -> List[IngredientLine]:
    """
    Collect the filled ingredient slots, in slot order (1 through 20).

    A slot is kept only when its name is non-blank after trimming; a missing
    measure becomes an empty string.

    Examples:
        Slots 1, 3 and 5 filled, the rest empty or whitespace -> three lines,
        in the order 1, 3, 5.
    """
    lines: List[IngredientLine] = []
    for slot in detail.ingredient_slots:
        name = (slot.name or "").strip()
        if not name:
            continue
        lines.append(IngredientLine(name=name, measure=(slot.measure or "").strip()))
    return lines


def format_instructions(text: Optional[str]) -> List[str]:
    """
    Split an instructions blob into steps.

    Examples:
        >>> format_instructions("Step one.\\n\\nStep two.\\n  ")
        ['Step one.', 'Step two.']
        >>> format_instructions(None)
        []
    """
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]
