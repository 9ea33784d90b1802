"""
Finder State Management Module.

This module keeps one recipe_finder.state.FinderState per browser session in
st.session_state and wires it to the backend API client. Pages call the
run_* / close / reset helpers below instead of touching the state object's
request tokens directly.

# NOTE: The state lives in session_state, so it persists across reruns of the
    script but is reset when the user refreshes the page.
"""

import logging
from typing import Any, Dict

import streamlit as st
from pydantic import ValidationError

from recipe_finder.models import DetailOutcome, FinderError, RecipeSummary, SearchOutcome
from recipe_finder.state import FinderState

from .api_client import (
    DETAILS_UNEXPECTED_MESSAGE,
    SEARCH_UNEXPECTED_MESSAGE,
    get_recipe_details,
    search_recipes,
)

logger = logging.getLogger(__name__)

# Session state key for the finder state
FINDER_STATE_KEY = "finder_state"


def get_finder_state() -> FinderState:
    """
    Get the finder state for this session, creating it on first use.

    Returns:
        The session's FinderState
    """
    if FINDER_STATE_KEY not in st.session_state:
        st.session_state[FINDER_STATE_KEY] = FinderState()
    return st.session_state[FINDER_STATE_KEY]


def search_outcome_from_payload(payload: Dict[str, Any]) -> SearchOutcome:
    """
    Convert a /search payload from the API client into a SearchOutcome.

    A payload that does not fit the models (bad result items, unknown error
    kind) becomes an "unexpected" error outcome.
    """
    try:
        return SearchOutcome(
            query=payload.get("query", ""),
            terms=payload.get("terms") or [],
            recipes=[] if payload.get("error") else payload.get("results") or [],
            error=payload.get("error"),
        )
    except ValidationError as e:
        logger.error("Malformed search payload: %s", e)
        query = payload.get("query")
        return SearchOutcome(
            query=query if isinstance(query, str) else "",
            terms=[],
            error=FinderError(kind="unexpected", message=SEARCH_UNEXPECTED_MESSAGE),
        )


def detail_outcome_from_payload(payload: Dict[str, Any]) -> DetailOutcome:
    """Convert a /recipes/{id} payload from the API client into a DetailOutcome."""
    try:
        return DetailOutcome(
            recipe_id=payload.get("recipe_id", ""),
            recipe=None if payload.get("error") else payload.get("recipe"),
            error=payload.get("error"),
        )
    except ValidationError as e:
        logger.error("Malformed recipe payload: %s", e)
        recipe_id = payload.get("recipe_id")
        return DetailOutcome(
            recipe_id=recipe_id if isinstance(recipe_id, str) else "",
            error=FinderError(kind="unexpected", message=DETAILS_UNEXPECTED_MESSAGE),
        )


def run_search(query: str) -> None:
    """
    Run a search for the query and record its outcome.

    Blank queries are ignored. The outcome is applied only if no newer search
    was started meanwhile.
    """
    state = get_finder_state()
    token = state.begin_search(query)
    if token is None:
        return
    payload = search_recipes(query)
    state.complete_search(token, search_outcome_from_payload(payload))


def open_recipe(recipe: RecipeSummary) -> None:
    """Select a recipe and load its details into the state."""
    state = get_finder_state()
    token = state.select_recipe(recipe)
    if token is None:
        return
    payload = get_recipe_details(recipe.id)
    state.complete_detail(token, detail_outcome_from_payload(payload))


def close_recipe() -> None:
    """Close the detail view."""
    get_finder_state().close_detail()


def reset_search() -> None:
    """Clear query, results, errors and the detail view."""
    get_finder_state().reset()
