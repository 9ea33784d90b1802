"""
Backend API Client Module.

This module is the **single source of truth** for all backend API communication.
All HTTP calls to the FastAPI backend should go through functions in this module.

Key principles:
- Centralized error handling for network issues
- One timeout per endpoint, no automatic retries
- Failures come back in the same shape as backend errors, so pages render a
  single kind of error banner
- Never let exceptions bubble up to crash the Streamlit app

# NOTE: search_recipes and get_recipe_details never return None. When the backend
    cannot be reached they return a payload whose "error" has kind "connectivity";
    when it answers with a non-2xx status the kind is "unexpected" and
    "status_code" is set.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
import streamlit as st

from api.config import get_backend_url

logger = logging.getLogger(__name__)

SEARCH_TIMEOUT_SECONDS = 30
DETAILS_TIMEOUT_SECONDS = 15

SEARCH_CONNECTIVITY_MESSAGE = "Network error: Please check your internet connection and try again."
SEARCH_UNEXPECTED_MESSAGE = "Sorry, we encountered an error while searching. Please try again in a moment."
DETAILS_CONNECTIVITY_MESSAGE = "Unable to load recipe details. Please check your connection."
DETAILS_UNEXPECTED_MESSAGE = "Sorry, we couldn't load the recipe details. Please try again."


def _error(kind: str, message: str, status_code: Optional[int] = None) -> Dict[str, Any]:
    return {"kind": kind, "message": message, "status_code": status_code, "terms": []}


def _get_json(
    path: str,
    params: Optional[Dict[str, Any]],
    timeout: float,
    connectivity_message: str,
    unexpected_message: str,
) -> Dict[str, Any]:
    """
    GET a backend endpoint and return its JSON body.

    Returns:
        The parsed body, or {"error": {...}} when the call failed.
    """
    url = f"{get_backend_url()}{path}"
    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        logger.warning("Backend unreachable at %s: %s", url, e)
        return {"error": _error("connectivity", connectivity_message)}
    except requests.exceptions.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        logger.error("Backend returned %s for %s", status_code, url)
        return {"error": _error("unexpected", unexpected_message, status_code)}
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("Backend call to %s failed: %s", url, e)
        return {"error": _error("unexpected", unexpected_message)}

    if not isinstance(data, dict):
        logger.error("Backend returned a non-object body for %s: %r", url, type(data).__name__)
        return {"error": _error("unexpected", unexpected_message)}
    return data


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling /health endpoint.

    Returns:
        {"status": "ok", "raw": {...}, "docs_url": "/docs"}, or None if the
        backend is unreachable or unhealthy.
    """
    try:
        response = requests.get(f"{get_backend_url()}/health", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return None

    if isinstance(data, dict) and data.get("status") == "ok":
        return {"status": "ok", "raw": data, "docs_url": "/docs"}
    return None


def search_recipes(query: str) -> Dict[str, Any]:
    """
    Search recipes by one or more comma-separated ingredients.

    Args:
        query: Raw query string (e.g., "chicken, tomato")

    Returns:
        Dictionary with "results" (list of {id, name, thumbnail}) and "error"
        (None or {kind, message, status_code, terms}). results is always empty
        when error is set.
    """
    data = _get_json(
        "/search",
        params={"q": query},
        timeout=SEARCH_TIMEOUT_SECONDS,
        connectivity_message=SEARCH_CONNECTIVITY_MESSAGE,
        unexpected_message=SEARCH_UNEXPECTED_MESSAGE,
    )
    if data.get("error"):
        data["results"] = []
    data.setdefault("results", [])
    data.setdefault("query", query)
    return data


def get_recipe_details(recipe_id: str) -> Dict[str, Any]:
    """
    Get the full record for one recipe.

    Args:
        recipe_id: Recipe identifier from a search result

    Returns:
        Dictionary with "recipe_id", "recipe" (raw RecipeDetail fields) and
        "error". The page normalizes the record itself with
        recipe_finder.details, so the backend's "ingredients" and
        "instructions" fields are dropped here.
    """
    data = _get_json(
        f"/recipes/{quote(recipe_id, safe='')}",
        params=None,
        timeout=DETAILS_TIMEOUT_SECONDS,
        connectivity_message=DETAILS_CONNECTIVITY_MESSAGE,
        unexpected_message=DETAILS_UNEXPECTED_MESSAGE,
    )
    data.setdefault("recipe_id", recipe_id)
    data.setdefault("recipe", None)
    data.pop("ingredients", None)
    data.pop("instructions", None)
    return data


@st.cache_data(ttl=300)
def get_suggestions() -> List[str]:
    """
    Get the quick-search ingredient suggestions.

    Returns:
        List of ingredient names, or an empty list if the backend is unavailable.
    """
    try:
        response = requests.get(f"{get_backend_url()}/suggestions", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        # Suggestions are a nice-to-have
        return []
    if not isinstance(data, dict):
        return []
    return [str(item) for item in data.get("suggestions") or [] if item]
