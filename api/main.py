"""
FastAPI application for the Recipe Finder API.

This module defines the REST API endpoints for the recipe finder backend:
- GET /search: Search recipes that use every ingredient in a comma-separated list
- GET /recipes/{recipe_id}: Get a recipe with normalized ingredients and instructions
- GET /suggestions: Quick-search ingredient suggestions
- GET /health: Health check

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time

from fastapi import Depends, FastAPI, HTTPException, Path, Query, status

from api.config import MealDBConfig, get_log_level
from api.schemas import RecipeDetailResponse, SearchResponse, SuggestionsResponse
from recipe_finder.connectors.base import BaseConnector
from recipe_finder.connectors.mealdb_connector import MealDBConnector
from recipe_finder.details import extract_ingredients, fetch_recipe_details, format_instructions
from recipe_finder.search import search_recipes

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

API_NAME = "Recipe Finder API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Backend API for finding TheMealDB recipes by one or more ingredients"

SUGGESTED_INGREDIENTS = ["chicken", "tomato", "pasta", "rice"]

app = FastAPI(
    title=API_NAME,
    description=API_DESCRIPTION,
    version=API_VERSION,
    openapi_tags=[
        {
            "name": "search",
            "description": "Search recipes by ingredient. Several comma-separated ingredients return only recipes using all of them.",
        },
        {
            "name": "recipes",
            "description": "Full recipe details with normalized ingredients and instruction steps.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)


def get_connector() -> BaseConnector:
    """
    Build the recipe service connector from configuration.

    Override with app.dependency_overrides[get_connector] in tests.
    """
    return MealDBConnector(
        base_url=MealDBConfig.get_base_url(),
        timeout=MealDBConfig.get_timeout(),
    )


@app.get(
    "/search",
    response_model=SearchResponse,
    tags=["search"],
    summary="Search recipes by ingredient",
    description="Looks up each comma-separated ingredient and returns the recipes common to all of them, "
                "in the order of the first ingredient's results. Upstream failures are reported in the "
                "`error` field with HTTP 200.",
)
def search(
    q: str = Query(..., min_length=1, description="Ingredient or comma-separated ingredients (e.g., 'chicken, tomato')"),
    connector: BaseConnector = Depends(get_connector),
) -> SearchResponse:
    """
    Search recipes that use every requested ingredient.

    Args:
        q: Raw query string; split on commas, blank pieces ignored

    Returns:
        SearchResponse with results or an error object

    Raises:
        HTTPException 400: If the query holds no ingredient after parsing (e.g., " , ")

    Example:
        ```bash
        GET /search?q=chicken,tomato
        ```
    """
    outcome = search_recipes(q, connector=connector, max_workers=MealDBConfig.get_max_workers())
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one ingredient must be specified.",
        )

    if outcome.error is not None:
        logger.info("GET /search q=%r -> %s", q, outcome.error.kind)
    else:
        logger.info("GET /search q=%r -> %d results", q, len(outcome.recipes))

    return SearchResponse(
        query=outcome.query,
        terms=outcome.terms,
        results=outcome.recipes,
        count=len(outcome.recipes),
        error=outcome.error,
    )


@app.get(
    "/recipes/{recipe_id}",
    response_model=RecipeDetailResponse,
    tags=["recipes"],
    summary="Get recipe details",
    description="Fetches the full recipe and returns it with its filled ingredient slots and instruction "
                "steps. Unknown ids and upstream failures are reported in the `error` field with HTTP 200.",
)
def recipe_details(
    recipe_id: str = Path(..., min_length=1, description="Recipe identifier (e.g., '52772')"),
    connector: BaseConnector = Depends(get_connector),
) -> RecipeDetailResponse:
    """
    Get one recipe with its normalized ingredient and instruction lists.

    Raises:
        HTTPException 400: If the identifier is blank
    """
    outcome = fetch_recipe_details(recipe_id, connector=connector)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A recipe identifier must be specified.",
        )

    if outcome.error is not None or outcome.recipe is None:
        logger.info("GET /recipes/%s -> %s", recipe_id, outcome.error.kind if outcome.error else "empty")
        return RecipeDetailResponse(recipe_id=outcome.recipe_id, error=outcome.error)

    return RecipeDetailResponse(
        recipe_id=outcome.recipe_id,
        recipe=outcome.recipe,
        ingredients=extract_ingredients(outcome.recipe),
        instructions=format_instructions(outcome.recipe.instructions),
    )


@app.get("/suggestions", response_model=SuggestionsResponse, tags=["search"])
def suggestions() -> SuggestionsResponse:
    """Ingredients offered as one-click searches before the first search."""
    return SuggestionsResponse(suggestions=list(SUGGESTED_INGREDIENTS))


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime and the configured upstream.
        Always returns 200 OK if the endpoint is reachable; the upstream is not probed.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)
    return {
        "status": "ok",
        "name": API_NAME,
        "version": API_VERSION,
        "uptime_seconds": uptime_seconds,
        "upstream": MealDBConfig.get_base_url(),
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "docs": "/docs",
    }
