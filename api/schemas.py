"""
Pydantic schemas for FastAPI responses.

These schemas define the JSON contract between the backend and the Streamlit
frontend. Recipe payloads reuse the models from recipe_finder.models; the
response wrappers add the normalized sequences and the in-band error object.

# NOTE: Upstream failures are reported in-band (HTTP 200 with `error` set) so
    the frontend can render the right banner; only invalid requests get 4xx.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from recipe_finder.models import FinderError, IngredientLine, RecipeDetail, RecipeSummary


class SearchResponse(BaseModel):
    """Response model for GET /search."""
    query: str = Field(..., description="Query as received")
    terms: List[str] = Field(default_factory=list, description="Parsed ingredient terms, in request order")
    results: List[RecipeSummary] = Field(default_factory=list, description="Matching recipes (empty on error)")
    count: int = Field(0, ge=0, description="Number of results")
    error: Optional[FinderError] = Field(None, description="Error details when the search failed")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "chicken, tomato",
                "terms": ["chicken", "tomato"],
                "results": [
                    {
                        "id": "52795",
                        "name": "Chicken Handi",
                        "thumbnail": "https://www.themealdb.com/images/media/meals/wyxwsp1486979827.jpg",
                    }
                ],
                "count": 1,
                "error": None,
            }
        }
    )


class RecipeDetailResponse(BaseModel):
    """Response model for GET /recipes/{recipe_id}."""
    recipe_id: str = Field(..., description="Requested recipe identifier")
    recipe: Optional[RecipeDetail] = Field(None, description="Full recipe record (None on error)")
    ingredients: List[IngredientLine] = Field(default_factory=list, description="Filled ingredient slots, in slot order")
    instructions: List[str] = Field(default_factory=list, description="Instruction steps, in cooking order")
    error: Optional[FinderError] = Field(None, description="Error details when the fetch failed")


class SuggestionsResponse(BaseModel):
    """Response model for GET /suggestions."""
    suggestions: List[str] = Field(default_factory=list, description="Quick-search ingredient suggestions")
