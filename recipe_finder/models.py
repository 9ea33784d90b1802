"""
Recipe models for the recipe finder.

This module defines the schemas used throughout the finder. The connector hands
back raw TheMealDB dictionaries; they are mapped into these models exactly once,
at the edge, so the rest of the code never touches upstream field names.

Upstream field mapping:
- Summary (filter.php): idMeal -> id, strMeal -> name, strMealThumb -> thumbnail
- Detail (lookup.php): the summary fields plus strCategory, strArea, strTags,
  strInstructions, strYoutube, strSource and the 20 numbered
  strIngredientN / strMeasureN pairs

# NOTE: The upstream detail schema carries ingredients as 20 parallel numbered
    fields instead of a list. RecipeDetail.from_api maps them into a fixed
    20-element ingredient_slots list (slot 1 at index 0) so callers iterate a
    plain list in slot order.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

# Number of numbered ingredient/measure slots in the upstream detail record
INGREDIENT_SLOT_COUNT = 20

ErrorKind = Literal["no_results", "connectivity", "unexpected", "not_found"]


def _clean(value: Any) -> Optional[str]:
    """Return a stripped string, or None for missing/blank upstream values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class RecipeSummary(BaseModel):
    """
    A recipe as returned by the lookup-by-ingredient endpoint.

    Only `id` has meaning to the search aggregation (set operations); the other
    fields are passed through to the results grid.
    """
    id: str = Field(..., min_length=1, description="Stable recipe identifier (idMeal)")
    name: str = Field("", description="Display name (strMeal)")
    thumbnail: Optional[str] = Field(None, description="Thumbnail image URL (strMealThumb)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "52772",
                "name": "Teriyaki Chicken Casserole",
                "thumbnail": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
            }
        },
    )

    @classmethod
    def from_api(cls, meal: Dict[str, Any]) -> "RecipeSummary":
        """Build a summary from a raw filter.php entry."""
        return cls(
            id=str(meal.get("idMeal") or "").strip(),
            name=_clean(meal.get("strMeal")) or "",
            thumbnail=_clean(meal.get("strMealThumb")),
        )


class IngredientSlot(BaseModel):
    """One numbered ingredient/measure slot, exactly as upstream stored it."""
    name: Optional[str] = None
    measure: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class IngredientLine(BaseModel):
    """A normalized ingredient line ready for rendering."""
    name: str = Field(..., min_length=1, description="Ingredient name (trimmed, never blank)")
    measure: str = Field("", description="Quantity/measure (trimmed, empty when unset)")

    model_config = ConfigDict(frozen=True)


class RecipeDetail(BaseModel):
    """
    Full recipe record from the lookup-by-identifier endpoint.

    Fetched fresh for every detail request and never mutated afterwards.
    """
    id: str = Field(..., min_length=1, description="Stable recipe identifier (idMeal)")
    name: str = Field("", description="Display name (strMeal)")
    thumbnail: Optional[str] = Field(None, description="Thumbnail image URL")
    category: Optional[str] = Field(None, description="Category tag (e.g., 'Chicken')")
    area: Optional[str] = Field(None, description="Cuisine tag (e.g., 'Japanese')")
    tags: List[str] = Field(default_factory=list, description="Free-form tags from strTags")
    instructions: Optional[str] = Field(None, description="Free-text instructions blob")
    ingredient_slots: List[IngredientSlot] = Field(
        default_factory=lambda: [IngredientSlot() for _ in range(INGREDIENT_SLOT_COUNT)],
        description="Exactly 20 ingredient/measure slots, slot 1 first",
    )
    youtube_url: Optional[str] = Field(None, description="Optional video link")
    source_url: Optional[str] = Field(None, description="Optional link to the original recipe")

    model_config = ConfigDict(frozen=True)

    @field_validator("ingredient_slots")
    @classmethod
    def _check_slot_count(cls, slots: List[IngredientSlot]) -> List[IngredientSlot]:
        if len(slots) != INGREDIENT_SLOT_COUNT:
            raise ValueError(
                f"ingredient_slots must hold exactly {INGREDIENT_SLOT_COUNT} entries, got {len(slots)}"
            )
        return slots

    @classmethod
    def from_api(cls, meal: Dict[str, Any]) -> "RecipeDetail":
        """
        Build a detail record from a raw lookup.php entry.

        Args:
            meal: Raw dictionary for one meal

        Returns:
            RecipeDetail with the numbered ingredient fields mapped into
            ingredient_slots (strIngredient1/strMeasure1 -> index 0, and so on)
        """
        slots = [
            IngredientSlot(
                name=meal.get(f"strIngredient{number}"),
                measure=meal.get(f"strMeasure{number}"),
            )
            for number in range(1, INGREDIENT_SLOT_COUNT + 1)
        ]

        raw_tags = _clean(meal.get("strTags")) or ""
        tags = [tag.strip() for tag in raw_tags.split(",") if tag.strip()]

        return cls(
            id=str(meal.get("idMeal") or "").strip(),
            name=_clean(meal.get("strMeal")) or "",
            thumbnail=_clean(meal.get("strMealThumb")),
            category=_clean(meal.get("strCategory")),
            area=_clean(meal.get("strArea")),
            tags=tags,
            instructions=meal.get("strInstructions"),
            ingredient_slots=slots,
            youtube_url=_clean(meal.get("strYoutube")),
            source_url=_clean(meal.get("strSource")),
        )


class FinderError(BaseModel):
    """
    Display-ready error state.

    kind is one of:
    - "no_results": zero matches or an empty intersection
    - "connectivity": the recipe service could not be reached
    - "unexpected": any other failure (status_code is set for HTTP errors)
    - "not_found": detail lookup for an unknown identifier
    """
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    terms: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SearchOutcome(BaseModel):
    """Result of one ingredient search: either recipes or an error, never both."""
    query: str
    terms: List[str]
    recipes: List[RecipeSummary] = Field(default_factory=list)
    error: Optional[FinderError] = None

    @model_validator(mode="after")
    def _no_recipes_with_error(self) -> "SearchOutcome":
        if self.error is not None and self.recipes:
            raise ValueError("a failed search cannot carry recipes")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class DetailOutcome(BaseModel):
    """Result of one detail fetch: either the record or an error."""
    recipe_id: str
    recipe: Optional[RecipeDetail] = None
    error: Optional[FinderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
