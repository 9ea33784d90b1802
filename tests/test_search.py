"""
Tests for the ingredient search aggregation.

This module tests search_recipes, which looks up every ingredient term and
intersects the results by recipe id. The connector is always mocked to avoid
real API calls.
"""

import threading
from typing import Any, Dict, List
from unittest.mock import Mock, patch

import pytest

from recipe_finder.connectors.mealdb_connector import MealDBConnectionError, MealDBResponseError
from recipe_finder.models import RecipeSummary
from recipe_finder.search import intersect_by_id, parse_ingredient_terms, search_recipes


def meal(meal_id: str, name: str = None) -> Dict[str, Any]:
    """Build a raw filter.php entry."""
    return {
        "idMeal": meal_id,
        "strMeal": name or f"Meal {meal_id}",
        "strMealThumb": f"https://img.example/{meal_id}.jpg",
    }


def make_connector(results_by_term: Dict[str, Any]) -> Mock:
    """
    Build a mock connector.

    Values are either a list of raw meals or an exception instance to raise.
    """
    def search_by_ingredient(term: str) -> List[Dict[str, Any]]:
        value = results_by_term.get(term, [])
        if isinstance(value, Exception):
            raise value
        return value

    connector = Mock()
    connector.search_by_ingredient.side_effect = search_by_ingredient
    return connector


def ids(recipes: List[RecipeSummary]) -> List[str]:
    return [recipe.id for recipe in recipes]


class TestParseIngredientTerms:
    """Test cases for splitting the raw query."""

    def test_splits_on_commas_and_trims(self):
        assert parse_ingredient_terms(" chicken ,tomato,  rice ") == ["chicken", "tomato", "rice"]

    def test_drops_empty_pieces(self):
        assert parse_ingredient_terms("chicken,, ,tomato,") == ["chicken", "tomato"]

    def test_blank_query_gives_no_terms(self):
        assert parse_ingredient_terms("") == []
        assert parse_ingredient_terms("   ") == []
        assert parse_ingredient_terms(" , ,") == []
        assert parse_ingredient_terms(None) == []

    def test_keeps_inner_spaces(self):
        assert parse_ingredient_terms("chicken breast, olive oil") == ["chicken breast", "olive oil"]


class TestIntersectById:
    """Test cases for the id intersection."""

    def test_keeps_first_list_order(self):
        """A -> [X, Y, Z], B -> [Y, Z, W] gives [Y, Z]."""
        list_a = [RecipeSummary(id=i, name=i) for i in ("X", "Y", "Z")]
        list_b = [RecipeSummary(id=i, name=i) for i in ("Y", "Z", "W")]
        assert ids(intersect_by_id([list_a, list_b])) == ["Y", "Z"]

    def test_order_not_taken_from_later_lists(self):
        list_a = [RecipeSummary(id=i) for i in ("3", "1", "2")]
        list_b = [RecipeSummary(id=i) for i in ("1", "2", "3")]
        assert ids(intersect_by_id([list_a, list_b])) == ["3", "1", "2"]

    def test_prefers_summary_from_first_list(self):
        list_a = [RecipeSummary(id="1", name="From first")]
        list_b = [RecipeSummary(id="1", name="From second")]
        assert intersect_by_id([list_a, list_b])[0].name == "From first"

    def test_requires_membership_in_every_list(self):
        list_a = [RecipeSummary(id=i) for i in ("1", "2", "3")]
        list_b = [RecipeSummary(id=i) for i in ("1", "2")]
        list_c = [RecipeSummary(id=i) for i in ("2", "3")]
        assert ids(intersect_by_id([list_a, list_b, list_c])) == ["2"]

    def test_disjoint_lists_give_empty_result(self):
        list_a = [RecipeSummary(id="1")]
        list_b = [RecipeSummary(id="2")]
        assert intersect_by_id([list_a, list_b]) == []

    def test_no_lists(self):
        assert intersect_by_id([]) == []


class TestSingleTermSearch:
    """Test cases for one-ingredient queries."""

    def test_returns_upstream_list_in_upstream_order(self):
        connector = make_connector({"chicken": [meal("3"), meal("1"), meal("2")]})

        outcome = search_recipes("chicken", connector=connector)

        assert outcome.error is None
        assert ids(outcome.recipes) == ["3", "1", "2"]
        assert outcome.terms == ["chicken"]
        connector.search_by_ingredient.assert_called_once_with("chicken")

    def test_maps_summary_fields(self):
        connector = make_connector({"chicken": [meal("52772", "Teriyaki Chicken Casserole")]})

        recipe = search_recipes("chicken", connector=connector).recipes[0]

        assert recipe.id == "52772"
        assert recipe.name == "Teriyaki Chicken Casserole"
        assert recipe.thumbnail == "https://img.example/52772.jpg"

    def test_trims_term_before_lookup(self):
        connector = make_connector({"chicken": [meal("1")]})
        search_recipes("  chicken  ", connector=connector)
        connector.search_by_ingredient.assert_called_once_with("chicken")

    def test_no_match_gives_no_results_error_with_query(self):
        connector = make_connector({"unicorn": []})

        outcome = search_recipes("unicorn", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "no_results"
        assert '"unicorn"' in outcome.error.message
        assert outcome.error.terms == ["unicorn"]

    def test_blank_query_is_a_no_op(self):
        connector = make_connector({})

        assert search_recipes("  ,  ", connector=connector) is None
        connector.search_by_ingredient.assert_not_called()


class TestMultiTermSearch:
    """Test cases for comma-separated queries."""

    def test_intersection_in_first_term_order(self):
        connector = make_connector({
            "chicken": [meal("X"), meal("Y"), meal("Z")],
            "tomato": [meal("Y"), meal("Z"), meal("W")],
        })

        outcome = search_recipes("chicken, tomato", connector=connector)

        assert outcome.error is None
        assert ids(outcome.recipes) == ["Y", "Z"]

    def test_output_is_subset_of_first_list(self):
        first = [meal(str(i)) for i in (5, 9, 2, 7)]
        second = [meal(str(i)) for i in (7, 2, 11, 5)]
        connector = make_connector({"a": first, "b": second})

        outcome = search_recipes("a,b", connector=connector)

        first_ids = [m["idMeal"] for m in first]
        assert ids(outcome.recipes) == [i for i in first_ids if i in {"7", "2", "5"}]

    def test_queries_every_term(self):
        connector = make_connector({"a": [meal("1")], "b": [meal("1")], "c": [meal("1")]})

        search_recipes("a, b, c", connector=connector)

        called = sorted(call.args[0] for call in connector.search_by_ingredient.call_args_list)
        assert called == ["a", "b", "c"]

    def test_any_empty_term_gives_no_results_listing_all_terms(self):
        connector = make_connector({
            "chicken": [meal("1"), meal("2")],
            "unicorn": [],
            "tomato": [meal("1")],
        })

        outcome = search_recipes("chicken, unicorn, tomato", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "no_results"
        assert outcome.error.message == 'No recipes found that match all ingredients: "chicken, unicorn, tomato".'
        assert outcome.error.terms == ["chicken", "unicorn", "tomato"]

    def test_empty_intersection_gives_no_results(self):
        connector = make_connector({"chicken": [meal("1")], "tomato": [meal("2")]})

        outcome = search_recipes("chicken, tomato", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "no_results"
        assert "chicken, tomato" in outcome.error.message

    def test_waits_for_all_lookups_even_after_an_empty_one(self):
        """An early empty result must not stop the remaining lookups."""
        connector = make_connector({"a": [], "b": [meal("1")], "c": [meal("1")]})

        search_recipes("a, b, c", connector=connector)

        assert connector.search_by_ingredient.call_count == 3

    def test_lookups_run_concurrently(self):
        """Both lookups must be in flight at the same time."""
        barrier = threading.Barrier(2, timeout=5)

        def search_by_ingredient(term):
            barrier.wait()
            return [meal("1")]

        connector = Mock()
        connector.search_by_ingredient.side_effect = search_by_ingredient

        outcome = search_recipes("a, b", connector=connector)

        assert ids(outcome.recipes) == ["1"]

    def test_identical_queries_give_identical_results(self):
        connector = make_connector({
            "chicken": [meal("3"), meal("1"), meal("2")],
            "rice": [meal("2"), meal("3")],
        })

        first = search_recipes("chicken, rice", connector=connector)
        second = search_recipes("chicken, rice", connector=connector)

        assert ids(first.recipes) == ids(second.recipes) == ["3", "2"]


class TestSearchFailures:
    """Test cases for upstream failures."""

    def test_connection_error_maps_to_connectivity(self):
        connector = make_connector({"chicken": MealDBConnectionError("refused")})

        outcome = search_recipes("chicken", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "connectivity"
        assert "internet connection" in outcome.error.message

    def test_http_error_maps_to_unexpected_with_status(self):
        connector = make_connector({"chicken": MealDBResponseError("boom", status_code=503)})

        outcome = search_recipes("chicken", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "unexpected"
        assert outcome.error.status_code == 503
        assert outcome.error.message.startswith("Sorry, we encountered an error while searching")

    def test_one_failed_term_fails_the_whole_search(self):
        connector = make_connector({
            "chicken": [meal("1")],
            "tomato": MealDBResponseError("boom", status_code=500),
        })

        outcome = search_recipes("chicken, tomato", connector=connector)

        assert outcome.recipes == []
        assert outcome.error.kind == "unexpected"
        assert outcome.error.status_code == 500

    def test_failure_wins_over_empty_match(self):
        connector = make_connector({"a": [], "b": MealDBConnectionError("down")})

        outcome = search_recipes("a, b", connector=connector)

        assert outcome.error.kind == "connectivity"

    def test_first_failing_term_decides_the_error(self):
        connector = make_connector({
            "a": MealDBConnectionError("down"),
            "b": MealDBResponseError("boom", status_code=500),
        })

        outcome = search_recipes("a, b", connector=connector)

        assert outcome.error.kind == "connectivity"

    def test_malformed_summary_maps_to_unexpected(self):
        connector = make_connector({"chicken": [{"strMeal": "No id"}]})

        outcome = search_recipes("chicken", connector=connector)

        assert outcome.error.kind == "unexpected"
        assert outcome.recipes == []

    def test_unknown_exception_maps_to_unexpected(self):
        connector = make_connector({"chicken": KeyError("meals")})

        outcome = search_recipes("chicken", connector=connector)

        assert outcome.error.kind == "unexpected"
        assert outcome.error.status_code is None


class TestDefaultConnector:
    """The default connector is built lazily so it can be patched."""

    @patch("recipe_finder.search.MealDBConnector")
    def test_uses_mealdb_connector_by_default(self, mock_connector_class):
        mock_connector_class.return_value = make_connector({"rice": [meal("9")]})

        outcome = search_recipes("rice")

        mock_connector_class.assert_called_once_with()
        assert ids(outcome.recipes) == ["9"]
