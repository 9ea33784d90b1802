"""
Tests for the FastAPI endpoints.

The connector dependency is overridden with a mock, so no request leaves the
test process. Upstream failures must come back as HTTP 200 with the error in
the body; only invalid requests get 4xx.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_connector
from recipe_finder.connectors.mealdb_connector import MealDBConnectionError, MealDBResponseError


def meal(meal_id: str) -> dict:
    return {"idMeal": meal_id, "strMeal": f"Meal {meal_id}", "strMealThumb": f"https://img.example/{meal_id}.jpg"}


@pytest.fixture
def connector():
    mock_connector = Mock()
    app.dependency_overrides[get_connector] = lambda: mock_connector
    yield mock_connector
    app.dependency_overrides.clear()


@pytest.fixture
def client(connector):
    return TestClient(app)


class TestSearchEndpoint:
    """Test cases for GET /search."""

    def test_single_term(self, client, connector):
        connector.search_by_ingredient.return_value = [meal("2"), meal("1")]

        response = client.get("/search", params={"q": "chicken"})

        assert response.status_code == 200
        data = response.json()
        assert data["terms"] == ["chicken"]
        assert [r["id"] for r in data["results"]] == ["2", "1"]
        assert data["count"] == 2
        assert data["error"] is None

    def test_multi_term_intersection(self, client, connector):
        results = {
            "chicken": [meal("X"), meal("Y"), meal("Z")],
            "tomato": [meal("Y"), meal("Z"), meal("W")],
        }
        connector.search_by_ingredient.side_effect = lambda term: results[term]

        response = client.get("/search", params={"q": "chicken, tomato"})

        data = response.json()
        assert [r["id"] for r in data["results"]] == ["Y", "Z"]

    def test_no_results_is_reported_in_band(self, client, connector):
        connector.search_by_ingredient.return_value = []

        response = client.get("/search", params={"q": "unicorn"})

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == []
        assert data["error"]["kind"] == "no_results"

    def test_connectivity_error_is_reported_in_band(self, client, connector):
        connector.search_by_ingredient.side_effect = MealDBConnectionError("down")

        data = client.get("/search", params={"q": "chicken"}).json()

        assert data["results"] == []
        assert data["error"]["kind"] == "connectivity"

    def test_upstream_status_is_reported(self, client, connector):
        connector.search_by_ingredient.side_effect = MealDBResponseError("boom", status_code=502)

        data = client.get("/search", params={"q": "chicken"}).json()

        assert data["error"]["kind"] == "unexpected"
        assert data["error"]["status_code"] == 502

    def test_blank_terms_give_400(self, client, connector):
        response = client.get("/search", params={"q": " , "})

        assert response.status_code == 400
        connector.search_by_ingredient.assert_not_called()

    def test_missing_query_gives_422(self, client):
        assert client.get("/search").status_code == 422


class TestRecipeEndpoint:
    """Test cases for GET /recipes/{recipe_id}."""

    def test_returns_normalized_lists(self, client, connector):
        record = {
            "idMeal": "52772",
            "strMeal": "Teriyaki Chicken Casserole",
            "strInstructions": "Preheat oven.\r\n\r\nBake.",
            "strIngredient1": "soy sauce",
            "strMeasure1": "3/4 cup",
            "strIngredient2": " ",
            "strIngredient3": "water",
            "strMeasure3": None,
            "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
        }
        connector.lookup_by_id.return_value = record

        response = client.get("/recipes/52772")

        assert response.status_code == 200
        data = response.json()
        assert data["recipe"]["id"] == "52772"
        assert data["recipe"]["youtube_url"] == "https://www.youtube.com/watch?v=4aZr5hZXP_s"
        assert data["ingredients"] == [
            {"name": "soy sauce", "measure": "3/4 cup"},
            {"name": "water", "measure": ""},
        ]
        assert data["instructions"] == ["Preheat oven.", "Bake."]
        assert data["error"] is None
        connector.lookup_by_id.assert_called_once_with("52772")

    def test_not_found(self, client, connector):
        connector.lookup_by_id.return_value = None

        data = client.get("/recipes/0").json()

        assert data["recipe"] is None
        assert data["ingredients"] == []
        assert data["error"]["kind"] == "not_found"

    def test_connectivity_error(self, client, connector):
        connector.lookup_by_id.side_effect = MealDBConnectionError("down")

        data = client.get("/recipes/52772").json()

        assert data["error"]["kind"] == "connectivity"


class TestMiscEndpoints:
    """Test cases for /suggestions, /health and /."""

    def test_suggestions(self, client):
        data = client.get("/suggestions").json()
        assert data["suggestions"] == ["chicken", "tomato", "pasta", "rice"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"
