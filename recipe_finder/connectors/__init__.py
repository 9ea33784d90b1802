"""Connectors for upstream recipe services."""

from .base import BaseConnector
from .mealdb_connector import (
    MealDBConnector,
    MealDBError,
    MealDBConnectionError,
    MealDBResponseError,
)

__all__ = [
    "BaseConnector",
    "MealDBConnector",
    "MealDBError",
    "MealDBConnectionError",
    "MealDBResponseError",
]
