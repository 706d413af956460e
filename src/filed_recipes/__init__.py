"""
Filed Recipes - Keep a recipe collection in a plain text file.

This package provides a recipe store that reads and writes recipes in a
section-tagged line format, hands out copies of its records, and notifies
subscribers whenever the collection is loaded, saved or changed.
"""

__version__ = "0.1.0"

from .config import StoreConfig
from .exceptions import (
    ConfigurationError,
    FiledRecipesError,
    PathError,
    RecipeFormatError,
    RecipeIndexError,
    RecipeIOError,
    RecipeNotFoundError,
)
from .models import Ingredient, Recipe
from .store import RecipeStore

__all__ = [
    "ConfigurationError",
    "FiledRecipesError",
    "Ingredient",
    "PathError",
    "Recipe",
    "RecipeFormatError",
    "RecipeIOError",
    "RecipeIndexError",
    "RecipeNotFoundError",
    "RecipeStore",
    "StoreConfig",
]
