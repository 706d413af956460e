"""Unit tests for filed_recipes.protocols module.

Tests Protocol definitions and runtime checkability.
"""

from pathlib import Path
from typing import Any

from filed_recipes.protocols import RecipeRepository
from filed_recipes.store import RecipeStore


class TestRecipeRepositoryProtocol:
    """Tests for RecipeRepository protocol."""

    def test_store_satisfies_protocol(self, tmp_path: Path) -> None:
        """RecipeStore is a RecipeRepository."""
        assert isinstance(RecipeStore(tmp_path / "recipes.txt"), RecipeRepository)

    def test_fake_satisfies_protocol(self) -> None:
        """Any object with the right members passes the check."""

        class FakeRepository:
            is_modified = False

            def load(self) -> None:
                pass

            def save(self) -> None:
                pass

            def get_all(self) -> list[Any]:
                return []

            def get_at(self, index: int) -> Any:
                raise IndexError(index)

            def delete(self, target: Any) -> None:
                pass

            def subscribe(self, handler: Any) -> Any:
                return handler

            def unsubscribe(self, handler: Any) -> None:
                pass

        assert isinstance(FakeRepository(), RecipeRepository)

    def test_missing_method_fails_check(self) -> None:
        """Class without save fails isinstance check."""

        class ReadOnly:
            is_modified = False

            def load(self) -> None:
                pass

            def get_all(self) -> list[Any]:
                return []

        assert not isinstance(ReadOnly(), RecipeRepository)
