"""Protocol definitions for filed_recipes.

Front-ends depend on :class:`RecipeRepository` rather than on
:class:`~filed_recipes.store.RecipeStore` directly, so they can be driven by
an in-memory fake in tests.

Example:
    >>> from filed_recipes.store import RecipeStore
    >>> isinstance(RecipeStore("recipes.txt"), RecipeRepository)
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from .models import Recipe


@runtime_checkable
class RecipeRepository(Protocol):
    """Protocol for a recipe collection with load, save and delete.

    Implementations hand out copies from :meth:`get_all` and :meth:`get_at`
    and call subscribed handlers after every change.
    """

    @property
    def is_modified(self) -> bool:
        """Whether there are unsaved changes."""
        ...

    def load(self) -> None:
        """Replace the collection with the stored recipes."""
        ...

    def save(self) -> None:
        """Persist the collection."""
        ...

    def get_all(self) -> list[Recipe]:
        """Return copies of all recipes."""
        ...

    def get_at(self, index: int) -> Recipe:
        """Return a copy of one recipe.

        Raises:
            IndexError: If ``index`` is out of range
        """
        ...

    def delete(self, target: Recipe | int) -> None:
        """Remove a recipe by value or by position."""
        ...

    def subscribe(self, handler: Callable[[Any], object]) -> Callable[[Any], object]:
        """Register a change handler."""
        ...

    def unsubscribe(self, handler: Callable[[Any], object]) -> None:
        """Remove a change handler."""
        ...
