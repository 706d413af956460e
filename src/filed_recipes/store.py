"""Recipe store backed by a section-tagged text file.

This module provides :class:`RecipeStore`, the repository that owns the
in-memory recipe collection. It loads the collection from its file, hands
out deep copies, deletes entries, writes the collection back and tells
subscribers whenever any of that happens.

Example:
    >>> store = RecipeStore("recipes.txt")
    >>> store.load()
    >>> [recipe.name for recipe in store.get_all()]
    ['Apple Pie', 'Tea']
    >>> store.delete(0)
    >>> store.is_modified
    True
    >>> store.save()
"""

from __future__ import annotations

import codecs
import logging
import operator
import os
import stat
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from .config import StoreConfig
from .events import ChangeHandler, ChangeNotifier
from .exceptions import PathError, RecipeIOError, RecipeIndexError, RecipeNotFoundError
from .models import Recipe
from .recipe_format import check_recipe, dump_lines, parse_lines

logger = logging.getLogger(__name__)


class RecipeStore:
    """In-memory recipe collection bound to one recipe file.

    Recipes handed out by :meth:`get_all`, :meth:`get_at` and iteration are
    deep copies, so changing them never changes the store. The only ways to
    change the collection are :meth:`load` (replace everything) and
    :meth:`delete`.

    Attributes:
        config: Encoding and save settings

    Example:
        >>> store = RecipeStore("recipes.txt")
        >>> @store.subscribe
        ... def on_change(sender: RecipeStore) -> None:
        ...     print(f"{len(sender)} recipes")
        >>> store.load()
        2 recipes
    """

    def __init__(self, path: str | os.PathLike[str], config: StoreConfig | None = None) -> None:
        """Bind the store to a recipe file.

        The file is not opened until :meth:`load` or :meth:`save`.

        Args:
            path: Path to the recipe file, relative paths resolve against
                the current working directory
            config: Store settings, defaults to :class:`StoreConfig`

        Raises:
            PathError: If the path cannot be normalized to an absolute path
        """
        self._path = _normalize_path(path)
        self.config = config if config is not None else StoreConfig()
        self._recipes: list[Recipe] = []
        self._is_modified = False
        self._changed: ChangeNotifier[RecipeStore] = ChangeNotifier()

    @property
    def path(self) -> Path:
        """Absolute path of the recipe file."""
        return self._path

    @property
    def is_modified(self) -> bool:
        """Whether the collection changed since the last load or save."""
        return self._is_modified

    def subscribe(self, handler: ChangeHandler[RecipeStore]) -> ChangeHandler[RecipeStore]:
        """Call ``handler(store)`` after every load, save and delete.

        Handlers run synchronously in subscription order. An exception raised
        by a handler propagates out of the operation that triggered it, after
        that operation has already taken effect.

        Returns:
            The handler, so this can be used as a decorator
        """
        return self._changed.subscribe(handler)

    def unsubscribe(self, handler: ChangeHandler[RecipeStore]) -> None:
        """Stop calling a handler. Handlers that were never subscribed are ignored."""
        self._changed.unsubscribe(handler)

    def load(self) -> None:
        """Replace the collection with the recipes in the file, sorted by name.

        The file is parsed in full before anything in the store changes, so a
        failed load leaves the previous collection and dirty flag in place.

        Raises:
            RecipeIOError: If the file cannot be read
            RecipeFormatError: If the file content violates the grammar
        """
        logger.debug(f"Loading recipes from {self._path}")
        try:
            with self._path.open("r", encoding=self._read_encoding()) as f:
                recipes = parse_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            raise RecipeIOError(
                "Could not read recipe file",
                path=str(self._path),
                error=str(e),
            ) from e

        recipes.sort(key=lambda recipe: recipe.name)

        self._recipes = recipes
        self._is_modified = False
        logger.info(f"Loaded {len(recipes)} recipes from {self._path}")
        self._on_changed()

    def save(self) -> None:
        """Write the collection to the file in its current order.

        Every recipe is checked before the file is touched. With
        ``config.atomic_save`` the lines go to a temporary file that replaces
        the target only once it is completely written.

        Raises:
            RecipeIOError: If the file cannot be written
            RecipeFormatError: If a recipe holds a value the format cannot
                represent (nothing is written in that case)
        """
        for recipe in self._recipes:
            check_recipe(recipe)

        try:
            if self.config.atomic_save:
                self._write_atomic()
            else:
                with self._path.open("w", encoding=self.config.encoding) as f:
                    self._write_lines(f)
        except (OSError, UnicodeEncodeError) as e:
            raise RecipeIOError(
                "Could not write recipe file",
                path=str(self._path),
                error=str(e),
            ) from e

        self._is_modified = False
        logger.info(f"Saved {len(self._recipes)} recipes to {self._path}")
        self._on_changed()

    def get_all(self) -> list[Recipe]:
        """Return copies of all recipes in store order."""
        return [recipe.clone() for recipe in self._recipes]

    def get_at(self, index: int) -> Recipe:
        """Return a copy of the recipe at a zero-based position.

        Raises:
            RecipeIndexError: If no recipe is stored at ``index``
        """
        return self._recipes[self._check_index(index)].clone()

    def delete(self, target: Recipe | int) -> None:
        """Remove a recipe, given either the recipe or its position.

        A recipe is matched by identity first, then by value, so a copy
        obtained from :meth:`get_all` or :meth:`get_at` removes the stored
        original.

        Args:
            target: Recipe to remove, or its zero-based index

        Raises:
            RecipeIndexError: If ``target`` is an index with no recipe
            RecipeNotFoundError: If ``target`` is a recipe matching no entry
        """
        if isinstance(target, Recipe):
            position = self._find(target)
        else:
            position = self._check_index(target)

        removed = self._recipes.pop(position)
        self._is_modified = True
        logger.info(f"Deleted recipe {removed.name!r}")
        self._on_changed()

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        # Copy the list too, so deleting while iterating is safe
        return iter(self.get_all())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(path={str(self._path)!r}, "
            f"recipes={len(self._recipes)}, modified={self._is_modified})"
        )

    def _on_changed(self) -> None:
        self._changed.notify(self)

    def _read_encoding(self) -> str:
        # A UTF-8 byte order mark is skipped on read; saves never write one
        if codecs.lookup(self.config.encoding).name == "utf-8":
            return "utf-8-sig"
        return self.config.encoding

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool):
            raise TypeError("Recipe index must be an int, not bool")
        try:
            index = operator.index(index)
        except TypeError as e:
            raise TypeError(f"Recipe index must be an int, not {type(index).__name__}") from e
        if not 0 <= index < len(self._recipes):
            raise RecipeIndexError(
                "Recipe index out of range",
                index=index,
                count=len(self._recipes),
            )
        return index

    def _find(self, recipe: Recipe) -> int:
        for position, stored in enumerate(self._recipes):
            if stored is recipe:
                return position
        for position, stored in enumerate(self._recipes):
            if stored == recipe:
                return position
        raise RecipeNotFoundError("Recipe not found in store", name=recipe.name)

    def _write_lines(self, f: TextIO) -> None:
        for line in dump_lines(self._recipes):
            f.write(line)
            f.write("\n")

    def _write_atomic(self) -> None:
        directory = self._path.parent
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with open(fd, "w", encoding=self.config.encoding) as f:
                if self._path.exists():
                    mode = stat.S_IMODE(self._path.stat().st_mode)
                else:
                    mode = 0o666 & ~_current_umask()
                os.chmod(temp_name, mode)
                self._write_lines(f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_name, self._path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise


def _current_umask() -> int:
    # The umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _normalize_path(path: str | os.PathLike[str]) -> Path:
    """Resolve a recipe file path to an absolute path.

    Raises:
        PathError: If the path is empty, malformed or cannot be resolved
    """
    try:
        raw = os.fspath(path)
    except TypeError as e:
        raise PathError("Recipe file path must be a string or path", path=repr(path)) from e

    if not isinstance(raw, str) or not raw.strip():
        raise PathError("Recipe file path must be a non-empty string", path=repr(raw))
    if "\0" in raw:
        raise PathError("Recipe file path contains a null byte", path=repr(raw))

    try:
        return Path(raw).expanduser().resolve()
    except (OSError, RuntimeError, ValueError) as e:
        raise PathError("Could not resolve recipe file path", path=raw, error=str(e)) from e
