"""Custom exceptions for filed_recipes.

This module defines the exception hierarchy raised by the recipe store and
its collaborators. Every exception carries a human-readable message plus
optional keyword context, rendered as ``message (key='value', ...)``.

Several exceptions also inherit from the matching builtin so that callers
can catch them generically:

- :class:`RecipeIOError` is an :class:`OSError`
- :class:`RecipeIndexError` is an :class:`IndexError`
- :class:`RecipeNotFoundError` is a :class:`KeyError`

Example:
    >>> try:
    ...     raise RecipeFormatError("Unexpected line", line_number=3, line="oops")
    ... except FiledRecipesError as e:
    ...     print(e)
    Unexpected line (line_number=3, line='oops')
"""


class FiledRecipesError(Exception):
    """Base exception for all filed_recipes errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about where the error occurred
    """

    def __init__(self, message: str, **context: str | int | float | bool | None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional context (e.g., path="recipes.txt", line_number=3)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class PathError(FiledRecipesError):
    """The recipe file path cannot be normalized to an absolute path.

    Raised by :class:`~filed_recipes.store.RecipeStore` at construction time,
    before any file access happens.
    """


class RecipeIOError(FiledRecipesError, OSError):
    """Reading or writing the recipe file failed.

    Wraps the underlying :class:`OSError` (missing file, permission denied,
    disk full), which stays available as ``__cause__``.
    """


class RecipeFormatError(FiledRecipesError):
    """Recipe file content violates the section grammar.

    Raised when:
    - A content line appears before any section marker
    - An ingredient line does not have exactly three ``;``-separated fields
    - An ingredient or instruction line appears before any recipe name
    - A recipe about to be saved holds a value the format cannot represent

    Example:
        >>> raise RecipeFormatError(
        ...     "Ingredient line must have 3 fields",
        ...     line_number=4,
        ...     line="2;dl",
        ... )
    """


class RecipeIndexError(FiledRecipesError, IndexError):
    """Index does not address a recipe in the store."""


class RecipeNotFoundError(FiledRecipesError, KeyError):
    """Recipe to delete matches no stored recipe, by identity or by value."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return FiledRecipesError.__str__(self)


class ConfigurationError(FiledRecipesError):
    """Error in configuration or settings.

    Raised when:
    - Configuration file is invalid
    - Settings have invalid values
    - Environment variables are malformed

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown text encoding",
        ...     encoding="utf-9",
        ... )
    """
