"""Section-tagged line grammar for recipe files.

A recipe file is a flat sequence of lines. Three literal marker lines switch
how the following lines are read::

    [Recept]
    Pancakes
    [Ingredienser]
    2;dl;flour
    3;st;eggs
    [Instruktioner]
    Mix ingredients.
    Fry on pan.

Blank lines are ignored everywhere. This module only converts between lines
and :class:`~filed_recipes.models.Recipe` objects; opening and writing files
is the store's job.

Example:
    >>> recipes = parse_lines(["[Recept]", "Tea", "[Instruktioner]", "Boil water."])
    >>> recipes[0].instructions
    ['Boil water.']
    >>> list(dump_lines(recipes))
    ['[Recept]', 'Tea', '[Ingredienser]', '[Instruktioner]', 'Boil water.']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Final

from .exceptions import RecipeFormatError
from .models import Ingredient, Recipe

logger = logging.getLogger(__name__)

SECTION_RECIPE: Final = "[Recept]"
SECTION_INGREDIENTS: Final = "[Ingredienser]"
SECTION_INSTRUCTIONS: Final = "[Instruktioner]"

FIELD_SEPARATOR: Final = ";"
INGREDIENT_FIELD_COUNT: Final = 3


class ReadState(str, Enum):
    """How the next content line is interpreted."""

    INDEFINITE = "indefinite"
    NEW_RECIPE = "new_recipe"
    INGREDIENT = "ingredient"
    INSTRUCTION = "instruction"


SECTION_STATES: Final[dict[str, ReadState]] = {
    SECTION_RECIPE: ReadState.NEW_RECIPE,
    SECTION_INGREDIENTS: ReadState.INGREDIENT,
    SECTION_INSTRUCTIONS: ReadState.INSTRUCTION,
}


def parse_ingredient(line: str, line_number: int = 0) -> Ingredient:
    """Split an ``amount;measure;name`` line into an :class:`Ingredient`.

    Fields are taken as-is: no trimming and no escape handling.

    Args:
        line: Ingredient line without its line terminator
        line_number: 1-based position in the file, for error reporting

    Returns:
        Parsed ingredient

    Raises:
        RecipeFormatError: If the line does not have exactly three fields
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != INGREDIENT_FIELD_COUNT:
        raise RecipeFormatError(
            f"Ingredient line must have {INGREDIENT_FIELD_COUNT} "
            f"'{FIELD_SEPARATOR}'-separated fields, found {len(fields)}",
            line_number=line_number,
            line=line,
        )
    amount, measure, name = fields
    return Ingredient(amount=amount, measure=measure, name=name)


def parse_lines(lines: Iterable[str]) -> list[Recipe]:
    """Parse recipe file lines into recipes, in file order.

    The read state is a local value that each marker line replaces; nothing
    is kept between calls. Lines may still carry a trailing ``\\n`` or
    ``\\r\\n``, which is stripped before interpretation.

    Args:
        lines: Lines of a recipe file

    Returns:
        Recipes in the order they appear in the file (not sorted)

    Raises:
        RecipeFormatError: If a line cannot be interpreted in the current state
    """
    state = ReadState.INDEFINITE
    recipes: list[Recipe] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line:
            continue

        if line in SECTION_STATES:
            state = SECTION_STATES[line]
            continue

        if state is ReadState.INDEFINITE:
            raise RecipeFormatError(
                "Content line before any section marker",
                line_number=line_number,
                line=line,
            )

        if state is ReadState.NEW_RECIPE:
            recipes.append(Recipe(name=line))
            continue

        if not recipes:
            raise RecipeFormatError(
                f"{state.value.capitalize()} line before any recipe name",
                line_number=line_number,
                line=line,
            )

        current = recipes[-1]
        if state is ReadState.INGREDIENT:
            current.add_ingredient(parse_ingredient(line, line_number))
        else:
            current.add_instruction(line)

    logger.debug(f"Parsed {len(recipes)} recipes")
    return recipes


def format_ingredient(ingredient: Ingredient) -> str:
    """Join an ingredient's fields into an ``amount;measure;name`` line."""
    return FIELD_SEPARATOR.join((ingredient.amount, ingredient.measure, ingredient.name))


def check_recipe(recipe: Recipe) -> None:
    """Check that a recipe can be written and read back unchanged.

    Raises:
        RecipeFormatError: If any value would be misread by :func:`parse_lines`
    """
    _check_text(recipe.name, recipe, "name")

    for ingredient in recipe.ingredients:
        for field_name in ("amount", "measure", "name"):
            value = getattr(ingredient, field_name)
            if FIELD_SEPARATOR in value:
                raise RecipeFormatError(
                    f"Ingredient {field_name} contains '{FIELD_SEPARATOR}'",
                    recipe=recipe.name,
                    value=value,
                )
            if _has_line_break(value):
                raise RecipeFormatError(
                    f"Ingredient {field_name} contains a line break",
                    recipe=recipe.name,
                    value=value,
                )

    for instruction in recipe.instructions:
        _check_text(instruction, recipe, "instruction")


def dump_lines(recipes: Iterable[Recipe]) -> Iterator[str]:
    """Yield the lines of a recipe file, without line terminators.

    Recipes are written in the order given, back to back with no blank
    separator lines.
    """
    for recipe in recipes:
        yield SECTION_RECIPE
        yield recipe.name
        yield SECTION_INGREDIENTS
        for ingredient in recipe.ingredients:
            yield format_ingredient(ingredient)
        yield SECTION_INSTRUCTIONS
        yield from recipe.instructions


def _check_text(value: str, recipe: Recipe, what: str) -> None:
    if not value:
        raise RecipeFormatError(f"Recipe {what} is empty", recipe=recipe.name)
    if _has_line_break(value):
        raise RecipeFormatError(
            f"Recipe {what} contains a line break", recipe=recipe.name, value=value
        )
    if value in SECTION_STATES:
        raise RecipeFormatError(
            f"Recipe {what} is a section marker", recipe=recipe.name, value=value
        )


def _has_line_break(value: str) -> bool:
    return "\n" in value or "\r" in value
