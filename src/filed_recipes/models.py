"""Recipe value types.

This module defines the Pydantic models held by the recipe store. Models
compare structurally (two recipes with the same name, ingredients and
instructions are equal) and copy deeply through :meth:`Recipe.clone`, so the
store can hand out copies that never alias its own records.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    """One ingredient line: amount, measure and name.

    All three fields are free text. ``amount`` is never parsed as a number,
    so notations like ``"1/2"`` or ``"to taste"`` survive a save/load cycle.
    ``amount`` and ``measure`` may be empty.
    """

    amount: str = Field(default="", description="Quantity as written, e.g. '2' or '1/2'")
    measure: str = Field(default="", description="Unit of measure, e.g. 'dl' or 'st'")
    name: str = Field(description="What the ingredient is, e.g. 'flour'")

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def __str__(self) -> str:
        return " ".join(part for part in (self.amount, self.measure, self.name) if part)


class Recipe(BaseModel):
    """A named recipe with ordered ingredients and instructions.

    Ordering is significant for both lists: instructions are numbered by
    position when displayed and ingredients are written back in the order
    they were read.

    Example:
        >>> recipe = Recipe(name="Pancakes")
        >>> recipe.add_ingredient(Ingredient(amount="2", measure="dl", name="flour"))
        >>> recipe.add_instruction("Mix ingredients.")
        >>> recipe.clone() == recipe
        True
    """

    name: str = Field(min_length=1, description="Recipe name, taken from the line after [Recept]")
    ingredients: list[Ingredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def add_ingredient(self, ingredient: Ingredient) -> None:
        """Append an ingredient to the end of the ingredient list."""
        self.ingredients.append(ingredient)

    def add_instruction(self, instruction: str) -> None:
        """Append an instruction to the end of the instruction list."""
        self.instructions.append(instruction)

    def clone(self) -> Recipe:
        """Return a deep copy that shares no mutable state with this recipe."""
        return self.model_copy(deep=True)
