"""Pytest configuration and fixtures for filed_recipes tests.

Fixtures follow pytest conventions:
- Use monkeypatch for environment manipulation
- Use tmp_path for file operations
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove FILED_RECIPES_* variables and isolate home and working directory.

    Use this fixture when testing configuration loading so that no user
    config file or environment variable interferes with test expectations.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("FILED_RECIPES_"):
            monkeypatch.delenv(key, raising=False)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Provide a helper to set FILED_RECIPES_* environment variables.

    Example:
        def test_env_loading(mock_env):
            mock_env["ENCODING"] = "latin-1"
            # FILED_RECIPES_ENCODING is now set
    """

    class EnvSetter(dict[str, str]):
        def __setitem__(self, key: str, value: str) -> None:
            super().__setitem__(key, value)
            monkeypatch.setenv(f"FILED_RECIPES_{key}", value)

    return EnvSetter()


# ============================================================================
# Recipe File Fixtures
# ============================================================================


PANCAKES_TEXT = """\
[Recept]
Pancakes
[Ingredienser]
2;dl;flour
3;st;eggs
[Instruktioner]
Mix ingredients.
Fry on pan.
"""

TWO_RECIPES_TEXT = """\
[Recept]
Tea

[Ingredienser]
1;bag;tea
[Instruktioner]
Boil water.
Steep for 3 minutes.

[Recept]
Apple Pie
[Ingredienser]
4;st;apples
1/2;tsk;cinnamon
;;salt to taste
[Instruktioner]
Slice the apples.
Bake at 200 degrees.
"""


@pytest.fixture
def write_recipes(tmp_path: Path):
    """Return a helper that writes text to a recipe file and returns its path."""

    def _write(text: str, name: str = "recipes.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def pancakes_file(write_recipes) -> Path:
    """Recipe file holding a single pancake recipe."""
    return write_recipes(PANCAKES_TEXT)


@pytest.fixture
def two_recipes_file(write_recipes) -> Path:
    """Recipe file holding "Tea" before "Apple Pie", with blank lines."""
    return write_recipes(TWO_RECIPES_TEXT)


@pytest.fixture
def loaded_store(two_recipes_file: Path):
    """RecipeStore loaded from the two-recipe file."""
    from filed_recipes.store import RecipeStore

    store = RecipeStore(two_recipes_file)
    store.load()
    return store


# ============================================================================
# Recipe/Model Fixtures
# ============================================================================


@pytest.fixture
def sample_recipe():
    """Create a sample Recipe for testing."""
    from filed_recipes.models import Ingredient, Recipe

    return Recipe(
        name="Pancakes",
        ingredients=[
            Ingredient(amount="2", measure="dl", name="flour"),
            Ingredient(amount="3", measure="st", name="eggs"),
        ],
        instructions=["Mix ingredients.", "Fry on pan."],
    )
