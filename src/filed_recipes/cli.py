#!/usr/bin/env python3
"""CLI for filed-recipes: browse and edit a recipe file from the terminal.

The CLI is responsible for:
- Argument parsing
- Recipe display (Rich UI)
- Error presentation
- Calling the store for everything else

Commands:
    list            Index and name of every recipe
    show [INDEX]    One recipe, or all of them
    delete INDEX    Delete a recipe and save the file
    check           Load the file and report whether it is well-formed
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import StoreConfig
from .exceptions import ConfigurationError, FiledRecipesError
from .models import Recipe
from .protocols import RecipeRepository
from .store import RecipeStore

# Create global Rich console for styled output
console = Console()

logger = logging.getLogger(__name__)


def setup_logging(level: int | str = logging.WARNING, log_file: str | Path | None = None) -> None:
    """Set up logging configuration for the application.

    Logs go to ``log_file`` when given, otherwise to stderr. Console output
    for the user is handled separately via Rich.

    Args:
        level: Logging level for the root logger
        log_file: Optional path to a log file
    """
    handler: logging.Handler
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s: %(message)s",
        handlers=[handler],
        force=True,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse, defaults to ``sys.argv[1:]``

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Browse and edit a recipe file", prog="filed-recipes"
    )
    parser.add_argument(
        "--file",
        "-f",
        type=str,
        default=None,
        help="Recipe file (default: recipes_file from configuration, else recipes.txt)",
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Project configuration file (TOML)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    parser.add_argument("--log-file", type=str, default=None, help="Write logs to this file")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List recipe names")
    show = commands.add_parser("show", help="Show one recipe, or all recipes")
    show.add_argument("index", type=int, nargs="?", default=None, help="Zero-based recipe index")
    delete = commands.add_parser("delete", help="Delete a recipe and save the file")
    delete.add_argument("index", type=int, help="Zero-based recipe index")
    commands.add_parser("check", help="Check that the recipe file can be loaded")

    return parser.parse_args(argv)


def render_recipe(recipe: Recipe) -> Panel:
    """Build a panel with a recipe's ingredients and numbered instructions."""
    ingredients = Text("\n").join(Text(f"  {ingredient}") for ingredient in recipe.ingredients)
    instructions = Text("\n").join(
        Text.assemble((f"{number}:", "cyan"), " ", instruction)
        for number, instruction in enumerate(recipe.instructions, 1)
    )

    return Panel(
        Group(
            Text("Ingredients", style="bold"),
            ingredients,
            Text(""),
            Text("Instructions", style="bold"),
            instructions,
        ),
        title=f"[bold]{escape(recipe.name)}[/bold]",
        border_style="cyan",
    )


def display_recipes(recipes: Iterable[Recipe]) -> None:
    """Print every recipe, one panel each."""
    for recipe in recipes:
        console.print(render_recipe(recipe))


def display_list(recipes: Sequence[Recipe]) -> None:
    """Print a table of recipe indexes and names."""
    table = Table(title="[bold]Recipes[/bold]", show_header=True, header_style="bold cyan")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Ingredients", justify="right")
    table.add_column("Steps", justify="right")

    for index, recipe in enumerate(recipes):
        table.add_row(
            str(index),
            Text(recipe.name),
            str(len(recipe.ingredients)),
            str(len(recipe.instructions)),
        )

    console.print(table)


def display_error(title: str, message: str) -> None:
    """Display an error panel."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        )
    )
    console.print()


def run_command(store: RecipeRepository, args: argparse.Namespace) -> None:
    """Run a parsed command against a store.

    Raises:
        FiledRecipesError: If loading, saving or indexing fails
    """
    store.load()

    if args.command == "list":
        display_list(store.get_all())
    elif args.command == "show":
        if args.index is None:
            display_recipes(store.get_all())
        else:
            display_recipes([store.get_at(args.index)])
    elif args.command == "delete":
        recipe = store.get_at(args.index)
        store.delete(args.index)
        store.save()
        console.print(f"[green]✓[/green] Deleted [bold]{escape(recipe.name)}[/bold]")
    elif args.command == "check":
        count = len(store.get_all())
        console.print(f"[green]✓[/green] {count} recipes, file is well-formed")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the filed-recipes CLI command.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Process exit status: 0 on success, 1 on a reported error
    """
    args = parse_args(argv)

    try:
        config = StoreConfig.load(config_path=args.config)
        if args.file:
            config.update(recipes_file=args.file)
        if args.verbose:
            config.update(log_level="DEBUG")
        if args.log_file:
            config.update(log_file=args.log_file)

        try:
            setup_logging(config.log_level_value, config.log_file)
        except OSError as e:
            raise ConfigurationError(
                "Could not open log file", log_file=str(config.log_file), error=str(e)
            ) from e
        store = RecipeStore(config.recipes_file, config=config)
        logger.debug(f"Running {args.command!r} on {store.path}")
        run_command(store, args)
    except IndexError as e:
        display_error("No such recipe", str(e))
        return 1
    except FiledRecipesError as e:
        logger.error(f"{args.command} failed: {e}")
        display_error(type(e).__name__, str(e))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
