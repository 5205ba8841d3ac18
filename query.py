#!/usr/bin/env python3
"""Ad hoc query runner for the Smart Recipe Finder.

Runs one search through the recommendation pipeline without starting the
HTTP server.

Usage:
    python query.py "chicken, rice"
    python query.py --cuisine italian "tomato, basil, pasta"
    python query.py --debug "chicken, rice"  # Show full JSON response

Features:
- Same pipeline as POST /api/recipes (search + AI or fallback suggestion)
- Recipe cards rendered as a table, suggestion rendered as markdown
- Debug mode to display the full JSON response
"""

import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from src.agents.agent import initialize_recipe_agent
from src.models.models import RecipeSearchResponse
from src.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--cuisine NAME] "<comma-separated ingredients>"'


def _flag(value: Optional[bool]) -> str:
    return "✓" if value else ""


def build_recipe_table(result: RecipeSearchResponse) -> Table:
    """Render recipe cards as a rich table (one row per recipe)."""
    table = Table(title="Recipes", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Time", justify="right")
    table.add_column("Servings", justify="right")
    table.add_column("Health", justify="right")
    table.add_column("Veg", justify="center")
    table.add_column("GF", justify="center")
    table.add_column("Link", style="cyan", overflow="fold")

    for index, recipe in enumerate(result.recipes, start=1):
        table.add_row(
            str(index),
            recipe.title,
            f"{recipe.ready_in_minutes} min" if recipe.ready_in_minutes is not None else "-",
            str(recipe.servings) if recipe.servings is not None else "-",
            f"{recipe.health_score:.0f}" if recipe.health_score is not None else "-",
            _flag(recipe.vegetarian),
            _flag(recipe.gluten_free),
            recipe.source_url or "",
        )
    return table


def run_query(ingredients: str, cuisine: Optional[str] = None, debug: bool = False) -> None:
    """Execute a single search and print the recipes and suggestion.

    Args:
        ingredients: Comma-separated ingredient list.
        cuisine: Optional cuisine preference.
        debug: If True, display the full JSON response.
    """
    try:
        agent = initialize_recipe_agent()

        logger.info(f"Running query: {ingredients} (cuisine={cuisine or '-'})")
        result = asyncio.run(agent.recommend(ingredients, cuisine))
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=result.to_wire())
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        if result.recipes:
            console.print(build_recipe_table(result))
        else:
            console.print("[yellow]No recipes found[/yellow]")

        console.print()
        console.print("[bold green]AI Chef Suggestion[/bold green]")
        console.print(Markdown(result.ai_suggestion or "_No suggestion available_"))

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=debug)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print('  python query.py "chicken, rice"')
        print('  python query.py --cuisine italian "tomato, basil, pasta"')
        print('  python query.py --debug "chicken, rice"')
        sys.exit(1)

    debug_mode = False
    cuisine_arg = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--cuisine":
            argv_start += 1
            if argv_start >= len(sys.argv):
                print("Error: --cuisine flag requires a value")
                sys.exit(1)
            cuisine_arg = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No ingredients provided")
        print(USAGE)
        sys.exit(1)

    # Join all remaining arguments (handles unquoted ingredient lists)
    ingredients_arg = " ".join(sys.argv[argv_start:])

    run_query(ingredients_arg, cuisine=cuisine_arg, debug=debug_mode)
