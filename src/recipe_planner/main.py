"""
Recipe Planner - CLI Entry Point.

Usage:
    recipe-planner import-url URL        Import a recipe from a web page
    recipe-planner import-pdf FILE       Import all recipes from a PDF
    recipe-planner grocery FILE          Build a grocery list from ingredient lines
    recipe-planner serve                 Start the web API
    recipe-planner health                Check configuration
"""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner

from recipe_planner.recipe_import import RecipeData, RecipeImportError

app = typer.Typer(
    name="recipe-planner",
    help="Recipe Planner - import recipes and build grocery lists.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging for every command."""
    from recipe_planner.config import settings

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_recipe(recipe: RecipeData, heading: str) -> None:
    body = f"[bold]{recipe.title}[/bold]\n"
    if recipe.tags:
        body += f"[dim]Tags: {', '.join(recipe.tags)}[/dim]\n"
    if recipe.image_url:
        body += f"[dim]Image: {recipe.image_url}[/dim]\n"
    body += f"\n[bold]Ingredients[/bold]\n{recipe.ingredients}\n"
    body += f"\n[bold]Instructions[/bold]\n{recipe.instructions}"
    console.print(Panel(body, title=heading, border_style="green"))


def _fail(error: RecipeImportError) -> None:
    console.print(f"[red]FAIL[/red] {error.user_message}")
    console.print(f"[dim]{error.code.value}: {error}[/dim]")
    raise typer.Exit(1)


def _enable_prompt_logging(log_prompts: bool) -> None:
    if log_prompts:
        from recipe_planner.llm.prompt_logger import enable_prompt_logging

        enable_prompt_logging(True)


def _show_prompt_log_dir(log_prompts: bool) -> None:
    if log_prompts:
        from recipe_planner.llm.prompt_logger import get_session_log_dir

        log_dir = get_session_log_dir()
        if log_dir:
            console.print(f"\n[dim]Prompts logged to: {log_dir}[/dim]")


@app.command("import-url")
def import_url(
    url: str = typer.Argument(..., help="Recipe page URL"),
    as_json: bool = typer.Option(False, "--json", help="Print the recipe as JSON"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log AI prompts to prompt_logs/"),
) -> None:
    """Import a recipe from a web page."""
    from recipe_planner.recipe_import import import_from_url

    _enable_prompt_logging(log_prompts)

    try:
        with Live(Spinner("dots", text="Importing..."), console=console, transient=True):
            result = asyncio.run(import_from_url(url))
    except RecipeImportError as e:
        _fail(e)

    if as_json:
        console.print_json(json.dumps({"recipe": result.recipe.to_dict(), "source": result.source.value}))
    else:
        _print_recipe(result.recipe, f"Imported via {result.source.value}")

    _show_prompt_log_dir(log_prompts)


@app.command("import-pdf")
def import_pdf(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="PDF cookbook file"),
    as_json: bool = typer.Option(False, "--json", help="Print the recipes as JSON"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log AI prompts to prompt_logs/"),
) -> None:
    """Import every recipe found in a PDF file."""
    from recipe_planner.config import settings
    from recipe_planner.recipe_import import import_from_pdf

    _enable_prompt_logging(log_prompts)

    size = path.stat().st_size
    if size > settings.max_pdf_upload_bytes:
        console.print(f"[red]FAIL[/red] {path.name} is {size:,} bytes; the limit is {settings.max_pdf_upload_bytes:,}")
        raise typer.Exit(1)

    try:
        with Live(Spinner("dots", text="Extracting recipes..."), console=console, transient=True):
            recipes = asyncio.run(import_from_pdf(path.read_bytes()))
    except RecipeImportError as e:
        _fail(e)

    if as_json:
        console.print_json(json.dumps({"recipes": [r.to_dict() for r in recipes], "count": len(recipes)}))
    else:
        for index, recipe in enumerate(recipes, start=1):
            _print_recipe(recipe, f"Recipe {index} of {len(recipes)}")

    _show_prompt_log_dir(log_prompts)


@app.command()
def grocery(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with one ingredient per line"),
) -> None:
    """Print a categorized grocery list for a file of ingredient lines."""
    from recipe_planner.grocery import build_grocery_items, format_shopping_list

    recipe = RecipeData(title=path.stem, ingredients=path.read_text(encoding="utf-8"), instructions="")
    items = build_grocery_items([recipe])

    if not items:
        console.print("[dim]No ingredients found.[/dim]")
        return

    console.print(format_shopping_list(items), markup=False)


@app.command()
def health() -> None:
    """Check configuration."""
    from recipe_planner.config import get_settings

    console.print("\n[bold]Recipe Planner Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Check your .env file and environment variables.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.app_env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Fetch timeout: {settings.fetch_timeout_seconds}s")

    if settings.ai_configured:
        console.print(f"[green]OK[/green] OpenAI API key configured (model {settings.openai_model})")
    else:
        console.print("[yellow]WARN[/yellow] OpenAI API key missing - only schema.org import available")


@app.command()
def version() -> None:
    """Show version information."""
    from recipe_planner import __version__

    console.print(f"Recipe Planner version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import os

    import uvicorn

    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Recipe Planner API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "recipe_planner.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
