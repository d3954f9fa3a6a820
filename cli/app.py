"""
Command-line front end for ParkBridge.

Typer commands that call the MangaPark provider and render the results
with Rich, or print the host-facing JSON shape with --json.
"""
import json
from typing import Any, List, Optional

import typer
from rich.console import Console

from core.config import Config
from providers.mangapark import MangaParkProvider
from cli.tables import (
    display_search_results, display_chapters, display_pages,
    display_manga_details, display_settings,
)

console = Console()

app = typer.Typer(help="Query the MangaPark catalog through the ParkBridge provider.", no_args_is_help=True)


def create_provider(config: Config) -> MangaParkProvider:
    """Build the provider for a command."""
    return MangaParkProvider(config=config)


def _print_json(items: Any):
    console.print_json(json.dumps(items, ensure_ascii=False))


def _get_config(ctx: typer.Context) -> Config:
    return ctx.obj if isinstance(ctx.obj, Config) else Config()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a settings.yaml file"),
):
    """Load configuration shared by all commands."""
    ctx.obj = Config(config_path)


@app.command()
def search(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="Title to search for"),
    as_json: bool = typer.Option(False, "--json", help="Print raw provider output"),
):
    """Search MangaPark by title."""
    config = _get_config(ctx)
    with create_provider(config) as provider:
        results = provider.search(query)

    if as_json:
        _print_json([r.to_dict() for r in results])
    else:
        display_search_results(results, limit=config.results_limit)


@app.command()
def chapters(
    ctx: typer.Context,
    manga_id: str = typer.Argument(..., help="Manga ID or title URL"),
    as_json: bool = typer.Option(False, "--json", help="Print raw provider output"),
):
    """List the chapters of a title in server order."""
    config = _get_config(ctx)
    with create_provider(config) as provider:
        chapter_list = provider.find_chapters(manga_id)

    if as_json:
        _print_json([c.to_dict() for c in chapter_list])
    else:
        display_chapters(chapter_list, limit=config.results_limit)


@app.command()
def pages(
    ctx: typer.Context,
    chapter_id: str = typer.Argument(..., help="Chapter ID or chapter URL"),
    as_json: bool = typer.Option(False, "--json", help="Print raw provider output"),
):
    """List the page images of a chapter."""
    config = _get_config(ctx)
    with create_provider(config) as provider:
        page_list = provider.find_chapter_pages(chapter_id)

    if as_json:
        _print_json([p.to_dict() for p in page_list])
    else:
        display_pages(page_list)


@app.command()
def details(
    ctx: typer.Context,
    manga_id: str = typer.Argument(..., help="Manga ID or title URL"),
    as_json: bool = typer.Option(False, "--json", help="Print raw provider output"),
):
    """Show detailed information about a title."""
    config = _get_config(ctx)
    with create_provider(config) as provider:
        info = provider.get_manga_details(manga_id)

    if info is None:
        console.print(f"[red]No details found for {manga_id}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        _print_json(info.to_dict())
    else:
        display_manga_details(info)


@app.command()
def settings(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw provider output"),
):
    """Show the provider's capability flags."""
    with create_provider(_get_config(ctx)) as provider:
        provider_settings = provider.get_settings()

    if as_json:
        _print_json(provider_settings.to_dict())
    else:
        display_settings(provider_settings)


def run(args: Optional[List[str]] = None):
    """Run the Typer app."""
    app(args=args)
