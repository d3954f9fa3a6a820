"""
Table formatting for the ParkBridge CLI.

This module renders provider results as Rich tables.
"""
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from models import SearchResult, MangaDetails, ChapterDetails, ChapterPage, ProviderSettings

console = Console()


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[:width - 3] + "..."
    return text


def display_search_results(results: List[SearchResult], limit: int = 24):
    """
    Display search results in a table.

    Args:
        results: Search results to display
        limit: Maximum number of rows to show
    """
    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table(title="Search Results", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=4, justify="center")
    table.add_column("ID", style="green", width=10)
    table.add_column("Title", style="white", max_width=40)
    table.add_column("Cover", style="dim", max_width=40)

    for i, result in enumerate(results[:limit], 1):
        table.add_row(
            str(i),
            result.id,
            _truncate(result.title, 40),
            _truncate(result.image or "-", 40),
        )

    console.print(table)
    if len(results) > limit:
        console.print(f"[dim]... {len(results) - limit} more not shown[/dim]")


def display_chapters(chapters: List[ChapterDetails], limit: int = 24):
    """Display a chapter list in server order."""
    if not chapters:
        console.print("[yellow]No chapters found.[/yellow]")
        return

    table = Table(title=f"Chapters ({len(chapters)})", show_header=True, header_style="bold magenta")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Chapter", style="bold white")
    table.add_column("Title", max_width=40)
    table.add_column("Scanlator", style="green")
    table.add_column("Updated", style="dim")
    table.add_column("ID", style="dim")

    for chapter in chapters[:limit]:
        table.add_row(
            str(chapter.index),
            chapter.chapter,
            _truncate(chapter.title, 40),
            chapter.scanlator or "-",
            chapter.updated_at or "-",
            chapter.id,
        )

    console.print(table)
    if len(chapters) > limit:
        console.print(f"[dim]... {len(chapters) - limit} more not shown[/dim]")


def display_pages(pages: List[ChapterPage]):
    """Display page image URLs."""
    if not pages:
        console.print("[yellow]No pages found.[/yellow]")
        return

    table = Table(title=f"Pages ({len(pages)})", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("URL", style="white", overflow="fold")

    for page in pages:
        table.add_row(str(page.index), page.url)

    console.print(table)
    headers = ", ".join(f"{k}: {v}" for k, v in pages[0].headers.items())
    console.print(f"[dim]Request headers: {headers}[/dim]")


def display_manga_details(details: MangaDetails):
    """Display a details card for a title."""
    lines = [
        f"[bold]Title:[/bold] {details.title}",
        f"[bold]ID:[/bold] {details.id}",
        f"[bold]Status:[/bold] {details.status or 'Unknown'}",
        f"[bold]Authors:[/bold] {', '.join(details.authors) or '-'}",
        f"[bold]Artists:[/bold] {', '.join(details.artists) or '-'}",
        f"[bold]Genres:[/bold] {', '.join(details.genres) or '-'}",
    ]
    if details.synonyms:
        lines.append(f"[bold]Also known as:[/bold] {', '.join(details.synonyms[:5])}")
    if details.score is not None:
        lines.append(f"[bold]Score:[/bold] {details.score:.2f}")
    if details.image:
        lines.append(f"[bold]Cover:[/bold] {details.image}")
    if details.description:
        lines.append("")
        lines.append(_truncate(details.description, 600))

    console.print(Panel("\n".join(lines), title="[bold blue]Manga Details[/bold blue]", border_style="blue"))


def display_settings(settings: ProviderSettings):
    table = Table(title="Provider Settings", show_header=True, header_style="bold magenta")
    table.add_column("Capability")
    table.add_column("Supported", justify="center")

    for key, value in settings.to_dict().items():
        table.add_row(key, "[green]yes[/green]" if value else "[red]no[/red]")

    console.print(table)
