"""CLI entrypoints for Mediashelf."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

from mediashelf.config import load_settings
from mediashelf.errors import ConfigurationError
from mediashelf.logging import configure_logging, get_logger
from mediashelf.models.bundle import ResultBundle
from mediashelf.service import search_media
from mediashelf.store.entries import EntryStore

app = typer.Typer(add_completion=False, help="Search movies, books and albums at once")
logger = get_logger(__name__)
console = Console()

SOURCE_LABELS = {"rt": "Movies", "gr": "Books", "sp": "Albums"}


@app.command()
def search(
    query: str = typer.Argument(..., help="Title, author or artist to look for."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result bundle as JSON"),
) -> None:
    """Search every source concurrently and print one table per source."""

    if not query.strip():
        raise typer.BadParameter("QUERY must not be empty.")

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("CLI search requested")

    try:
        bundle = search_media(query, settings)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2) from e

    if as_json:
        typer.echo(bundle.model_dump_json(indent=2))
        return
    _print_bundle(bundle)


@app.command()
def save(
    title: str = typer.Argument(..., help="Entry title"),
    link: str = typer.Argument(..., help="Link to the item"),
    media_type: str = typer.Option(..., "--type", "-t", help="movie, book, album, ..."),
    image_url: str | None = typer.Option(None, "--image-url", help="Optional image URL"),
) -> None:
    """Save an entry to the shelf."""

    store = EntryStore(load_settings().entries_path)
    try:
        entry = store.add(title=title, link=link, media_type=media_type, image_url=image_url)
    except ValueError as e:
        raise typer.BadParameter(f"invalid image URL: {image_url}") from e
    typer.echo(entry.id)


@app.command("list")
def list_entries(
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
) -> None:
    """List saved entries grouped by media type."""

    store = EntryStore(load_settings().entries_path)
    if as_json:
        groups = store.grouped()
        payload = {k: [e.model_dump(mode="json") for e in v] for k, v in groups.items()}
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if store.count() == 0:
        console.print("[dim]No saved entries.[/dim]")
        return
    for media_type, entries in store.grouped().items():
        table = Table(title=media_type, show_lines=False)
        table.add_column("id", style="dim")
        table.add_column("title")
        table.add_column("link")
        for e in entries:
            table.add_row(e.id, e.title, e.link)
        console.print(table)


@app.command()
def remove(entry_id: str = typer.Argument(..., help="Entry id")) -> None:
    """Remove a saved entry."""

    store = EntryStore(load_settings().entries_path)
    try:
        store.remove(entry_id)
    except KeyError as e:
        typer.echo(f"No entry with id {entry_id}", err=True)
        raise typer.Exit(code=1) from e


def _print_bundle(bundle: ResultBundle) -> None:
    for slot in bundle.slots:
        label = SOURCE_LABELS.get(slot.source, slot.source)
        if not slot.ok:
            console.print(f"[bold]{label}[/bold] [red]unavailable[/red] ({slot.error})")
            continue
        table = Table(title=f"{label} ({len(slot.items)})")
        table.add_column("#", justify="right", style="dim")
        table.add_column("title")
        table.add_column("link")
        for i, item in enumerate(slot.items, start=1):
            table.add_row(str(i), item.display_title, item.link or "")
        console.print(table)


if __name__ == "__main__":
    app()
