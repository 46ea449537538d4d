# ABOUTME: The `kindling inspect` command for previewing what ingestion would extract.
# ABOUTME: Parses a single file with the matching processor without storing anything.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kindling.core.ingest import detect_extension
from kindling.core.registry import build_default_registry
from kindling.errors import MissingExtension
from kindling.formats import FormatReadError

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show the metadata an ebook file would be ingested with."""
    try:
        extension = detect_extension(path.name)
    except MissingExtension as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    processor = build_default_registry().resolve(extension)
    if processor is None:
        console.print(f"[red]Error:[/red] Unsupported ebook format: {escape(extension)}")
        raise SystemExit(1)

    try:
        book = processor.read(path)
    except FormatReadError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    table = Table(title=escape(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Format", processor.name)
    table.add_row("Title", escape(book.title))
    table.add_row("Author", escape(book.author))
    table.add_row("Cover", f"yes ({len(book.cover_image)} bytes)" if book.has_cover else "no")

    console.print(table)
