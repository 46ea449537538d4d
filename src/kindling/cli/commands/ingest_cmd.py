# ABOUTME: The `kindling ingest` command for storing ebook files and extracting their metadata.
# ABOUTME: Plays the part of the upload layer: runs each file through the ingestion coordinator.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from kindling.cli.options import storage_option
from kindling.core.batch import ingest_many
from kindling.core.ingest import IngestionCoordinator
from kindling.core.registry import build_default_registry
from kindling.storage.layout import DEFAULT_STORAGE_ROOT, StorageLayout

console = Console()


@click.command("ingest")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@storage_option
@click.option(
    "-j", "--jobs",
    type=click.IntRange(1, 32),
    default=4,
    help="Number of files to ingest in parallel (default 4).",
)
def ingest(files: tuple[Path, ...], storage_root: Path | None, jobs: int) -> None:
    """Store ebook FILES and report the metadata extracted from each."""
    layout = StorageLayout(storage_root or DEFAULT_STORAGE_ROOT)
    coordinator = IngestionCoordinator(build_default_registry(), layout)

    console.print(f"Ingesting [bold]{len(files)}[/bold] file(s) into {escape(str(layout.root))}\n")

    result = ingest_many(coordinator, list(files), max_workers=jobs)

    for path, meta in result.ingested:
        console.print(
            f"[green]Ingested[/green] {escape(path.name)}: "
            f"{escape(meta.title)} [dim]by[/dim] {escape(meta.author)}"
        )
        console.print(f"  [dim]Stored:[/dim] {escape(str(meta.file_path))}")
        cover = escape(str(meta.cover_path)) if meta.has_cover else "[dim]default cover[/dim]"
        console.print(f"  [dim]Cover:[/dim] {cover}")

    # Summary
    parts = []
    if result.ingested:
        parts.append(f"[green]{len(result.ingested)} ingested[/green]")
    if result.rejected:
        parts.append(f"[yellow]{len(result.rejected)} rejected[/yellow]")
    if result.failed:
        parts.append(f"[red]{len(result.failed)} failed[/red]")

    console.print("\n" + ", ".join(parts))

    problems = result.rejected + result.failed
    if problems:
        console.print(f"\n[yellow]{len(problems)} file(s) were not ingested:[/yellow]")
        for path, msg in problems:
            console.print(f"  [dim]{escape(path.name)}:[/dim] {escape(msg)}")
        raise SystemExit(1)
