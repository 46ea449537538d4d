# ABOUTME: The `kindling formats` command listing registered format processors.
# ABOUTME: Shows processors in resolution order with the extensions each one claims.

import click
from rich.console import Console
from rich.table import Table

from kindling.core.registry import build_default_registry

console = Console()


@click.command()
def formats() -> None:
    """List the ebook formats Kindling can ingest."""
    registry = build_default_registry()

    table = Table(title="Supported formats")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Processor", style="bold")
    table.add_column("Extensions")

    for position, processor in enumerate(registry, start=1):
        extensions = ", ".join(f".{ext}" for ext in sorted(processor.extensions))
        table.add_row(str(position), processor.name, extensions)

    console.print(table)
