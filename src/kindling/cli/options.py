# ABOUTME: Shared Click options for Kindling CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --storage.

from pathlib import Path

import click

from kindling.storage.layout import DEFAULT_STORAGE_ROOT

storage_option = click.option(
    "--storage",
    "storage_root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="KINDLING_STORAGE",
    default=None,
    help=f"Storage root for ebooks and covers (default: {DEFAULT_STORAGE_ROOT})",
)
