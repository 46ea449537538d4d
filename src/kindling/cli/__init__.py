# ABOUTME: CLI package for Kindling, built on Click.
# ABOUTME: Defines the root command group, the --verbose log switch, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from kindling.cli.commands import formats_cmd, ingest_cmd, inspect_cmd


def _enable_debug_logging() -> None:
    """Route kindling's log records to stderr through Rich."""
    package_logger = logging.getLogger("kindling")
    package_logger.setLevel(logging.DEBUG)
    if any(isinstance(h, RichHandler) for h in package_logger.handlers):
        return
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_time=True, show_path=False)
    )


@click.group()
@click.version_option(package_name="kindling")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log pipeline activity to stderr.",
)
def cli(verbose: bool) -> None:
    """Kindling - ingest ebook uploads into durable storage."""
    if verbose:
        _enable_debug_logging()


cli.add_command(ingest_cmd.ingest)
cli.add_command(inspect_cmd.inspect)
cli.add_command(formats_cmd.formats)
