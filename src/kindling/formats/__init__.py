# ABOUTME: Format processors for the ingestion pipeline.
# ABOUTME: Exports the processor protocol, the shipped processors, and their default order.

from kindling.formats.base import (
    ContainerProcessor,
    FormatProcessor,
    FormatReadError,
    normalize_extension,
)
from kindling.formats.epub import EpubProcessor, EpubReadError
from kindling.formats.fb2 import Fb2Processor, Fb2ReadError


def default_processors() -> list[FormatProcessor]:
    """The processors Kindling ships with, in resolution order."""
    return [EpubProcessor(), Fb2Processor()]


__all__ = [
    "ContainerProcessor",
    "EpubProcessor",
    "EpubReadError",
    "Fb2Processor",
    "Fb2ReadError",
    "FormatProcessor",
    "FormatReadError",
    "default_processors",
    "normalize_extension",
]
