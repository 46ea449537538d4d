# ABOUTME: Metadata package for uploaded content and what ingestion extracts from it.
# ABOUTME: Exports the dataclasses and sentinel values used throughout Kindling.

from kindling.metadata.types import (
    DEFAULT_COVER,
    UNKNOWN_AUTHOR,
    ExtractedMetadata,
    ParsedBook,
    UploadedContent,
    format_authors,
    title_from_filename,
)

__all__ = [
    "DEFAULT_COVER",
    "UNKNOWN_AUTHOR",
    "ExtractedMetadata",
    "ParsedBook",
    "UploadedContent",
    "format_authors",
    "title_from_filename",
]
