# ABOUTME: Kindling - ebook upload ingestion with format-dispatching processors.
# ABOUTME: Re-exports the objects a catalog layer needs to run an ingestion.

from kindling.core.ingest import IngestionCoordinator
from kindling.core.registry import ProcessorRegistry, build_default_registry
from kindling.errors import (
    EmptyUpload,
    IngestionError,
    MissingExtension,
    ProcessingFailed,
    StorageFailed,
    UnsupportedFormat,
)
from kindling.metadata.types import ExtractedMetadata, UploadedContent
from kindling.storage.layout import StorageLayout

__all__ = [
    "EmptyUpload",
    "ExtractedMetadata",
    "IngestionCoordinator",
    "IngestionError",
    "MissingExtension",
    "ProcessingFailed",
    "ProcessorRegistry",
    "StorageFailed",
    "StorageLayout",
    "UnsupportedFormat",
    "UploadedContent",
    "build_default_registry",
]
