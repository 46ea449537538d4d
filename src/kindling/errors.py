# ABOUTME: Typed error taxonomy for the ingestion pipeline.
# ABOUTME: Validation errors reject input before any I/O; the rest follow a write to storage.

from pathlib import Path


class IngestionError(Exception):
    """Base class for every error an ingestion call can surface."""


class ValidationError(IngestionError):
    """The upload was rejected before anything touched storage."""


class EmptyUpload(ValidationError):
    """Raised when the uploaded stream has no content."""

    def __init__(self, filename: str | None = None) -> None:
        self.filename = filename
        super().__init__(f"Uploaded file is empty: {filename}" if filename else "Uploaded file is empty")


class MissingExtension(ValidationError):
    """Raised when the declared filename has no usable suffix."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Cannot determine file extension: {filename!r}")


class UnsupportedFormat(ValidationError):
    """Raised when no registered processor claims the extension."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported ebook format: {extension}")


class ProcessingFailed(IngestionError):
    """Raised when a stored container could not be parsed.

    The raw file has already been rolled back by the time this surfaces.
    """

    def __init__(self, format_name: str, cause: BaseException) -> None:
        self.format_name = format_name
        self.cause = cause
        super().__init__(f"Failed to process {format_name} file: {cause}")


class StorageFailed(IngestionError):
    """Raised when the filesystem refused a directory or file operation."""

    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Storage operation failed for {path}{detail}")
