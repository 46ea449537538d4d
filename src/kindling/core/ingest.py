# ABOUTME: Ingestion coordinator: validates an upload, picks a processor, and stores the book.
# ABOUTME: Returns ExtractedMetadata for the catalog layer or raises a typed IngestionError.

import logging
from pathlib import Path

from kindling.core.registry import ProcessorRegistry
from kindling.errors import (
    EmptyUpload,
    IngestionError,
    MissingExtension,
    ProcessingFailed,
    StorageFailed,
    UnsupportedFormat,
)
from kindling.metadata.types import ExtractedMetadata, UploadedContent
from kindling.storage.filesystem import Filesystem, LocalFilesystem
from kindling.storage.layout import StorageLayout
from kindling.storage.naming import NameFactory, random_name, unique_name

logger = logging.getLogger(__name__)


def base_filename(filename: str) -> str:
    """Drop any directory part a browser or client left in an upload name."""
    return filename.replace("\\", "/").rsplit("/", 1)[-1].strip()


def detect_extension(filename: str) -> str:
    """Derive the normalized format extension from a declared filename.

    A name whose only dot is the leading one (".epub") has no extension, and
    neither does a trailing dot ("book.").

    Raises:
        MissingExtension: If there is no usable suffix.
    """
    name = base_filename(filename or "")
    dot = name.rfind(".")
    if dot <= 0:
        raise MissingExtension(filename)
    extension = name[dot + 1:].lower()
    if not extension or not extension.isalnum():
        raise MissingExtension(filename)
    return extension


class IngestionCoordinator:
    """Runs one upload through extension detection, dispatch, and storage.

    Holds no per-call state, so one coordinator may serve concurrent calls.
    """

    def __init__(
        self,
        registry: ProcessorRegistry,
        layout: StorageLayout,
        *,
        filesystem: Filesystem | None = None,
        name_factory: NameFactory = random_name,
    ) -> None:
        self.registry = registry
        self.layout = layout
        self.filesystem = filesystem or LocalFilesystem()
        self._name_factory = name_factory

    def ingest(self, content: UploadedContent) -> ExtractedMetadata:
        """Store an uploaded ebook and extract its metadata.

        Args:
            content: The uploaded stream and its declared filename.

        Returns:
            ExtractedMetadata from the processor, unchanged.

        Raises:
            EmptyUpload: If the stream has no content.
            MissingExtension: If the filename has no usable suffix.
            UnsupportedFormat: If no processor handles the extension.
            ProcessingFailed: If the stored file could not be parsed.
            StorageFailed: If storage could not be written.
        """
        if content.is_empty():
            logger.debug("Rejected empty upload %r", content.filename)
            raise EmptyUpload(content.filename)

        extension = detect_extension(content.filename)

        processor = self.registry.resolve(extension)
        if processor is None:
            logger.debug("Rejected %r: no processor for .%s", content.filename, extension)
            raise UnsupportedFormat(extension)

        name = unique_name(
            self.layout.ebook_dir,
            extension,
            self.filesystem,
            name_factory=self._name_factory,
        )
        original_name = base_filename(content.filename)

        try:
            metadata = processor.process(
                content.stream,
                name,
                self.layout,
                original_name=original_name,
                filesystem=self.filesystem,
            )
        except IngestionError as exc:
            logger.warning("Ingestion of %r failed: %s", original_name, exc)
            raise
        except OSError as exc:
            logger.warning("Ingestion of %r failed: %s", original_name, exc)
            raise StorageFailed(self.layout.root, exc) from exc
        except Exception as exc:
            logger.warning("Ingestion of %r failed: %s", original_name, exc)
            raise ProcessingFailed(processor.name, exc) from exc

        logger.info("Ingested %r as %s (%s)", original_name, name, processor.name)
        return metadata

    def ingest_path(self, path: Path) -> ExtractedMetadata:
        """Ingest a local file as if it had been uploaded under its own name."""
        content = UploadedContent.from_path(path)
        try:
            return self.ingest(content)
        finally:
            content.stream.close()
