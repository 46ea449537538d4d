# ABOUTME: FormatProcessor protocol and the shared store-parse-rollback routine for container formats.
# ABOUTME: Subclasses only say how to open a container and where its title, authors and cover live.

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO, Protocol, runtime_checkable

from kindling.errors import ProcessingFailed, StorageFailed
from kindling.metadata.types import (
    DEFAULT_COVER,
    ExtractedMetadata,
    ParsedBook,
    title_from_filename,
)
from kindling.storage.filesystem import Filesystem, LocalFilesystem
from kindling.storage.layout import StorageLayout
from kindling.storage.rollback import rollback_on_failure

logger = logging.getLogger(__name__)


class FormatReadError(Exception):
    """Raised when a container file cannot be read or parsed."""


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and drop any leading dot."""
    return extension.strip().lstrip(".").lower()


@runtime_checkable
class FormatProcessor(Protocol):
    """Protocol for format-specific parse-and-persist processors.

    Processors hold no per-call state, so one instance may serve concurrent
    ingestions.
    """

    @property
    def name(self) -> str: ...

    @property
    def extensions(self) -> frozenset[str]: ...

    def supports(self, extension: str) -> bool: ...

    def read(
        self,
        path: Path,
        original_name: str | None = None,
        *,
        filesystem: Filesystem | None = None,
    ) -> ParsedBook: ...

    def process(
        self,
        stream: BinaryIO,
        unique_name: str,
        layout: StorageLayout,
        *,
        original_name: str | None = None,
        filesystem: Filesystem | None = None,
    ) -> ExtractedMetadata: ...


class ContainerProcessor(ABC):
    """Base class for processors of archive-style formats with a metadata manifest.

    Subclasses set ``name``, ``extensions`` and ``read_error`` and implement
    the four container hooks. Everything about storage, fallbacks and
    rollback lives here.
    """

    name: str = ""
    extensions: frozenset[str] = frozenset()
    read_error: type[FormatReadError] = FormatReadError

    def supports(self, extension: str) -> bool:
        return normalize_extension(extension) in self.extensions

    @abstractmethod
    def _open(self, path: Path, fs: Filesystem) -> Any:
        """Parse the container at ``path``; raise on malformed input."""

    @abstractmethod
    def _title(self, container: Any) -> str | None:
        """The declared title, or None."""

    @abstractmethod
    def _authors(self, container: Any) -> list[str]:
        """Declared authors, each formatted as "given-name family-name"."""

    @abstractmethod
    def _cover(self, container: Any) -> bytes | None:
        """Raw bytes of the embedded cover image, or None."""

    def _safe_cover(self, container: Any, path: Path) -> bytes | None:
        try:
            return self._cover(container)
        except Exception as exc:
            logger.warning("Could not extract cover from %s: %s", path, exc)
            return None

    def read(
        self,
        path: Path,
        original_name: str | None = None,
        *,
        filesystem: Filesystem | None = None,
    ) -> ParsedBook:
        """Extract title, authors and cover from a container file.

        Args:
            path: Path to the stored container.
            original_name: Filename the book was uploaded as, used for the
                title fallback. Defaults to the name of ``path``.
            filesystem: Filesystem to read through. Defaults to local disk.

        Returns:
            ParsedBook with fallbacks applied to the title.

        Raises:
            FormatReadError: If the container cannot be parsed.
        """
        fs = filesystem or LocalFilesystem()
        if not fs.exists(path):
            raise self.read_error(f"File not found: {path}")

        try:
            container = self._open(path, fs)
            title = self._title(container)
            authors = self._authors(container)
        except FormatReadError:
            raise
        except Exception as exc:
            raise self.read_error(f"Failed to read {self.name.upper()}: {path}: {exc}") from exc

        if not title:
            title = title_from_filename(original_name or path.name)

        return ParsedBook(
            title=title,
            authors=authors,
            cover_image=self._safe_cover(container, path),
        )

    def _store_cover(
        self, book: ParsedBook, unique_name: str, layout: StorageLayout, fs: Filesystem
    ) -> Path | str:
        """Write the cover image next to the ebook, or fall back to DEFAULT_COVER."""
        if not book.has_cover:
            return DEFAULT_COVER

        cover_path = layout.cover_path(unique_name)
        try:
            with rollback_on_failure(fs, cover_path):
                fs.copy_stream(io.BytesIO(book.cover_image), cover_path)
        except Exception as exc:
            logger.warning("Could not save cover %s: %s", cover_path, exc)
            return DEFAULT_COVER
        return cover_path

    def process(
        self,
        stream: BinaryIO,
        unique_name: str,
        layout: StorageLayout,
        *,
        original_name: str | None = None,
        filesystem: Filesystem | None = None,
    ) -> ExtractedMetadata:
        """Store an uploaded container and extract its metadata and cover.

        The raw bytes are written to ``ebook/<unique_name>`` first and the
        stored copy is parsed. If parsing fails, or the call is interrupted
        before it returns, the stored copy is deleted again.

        Args:
            stream: Uploaded bytes, read once from the current position.
            unique_name: Collision-free file name to store the ebook under.
            layout: Storage root and subdirectories.
            original_name: Filename the book was uploaded as.
            filesystem: Filesystem to write through. Defaults to local disk.

        Returns:
            ExtractedMetadata pointing at the stored ebook and cover.

        Raises:
            StorageFailed: If directories or the ebook file cannot be written.
            ProcessingFailed: If the stored container cannot be parsed.
        """
        fs = filesystem or LocalFilesystem()
        layout.ensure(fs)
        ebook_path = layout.ebook_path(unique_name)

        with rollback_on_failure(fs, ebook_path):
            try:
                fs.copy_stream(stream, ebook_path)
            except OSError as exc:
                raise StorageFailed(ebook_path, exc) from exc

            try:
                book = self.read(ebook_path, original_name or unique_name, filesystem=fs)
            except Exception as exc:
                logger.warning("Rolling back %s: %s", ebook_path, exc)
                raise ProcessingFailed(self.name, exc) from exc

            cover_path = self._store_cover(book, unique_name, layout, fs)

        return ExtractedMetadata(
            title=book.title,
            author=book.author,
            file_path=ebook_path,
            cover_path=cover_path,
        )
