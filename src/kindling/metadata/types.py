# ABOUTME: Core data structures for one ingestion call: the upload and its extracted metadata.
# ABOUTME: ExtractedMetadata is the interchange format handed back to the catalog layer.

import io
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

UNKNOWN_AUTHOR = "unknown author"
DEFAULT_COVER = "default_cover.jpg"

# Uploads above this size spill from memory to a temporary file when spooled.
_SPOOL_MAX_SIZE = 8 * 1024 * 1024


def _spool(stream: BinaryIO) -> BinaryIO:
    """Copy a single-pass stream into a seekable temporary buffer."""
    spooled = tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_SIZE)
    shutil.copyfileobj(stream, spooled)
    spooled.seek(0)
    return spooled


@dataclass
class UploadedContent:
    """An uploaded byte stream plus the filename the uploader declared.

    The stream is owned by the caller. Non-seekable streams are spooled on
    construction so that emptiness can be checked without consuming them.
    """

    stream: BinaryIO
    filename: str

    def __post_init__(self) -> None:
        if not self.stream.seekable():
            self.stream = _spool(self.stream)

    @classmethod
    def from_bytes(cls, data: bytes, filename: str) -> "UploadedContent":
        return cls(stream=io.BytesIO(data), filename=filename)

    @classmethod
    def from_path(cls, path: Path) -> "UploadedContent":
        """Open a local file as an upload. The caller closes ``stream``."""
        return cls(stream=open(path, "rb"), filename=path.name)

    def is_empty(self) -> bool:
        """Whether no bytes remain between the current position and the end."""
        position = self.stream.tell()
        end = self.stream.seek(0, io.SEEK_END)
        self.stream.seek(position)
        return end <= position


@dataclass
class ExtractedMetadata:
    """Metadata and storage locations produced by a successful ingestion.

    ``cover_path`` holds DEFAULT_COVER when the book had no usable cover.
    """

    title: str
    author: str
    file_path: Path
    cover_path: Path | str = DEFAULT_COVER

    @property
    def has_cover(self) -> bool:
        """Whether a cover image was extracted and stored."""
        return self.cover_path != DEFAULT_COVER

    def as_dict(self) -> dict[str, str]:
        """Flatten to the string mapping consumed by the catalog layer."""
        return {
            "title": self.title,
            "author": self.author,
            "filePath": str(self.file_path),
            "coverPath": str(self.cover_path),
        }


@dataclass
class ParsedBook:
    """What a format processor read out of a container, before storage."""

    title: str
    authors: list[str] = field(default_factory=list)
    cover_image: bytes | None = None

    @property
    def author(self) -> str:
        """Joined author string, or UNKNOWN_AUTHOR when none were declared."""
        return format_authors(self.authors)

    @property
    def has_cover(self) -> bool:
        return self.cover_image is not None and len(self.cover_image) > 0


def format_authors(authors: list[str]) -> str:
    """Join trimmed author names with ", ", substituting UNKNOWN_AUTHOR if empty."""
    joined = ", ".join(name.strip() for name in authors if name and name.strip())
    return joined or UNKNOWN_AUTHOR


def title_from_filename(filename: str) -> str:
    """Strip the trailing extension from a filename to use as a fallback title."""
    dot = filename.rfind(".")
    return filename[:dot] if dot > 0 else filename
