# ABOUTME: EPUB processor: reads title, authors and cover from the OPF manifest using ebooklib.
# ABOUTME: Storage, fallbacks and rollback are inherited from ContainerProcessor.

from collections.abc import Iterator
from pathlib import Path

import ebooklib
from ebooklib import epub

from kindling.formats.base import ContainerProcessor, FormatReadError
from kindling.storage.filesystem import Filesystem


class EpubReadError(FormatReadError):
    """Raised when an EPUB file cannot be read or parsed."""


def _attr(attrs: dict[str, str], local_name: str) -> str | None:
    """Look up an attribute by local name, whatever namespace prefix ebooklib kept."""
    for key, value in attrs.items():
        if key == local_name or key.endswith(f"}}{local_name}") or key.endswith(f":{local_name}"):
            return value
    return None


def _first_dc_text(book: epub.EpubBook, name: str) -> str | None:
    """The first non-blank Dublin Core value for ``name``, whitespace collapsed."""
    for value, _attrs in book.get_metadata("DC", name):
        text = " ".join(str(value or "").split())
        if text:
            return text
    return None


def _display_name(text: str | None, file_as: str | None) -> str:
    """Render a creator as "given-name family-name".

    The element text is already in display order. When it is missing, a
    "Family, Given" file-as value is flipped around instead.
    """
    if text and text.strip():
        return " ".join(text.split())
    if file_as and "," in file_as:
        family, given = file_as.split(",", 1)
        return f"{given.strip()} {family.strip()}".strip()
    return (file_as or "").strip()


def _get_authors(book: epub.EpubBook) -> list[str]:
    """Extract author names from an EpubBook, skipping editors, illustrators, etc."""
    authors = []
    for value, attrs in book.get_metadata("DC", "creator"):
        role = _attr(attrs, "role")
        if role and role.lower() != "aut":
            continue
        name = _display_name(value, _attr(attrs, "file-as"))
        if name:
            authors.append(name)
    return authors


def _cover_candidates(book: epub.EpubBook) -> Iterator[epub.EpubItem]:
    """Manifest items that may hold the cover, most authoritative first."""
    for _value, attrs in book.get_metadata("OPF", "cover"):
        item = book.get_item_with_id(attrs.get("content", ""))
        if item is not None:
            yield item

    # properties="cover-image" in EPUB 3 manifests
    yield from book.get_items_of_type(ebooklib.ITEM_COVER)

    for item in book.get_items_of_type(ebooklib.ITEM_IMAGE):
        label = f"{item.get_id() or ''} {item.get_name() or ''}".lower()
        if "cover" in label:
            yield item


def _extract_cover_image(book: epub.EpubBook) -> bytes | None:
    """Bytes of the first cover candidate that has any content."""
    for item in _cover_candidates(book):
        content = item.get_content()
        if content:
            return content
    return None


class EpubProcessor(ContainerProcessor):
    """Processor for EPUB packages."""

    name = "epub"
    extensions = frozenset({"epub"})
    read_error = EpubReadError

    def _open(self, path: Path, fs: Filesystem) -> epub.EpubBook:
        # ebooklib opens the zip itself and needs a real path, not a stream
        return epub.read_epub(str(path), options={"ignore_ncx": True})

    def _title(self, container: epub.EpubBook) -> str | None:
        return _first_dc_text(container, "title")

    def _authors(self, container: epub.EpubBook) -> list[str]:
        return _get_authors(container)

    def _cover(self, container: epub.EpubBook) -> bytes | None:
        return _extract_cover_image(container)
