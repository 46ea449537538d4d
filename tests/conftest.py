# ABOUTME: Shared pytest fixtures for Kindling tests.
# ABOUTME: Builds real EPUB and FB2 files (valid, bare, and corrupt) plus a storage layout to ingest into.

import base64
import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from ebooklib import epub

from kindling.core.ingest import IngestionCoordinator
from kindling.core.registry import build_default_registry
from kindling.storage.layout import StorageLayout

# Not a decodable JPEG, but the pipeline copies cover bytes verbatim.
COVER_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-cover-image\xff\xd9"


def _build_epub(
    path: Path,
    *,
    title: str | None,
    authors: list[str],
    cover: bytes | None,
) -> Path:
    book = epub.EpubBook()
    book.set_identifier(f"kindling-test-{path.stem}")
    if title is not None:
        book.set_title(title)
    book.set_language("en")
    for i, author in enumerate(authors):
        book.add_author(author, uid=f"creator{i}")
    if cover is not None:
        book.set_cover("images/cover.jpg", cover, create_page=False)

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    epub.write_epub(str(path), book)
    return path


def build_fb2(
    *,
    title: str | None = "Roadside Picnic",
    authors: list[tuple[str, str]] | None = None,
    cover: bytes | None = None,
) -> bytes:
    """Render a FictionBook 2 document as UTF-8 bytes."""
    if authors is None:
        authors = [("Arkady", "Strugatsky"), ("Boris", "Strugatsky")]

    author_xml = "".join(
        f"<author><first-name>{first}</first-name><last-name>{last}</last-name></author>"
        for first, last in authors
    )
    title_xml = f"<book-title>{title}</book-title>" if title is not None else ""
    coverpage_xml = '<coverpage><image l:href="#cover.jpg"/></coverpage>' if cover else ""
    binary_xml = (
        f'<binary id="cover.jpg" content-type="image/jpeg">'
        f"{base64.b64encode(cover).decode('ascii')}</binary>"
        if cover
        else ""
    )

    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<FictionBook xmlns="http://www.gribuser.ru/xml/fictionbook/2.0" '
        'xmlns:l="http://www.w3.org/1999/xlink">'
        "<description><title-info><genre>sf</genre>"
        f"{author_xml}{title_xml}{coverpage_xml}<lang>en</lang>"
        "</title-info></description>"
        "<body><section><title><p>Chapter 1</p></title><p>Content.</p></section></body>"
        f"{binary_xml}"
        "</FictionBook>"
    ).encode("utf-8")


def zip_fb2(document: bytes, inner_name: str = "book.fb2") -> bytes:
    """Wrap an FB2 document in an .fbz zip container."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(inner_name, document)
    return buffer.getvalue()


@pytest.fixture
def epub_factory(tmp_path: Path) -> Callable[..., Path]:
    """Build EPUB files with chosen metadata inside tmp_path/books."""
    books_dir = tmp_path / "books"
    books_dir.mkdir(exist_ok=True)

    def factory(
        filename: str = "book.epub",
        *,
        title: str | None = "Untitled",
        authors: list[str] | None = None,
        cover: bytes | None = None,
    ) -> Path:
        return _build_epub(
            books_dir / filename, title=title, authors=authors or [], cover=cover,
        )

    return factory


@pytest.fixture
def sample_epub(epub_factory: Callable[..., Path]) -> Path:
    """A valid EPUB with known title and author and no cover."""
    return epub_factory(
        "name_of_the_rose.epub", title="The Name of the Rose", authors=["Umberto Eco"],
    )


@pytest.fixture
def covered_epub(epub_factory: Callable[..., Path]) -> Path:
    """A valid EPUB with an embedded cover image."""
    return epub_factory(
        "dune.epub", title="Dune", authors=["Frank Herbert"], cover=COVER_BYTES,
    )


@pytest.fixture
def bare_epub(epub_factory: Callable[..., Path]) -> Path:
    """A valid EPUB that declares neither title nor author."""
    return epub_factory("Mystery Manuscript.epub", title=None)


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """A file with an .epub name that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_bytes(b"this is not a valid epub file \x00\x01\x02" * 8)
    return filepath


@pytest.fixture
def sample_fb2(tmp_path: Path) -> Path:
    """A valid FB2 document with two authors and an embedded cover."""
    filepath = tmp_path / "roadside_picnic.fb2"
    filepath.write_bytes(build_fb2(cover=COVER_BYTES))
    return filepath


@pytest.fixture
def layout(tmp_path: Path) -> StorageLayout:
    """Storage layout rooted in a directory that does not exist yet."""
    return StorageLayout(tmp_path / "storage")


@pytest.fixture
def coordinator(layout: StorageLayout) -> IngestionCoordinator:
    """Coordinator with the default processors, storing into ``layout``."""
    return IngestionCoordinator(build_default_registry(), layout)


@pytest.fixture
def cover_bytes() -> bytes:
    """The raw cover image embedded by the covered fixtures."""
    return COVER_BYTES


@pytest.fixture
def fb2_builder() -> Callable[..., bytes]:
    """The FB2 document builder, for tests that need custom metadata."""
    return build_fb2


@pytest.fixture
def fbz_builder() -> Callable[..., bytes]:
    """Wraps an FB2 document in a zip container."""
    return zip_fb2
