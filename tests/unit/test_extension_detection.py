# ABOUTME: Unit tests for deriving a format extension from an uploaded filename.
# ABOUTME: Covers normalization, directory parts, and the malformed names that must be rejected.

import pytest

from kindling.core.ingest import base_filename, detect_extension
from kindling.errors import MissingExtension


class TestDetectExtension:
    """Tests for detect_extension."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("book.epub", "epub"),
            ("BOOK.EPUB", "epub"),
            ("Roadside Picnic.fb2", "fb2"),
            ("archive.tar.fbz", "fbz"),
            ("uploads/2024/book.Epub", "epub"),
            ("C:\\Users\\me\\book.epub", "epub"),
        ],
    )
    def test_valid_names(self, filename: str, expected: str) -> None:
        assert detect_extension(filename) == expected

    @pytest.mark.parametrize(
        "filename",
        ["book", "book.", ".epub", "", "dir.d/book", "book.ep ub", "book.e-pub"],
    )
    def test_missing_or_malformed_suffix_raises(self, filename: str) -> None:
        with pytest.raises(MissingExtension):
            detect_extension(filename)

    def test_error_carries_filename(self) -> None:
        with pytest.raises(MissingExtension) as excinfo:
            detect_extension("book")
        assert excinfo.value.filename == "book"


class TestBaseFilename:
    """Tests for base_filename."""

    def test_plain_name_unchanged(self) -> None:
        assert base_filename("book.epub") == "book.epub"

    def test_strips_posix_and_windows_directories(self) -> None:
        assert base_filename("a/b/book.epub") == "book.epub"
        assert base_filename("a\\b\\book.epub") == "book.epub"
