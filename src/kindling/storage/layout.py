# ABOUTME: Storage layout for ingested books: a root with ebook/ and cover/ subdirectories.
# ABOUTME: Directories are created lazily the first time a processor stores something.

import logging
from dataclasses import dataclass
from pathlib import Path

from kindling.errors import StorageFailed
from kindling.storage.filesystem import Filesystem

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_ROOT = Path.home() / ".kindling" / "storage"

EBOOK_SUBDIR = "ebook"
COVER_SUBDIR = "cover"


@dataclass(frozen=True)
class StorageLayout:
    """Where ingested ebooks and their extracted covers live."""

    root: Path = DEFAULT_STORAGE_ROOT

    @property
    def ebook_dir(self) -> Path:
        return self.root / EBOOK_SUBDIR

    @property
    def cover_dir(self) -> Path:
        return self.root / COVER_SUBDIR

    def ebook_path(self, unique_name: str) -> Path:
        return self.ebook_dir / unique_name

    def cover_path(self, unique_name: str) -> Path:
        """Cover files are always stored with a .jpg suffix, whatever the image type."""
        return self.cover_dir / f"cover_{unique_name}.jpg"

    def ensure(self, fs: Filesystem) -> None:
        """Create the root and both subdirectories if they are missing.

        Raises:
            StorageFailed: If a directory cannot be checked or created.
        """
        for directory in (self.root, self.ebook_dir, self.cover_dir):
            try:
                if fs.is_dir(directory):
                    continue
                fs.make_dirs(directory)
            except OSError as exc:
                raise StorageFailed(directory, exc) from exc
            logger.debug("Created storage directory %s", directory)
