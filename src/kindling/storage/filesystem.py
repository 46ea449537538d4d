# ABOUTME: Filesystem protocol consumed by format processors, plus the local-disk implementation.
# ABOUTME: Keeps every storage side effect behind one seam so failures can be injected in tests.

import shutil
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

_COPY_BUFFER_SIZE = 65536  # 64 KB


@runtime_checkable
class Filesystem(Protocol):
    """The storage operations an ingestion call needs.

    Implementations raise OSError on failure; processors translate that into
    StorageFailed.
    """

    def is_dir(self, path: Path) -> bool: ...

    def exists(self, path: Path) -> bool: ...

    def make_dirs(self, path: Path) -> None: ...

    def open_write(self, path: Path) -> BinaryIO: ...

    def copy_stream(self, stream: BinaryIO, path: Path) -> int: ...

    def delete(self, path: Path) -> None: ...

    def open_read(self, path: Path) -> BinaryIO: ...


class LocalFilesystem:
    """Filesystem backed by the local disk via pathlib."""

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def open_write(self, path: Path) -> BinaryIO:
        """Open ``path`` for binary writing, truncating any existing file."""
        return open(path, "wb")

    def copy_stream(self, stream: BinaryIO, path: Path) -> int:
        """Copy ``stream`` from its current position into ``path``.

        Returns:
            The number of bytes written.
        """
        with self.open_write(path) as out:
            shutil.copyfileobj(stream, out, _COPY_BUFFER_SIZE)
            return out.tell()

    def delete(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    def open_read(self, path: Path) -> BinaryIO:
        return open(path, "rb")
