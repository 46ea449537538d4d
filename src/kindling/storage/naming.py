# ABOUTME: Collision-free storage names for ingested ebooks.
# ABOUTME: Random UUID4 identifiers plus the original extension, re-drawn on the rare collision.

import uuid
from collections.abc import Callable
from pathlib import Path

from kindling.errors import StorageFailed
from kindling.storage.filesystem import Filesystem

NameFactory = Callable[[str], str]

_MAX_NAME_ATTEMPTS = 16


def random_name(extension: str) -> str:
    """Build a storage name from 128 random bits and the extension."""
    return f"{uuid.uuid4().hex}.{extension}"


def unique_name(
    directory: Path,
    extension: str,
    fs: Filesystem,
    *,
    name_factory: NameFactory = random_name,
) -> str:
    """Draw a storage name that is not already taken in ``directory``.

    Args:
        directory: Directory the name must be unique within.
        extension: Normalized extension to keep on the stored file.
        fs: Filesystem used to check for existing files.
        name_factory: Source of candidate names.

    Returns:
        A file name (not a path) with no existing file in ``directory``.

    Raises:
        StorageFailed: If every attempt produced a taken name, or the
            directory cannot be checked.
    """
    for _ in range(_MAX_NAME_ATTEMPTS):
        candidate = name_factory(extension)
        try:
            taken = fs.exists(directory / candidate)
        except OSError as exc:
            raise StorageFailed(directory / candidate, exc) from exc
        if not taken:
            return candidate
    raise StorageFailed(
        directory,
        OSError(f"Could not find a free file name after {_MAX_NAME_ATTEMPTS} attempts"),
    )
