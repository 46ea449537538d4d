# ABOUTME: Scoped rollback for files written during ingestion.
# ABOUTME: Deletes the guarded file on every non-success exit, including interrupts.

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from kindling.storage.filesystem import Filesystem

logger = logging.getLogger(__name__)


def discard(fs: Filesystem, path: Path) -> bool:
    """Delete ``path``, logging rather than raising if the delete fails.

    Returns:
        True if the file is gone afterwards.
    """
    try:
        fs.delete(path)
    except OSError:
        logger.exception("Rollback failed, could not delete %s", path)
        return False
    logger.debug("Rolled back %s", path)
    return True


@contextmanager
def rollback_on_failure(fs: Filesystem, path: Path) -> Iterator[Path]:
    """Guard ``path`` so it is deleted if the block exits with any exception.

    BaseException is caught so that KeyboardInterrupt and task cancellation
    roll back too. The original exception is always re-raised; a failed
    delete is only logged.
    """
    try:
        yield path
    except BaseException:
        discard(fs, path)
        raise
