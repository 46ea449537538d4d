# ABOUTME: Public API for the Kindling storage layer.
# ABOUTME: Exports the filesystem seam, the storage layout, naming, and rollback helpers.

from kindling.storage.filesystem import Filesystem, LocalFilesystem
from kindling.storage.layout import DEFAULT_STORAGE_ROOT, StorageLayout
from kindling.storage.naming import random_name, unique_name
from kindling.storage.rollback import discard, rollback_on_failure

__all__ = [
    "DEFAULT_STORAGE_ROOT",
    "Filesystem",
    "LocalFilesystem",
    "StorageLayout",
    "discard",
    "random_name",
    "rollback_on_failure",
    "unique_name",
]
