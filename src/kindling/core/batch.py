# ABOUTME: Batch ingestion of many local files on a worker-thread pool.
# ABOUTME: Each file is an independent ingestion; results are reported in input order.

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from kindling.core.ingest import IngestionCoordinator
from kindling.errors import IngestionError, ValidationError
from kindling.metadata.types import ExtractedMetadata

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Summary of a batch ingestion."""

    ingested: list[tuple[Path, ExtractedMetadata]] = field(default_factory=list)
    rejected: list[tuple[Path, str]] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.ingested) + len(self.rejected) + len(self.failed)

    @property
    def ok(self) -> bool:
        """Whether every file in the batch was ingested."""
        return not self.rejected and not self.failed


def ingest_many(
    coordinator: IngestionCoordinator,
    paths: list[Path],
    *,
    max_workers: int = 4,
) -> BatchResult:
    """Ingest local files concurrently.

    Validation errors (empty, no extension, unsupported format) are recorded
    as rejections; processing and storage errors as failures. Anything else
    propagates.

    Args:
        coordinator: Coordinator shared read-only by all workers.
        paths: Files to ingest.
        max_workers: Size of the worker-thread pool.

    Returns:
        BatchResult with per-file outcomes in the order of ``paths``.
    """
    result = BatchResult()
    if not paths:
        return result

    with ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="ingest") as executor:
        futures = [(path, executor.submit(coordinator.ingest_path, path)) for path in paths]

        for path, future in futures:
            try:
                metadata = future.result()
            except ValidationError as exc:
                result.rejected.append((path, str(exc)))
            except (IngestionError, OSError) as exc:
                result.failed.append((path, str(exc)))
            else:
                result.ingested.append((path, metadata))

    logger.info(
        "Batch finished: %d ingested, %d rejected, %d failed",
        len(result.ingested),
        len(result.rejected),
        len(result.failed),
    )
    return result
