"""Entry point that runs one traversal and packages its result.

The orchestrator owns the aggregator and error collector for the lifetime of
a single traversal, runs the parallel walker to completion and retires both
into an immutable TraversalResult.
"""

from __future__ import annotations

import logging
import time
import uuid

from dirsize.types.models import TraversalRequest, TraversalResult
from dirsize.utils.logging import reset_traversal_id, set_traversal_id
from dirsize.utils.units import DEFAULT_UNIT, AdjustedSize

from .aggregator import Aggregator
from .error_collector import ErrorCollector
from .metadata import MetadataResolver
from .walker import ParallelWalker, default_thread_count

logger = logging.getLogger(__name__)


def generate_traversal_id() -> str:
    """Create a short id used to correlate the log records of one traversal."""
    return uuid.uuid4().hex[:8]


def compute_directory_size(request: TraversalRequest) -> TraversalResult:
    """Calculate the total adjusted size of a directory's contents.

    Walks the tree below ``request.path`` without following symbolic links,
    divides each file's length by its hard-link count, and returns the total
    along with the number of files resolved and any entries that failed.
    Files with hard links outside the tree are undercounted.

    Args:
        request: Traversal root and options

    Returns:
        TraversalResult with the converted total, file count and errors.
        Per-entry failures never raise; they are listed in the result.

    Raises:
        WorkerPoolError: If the worker pool cannot be created or run
        AccumulatorRetiredError: If the accumulators were retired twice,
            which indicates an internal bug

    Examples:
        >>> result = compute_directory_size(TraversalRequest(path=Path("/srv/data")))
        >>> result.file_count >= 0
        True
    """
    threads = request.threads if request.threads is not None else default_thread_count()
    unit = request.unit if request.unit is not None else DEFAULT_UNIT

    token = set_traversal_id(generate_traversal_id())
    try:
        aggregator = Aggregator()
        errors = ErrorCollector()
        walker = ParallelWalker(
            request.path,
            aggregator=aggregator,
            errors=errors,
            resolver=MetadataResolver(verbose=request.verbose),
            threads=threads,
        )

        logger.info(
            "Directory size calculation started",
            extra={"root": str(request.path), "threads": threads, "unit": unit.value},
        )
        started = time.perf_counter()

        walker.run()

        total_bytes, file_count = aggregator.retire()
        error_count = len(errors)
        error_records = errors.take()

        logger.info(
            "Directory size calculation complete",
            extra={
                "root": str(request.path),
                "total_bytes": total_bytes,
                "file_count": file_count,
                "error_count": error_count,
                "elapsed_seconds": round(time.perf_counter() - started, 3),
            },
        )

        return TraversalResult(
            size=AdjustedSize.from_bytes(total_bytes, unit),
            total_bytes=total_bytes,
            file_count=file_count,
            errors=error_records,
        )
    finally:
        reset_traversal_id(token)
