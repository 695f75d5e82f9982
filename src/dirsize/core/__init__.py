"""Concurrent traversal and aggregation engine."""

from __future__ import annotations

from .aggregator import Aggregator
from .error_collector import ErrorCollector
from .exceptions import (
    AccumulatorRetiredError,
    DirsizeError,
    WalkerStateError,
    WorkerPoolError,
)
from .metadata import MetadataResolver, classify_os_error
from .orchestrator import compute_directory_size
from .walker import ParallelWalker, WalkState, default_thread_count

__all__ = [
    "AccumulatorRetiredError",
    "Aggregator",
    "DirsizeError",
    "ErrorCollector",
    "MetadataResolver",
    "ParallelWalker",
    "WalkState",
    "WalkerStateError",
    "WorkerPoolError",
    "classify_os_error",
    "compute_directory_size",
    "default_thread_count",
]
