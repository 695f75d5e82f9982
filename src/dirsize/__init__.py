"""dirsize - measure the storage footprint of a directory tree.

Walks a tree in parallel without following symbolic links, divides each
file's size by its hard link count, and reports the total alongside the
number of files seen and any entries that could not be read.
"""

from dirsize.core.exceptions import (
    AccumulatorRetiredError,
    DirsizeError,
    WalkerStateError,
    WorkerPoolError,
)
from dirsize.core.orchestrator import compute_directory_size
from dirsize.types.models import (
    ErrorKind,
    ErrorRecord,
    FileStat,
    TraversalRequest,
    TraversalResult,
)
from dirsize.utils.units import AdjustedSize, ByteUnit

__all__ = [
    "AccumulatorRetiredError",
    "AdjustedSize",
    "ByteUnit",
    "DirsizeError",
    "ErrorKind",
    "ErrorRecord",
    "FileStat",
    "TraversalRequest",
    "TraversalResult",
    "WalkerStateError",
    "WorkerPoolError",
    "compute_directory_size",
]
