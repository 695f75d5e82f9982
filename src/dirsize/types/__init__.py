"""Type definitions for the dirsize application.

This package provides the request, per-entry and result models.
"""

from dirsize.types.models import (
    Entry,
    ErrorKind,
    ErrorRecord,
    FileStat,
    TraversalRequest,
    TraversalResult,
)

__all__ = [
    "Entry",
    "ErrorKind",
    "ErrorRecord",
    "FileStat",
    "TraversalRequest",
    "TraversalResult",
]
