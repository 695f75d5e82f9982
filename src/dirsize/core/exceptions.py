"""Exceptions that escape a traversal.

Per-entry failures never raise; they are recorded as ErrorRecords. The
exceptions below cover the few conditions that end a traversal.
"""

from __future__ import annotations

from typing import Any


class DirsizeError(Exception):
    """Base exception for dirsize errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportAny] # Flexible error context
        """Initialize DirsizeError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message: str = message
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportAny] # Flexible error context


class WorkerPoolError(DirsizeError):
    """Raised when the worker pool cannot be created or run."""

    def __init__(self, message: str, threads: int | None = None) -> None:
        """Initialize WorkerPoolError.

        Args:
            message: Error message
            threads: Requested pool size, if known
        """
        context: dict[str, Any] = {}  # pyright: ignore[reportAny] # Flexible error context
        if threads is not None:
            context["threads"] = threads
        super().__init__(message, context)
        self.threads: int | None = threads


class WalkerStateError(DirsizeError):
    """Raised when a walker is run outside the IDLE state."""


class AccumulatorRetiredError(DirsizeError):
    """Raised when a retired accumulator is mutated or retired again."""
