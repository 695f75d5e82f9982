"""Append-only, thread-safe collection of per-entry failures."""

from __future__ import annotations

import threading

from dirsize.types.models import ErrorRecord


class ErrorCollector:
    """Collects ErrorRecords from any number of worker threads.

    The lock covers only the append and the hand-over in ``take``.
    """

    def __init__(self) -> None:
        """Initialize an empty collector."""
        self._lock: threading.Lock = threading.Lock()
        self._records: list[ErrorRecord] = []

    def append(self, record: ErrorRecord) -> None:
        """Record one failure."""
        with self._lock:
            self._records.append(record)

    def take(self) -> list[ErrorRecord] | None:
        """Hand over every collected record.

        Returns:
            The records gathered so far, or None when there are none. The
            collector is empty afterwards, so a second call returns None.
        """
        with self._lock:
            records, self._records = self._records, []
        return records or None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
