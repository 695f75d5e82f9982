"""Thread-safe size and file-count accumulators shared by walker workers."""

from __future__ import annotations

import threading

from .exceptions import AccumulatorRetiredError


class Aggregator:
    """Accumulates adjusted file sizes and the count of resolved files.

    Both counters are updated under one lock so that a single ``add`` is
    atomic; the reduction is a plain sum, so the final values do not depend
    on which worker added what or in which order.
    """

    def __init__(self) -> None:
        """Initialize empty accumulators."""
        self._lock: threading.Lock = threading.Lock()
        self._total_size: int = 0
        self._file_count: int = 0
        self._retired: bool = False

    def add(self, contribution: int) -> None:
        """Fold one resolved file into the totals.

        Args:
            contribution: Adjusted size of the file in bytes

        Raises:
            AccumulatorRetiredError: If the aggregator was already retired
        """
        with self._lock:
            if self._retired:
                raise AccumulatorRetiredError("Cannot add to a retired aggregator")
            self._total_size += contribution
            self._file_count += 1

    @property
    def total_size(self) -> int:
        with self._lock:
            return self._total_size

    @property
    def file_count(self) -> int:
        with self._lock:
            return self._file_count

    @property
    def retired(self) -> bool:
        return self._retired

    def retire(self) -> tuple[int, int]:
        """Freeze the accumulators and return their final values.

        Returns:
            Tuple of (total adjusted size, file count)

        Raises:
            AccumulatorRetiredError: If called more than once
        """
        with self._lock:
            if self._retired:
                raise AccumulatorRetiredError("Aggregator already retired")
            self._retired = True
            return self._total_size, self._file_count
