"""Byte-magnitude units and conversion of raw byte totals.

Decimal units (KB, MB, ...) are powers of 1000 and binary units (KiB, MiB, ...)
are powers of 1024. Conversion is applied once, after aggregation, so the raw
total kept in a traversal result stays exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, override


class ByteUnit(str, Enum):
    """Enumeration of supported display units."""

    B = "B"
    KB = "KB"
    KIB = "KiB"
    MB = "MB"
    MIB = "MiB"
    GB = "GB"
    GIB = "GiB"
    TB = "TB"
    TIB = "TiB"
    PB = "PB"
    PIB = "PiB"

    @property
    def factor(self) -> int:
        """Number of bytes in one of this unit."""
        return _FACTORS[self]

    @classmethod
    def parse(cls, value: str | ByteUnit) -> ByteUnit:
        """Parse a unit name case-insensitively.

        Args:
            value: Unit name such as ``"kib"``, ``"GB"`` or ``"b"``

        Returns:
            Matching ByteUnit

        Raises:
            ValueError: If the name does not match any unit
        """
        if isinstance(value, ByteUnit):
            return value

        normalized = value.strip().lower()
        for unit in cls:
            if unit.value.lower() == normalized:
                return unit

        valid = ", ".join(unit.value for unit in cls)
        msg = f"Unknown byte unit '{value}'. Valid units: {valid}"
        raise ValueError(msg)


_FACTORS: Final[dict[ByteUnit, int]] = {
    ByteUnit.B: 1,
    ByteUnit.KB: 1000,
    ByteUnit.KIB: 1024,
    ByteUnit.MB: 1000**2,
    ByteUnit.MIB: 1024**2,
    ByteUnit.GB: 1000**3,
    ByteUnit.GIB: 1024**3,
    ByteUnit.TB: 1000**4,
    ByteUnit.TIB: 1024**4,
    ByteUnit.PB: 1000**5,
    ByteUnit.PIB: 1024**5,
}

DEFAULT_UNIT: Final[ByteUnit] = ByteUnit.GB


@dataclass(slots=True, frozen=True)
class AdjustedSize:
    """A byte total expressed in a chosen display unit."""

    value: float
    unit: ByteUnit

    @classmethod
    def from_bytes(cls, total_bytes: int, unit: ByteUnit = DEFAULT_UNIT) -> AdjustedSize:
        """Convert a raw byte count into ``unit``.

        Args:
            total_bytes: Raw byte count (must be non-negative)
            unit: Target display unit

        Returns:
            AdjustedSize holding the converted value

        Examples:
            >>> AdjustedSize.from_bytes(1536, ByteUnit.KIB)
            AdjustedSize(value=1.5, unit=<ByteUnit.KIB: 'KiB'>)
        """
        if total_bytes < 0:
            msg = "total_bytes must be non-negative"
            raise ValueError(msg)
        return cls(value=total_bytes / unit.factor, unit=unit)

    @override
    def __str__(self) -> str:
        return f"{self.value:.2f} {self.unit.value}"
