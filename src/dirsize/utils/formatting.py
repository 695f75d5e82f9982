"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions used by the CLI and by
verbose per-file logging. All functions are pure with no side effects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

from dirsize.types.models import ErrorRecord, TraversalResult
from dirsize.utils.units import ByteUnit

# Column width used when printing a size next to a path
SIZE_COLUMN_WIDTH: Final[int] = 16

_DECIMAL_UNITS: Final[tuple[ByteUnit, ...]] = (
    ByteUnit.PB,
    ByteUnit.TB,
    ByteUnit.GB,
    ByteUnit.MB,
    ByteUnit.KB,
)

_BINARY_UNITS: Final[tuple[ByteUnit, ...]] = (
    ByteUnit.PIB,
    ByteUnit.TIB,
    ByteUnit.GIB,
    ByteUnit.MIB,
    ByteUnit.KIB,
)


def appropriate_unit(num_bytes: int, *, binary: bool = False) -> ByteUnit:
    """Pick the largest unit in which ``num_bytes`` is at least one.

    Args:
        num_bytes: Number of bytes (must be non-negative)
        binary: Use 1024-based units instead of 1000-based units

    Returns:
        The selected ByteUnit, ``ByteUnit.B`` for small values

    Examples:
        >>> appropriate_unit(999)
        <ByteUnit.B: 'B'>
        >>> appropriate_unit(1500)
        <ByteUnit.KB: 'KB'>
        >>> appropriate_unit(1536, binary=True)
        <ByteUnit.KIB: 'KiB'>
    """
    if num_bytes < 0:
        msg = "num_bytes must be non-negative"
        raise ValueError(msg)

    for unit in _BINARY_UNITS if binary else _DECIMAL_UNITS:
        if num_bytes >= unit.factor:
            return unit
    return ByteUnit.B


def format_size(num_bytes: int, *, binary: bool = False, precision: int = 2) -> str:
    """Convert bytes to a human-readable size string.

    Args:
        num_bytes: Number of bytes to format (must be non-negative)
        binary: Use 1024-based units instead of 1000-based units
        precision: Decimal places shown for scaled units

    Returns:
        Human-readable string such as ``"512 B"`` or ``"1.50 KB"``

    Examples:
        >>> format_size(512)
        '512 B'
        >>> format_size(1500)
        '1.50 KB'
        >>> format_size(1536, binary=True)
        '1.50 KiB'
    """
    unit = appropriate_unit(num_bytes, binary=binary)
    if unit is ByteUnit.B:
        return f"{num_bytes} B"
    return f"{num_bytes / unit.factor:.{precision}f} {unit.value}"


def format_file_line(num_bytes: int, path: Path | str) -> str:
    """Format one verbose output line: padded size followed by the path.

    Examples:
        >>> format_file_line(100, "/tmp/a")
        '100 B            /tmp/a'
    """
    return f"{format_size(num_bytes):<{SIZE_COLUMN_WIDTH}} {path}"


def format_error(record: ErrorRecord) -> str:
    """Format an error record as an indented report line."""
    return f"\t{record}"


def format_summary(result: TraversalResult, errors: list[ErrorRecord] | None = None) -> str:
    """Render the end-of-run report printed by the CLI.

    Args:
        result: Completed traversal result
        errors: Errors already taken from the result, if any

    Returns:
        Multi-line report text without a trailing newline
    """
    lines = [
        "Total size of directory:",
        f"    {result.size}",
        "Total number of files:",
        f"      {result.file_count}",
    ]
    if errors:
        lines.append("Problem reading metadata from file:")
        lines.extend(format_error(record) for record in errors)
    return "\n".join(lines)
