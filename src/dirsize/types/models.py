"""Data models for the dirsize application.

This module defines the request, per-entry and result types passed between
the walker, the accumulators and the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, override

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dirsize.utils.units import AdjustedSize, ByteUnit


class TraversalRequest(BaseModel):
    """Request to calculate the size of a directory tree.

    The root path is not checked here; the filesystem reports a missing or
    unreadable root through the normal error records.
    """

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        frozen=True,
        extra="forbid",
    )

    path: Annotated[Path, Field(description="Root of the tree to measure")]
    threads: Annotated[
        int | None,
        Field(gt=0, description="Worker pool size, None for the runtime default"),
    ] = None
    verbose: Annotated[
        bool,
        Field(description="Log every resolved file with its adjusted size"),
    ] = False
    unit: Annotated[
        ByteUnit | None,
        Field(description="Display unit for the total, None for the default"),
    ] = None

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, v: object) -> object:
        """Accept unit names case-insensitively."""
        if isinstance(v, str):
            return ByteUnit.parse(v)
        return v


@dataclass(slots=True, frozen=True)
class Entry:
    """A single filesystem entry discovered by the walker."""

    path: Path
    is_symlink: bool


@dataclass(slots=True, frozen=True)
class FileStat:
    """Resolved metadata for one entry.

    The adjusted size divides the length evenly across every hard link to
    the inode on the system, not only links found inside the scanned tree.
    When some links live outside the tree the reported total undercounts.
    """

    length: int
    nlink: int

    def __post_init__(self) -> None:
        # Some filesystems report 0 links for open-but-unlinked files
        if self.nlink < 1:
            object.__setattr__(self, "nlink", 1)

    @property
    def adjusted_size(self) -> int:
        """Length floor-divided by the hard-link count."""
        return self.length // self.nlink


class ErrorKind(str, Enum):
    """Classification of per-entry failures."""

    PERMISSION_DENIED = "permission_denied"
    METADATA = "metadata"
    UNKNOWN = "unknown"


@dataclass(slots=True, frozen=True)
class ErrorRecord:
    """A failure recorded for one entry during traversal."""

    kind: ErrorKind
    path: Path | None = None
    detail: str | None = None

    @classmethod
    def permission_denied(cls, path: Path, detail: str | None = None) -> ErrorRecord:
        return cls(ErrorKind.PERMISSION_DENIED, path, detail)

    @classmethod
    def metadata_failure(cls, path: Path, detail: str | None = None) -> ErrorRecord:
        return cls(ErrorKind.METADATA, path, detail)

    @classmethod
    def unknown(cls, path: Path | None = None, detail: str | None = None) -> ErrorRecord:
        return cls(ErrorKind.UNKNOWN, path, detail)

    @override
    def __str__(self) -> str:
        if self.kind is ErrorKind.PERMISSION_DENIED:
            return f"PermissionDenied: Cannot access `{self.path}`"
        if self.kind is ErrorKind.METADATA:
            return f"MetadataError: Unable to retrieve metadata for `{self.path}`"
        if self.path is None:
            return "UnknownError: Cannot record path"
        return f"UnknownError: Unable to process `{self.path}`"


class TraversalResult:
    """Outcome of one completed traversal.

    ``size`` is the adjusted total converted to the requested unit and
    ``total_bytes`` the same total before conversion. The error list can be
    taken exactly once; afterwards ``take_errors`` returns None.
    """

    __slots__ = ("_size", "_total_bytes", "_file_count", "_errors")

    def __init__(
        self,
        size: AdjustedSize,
        total_bytes: int,
        file_count: int,
        errors: list[ErrorRecord] | None = None,
    ) -> None:
        """Initialize the result.

        Args:
            size: Adjusted total in the display unit
            total_bytes: Adjusted total in bytes
            file_count: Number of successfully resolved files
            errors: Recorded failures; an empty list is stored as None
        """
        self._size: AdjustedSize = size
        self._total_bytes: int = total_bytes
        self._file_count: int = file_count
        self._errors: list[ErrorRecord] | None = list(errors) if errors else None

    @property
    def size(self) -> AdjustedSize:
        return self._size

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    @property
    def file_count(self) -> int:
        return self._file_count

    def has_errors(self) -> bool:
        """Whether errors were recorded and not yet taken."""
        return self._errors is not None

    def take_errors(self) -> list[ErrorRecord] | None:
        """Hand over the recorded errors, leaving none behind."""
        errors, self._errors = self._errors, None
        return errors

    @override
    def __repr__(self) -> str:
        return (
            f"TraversalResult(size={self._size!s}, total_bytes={self._total_bytes}, "
            f"file_count={self._file_count})"
        )
