"""Per-entry metadata resolution and OS error classification.

``classify_os_error`` is the single place where an ``OSError`` raised while
walking is mapped onto an ErrorRecord kind. Keeping it separate from the
walker lets the mapping be tested without building a directory tree.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Final

from dirsize.types.models import ErrorRecord, FileStat
from dirsize.utils.formatting import format_file_line
from dirsize.utils.logging import VERBOSE_LOGGER_NAME

logger = logging.getLogger(__name__)

# Per-file lines requested with the verbose flag
verbose_logger = logging.getLogger(VERBOSE_LOGGER_NAME)

PERMISSION_ERRNOS: Final[frozenset[int]] = frozenset({errno.EACCES, errno.EPERM})


def classify_os_error(error: BaseException, path: Path | None) -> ErrorRecord:
    """Map a traversal-layer failure onto an ErrorRecord.

    Args:
        error: Exception raised while opening or listing a directory
        path: Path the failure relates to, if known

    Returns:
        ``PermissionDenied`` for EACCES/EPERM on a known path, ``Unknown``
        for everything else
    """
    if path is not None and isinstance(error, OSError):
        if isinstance(error, PermissionError) or error.errno in PERMISSION_ERRNOS:
            return ErrorRecord.permission_denied(path, detail=error.strerror)
    detail = error.strerror if isinstance(error, OSError) and error.strerror else str(error)
    return ErrorRecord.unknown(path, detail=detail or type(error).__name__)


class MetadataResolver:
    """Resolves the byte length and hard-link count of single entries."""

    def __init__(self, verbose: bool = False) -> None:
        """Initialize the resolver.

        Args:
            verbose: Log every resolved file with its adjusted size
        """
        self.verbose: bool = verbose

    def resolve(self, path: Path) -> FileStat | ErrorRecord:
        """Stat ``path`` without following symlinks.

        Args:
            path: Entry to resolve

        Returns:
            FileStat on success, a ``MetadataFailure`` record otherwise
        """
        try:
            stat_result = os.stat(path, follow_symlinks=False)
        except OSError as exc:
            logger.debug(
                "Metadata query failed",
                extra={"path": str(path), "error": exc.strerror},
            )
            return ErrorRecord.metadata_failure(path, detail=exc.strerror)

        file_stat = FileStat(length=stat_result.st_size, nlink=stat_result.st_nlink)
        if self.verbose:
            verbose_logger.info(format_file_line(file_stat.adjusted_size, path))
        return file_stat
