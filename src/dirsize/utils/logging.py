"""Logging setup with traversal id tracking.

Every traversal gets a short id stored in a ContextVar. Walker threads run
inside a copy of the caller's context, so records emitted by workers carry
the same id as the orchestrator's own start and summary records.
"""

import contextvars
import logging
import sys
from typing import Final, TextIO, override

# Traversal id of the walk running in the current context
traversal_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "traversal_id",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(traversal_id)s] - %(message)s"

# Verbose per-file lines are printed bare
VERBOSE_LOG_FORMAT: Final[str] = "%(message)s"

VERBOSE_LOGGER_NAME: Final[str] = "dirsize.verbose"


class TraversalIdFilter(logging.Filter):
    """Logging filter that adds the traversal id to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add traversal id to log record from ContextVar.

        Args:
            record: Log record to enhance

        Returns:
            True to allow the record to be logged
        """
        traversal_id = traversal_id_var.get()
        record.traversal_id = traversal_id if traversal_id is not None else "N/A"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_console: bool = True,
    verbose: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level for the root logger (DEBUG, INFO, WARNING, ERROR)
        enable_console: Attach a console handler to the root logger
        verbose: Emit per-file lines from the ``dirsize.verbose`` logger
        stream: Output stream for the console handler (default: stderr)

    Example:
        >>> configure_logging(log_level="INFO")
        >>> logging.getLogger(__name__).info("Scanning")
    """
    root_logger = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.WARNING)  # pyright: ignore[reportAny]
    root_logger.setLevel(level)  # pyright: ignore[reportAny]

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    traversal_filter = TraversalIdFilter()

    if enable_console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(traversal_filter)
        root_logger.addHandler(console_handler)

    verbose_logger = logging.getLogger(VERBOSE_LOGGER_NAME)
    verbose_logger.handlers.clear()
    verbose_logger.propagate = False
    if verbose:
        verbose_handler = logging.StreamHandler(sys.stdout)
        verbose_handler.setFormatter(logging.Formatter(VERBOSE_LOG_FORMAT))
        verbose_logger.addHandler(verbose_handler)
        verbose_logger.setLevel(logging.INFO)
    else:
        verbose_logger.setLevel(logging.CRITICAL + 1)


def set_traversal_id(traversal_id: str) -> contextvars.Token[str | None]:
    """Set the traversal id for the current context.

    Returns:
        Token that restores the previous value via ``reset_traversal_id``
    """
    return traversal_id_var.set(traversal_id)


def reset_traversal_id(token: contextvars.Token[str | None]) -> None:
    """Restore the traversal id that was active before ``set_traversal_id``."""
    traversal_id_var.reset(token)


def get_traversal_id() -> str | None:
    """Get the current traversal id from context."""
    return traversal_id_var.get()


def clear_traversal_id() -> None:
    """Clear the traversal id from the current context."""
    _ = traversal_id_var.set(None)
