"""Parallel directory walker feeding the shared accumulators.

The walker keeps a queue of work items. A directory item is listed by
whichever worker takes it: its subdirectories and other entries go back on
the queue as items of their own, so the stat of every file is done by any
idle worker rather than by the one that listed the directory.
``queue.Queue.join`` returns once every queued item has been handled, at
which point one None marker per worker shuts the pool down.

Symbolic links below the root are never followed or counted, no ignore
rules apply, and nothing above the root is visited.
"""

from __future__ import annotations

import contextvars
import logging
import os
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dirsize.types.models import Entry, ErrorRecord, FileStat

from .aggregator import Aggregator
from .error_collector import ErrorCollector
from .exceptions import WalkerStateError, WorkerPoolError
from .metadata import MetadataResolver, classify_os_error

logger = logging.getLogger(__name__)


def default_thread_count() -> int:
    """Worker pool size used when none is requested."""
    return os.cpu_count() or 1


class WalkState(str, Enum):
    """Lifecycle states of a ParallelWalker."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class WorkItem:
    """One unit of queued work: a directory to list or an entry to resolve."""

    path: Path
    is_directory: bool


class ParallelWalker:
    """Walks a directory tree with a fixed-size pool of worker threads.

    Provides:
    - Exactly-once visits of every entry below the root
    - No symlink dereferencing; siblings of a symlink are still visited
    - Recovery from unreadable directories and entries without aborting
    - Identical totals for any pool size

    A walker runs once. Results are read from the aggregator and error
    collector handed in by the caller.
    """

    def __init__(
        self,
        root: Path,
        *,
        aggregator: Aggregator,
        errors: ErrorCollector,
        resolver: MetadataResolver | None = None,
        threads: int | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            root: Root of the tree to walk
            aggregator: Receives the adjusted size of every resolved file
            errors: Receives one record per failed entry
            resolver: Metadata resolver (default: non-verbose resolver)
            threads: Worker pool size (None for the hardware default)
        """
        if threads is not None and threads < 1:
            raise WorkerPoolError(f"Worker pool size must be positive, got {threads}", threads)

        self.root: Path = root
        self.threads: int = threads if threads is not None else default_thread_count()
        self.aggregator: Aggregator = aggregator
        self.errors: ErrorCollector = errors
        self.resolver: MetadataResolver = resolver or MetadataResolver()

        self._queue: queue.Queue[WorkItem | None] = queue.Queue()
        self._state: WalkState = WalkState.IDLE
        self._state_lock: threading.Lock = threading.Lock()

    @property
    def state(self) -> WalkState:
        return self._state

    def run(self) -> None:
        """Walk the tree and block until every worker has joined.

        Raises:
            WalkerStateError: If the walker has already been run
            WorkerPoolError: If the worker threads cannot be started
        """
        with self._state_lock:
            if self._state is not WalkState.IDLE:
                raise WalkerStateError(
                    f"Walker cannot run from state {self._state.value}",
                    context={"root": str(self.root)},
                )
            self._state = WalkState.RUNNING

        logger.debug(
            "Starting parallel walk",
            extra={"root": str(self.root), "threads": self.threads},
        )

        try:
            is_directory = self.root.is_dir()
        except OSError as exc:
            self.errors.append(classify_os_error(exc, self.root))
            self._state = WalkState.COMPLETED
            return

        if not is_directory:
            self._visit_root_entry()
            self._state = WalkState.COMPLETED
            return

        workers = self._start_workers()
        self._queue.put(WorkItem(self.root, is_directory=True))
        self._queue.join()
        self._stop_workers(workers)

        self._state = WalkState.COMPLETED
        logger.debug("Parallel walk complete", extra={"root": str(self.root)})

    def _visit_root_entry(self) -> None:
        if not os.path.lexists(self.root):
            self.errors.append(ErrorRecord.unknown(self.root, detail="No such file or directory"))
            return
        # The root was named explicitly, so a link there counts its target
        if self.root.is_symlink():
            self._resolve(Path(os.path.realpath(self.root)))
        else:
            self._resolve(self.root)

    def _start_workers(self) -> list[threading.Thread]:
        workers: list[threading.Thread] = []
        for index in range(self.threads):
            # A Context can only be entered by one thread at a time
            context = contextvars.copy_context()
            worker = threading.Thread(
                target=context.run,
                args=(self._work,),
                name=f"dirsize-worker-{index}",
                daemon=True,
            )
            try:
                worker.start()
            except RuntimeError as exc:
                self._stop_workers(workers)
                self._state = WalkState.FAILED
                raise WorkerPoolError(
                    f"Unable to start worker thread {index + 1} of {self.threads}: {exc}",
                    self.threads,
                ) from exc
            workers.append(worker)
        return workers

    def _stop_workers(self, workers: list[threading.Thread]) -> None:
        for _ in workers:
            self._queue.put(None)
        for worker in workers:
            worker.join()

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                self._queue.task_done()
                return
            try:
                if item.is_directory:
                    self._list_directory(item.path)
                else:
                    self._resolve(item.path)
            except Exception as exc:
                # Unexpected failure for one item; keep serving the queue
                logger.warning(
                    "Unexpected error while walking entry",
                    extra={"path": str(item.path), "error": str(exc)},
                    exc_info=True,
                )
                self.errors.append(ErrorRecord.unknown(item.path, detail=str(exc)))
            finally:
                self._queue.task_done()

    def _list_directory(self, directory: Path) -> None:
        try:
            entries = os.scandir(directory)
        except OSError as exc:
            record = classify_os_error(exc, directory)
            logger.debug(
                "Cannot open directory",
                extra={"path": str(directory), "kind": record.kind.value},
            )
            self.errors.append(record)
            return

        with entries:
            try:
                for dir_entry in entries:
                    self._visit(dir_entry)
            except OSError as exc:
                # Listing broke off part way through
                self.errors.append(classify_os_error(exc, directory))

    def _visit(self, dir_entry: os.DirEntry[str]) -> None:
        path = Path(dir_entry.path)
        try:
            entry = Entry(path=path, is_symlink=dir_entry.is_symlink())
            if entry.is_symlink:
                return
            is_directory = dir_entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            self.errors.append(ErrorRecord.unknown(path, detail=exc.strerror))
            return

        self._queue.put(WorkItem(entry.path, is_directory=is_directory))

    def _resolve(self, path: Path) -> None:
        outcome = self.resolver.resolve(path)
        if isinstance(outcome, FileStat):
            self.aggregator.add(outcome.adjusted_size)
        else:
            self.errors.append(outcome)
