"""Concurrent pattern-based discovery of cache artifacts.

A :class:`PatternScanner` walks its search roots in parallel, compares
each entry's base name with a glob pattern and streams matches through a
bounded :class:`ScanStream`. A matched entry is never descended into, so
a cache nested inside another match is not reported twice.
"""

import logging
import os
import queue
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path

from devsweep.sizing import DEFAULT_WORKERS, measure

logger = logging.getLogger(__name__)

# Common project locations, relative to the home directory
DEFAULT_SEARCH_DIRS = (
    "Projects",
    "Code",
    "Development",
    "Developer",
    "Documents",
    "Desktop",
)

DEFAULT_CONCURRENCY = 4
BUFFER_SIZE = 100

# How often blocked producers and consumers re-check for stop/cancel
_POLL_INTERVAL = 0.05

_DONE = object()


@dataclass(frozen=True, slots=True)
class ScanMatch:
    """A path matching a scan pattern and its size in bytes."""

    path: str
    size: int


class _Walkers:
    """Producer side of a scan: walker threads feeding a bounded queue.

    Kept apart from :class:`ScanStream` so the running threads hold no
    reference to the stream a consumer owns.
    """

    def __init__(
        self,
        pattern: str,
        cancel: threading.Event | None,
        size_workers: int,
    ) -> None:
        self.pattern = pattern
        self.cancel = cancel
        self.size_workers = size_workers
        self.queue: queue.Queue = queue.Queue(maxsize=BUFFER_SIZE)
        self.stop = threading.Event()
        self._lock = threading.Lock()
        self._skipped = 0

    @property
    def skipped(self) -> int:
        with self._lock:
            return self._skipped

    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def stopped(self) -> bool:
        return self.stop.is_set() or self.cancelled()

    def skip(self, count: int = 1) -> None:
        with self._lock:
            self._skipped += count

    def put(self, item: object) -> bool:
        while not self.stopped():
            try:
                self.queue.put(item, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def run(self, roots: list[str], width: int) -> None:
        try:
            with ThreadPoolExecutor(
                max_workers=width, thread_name_prefix="devsweep-walk"
            ) as pool:
                futures = []
                for root in roots:
                    if self.stopped():
                        break
                    futures.append(pool.submit(self.walk, root))
            for future in futures:
                exc = future.exception()
                if exc is not None:
                    logger.error("Walker failed for pattern %r: %s", self.pattern, exc)
        finally:
            self.put(_DONE)

    def emit(self, path: str, is_dir: bool) -> bool:
        """Measure and queue one match; False once the stream is stopped."""
        try:
            tree = measure(path, self.size_workers if is_dir else 1)
        except OSError as e:
            logger.debug("Skipping unreadable match %s: %s", path, e)
            self.skip()
            return True
        if tree.skipped:
            self.skip(tree.skipped)
        return self.put(ScanMatch(path=path, size=tree.size_bytes))

    def walk(self, root: str) -> None:
        if fnmatchcase(os.path.basename(root), self.pattern):
            self.emit(root, is_dir=True)
            return

        stack = [root]
        while stack:
            if self.stopped():
                return
            current = stack.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        if self.stopped():
                            return
                        try:
                            is_dir = entry.is_dir(follow_symlinks=False)
                        except OSError:
                            self.skip()
                            continue

                        if fnmatchcase(entry.name, self.pattern):
                            # Matches are never descended into
                            if not self.emit(entry.path, is_dir):
                                return
                        elif is_dir:
                            stack.append(entry.path)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                self.skip()


class ScanStream:
    """Lazy, finite, non-restartable stream of :class:`ScanMatch`.

    Matches arrive in no particular order. When the cancel event is set
    the stream ends and yields nothing further, even if matches are still
    buffered. A consumer that stops reading early should call
    :meth:`close` (or use the stream as a context manager) to release the
    walkers right away; a stream that is simply dropped releases them
    when it is garbage collected.
    """

    def __init__(
        self,
        roots: list[str],
        pattern: str,
        width: int,
        cancel: threading.Event | None = None,
        size_workers: int = DEFAULT_WORKERS,
    ) -> None:
        self._walkers = _Walkers(pattern, cancel, size_workers)
        self._finished = False
        self._coordinator = threading.Thread(
            target=self._walkers.run,
            args=(list(roots), max(width, 1)),
            name=f"devsweep-scan[{pattern}]",
            daemon=True,
        )
        self._coordinator.start()

    def __del__(self) -> None:
        # __init__ may have failed before the walkers existed
        if "_walkers" in self.__dict__:
            self._finish()

    @property
    def skipped(self) -> int:
        """Entries skipped so far because they could not be read."""
        return self._walkers.skipped

    def __iter__(self) -> Iterator[ScanMatch]:
        return self

    def __next__(self) -> ScanMatch:
        if self._finished:
            raise StopIteration

        while True:
            if self._walkers.cancelled():
                self._finish()
                raise StopIteration
            try:
                item = self._walkers.queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if self._walkers.stop.is_set():
                    self._finish()
                    raise StopIteration
                continue

            if item is _DONE:
                self._finished = True
                raise StopIteration
            return item

    def __enter__(self) -> "ScanStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop the walkers and end the stream."""
        self._finish()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for all walkers to exit; returns True once they have."""
        self._coordinator.join(timeout)
        return not self._coordinator.is_alive()

    def _finish(self) -> None:
        self._finished = True
        self._walkers.stop.set()


class PatternScanner:
    """Scans a fixed set of root directories for base-name patterns.

    Example:
        >>> scanner = PatternScanner(["~/Projects"])
        >>> with scanner.scan("node_modules") as matches:
        ...     for match in matches:
        ...         print(match.path, match.size)
    """

    def __init__(
        self,
        roots: Iterable[str | Path] | None = None,
        size_workers: int = DEFAULT_WORKERS,
    ) -> None:
        """Initialize the scanner.

        Args:
            roots: Directories to search. Entries that do not exist or are
                not directories are dropped. Defaults to common project
                locations under the home directory.
            size_workers: Width of the pool used to size matched directories.
        """
        if roots is None:
            home = Path.home()
            roots = [home / name for name in DEFAULT_SEARCH_DIRS]

        self._roots: list[str] = []
        for root in roots:
            path = os.path.abspath(os.path.expanduser(os.fspath(root)))
            if os.path.isdir(path) and path not in self._roots:
                self._roots.append(path)
            else:
                logger.debug("Ignoring scan root %s", path)

        self._concurrency = DEFAULT_CONCURRENCY
        self._size_workers = size_workers

    @property
    def search_dirs(self) -> list[str]:
        """Directories that will be searched."""
        return list(self._roots)

    @property
    def concurrency(self) -> int:
        """Number of roots walked in parallel."""
        return self._concurrency

    def set_concurrency(self, n: int) -> None:
        """Set how many roots are walked in parallel.

        Values of zero or below are ignored and the current width is kept.
        """
        if n > 0:
            self._concurrency = n

    def add_search_dir(self, directory: str | Path) -> None:
        """Add an existing directory to the search roots.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        path = os.path.abspath(os.path.expanduser(os.fspath(directory)))
        if not os.path.isdir(path):
            os.stat(path)  # FileNotFoundError when missing
            raise NotADirectoryError(f"Not a directory: {path}")
        if path not in self._roots:
            self._roots.append(path)

    def scan(self, pattern: str, cancel: threading.Event | None = None) -> ScanStream:
        """Stream every path under the roots whose base name matches ``pattern``.

        Args:
            pattern: Glob pattern (``fnmatch`` syntax, case sensitive)
            cancel: Optional event; once set, the stream ends promptly

        Returns:
            ScanStream of matches, one per matched top-level path
        """
        return ScanStream(
            self._roots,
            pattern,
            self._concurrency,
            cancel=cancel,
            size_workers=self._size_workers,
        )

    def scan_dir(
        self,
        directory: str | Path,
        pattern: str,
        cancel: threading.Event | None = None,
    ) -> ScanStream:
        """Stream matches for ``pattern`` inside a single directory."""
        path = os.path.abspath(os.path.expanduser(os.fspath(directory)))
        return ScanStream([path], pattern, 1, cancel=cancel, size_workers=self._size_workers)

    def scan_many(
        self,
        patterns: Iterable[str],
        cancel: threading.Event | None = None,
    ) -> dict[str, ScanStream]:
        """Start one stream per pattern; all run concurrently."""
        return {pattern: self.scan(pattern, cancel) for pattern in patterns}

    def find_exact_path(self, path: str | Path) -> ScanMatch:
        """Size a single known path (file or directory) without matching.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        path = os.fspath(path)
        return ScanMatch(path=path, size=measure(path, self._size_workers).size_bytes)
