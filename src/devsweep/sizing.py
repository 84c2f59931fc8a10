"""Best-effort size aggregation for files and directory trees.

Directory enumeration is single-threaded; the per-file ``lstat`` calls
of large trees are fanned out over a small thread pool. Entries that
cannot be read are skipped and counted, so the returned total is a
lower bound whenever ``skipped`` is non-zero.
"""

import logging
import os
import stat
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 10

# Files per pool job; trees smaller than one batch never touch the pool
BATCH_SIZE = 256


@dataclass(frozen=True, slots=True)
class TreeSize:
    """Aggregated size of a file or directory tree.

    Attributes:
        size_bytes: Sum of the sizes of all non-directory entries.
        file_count: Number of non-directory entries counted.
        dir_count: Number of sub-directories visited (root excluded).
        skipped: Entries that could not be read.
    """

    size_bytes: int
    file_count: int
    dir_count: int
    skipped: int = 0


class _Accumulator:
    """Lock-guarded running totals shared by the stat workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.size_bytes = 0
        self.file_count = 0
        self.skipped = 0

    def add(self, size_bytes: int, file_count: int, skipped: int) -> None:
        with self._lock:
            self.size_bytes += size_bytes
            self.file_count += file_count
            self.skipped += skipped


def _stat_batch(paths: list[str], acc: _Accumulator) -> None:
    size = 0
    files = 0
    skipped = 0
    for path in paths:
        try:
            size += os.lstat(path).st_size
            files += 1
        except OSError:
            skipped += 1
    acc.add(size, files, skipped)


def measure(path: str | Path, workers: int = DEFAULT_WORKERS) -> TreeSize:
    """
    Measure a file or a directory tree.

    Symlinks are never followed; a link counts as a file of its own size.

    Args:
        path: File or directory to measure
        workers: Width of the stat pool; 1 or less measures sequentially

    Returns:
        TreeSize with totals and the number of skipped entries

    Raises:
        OSError: If ``path`` itself cannot be stat'ed, or is a directory
            that cannot be listed
    """
    root_stat = os.lstat(path)
    if not stat.S_ISDIR(root_stat.st_mode):
        return TreeSize(size_bytes=root_stat.st_size, file_count=1, dir_count=0)

    acc = _Accumulator()
    dir_count = 0
    batch: list[str] = []
    pending: list[Future] = []
    pool: ThreadPoolExecutor | None = None
    root = os.fspath(path)
    stack = [root]

    try:
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        try:
                            is_dir = entry.is_dir(follow_symlinks=False)
                        except OSError:
                            acc.add(0, 0, 1)
                            continue

                        if is_dir:
                            dir_count += 1
                            stack.append(entry.path)
                            continue

                        batch.append(entry.path)
                        if len(batch) >= BATCH_SIZE:
                            if workers > 1:
                                if pool is None:
                                    pool = ThreadPoolExecutor(max_workers=workers)
                                pending.append(pool.submit(_stat_batch, batch, acc))
                            else:
                                _stat_batch(batch, acc)
                            batch = []
            except OSError as e:
                if current == root:
                    raise
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                acc.add(0, 0, 1)

        if batch:
            _stat_batch(batch, acc)
        for future in pending:
            future.result()
    finally:
        if pool is not None:
            pool.shutdown(wait=True)

    return TreeSize(
        size_bytes=acc.size_bytes,
        file_count=acc.file_count,
        dir_count=dir_count,
        skipped=acc.skipped,
    )


def directory_size(path: str | Path) -> int:
    """Total size in bytes of a file or directory, 0 if it cannot be read."""
    try:
        return measure(path).size_bytes
    except OSError:
        return 0
