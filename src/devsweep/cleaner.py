"""Deletion of clean targets with safety checks."""

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from devsweep.models import CleanResult, CleanTarget
from devsweep.utils import expand_path

logger = logging.getLogger(__name__)

# Paths that must never be deleted themselves (their contents may be)
BLOCKED_PATHS = [
    "~",
    "~/Documents",
    "~/Desktop",
    "~/Downloads",
    "~/Pictures",
    "~/Music",
    "~/Movies",
    "~/Code",
    "~/Projects",
    "~/Development",
    "~/Developer",
    "~/Library",
    "/",
    "/System",
    "/Library",
    "/Applications",
    "/usr",
    "/bin",
    "/sbin",
    "/etc",
    "/var",
    "/private",
    "/private/tmp",
    "/private/var/tmp",
    "/tmp",
    "/Users",
    "/home",
]


def _normalize(path: str | Path) -> str:
    return os.path.normpath(str(expand_path(str(path))))


def is_path_safe(path: str | Path) -> bool:
    """
    Check that a path is not one of the blocked locations.

    Args:
        path: Path to check

    Returns:
        True if the path may be deleted, False otherwise
    """
    normalized = _normalize(path)
    return all(normalized != _normalize(blocked) for blocked in BLOCKED_PATHS)


def is_protected(path: str | Path, protected_paths: Iterable[str]) -> bool:
    """Check if a path is a protected path or lies inside one."""
    normalized = _normalize(path)
    for protected in protected_paths:
        root = _normalize(protected)
        if normalized == root or normalized.startswith(root.rstrip(os.sep) + os.sep):
            return True
    return False


def delete_path(path: Path) -> bool:
    """
    Delete a file, symlink or directory tree.

    Symlinks are removed, never followed.

    Returns:
        False if the path did not exist, True once it is deleted

    Raises:
        OSError: If the deletion fails
    """
    if not os.path.lexists(path):
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    return True


def clean_target(
    target: CleanTarget,
    dry_run: bool = False,
    protected_paths: Iterable[str] = (),
) -> CleanResult:
    """
    Remove one target, or simulate its removal.

    A dry run touches nothing and reports the target's full size as freed.

    Args:
        target: Target to remove
        dry_run: If True, don't actually delete
        protected_paths: User-protected paths that are refused

    Returns:
        CleanResult describing the attempt
    """
    if dry_run:
        logger.info("Dry-run: would delete %s", target.path)
        return CleanResult(
            target=target,
            success=True,
            bytes_freed=target.size_bytes,
            dry_run=True,
        )

    path = Path(target.path)
    if not is_path_safe(path):
        return CleanResult(target=target, success=False, error=f"Blocked path: {path}")
    if is_protected(path, protected_paths):
        return CleanResult(target=target, success=False, error=f"Protected path: {path}")

    try:
        existed = delete_path(path)
    except PermissionError as e:
        logger.debug("Failed to delete %s: %s", path, e)
        return CleanResult(target=target, success=False, error=f"Permission denied: {e}")
    except OSError as e:
        logger.debug("Failed to delete %s: %s", path, e)
        return CleanResult(target=target, success=False, error=f"OS error: {e}")

    if not existed:
        logger.debug("Already gone: %s", path)
        return CleanResult(target=target, success=True, bytes_freed=0)

    logger.info("Deleted %s (%s)", path, target.size_human)
    return CleanResult(target=target, success=True, bytes_freed=target.size_bytes)
