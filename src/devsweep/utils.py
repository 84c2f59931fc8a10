"""Small filesystem and environment helpers."""

import os
import shutil
from pathlib import Path


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def path_exists(path: str | Path) -> bool:
    """Check if a path exists (dangling symlinks count as existing)."""
    return os.path.lexists(path)


def command_exists(command: str) -> bool:
    """Check if a command is available on PATH."""
    return shutil.which(command) is not None
