"""devsweep - reclaim disk space taken by developer caches."""

__version__ = "0.1.0"
