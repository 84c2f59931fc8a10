"""Pluggable collectors, one per technology domain."""

from devsweep.collectors.base import Collector, FilesystemCollector
from devsweep.collectors.builtin import CatalogCollector, build_collectors

__all__ = ["CatalogCollector", "Collector", "FilesystemCollector", "build_collectors"]
