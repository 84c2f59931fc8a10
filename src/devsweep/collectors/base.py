"""Abstract base classes for collectors.

A collector owns one technology domain: it knows whether it applies to
the current machine, which paths it can reclaim and how to remove them.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

from devsweep.cleaner import clean_target
from devsweep.config import Policy
from devsweep.models import CleanResult, CleanTarget, Domain


class Collector(ABC):
    """Abstract base class for all collectors.

    Example:
        >>> if collector.detect():
        ...     targets = collector.scan(policy)
        ...     results = collector.clean(targets, dry_run=True)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, unique within a registry."""

    @property
    @abstractmethod
    def domain(self) -> Domain:
        """Domain this collector belongs to."""

    @abstractmethod
    def detect(self, cancel: threading.Event | None = None) -> bool:
        """Check if this collector applies to the current system.

        Raises:
            CollectorError: If applicability cannot be determined.
        """

    @abstractmethod
    def scan(
        self,
        policy: Policy,
        cancel: threading.Event | None = None,
    ) -> list[CleanTarget]:
        """Find everything that could be cleaned, without deleting anything.

        Targets whose safety level the policy's clean level does not allow
        must not be returned. When ``cancel`` is set, the targets found so
        far are returned.
        """

    @abstractmethod
    def clean(
        self,
        targets: list[CleanTarget],
        dry_run: bool,
        cancel: threading.Event | None = None,
    ) -> list[CleanResult]:
        """Remove targets, returning one result per target in input order.

        When ``cancel`` is set, stops before the next target and returns
        the results gathered so far.
        """


class FilesystemCollector(Collector):
    """Collector whose targets are plain paths removed from disk."""

    def __init__(self, protected_paths: Iterable[str] = ()) -> None:
        self._protected_paths = tuple(protected_paths)

    def clean(
        self,
        targets: list[CleanTarget],
        dry_run: bool,
        cancel: threading.Event | None = None,
    ) -> list[CleanResult]:
        results: list[CleanResult] = []
        for target in targets:
            if cancel is not None and cancel.is_set():
                break
            results.append(clean_target(target, dry_run, self._protected_paths))
        return results
