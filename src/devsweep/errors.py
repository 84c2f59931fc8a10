"""Exceptions raised by devsweep."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devsweep.models import CleanupReport


class DevsweepError(Exception):
    """Base exception for devsweep errors."""


class ConfigError(DevsweepError):
    """Raised when a policy or settings value is invalid.

    Always raised before any scanning starts.
    """


class CollectorError(DevsweepError):
    """Raised by a collector when it cannot detect, scan or clean."""


class CleanupCancelled(DevsweepError):
    """Raised when a run is cancelled.

    Attributes:
        report: Partial report with everything gathered before the
            cancellation was observed.
    """

    def __init__(self, report: CleanupReport) -> None:
        super().__init__("Cleanup cancelled")
        self.report = report
