"""Cleanup orchestration across collectors.

The orchestrator is the only place that sequences detect -> scan ->
confirm -> clean. Collectors are processed one at a time in registry
order; a failing collector is recorded and the run carries on.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Literal, Optional

from devsweep.collectors.base import Collector
from devsweep.config import Policy
from devsweep.errors import CleanupCancelled, ConfigError
from devsweep.models import CleanupReport, CollectorFailure

logger = logging.getLogger(__name__)

# confirm(scanned_report) -> proceed?
ConfirmCallback = Callable[[CleanupReport], bool]


class CleanupOrchestrator:
    """Runs an ordered set of collectors against one policy.

    Example:
        >>> orchestrator = CleanupOrchestrator(build_collectors(), confirm=ask_user)
        >>> report = orchestrator.run(Policy.from_options("standard"))
        >>> print(report.bytes_freed)
    """

    def __init__(
        self,
        collectors: Sequence[Collector],
        confirm: Optional[ConfirmCallback] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            collectors: Registry of collectors, processed in this order.
            confirm: Shown the scanned report before any deletion in
                interactive runs. An interactive run without a callback
                never deletes.

        Raises:
            ConfigError: If two collectors share a name.
        """
        names: set[str] = set()
        for collector in collectors:
            if collector.name in names:
                raise ConfigError(f"Duplicate collector name: {collector.name}")
            names.add(collector.name)

        self._collectors = list(collectors)
        self._by_name = {c.name: c for c in self._collectors}
        self._confirm = confirm

    @property
    def collectors(self) -> list[Collector]:
        return list(self._collectors)

    def run(
        self,
        policy: Policy,
        cancel: Optional[threading.Event] = None,
    ) -> CleanupReport:
        """
        Scan, confirm and clean.

        Args:
            policy: Run policy
            cancel: Optional event spanning the whole run

        Returns:
            CleanupReport with targets, results and recorded failures

        Raises:
            CleanupCancelled: If ``cancel`` is set; carries the partial report
        """
        report = self.scan(policy, cancel)

        if report.total_targets == 0:
            logger.info("Nothing to clean")
            return report

        if policy.interactive and not policy.dry_run:
            if self._confirm is None or not self._confirm(report):
                logger.info("Cleanup declined, nothing deleted")
                report.aborted = True
                return report

        return self.execute(report, policy, cancel)

    def scan(
        self,
        policy: Policy,
        cancel: Optional[threading.Event] = None,
    ) -> CleanupReport:
        """
        Detect applicable collectors and gather their targets.

        Collectors that do not apply, or fail to detect, are left out of
        the report entirely. A path is claimed by the first collector that
        reports it; later collectors do not get it again.

        Raises:
            CleanupCancelled: If ``cancel`` is set; carries the partial report
        """
        report = CleanupReport(dry_run=policy.dry_run)
        seen: set[str] = set()

        for collector in self._collectors:
            self._check_cancel(report, cancel)

            if not policy.includes_domain(collector.domain):
                continue

            try:
                detected = collector.detect(cancel)
            except Exception as e:
                self._record(report, collector, "detect", e)
                continue
            if not detected:
                logger.debug("%s does not apply, skipping", collector.name)
                continue
            report.detected.append(collector.name)

            try:
                targets = collector.scan(policy, cancel)
            except Exception as e:
                self._record(report, collector, "scan", e)
                continue

            claimed = []
            for target in targets:
                if target.path in seen:
                    logger.debug(
                        "%s already claimed by an earlier collector, skipping for %s",
                        target.path,
                        collector.name,
                    )
                    continue
                seen.add(target.path)
                claimed.append(target)

            if claimed:
                report.targets_by_collector[collector.name] = claimed

        self._check_cancel(report, cancel)
        return report

    def execute(
        self,
        report: CleanupReport,
        policy: Policy,
        cancel: Optional[threading.Event] = None,
    ) -> CleanupReport:
        """
        Clean every bucket of a scanned report.

        Results are appended to ``report.results``. A collector that raises
        is recorded and the remaining buckets are still cleaned.

        Raises:
            CleanupCancelled: If ``cancel`` is set; carries the partial report
        """
        report.dry_run = policy.dry_run
        if policy.dry_run:
            logger.info("Dry run: no files will be deleted")

        for name, targets in report.targets_by_collector.items():
            self._check_cancel(report, cancel)

            collector = self._by_name.get(name)
            if collector is None:
                logger.warning("No collector named %s, skipping its targets", name)
                continue

            logger.debug("Cleaning %s (%d targets)", name, len(targets))
            try:
                results = collector.clean(targets, policy.dry_run, cancel)
            except Exception as e:
                self._record(report, collector, "clean", e)
                continue
            report.results.extend(results)

        self._check_cancel(report, cancel)
        return report

    @staticmethod
    def _record(
        report: CleanupReport,
        collector: Collector,
        stage: Literal["detect", "scan", "clean"],
        error: Exception,
    ) -> None:
        logger.warning("%s error for %s: %s", stage.capitalize(), collector.name, error)
        report.failures.append(
            CollectorFailure(
                collector=collector.name,
                stage=stage,
                error=str(error) or type(error).__name__,
            )
        )

    @staticmethod
    def _check_cancel(report: CleanupReport, cancel: Optional[threading.Event]) -> None:
        if cancel is not None and cancel.is_set():
            report.cancelled = True
            raise CleanupCancelled(report)
