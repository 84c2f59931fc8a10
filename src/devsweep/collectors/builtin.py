"""Collectors built from the static catalog definitions."""

import logging
import os
import threading
from collections.abc import Iterable
from typing import Optional

from devsweep.catalog import get_all_specs
from devsweep.collectors.base import Collector, FilesystemCollector
from devsweep.config import Policy, Settings
from devsweep.models import CleanTarget, CollectorSpec, Domain, PathRule, PatternRule
from devsweep.safety import allows
from devsweep.scanner import PatternScanner
from devsweep.sizing import measure
from devsweep.utils import command_exists, expand_path, path_exists

logger = logging.getLogger(__name__)


class CatalogCollector(FilesystemCollector):
    """Collector driven by a :class:`CollectorSpec`.

    Fixed paths are measured directly; pattern rules are streamed from
    the shared :class:`PatternScanner`.
    """

    def __init__(
        self,
        spec: CollectorSpec,
        scanner: PatternScanner,
        protected_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(protected_paths)
        self._spec = spec
        self._scanner = scanner

    @property
    def spec(self) -> CollectorSpec:
        return self._spec

    @property
    def name(self) -> str:
        return self._spec.name

    @property
    def domain(self) -> Domain:
        return self._spec.domain

    def detect(self, cancel: threading.Event | None = None) -> bool:
        if self._spec.always:
            return True
        if any(command_exists(cmd) for cmd in self._spec.commands):
            return True
        return any(path_exists(expand_path(p)) for p in self._spec.detect_paths)

    def scan(
        self,
        policy: Policy,
        cancel: threading.Event | None = None,
    ) -> list[CleanTarget]:
        targets: list[CleanTarget] = []
        seen: set[str] = set()

        def add(target: CleanTarget) -> None:
            if target.path not in seen:
                seen.add(target.path)
                targets.append(target)

        for path_rule in self._spec.paths:
            if cancel is not None and cancel.is_set():
                return targets
            if not allows(policy.clean_level, path_rule.safety):
                continue
            target = self._scan_path(path_rule)
            if target:
                add(target)

        for pattern_rule in self._spec.patterns:
            if cancel is not None and cancel.is_set():
                return targets
            if not allows(policy.clean_level, pattern_rule.safety):
                continue
            with self._scanner.scan(pattern_rule.pattern, cancel) as matches:
                for match in matches:
                    if not self._accepts(match.path, pattern_rule):
                        continue
                    add(
                        CleanTarget(
                            path=match.path,
                            description=pattern_rule.description,
                            size_bytes=match.size,
                            safety=pattern_rule.safety,
                        )
                    )

        logger.debug("%s: %d targets", self.name, len(targets))
        return targets

    def _scan_path(self, rule: PathRule) -> Optional[CleanTarget]:
        path = expand_path(rule.path)
        if not path_exists(path):
            return None

        try:
            size = measure(path).size_bytes
        except OSError as e:
            logger.debug("Cannot measure %s: %s", path, e)
            return None

        if size == 0:
            return None

        return CleanTarget(
            path=str(path),
            description=rule.description,
            size_bytes=size,
            safety=rule.safety,
        )

    @staticmethod
    def _accepts(path: str, rule: PatternRule) -> bool:
        parent = os.path.dirname(path)
        if rule.skip_inside and os.path.basename(parent) == rule.skip_inside:
            return False
        if rule.marker and not path_exists(os.path.join(parent, rule.marker)):
            return False
        return True


def build_scanner(settings: Settings) -> PatternScanner:
    """Create the scanner shared by all catalog collectors."""
    scanner = PatternScanner()
    for directory in settings.search_dirs:
        try:
            scanner.add_search_dir(expand_path(directory))
        except OSError as e:
            logger.warning("Ignoring search directory %s: %s", directory, e)
    scanner.set_concurrency(settings.max_concurrent)
    return scanner


def build_collectors(
    settings: Optional[Settings] = None,
    specs: Optional[list[CollectorSpec]] = None,
    scanner: Optional[PatternScanner] = None,
) -> list[Collector]:
    """
    Build the ordered collector registry.

    Args:
        settings: User settings; defaults apply when omitted
        specs: Collector definitions; the whole catalog when omitted
        scanner: Scanner to share; built from settings when omitted

    Returns:
        One CatalogCollector per definition, in catalog order
    """
    settings = settings or Settings()
    if scanner is None:
        scanner = build_scanner(settings)
    if specs is None:
        specs = get_all_specs()
    return [CatalogCollector(spec, scanner, settings.protected_paths) for spec in specs]
