"""Shared fixtures for devsweep tests."""

import threading
from pathlib import Path

import pytest

from devsweep.collectors.base import Collector
from devsweep.config import Policy
from devsweep.models import CleanResult, CleanTarget, Domain, SafetyLevel
from devsweep.safety import allows


class FakeCollector(Collector):
    """In-memory collector recording how it was called."""

    def __init__(
        self,
        name: str,
        targets: list[CleanTarget] | None = None,
        domain: Domain = Domain.SYSTEM,
        detected: bool = True,
        detect_error: Exception | None = None,
        scan_error: Exception | None = None,
        clean_error: Exception | None = None,
        on_scan=None,
    ) -> None:
        self._name = name
        self._domain = domain
        self._targets = targets or []
        self._detected = detected
        self._detect_error = detect_error
        self._scan_error = scan_error
        self._clean_error = clean_error
        self._on_scan = on_scan
        self.scan_calls = 0
        self.clean_calls: list[list[CleanTarget]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def domain(self) -> Domain:
        return self._domain

    def detect(self, cancel: threading.Event | None = None) -> bool:
        if self._detect_error:
            raise self._detect_error
        return self._detected

    def scan(self, policy: Policy, cancel: threading.Event | None = None) -> list[CleanTarget]:
        self.scan_calls += 1
        if self._on_scan:
            self._on_scan()
        if self._scan_error:
            raise self._scan_error
        return [t for t in self._targets if allows(policy.clean_level, t.safety)]

    def clean(
        self,
        targets: list[CleanTarget],
        dry_run: bool,
        cancel: threading.Event | None = None,
    ) -> list[CleanResult]:
        self.clean_calls.append(list(targets))
        if self._clean_error:
            raise self._clean_error
        return [
            CleanResult(target=t, success=True, bytes_freed=t.size_bytes, dry_run=dry_run)
            for t in targets
        ]


def make_target(
    path: str = "/tmp/devsweep-test/cache",
    size: int = 100,
    safety: SafetyLevel = SafetyLevel.SAFE,
    description: str = "Test cache",
) -> CleanTarget:
    return CleanTarget(path=path, description=description, size_bytes=size, safety=safety)


def write_bytes(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """A temporary home directory for ~ expansion."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
