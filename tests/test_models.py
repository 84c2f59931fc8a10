"""Tests for data models."""

import pytest
from pydantic import ValidationError

from devsweep.models import (
    CleanLevel,
    CleanResult,
    CleanTarget,
    CleanupReport,
    CollectorFailure,
    Domain,
    SafetyLevel,
    format_size,
)


class TestFormatSize:
    def test_bytes(self):
        assert format_size(500) == "500 B"

    def test_kilobytes(self):
        assert format_size(1500) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(5_000_000) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(2_500_000_000) == "2.5 GB"


class TestLevels:
    def test_safety_levels_are_ordered(self):
        assert SafetyLevel.SAFE < SafetyLevel.MODERATE < SafetyLevel.DANGEROUS

    def test_clean_levels_are_ordered(self):
        assert CleanLevel.CONSERVATIVE < CleanLevel.STANDARD < CleanLevel.AGGRESSIVE

    def test_labels(self):
        assert SafetyLevel.MODERATE.label == "Moderate"
        assert CleanLevel.AGGRESSIVE.label == "aggressive"
        assert Domain.DATAML.label == "Data/ML"


class TestCleanTarget:
    def test_size_human(self):
        target = CleanTarget(
            path="/test", description="Test", size_bytes=5000, safety=SafetyLevel.SAFE
        )
        assert target.size_human == "5.0 KB"

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            CleanTarget(path="/test", description="Test", size_bytes=-1, safety=SafetyLevel.SAFE)


class TestCleanupReport:
    def _target(self, path, size):
        return CleanTarget(path=path, description="x", size_bytes=size, safety=SafetyLevel.SAFE)

    def test_empty_report(self):
        report = CleanupReport()
        assert report.total_targets == 0
        assert report.total_bytes == 0
        assert report.bytes_freed == 0

    def test_totals(self):
        a = self._target("/a", 100)
        b = self._target("/b", 200)
        c = self._target("/c", 300)
        report = CleanupReport(targets_by_collector={"one": [a, b], "two": [c]})
        assert report.total_targets == 3
        assert report.total_bytes == 600

    def test_bytes_freed_counts_only_successes(self):
        a = self._target("/a", 100)
        b = self._target("/b", 200)
        report = CleanupReport(
            results=[
                CleanResult(target=a, success=True, bytes_freed=100),
                CleanResult(target=b, success=False, error="Permission denied"),
            ]
        )
        assert report.bytes_freed == 100
        assert report.success_count == 1
        assert report.failure_count == 1

    def test_failure_stage_is_validated(self):
        with pytest.raises(ValidationError):
            CollectorFailure(collector="x", stage="delete", error="boom")
