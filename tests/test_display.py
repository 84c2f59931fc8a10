"""Tests for display module."""

from unittest.mock import patch

from devsweep.detector import DetectionResult
from devsweep.display import (
    confirm_action,
    confirm_cleanup,
    safety_icon,
    safety_label,
    show_catalog,
    show_clean_results,
    show_detection,
    show_estimation,
    show_failures,
    show_safety_legend,
    show_scanning_progress,
    show_target_details,
)
from devsweep.catalog import get_all_specs
from devsweep.models import (
    CleanResult,
    CleanupReport,
    CollectorFailure,
    Domain,
    SafetyLevel,
)

from conftest import make_target


def _printed(mock_console) -> str:
    return "\n".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)


def _report(**kwargs) -> CleanupReport:
    targets = [
        make_target("/p/small", 1000, SafetyLevel.SAFE),
        make_target("/p/large", 2000, SafetyLevel.MODERATE),
    ]
    return CleanupReport(targets_by_collector={"Frontend": targets}, **kwargs)


class TestSafetyIcon:
    def test_safe_icon(self):
        icon = safety_icon(SafetyLevel.SAFE)
        assert "✓" in icon
        assert "green" in icon

    def test_dangerous_icon(self):
        icon = safety_icon(SafetyLevel.DANGEROUS)
        assert "✗" in icon
        assert "red" in icon

    def test_labels(self):
        assert "Moderate" in safety_label(SafetyLevel.MODERATE)
        assert "yellow" in safety_label(SafetyLevel.MODERATE)


class TestShowEstimation:
    @patch("devsweep.display.console")
    def test_nothing_to_clean(self, mock_console):
        show_estimation(CleanupReport())
        assert "Nothing to clean" in _printed(mock_console)

    @patch("devsweep.display.console")
    def test_totals(self, mock_console):
        show_estimation(_report())
        assert "Total: 2 items, 3.0 KB" in _printed(mock_console)

    @patch("devsweep.display.console")
    def test_target_details(self, mock_console):
        show_target_details(_report())
        output = _printed(mock_console)
        assert output.index("/p/large") < output.index("/p/small")


class TestShowCleanResults:
    @patch("devsweep.display.console")
    def test_dry_run(self, mock_console):
        report = _report(dry_run=True)
        report.results = [
            CleanResult(target=t, bytes_freed=t.size_bytes, dry_run=True)
            for t in report.targets_by_collector["Frontend"]
        ]

        show_clean_results(report)

        assert "DRY RUN" in _printed(mock_console)

    @patch("devsweep.display.console")
    def test_failures_listed(self, mock_console):
        report = _report()
        target = report.targets_by_collector["Frontend"][0]
        report.results = [CleanResult(target=target, success=False, error="Permission denied")]
        report.failures = [CollectorFailure(collector="Mobile", stage="scan", error="boom")]

        show_clean_results(report)

        output = _printed(mock_console)
        assert "Permission denied" in output
        assert "Mobile (scan): boom" in output

    @patch("devsweep.display.console")
    def test_no_failures_prints_nothing(self, mock_console):
        show_failures(CleanupReport())
        mock_console.print.assert_not_called()


class TestOtherViews:
    @patch("devsweep.display.console")
    def test_detection(self, mock_console):
        show_detection(DetectionResult(tools={Domain.BACKEND: ["go"]}))
        mock_console.print.assert_called_once()

    @patch("devsweep.display.console")
    def test_catalog(self, mock_console):
        show_catalog(get_all_specs())
        mock_console.print.assert_called_once()

    @patch("devsweep.display.console")
    def test_legend(self, mock_console):
        show_safety_legend()
        assert "Dangerous" in _printed(mock_console)

    def test_scanning_progress(self):
        progress = show_scanning_progress()
        assert progress is not None


class TestConfirm:
    @patch("rich.prompt.Confirm.ask", return_value=True)
    def test_confirm_action(self, mock_ask):
        assert confirm_action("Proceed?") is True
        mock_ask.assert_called_once()

    @patch("devsweep.display.console")
    @patch("devsweep.display.confirm_action", return_value=False)
    def test_confirm_cleanup_message(self, mock_confirm, mock_console):
        assert confirm_cleanup(3, 5000) is False
        mock_confirm.assert_called_once_with("Delete 3 items (5.0 KB)?")
