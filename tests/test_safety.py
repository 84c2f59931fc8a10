"""Tests for the safety gate."""

import pytest

from devsweep.errors import ConfigError
from devsweep.models import CleanLevel, SafetyLevel
from devsweep.safety import allows, parse_clean_level, permitted_levels

from conftest import make_target


class TestAllows:
    def test_conservative_allows_only_safe(self):
        assert allows(CleanLevel.CONSERVATIVE, SafetyLevel.SAFE)
        assert not allows(CleanLevel.CONSERVATIVE, SafetyLevel.MODERATE)
        assert not allows(CleanLevel.CONSERVATIVE, SafetyLevel.DANGEROUS)

    def test_standard_allows_safe_and_moderate(self):
        assert allows(CleanLevel.STANDARD, SafetyLevel.SAFE)
        assert allows(CleanLevel.STANDARD, SafetyLevel.MODERATE)
        assert not allows(CleanLevel.STANDARD, SafetyLevel.DANGEROUS)

    def test_aggressive_allows_everything(self):
        for safety in SafetyLevel:
            assert allows(CleanLevel.AGGRESSIVE, safety)

    def test_monotonic_in_clean_level(self):
        levels = sorted(CleanLevel)
        for safety in SafetyLevel:
            for lower, higher in zip(levels, levels[1:]):
                if allows(lower, safety):
                    assert allows(higher, safety)

    @pytest.mark.parametrize("level", [None, 1, "standard", 99])
    def test_unrecognized_level_denies_everything(self, level):
        assert permitted_levels(level) == frozenset()
        for safety in SafetyLevel:
            assert not allows(level, safety)

    def test_conservative_filters_mixed_targets(self):
        targets = [
            make_target("/a", safety=SafetyLevel.SAFE),
            make_target("/b", safety=SafetyLevel.MODERATE),
            make_target("/c", safety=SafetyLevel.DANGEROUS),
        ]
        passed = [t for t in targets if allows(CleanLevel.CONSERVATIVE, t.safety)]
        assert len(passed) == 1
        assert passed[0].path == "/a"


class TestParseCleanLevel:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("conservative", CleanLevel.CONSERVATIVE),
            ("standard", CleanLevel.STANDARD),
            ("aggressive", CleanLevel.AGGRESSIVE),
        ],
    )
    def test_valid_names(self, text, expected):
        assert parse_clean_level(text) is expected

    @pytest.mark.parametrize("text", ["Standard", "STANDARD", "extreme", ""])
    def test_invalid_names(self, text):
        with pytest.raises(ConfigError, match="invalid clean level"):
            parse_clean_level(text)
