"""Safety gate: which risk tiers a clean level may act on."""

from devsweep.errors import ConfigError
from devsweep.models import CleanLevel, SafetyLevel

_PERMITTED: dict[CleanLevel, frozenset[SafetyLevel]] = {
    CleanLevel.CONSERVATIVE: frozenset({SafetyLevel.SAFE}),
    CleanLevel.STANDARD: frozenset({SafetyLevel.SAFE, SafetyLevel.MODERATE}),
    CleanLevel.AGGRESSIVE: frozenset(SafetyLevel),
}

_BY_NAME = {level.label: level for level in CleanLevel}


def permitted_levels(clean_level: object) -> frozenset[SafetyLevel]:
    """Safety levels a clean level permits; empty for unrecognized values."""
    if not isinstance(clean_level, CleanLevel):
        return frozenset()
    return _PERMITTED.get(clean_level, frozenset())


def allows(clean_level: object, safety: SafetyLevel) -> bool:
    """
    Check if a target of the given safety level may be cleaned.

    Anything that is not a known CleanLevel denies every tier.

    Args:
        clean_level: Operator-chosen aggressiveness
        safety: Risk tier of the target

    Returns:
        True if the target is permitted at this clean level
    """
    return safety in permitted_levels(clean_level)


def parse_clean_level(text: str) -> CleanLevel:
    """
    Convert a clean level name to a CleanLevel.

    Matching is exact and case sensitive.

    Raises:
        ConfigError: If the name is not conservative, standard or aggressive
    """
    try:
        return _BY_NAME[text]
    except (KeyError, TypeError):
        raise ConfigError(
            f"invalid clean level: {text} (must be conservative, standard, or aggressive)"
        ) from None
