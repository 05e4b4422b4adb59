"""Threshold tables shared by the normalizers and the scoring engine."""

import re

from heliotrends.schemas.enums import ActivityLevel, CorrelationStrength

FLARE_CLASS_SCORES: dict[str, int] = {"A": 1, "B": 2, "C": 3, "M": 4, "X": 5}

_MAGNITUDE_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")


def activity_level_for_kp(kp_index: float) -> ActivityLevel:
    if kp_index >= 7:
        return ActivityLevel.EXTREME
    if kp_index >= 5:
        return ActivityLevel.HIGH
    if kp_index >= 3:
        return ActivityLevel.MODERATE
    return ActivityLevel.LOW


def flare_intensity(class_type: str | None) -> float:
    """Score a flare class like 'M2.1' as letter score * 10 + magnitude.

    Unknown letters score 0; a missing or unparseable magnitude counts as 1.0.
    """
    class_type = (class_type or "").strip()
    base = FLARE_CLASS_SCORES.get(class_type[:1], 0)
    match = _MAGNITUDE_RE.match(class_type[1:])
    magnitude = float(match.group(0)) if match else 0.0
    return base * 10 + (magnitude or 1.0)


def correlation_strength(coefficient: float) -> CorrelationStrength:
    magnitude = abs(coefficient)
    if magnitude > 0.7:
        return CorrelationStrength.STRONG
    if magnitude > 0.4:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def significance(coefficient: float) -> float:
    """Confidence-flavoured display value in [60, 95]; not a p-value."""
    return min(95.0, 60 + abs(coefficient) * 35)


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))
