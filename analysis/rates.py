"""Rate and average calculations for the Statistics Engine.

Every helper here resolves a zero denominator to a defined default instead of
raising, so dashboards always render with best-available numbers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable


def round_half_up(value: float, digits: int = 0) -> float:
    """Round a value half-up (towards positive infinity on .5).

    Args:
        value: Value to round.
        digits: Number of decimal places to keep.

    Returns:
        The rounded value. Python's built-in `round` uses banker's rounding,
        which would turn 2.5 into 2; dashboards expect 3.
    """

    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def percent(numerator: int, denominator: int) -> int:
    """Return `round(100 * numerator / denominator)` as an integer.

    Args:
        numerator: Count of matching items.
        denominator: Count of all items.

    Returns:
        Whole-number percentage, or 0 when the denominator is 0.
    """

    if denominator <= 0:
        return 0
    return int(round_half_up(100.0 * numerator / denominator))


def clamped_percent(numerator: int, denominator: int) -> int:
    """Return `percent(...)` bounded to the closed range [0, 100]."""

    return max(0, min(100, percent(numerator, denominator)))


def mean(values: Iterable[float]) -> float:
    """Return the arithmetic mean of values, or 0.0 when there are none."""

    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return 0.0
    return total / count


def ratio(numerator: float, denominator: float) -> float:
    """Return `numerator / denominator`, or 0.0 when the denominator is 0."""

    if denominator == 0:
        return 0.0
    return numerator / denominator
