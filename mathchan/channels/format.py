"""Display formatting for measurement values."""

from __future__ import annotations

import math


PLACEHOLDER = "---"


def _exponential(value: float, digits: int) -> str:
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_measurement_value(value: float | None, precision: int | None = None) -> str:
    """Format a value for live views; missing or non-finite values show ``---``."""

    if value is None or not math.isfinite(value):
        return PLACEHOLDER

    if precision is not None:
        digits = max(0, min(10, round(precision)))
        return f"{value:.{digits}f}"

    magnitude = abs(value)
    if magnitude == 0:
        return "0"
    if magnitude >= 1000:
        return f"{value:.1f}"
    if magnitude >= 1:
        return f"{value:.3f}"
    return _exponential(value, 3)
