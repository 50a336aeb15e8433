"""Rounding and percentile helpers shared by every statistic."""

from __future__ import annotations

import math
import sys

import numpy as np
from numpy.typing import ArrayLike


class Precision:
    """Number of decimals each kind of figure is reported with."""

    TIME = 3  # intervals, jitter, variance (ms)
    PERCENTAGE = 2  # scores, coefficient of variation
    FREQUENCY = 1  # report rates (Hz)
    LATENCY = 2  # response times (ms)
    DURATION = 1  # test durations (s)


_EPSILON = sys.float_info.epsilon


def round_to(value: float, digits: int) -> float:
    """
    Round ``value`` half away from zero at ``digits`` decimals.

    A machine-epsilon bias is added to the magnitude before scaling so that
    values such as ``1.005`` (stored as ``1.00499999...``) round up as
    written. Non-finite input yields ``0.0``; magnitudes too large to scale
    are returned unchanged.
    """
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(x):
        return 0.0
    factor = 10.0 ** int(digits)
    scaled = (abs(x) + _EPSILON) * factor
    if not math.isfinite(scaled):
        # too large to carry any fractional digits
        return x + 0.0
    magnitude = math.floor(scaled + 0.5) / factor
    # adding 0.0 turns -0.0 into 0.0
    return math.copysign(magnitude, x) + 0.0


def percentile(sorted_values: ArrayLike, p: float) -> float:
    """
    Linearly interpolated percentile of an ascending-sorted sequence.

    Parameters
    ----------
    sorted_values:
        Values sorted in ascending order. The caller is responsible for
        sorting; the input is not copied or modified.
    p:
        Percentile in ``[0, 100]``. Values outside are clamped.

    Returns
    -------
    float
        ``0.0`` for empty input, otherwise the value at fractional index
        ``(p / 100) * (n - 1)`` interpolated between its neighbours.
    """
    arr = np.asarray(sorted_values, dtype=float)
    if arr.size == 0:
        return 0.0
    p = min(100.0, max(0.0, float(p)))
    index = (p / 100.0) * (arr.size - 1)
    lower = int(math.floor(index))
    upper = int(math.ceil(index))
    if lower == upper:
        return float(arr[lower])
    weight = index - lower
    return float(arr[lower] * (1.0 - weight) + arr[upper] * weight)


def format_latency(value_ms: float) -> str:
    """Latency at 2 decimals, e.g. ``"12.35ms"``."""
    return f"{round_to(value_ms, Precision.LATENCY)}ms"


def format_frequency(value_hz: float) -> str:
    """Frequency at 1 decimal; whole rates keep the ``.0`` (``"125.0Hz"``)."""
    return f"{round_to(value_hz, Precision.FREQUENCY)}Hz"


def format_percentage(value: float) -> str:
    """Score or ratio at 2 decimals, e.g. ``"97.5%"``."""
    return f"{round_to(value, Precision.PERCENTAGE)}%"


def format_time(value_ms: float) -> str:
    """Interval or jitter at 3 decimals, e.g. ``"8.125ms"``."""
    return f"{round_to(value_ms, Precision.TIME)}ms"


def format_duration(value_ms: float) -> str:
    """Render a duration given in milliseconds as seconds."""
    return f"{round_to(value_ms / 1000.0, Precision.DURATION)}s"


__all__ = [
    "Precision",
    "format_duration",
    "format_frequency",
    "format_latency",
    "format_percentage",
    "format_time",
    "percentile",
    "round_to",
]
