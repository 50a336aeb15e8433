"""Mappings from raw statistics to bounded 0-100 quality scores.

Each score is a pure function of one number (or a small tuple) and clamps its
own output, so the threshold tables below can be tuned without touching the
latency or report-rate reductions that call them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike


Rating = Literal["excellent", "fair", "poor"]

SCORE_MIN = 0.0
SCORE_MAX = 100.0

RELIABILITY_WEIGHTS = (0.6, 0.4)  # stability, consistency
SIGNAL_QUALITY_WEIGHTS = (0.5, 0.3, 0.2)  # consistency, peak control, distribution

EXCELLENT_THRESHOLD = 80.0
FAIR_THRESHOLD = 60.0


def clamp_score(value: float) -> float:
    """Clamp ``value`` into ``[0, 100]``; non-finite values become 0."""
    x = float(value)
    if not math.isfinite(x):
        return SCORE_MIN
    return max(SCORE_MIN, min(SCORE_MAX, x))


@dataclass(frozen=True)
class ScoreCurve:
    """
    Piecewise-linear, decreasing score curve.

    ``knots`` are ascending input thresholds and ``values`` the scores reached
    at each of them. Inputs below the first knot score ``values[0]``; inputs
    beyond the last knot keep falling by ``tail_slope`` points per unit.
    """

    knots: Tuple[float, ...]
    values: Tuple[float, ...]
    tail_slope: float

    def __post_init__(self) -> None:
        if len(self.knots) != len(self.values) or len(self.knots) < 2:
            raise ValueError("knots and values must have the same length (>= 2)")
        if any(b <= a for a, b in zip(self.knots, self.knots[1:])):
            raise ValueError(f"knots must be strictly ascending, got {self.knots}")

    def __call__(self, x: float) -> float:
        x = float(x)
        if not math.isfinite(x):
            return SCORE_MIN
        last = self.knots[-1]
        if x > last:
            score = self.values[-1] - (x - last) * self.tail_slope
        else:
            score = float(np.interp(x, self.knots, self.values))
        return clamp_score(score)


# Coefficient of variation (%) -> stability
STABILITY_CURVE = ScoreCurve(
    knots=(5.0, 10.0, 20.0, 40.0),
    values=(100.0, 80.0, 50.0, 20.0),
    tail_slope=0.5,
)

# std/mean (%) -> consistency; steeper than stability in the 3-15% band
CONSISTENCY_CURVE = ScoreCurve(
    knots=(3.0, 8.0, 15.0, 30.0),
    values=(100.0, 70.0, 42.0, 12.0),
    tail_slope=0.4,
)

# Mean latency (ms) -> performance
PERFORMANCE_CURVE = ScoreCurve(
    knots=(5.0, 10.0, 20.0, 40.0, 80.0),
    values=(100.0, 80.0, 50.0, 20.0, 10.0),
    tail_slope=0.1,
)


def stability_score(coefficient_of_variation: float) -> float:
    return STABILITY_CURVE(coefficient_of_variation)


def consistency_score(consistency_ratio: float) -> float:
    return CONSISTENCY_CURVE(consistency_ratio)


def performance_score(average_latency_ms: float) -> float:
    return PERFORMANCE_CURVE(average_latency_ms)


def reliability_score(stability: float, consistency: float) -> float:
    """Weighted blend favouring stability over consistency."""
    w_stability, w_consistency = RELIABILITY_WEIGHTS
    return clamp_score(
        w_stability * clamp_score(stability) + w_consistency * clamp_score(consistency)
    )


def cv_stability_score(coefficient_of_variation: float) -> float:
    """Plain ``100 - CV`` stability used for report-rate intervals."""
    return clamp_score(SCORE_MAX - float(coefficient_of_variation))


def interval_consistency_score(mean_difference: float, mean_interval: float) -> float:
    """Penalise the mean jump between adjacent intervals (200 points per mean)."""
    if mean_interval <= 0:
        return SCORE_MIN
    return clamp_score(SCORE_MAX - (mean_difference / mean_interval) * 200.0)


def peak_control_score(max_difference: float, mean_interval: float) -> float:
    """Penalise the single largest jump between adjacent intervals."""
    if mean_interval <= 0:
        return SCORE_MIN
    return clamp_score(SCORE_MAX - (max_difference / mean_interval) * 100.0)


def distribution_score(median_interval: float, mean_interval: float) -> float:
    """Penalise skew, measured as median/mean divergence relative to the mean."""
    if mean_interval <= 0:
        return SCORE_MIN
    return clamp_score(
        SCORE_MAX - abs(median_interval - mean_interval) / mean_interval * 100.0
    )


def signal_quality_score(
    intervals: ArrayLike,
    mean_interval: float,
    median_interval: float,
) -> float:
    """
    Composite regularity score of a polling signal.

    Parameters
    ----------
    intervals:
        Valid intervals in arrival order (not sorted).
    mean_interval, median_interval:
        Central tendency of the same intervals.

    Returns
    -------
    float
        ``0.5 * consistency + 0.3 * peak control + 0.2 * distribution``.
        Needs at least three intervals; fewer yield 0.
    """
    arr = np.asarray(intervals, dtype=float)
    if arr.size <= 2 or mean_interval <= 0:
        return SCORE_MIN
    differences = np.abs(np.diff(arr))
    parts: Sequence[float] = (
        interval_consistency_score(float(np.mean(differences)), mean_interval),
        peak_control_score(float(np.max(differences)), mean_interval),
        distribution_score(median_interval, mean_interval),
    )
    return clamp_score(sum(w * s for w, s in zip(SIGNAL_QUALITY_WEIGHTS, parts)))


def sample_adequacy_score(count: int, target: int) -> float:
    """Share of the planned trials that were actually collected, in percent."""
    if target <= 0:
        return SCORE_MIN
    return clamp_score(SCORE_MAX * count / target)


def rating_band(score: float) -> Rating:
    """Bucket a 0-100 score into the label the result cards are coloured by."""
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    if score >= FAIR_THRESHOLD:
        return "fair"
    return "poor"
