"""Report-rate (polling frequency) statistics from event timestamps."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional, Sequence, Union

import numpy as np

from ..config.profiles import (
    KEYBOARD_PROFILE,
    POINTER_PROFILE,
    FilterProfile,
    resolve_profile,
)
from .precision import Precision, percentile, round_to
from .scoring import cv_stability_score, signal_quality_score

logger = logging.getLogger(__name__)

MS_PER_SECOND = 1000.0


@dataclass(frozen=True, slots=True)
class TimedEvent:
    """One raw input event; ``captured_at`` is a monotonic timestamp in ms."""

    captured_at: float
    x: Optional[float] = None
    y: Optional[float] = None


EventLike = Union[TimedEvent, float]


@dataclass(frozen=True, slots=True)
class ReportRateStats:
    """
    Polling-frequency metrics of one sampling window.

    Intervals are in milliseconds, rates in Hz, scores in ``[0, 100]``.
    ``effective_report_rate`` (from the median interval) is the headline
    figure; ``report_rate`` uses the mean and is more sensitive to skew.
    """

    average_interval: float
    report_rate: float
    max_report_rate: float
    min_report_rate: float
    jitter: float
    stability: float
    total_events: int
    test_duration: float
    effective_report_rate: float
    signal_quality: float
    frequency_stability: float
    interval_variance: float
    median_interval: float
    p95_interval: float
    discarded_intervals: int = 0
    outlier_intervals: int = 0

    @property
    def temporal_precision(self) -> float:
        """Name used by the keyboard panel for :attr:`signal_quality`."""
        return self.signal_quality

    @classmethod
    def zero(cls, total_events: int = 0, discarded_intervals: int = 0) -> "ReportRateStats":
        return cls(
            average_interval=0.0,
            report_rate=0.0,
            max_report_rate=0.0,
            min_report_rate=0.0,
            jitter=0.0,
            stability=0.0,
            total_events=int(total_events),
            test_duration=0.0,
            effective_report_rate=0.0,
            signal_quality=0.0,
            frequency_stability=0.0,
            interval_variance=0.0,
            median_interval=0.0,
            p95_interval=0.0,
            discarded_intervals=int(discarded_intervals),
            outlier_intervals=0,
        )

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def _timestamps(events: Sequence[EventLike]) -> np.ndarray:
    return np.fromiter(
        (e.captured_at if isinstance(e, TimedEvent) else e for e in events),
        dtype=float,
        count=len(events),
    )


def filter_intervals(intervals: np.ndarray, profile: FilterProfile) -> np.ndarray:
    """
    Drop outlying intervals with an IQR fence clipped to the profile bounds.

    The input order is preserved. When the fence keeps too few intervals
    (typically because near-uniform data collapses the IQR), the plain
    absolute bounds of ``profile`` are used instead.
    """
    ordered = np.sort(intervals)
    q1 = percentile(ordered, 25)
    q3 = percentile(ordered, 75)
    iqr = q3 - q1
    lower = max(profile.min_interval_ms, q1 - profile.iqr_multiplier * iqr)
    upper = min(profile.max_interval_ms, q3 + profile.iqr_multiplier * iqr)

    fenced = intervals[(intervals >= lower) & (intervals <= upper)]
    if fenced.size >= profile.required_retained(intervals.size):
        return fenced

    logger.debug(
        "IQR fence [%.3f, %.3f] kept %d/%d intervals; using %s bounds",
        lower,
        upper,
        fenced.size,
        intervals.size,
        profile.key,
    )
    within = (intervals >= profile.min_interval_ms) & (intervals <= profile.max_interval_ms)
    return intervals[within]


def report_rate_stats(
    events: Sequence[EventLike],
    profile: Union[FilterProfile, str] = POINTER_PROFILE,
) -> ReportRateStats:
    """
    Reduce a frozen sampling window of events to report-rate metrics.

    Parameters
    ----------
    events:
        Events (or bare timestamps in ms) in arrival order.
    profile:
        Filter profile or its key (``"pointer"``, ``"keyboard"`` or an alias).

    Returns
    -------
    ReportRateStats
        A fully-populated record. Fewer than two events, or no positive
        interval, yield zeros apart from the event/discard counts.
    """
    if isinstance(profile, str):
        profile = resolve_profile(profile)

    total = len(events)
    if total < 2:
        return ReportRateStats.zero(total)

    stamps = _timestamps(events)
    raw = np.diff(stamps)
    intervals = raw[raw > 0]
    discarded = int(raw.size - intervals.size)
    if discarded:
        logger.debug("discarded %d non-positive intervals", discarded)
    if intervals.size == 0:
        return ReportRateStats.zero(total, discarded)

    valid = filter_intervals(intervals, profile)
    if valid.size == 0:
        # every interval lies outside the profile's absolute bounds
        return ReportRateStats.zero(total, discarded)

    ordered = np.sort(valid)
    average = float(np.mean(valid))
    median = percentile(ordered, 50)
    p95 = percentile(ordered, 95)
    variance = float(np.var(valid))
    jitter = float(np.sqrt(variance))

    coefficient_of_variation = jitter / average * 100.0 if average > 0 else 0.0
    signal_quality = signal_quality_score(valid, average, median)

    return ReportRateStats(
        average_interval=round_to(average, Precision.TIME),
        report_rate=round_to(MS_PER_SECOND / average, Precision.FREQUENCY),
        max_report_rate=round_to(MS_PER_SECOND / float(ordered[0]), Precision.FREQUENCY),
        min_report_rate=round_to(MS_PER_SECOND / float(ordered[-1]), Precision.FREQUENCY),
        jitter=round_to(jitter, Precision.TIME),
        stability=round_to(cv_stability_score(coefficient_of_variation), Precision.PERCENTAGE),
        total_events=total,
        test_duration=round_to(float(stamps[-1] - stamps[0]), Precision.TIME),
        effective_report_rate=round_to(MS_PER_SECOND / median, Precision.FREQUENCY),
        signal_quality=round_to(signal_quality, Precision.PERCENTAGE),
        frequency_stability=round_to(signal_quality, Precision.PERCENTAGE),
        interval_variance=round_to(variance, Precision.TIME),
        median_interval=round_to(median, Precision.TIME),
        p95_interval=round_to(p95, Precision.TIME),
        discarded_intervals=discarded,
        outlier_intervals=int(intervals.size - valid.size),
    )


def pointer_report_rate_stats(events: Sequence[EventLike]) -> ReportRateStats:
    """Report rate of continuous pointer motion (mouse-move events)."""
    return report_rate_stats(events, POINTER_PROFILE)


def keyboard_report_rate_stats(events: Sequence[EventLike]) -> ReportRateStats:
    """Report rate of key-repeat/keydown signals."""
    return report_rate_stats(events, KEYBOARD_PROFILE)
