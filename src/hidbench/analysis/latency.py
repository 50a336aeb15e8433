"""Click/key response latency statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal, Optional, Sequence

import numpy as np

from .precision import Precision, percentile, round_to
from .scoring import (
    Rating,
    consistency_score,
    performance_score,
    rating_band,
    reliability_score,
    sample_adequacy_score,
    stability_score,
)


DeviceClass = Literal["mouse", "keyboard"]

DEFAULT_TRIAL_COUNT = 20


@dataclass(frozen=True, slots=True)
class TimedSample:
    """
    One completed latency trial.

    ``occurred_at`` is a wall-clock timestamp kept for display only;
    ``response_time_ms`` was measured on a monotonic clock.
    """

    occurred_at: float
    response_time_ms: float
    device_class: DeviceClass


@dataclass(frozen=True, slots=True)
class BasicStats:
    avg: float
    min: float
    max: float
    count: int

    @classmethod
    def zero(cls) -> "BasicStats":
        return cls(avg=0.0, min=0.0, max=0.0, count=0)

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AdvancedStats:
    """Dispersion, percentiles and 0-100 quality scores of a latency run."""

    stability: float
    consistency: float
    performance: float
    reliability: float
    median: float
    p95: float
    p99: float
    standard_deviation: float
    coefficient_of_variation: float
    jitter_index: float

    @classmethod
    def zero(cls) -> "AdvancedStats":
        return cls(
            stability=0.0,
            consistency=0.0,
            performance=0.0,
            reliability=0.0,
            median=0.0,
            p95=0.0,
            p99=0.0,
            standard_deviation=0.0,
            coefficient_of_variation=0.0,
            jitter_index=0.0,
        )

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class LatencySummary:
    """Everything the overall-results panel shows for one session."""

    overall: BasicStats
    mouse: BasicStats
    keyboard: BasicStats
    advanced: AdvancedStats
    latency_range: float
    device_difference: float
    sample_adequacy: float
    rating: Rating

    def as_dict(self) -> dict:
        return asdict(self)


def _response_times(samples: Sequence[TimedSample]) -> np.ndarray:
    return np.fromiter(
        (s.response_time_ms for s in samples), dtype=float, count=len(samples)
    )


def basic_stats(
    samples: Sequence[TimedSample],
    device_class: Optional[DeviceClass] = None,
) -> BasicStats:
    """
    Mean, extrema and count of response times.

    Parameters
    ----------
    samples:
        Completed trials in arrival order.
    device_class:
        Restrict to ``"mouse"`` or ``"keyboard"`` trials; ``None`` keeps all.

    Returns
    -------
    BasicStats
        ``avg`` is rounded to latency precision, ``min``/``max`` are the
        exact extrema. All fields are zero when nothing matches.
    """
    selected = [s for s in samples if device_class is None or s.device_class == device_class]
    if not selected:
        return BasicStats.zero()
    times = _response_times(selected)
    return BasicStats(
        avg=round_to(float(np.mean(times)), Precision.LATENCY),
        min=float(np.min(times)),
        max=float(np.max(times)),
        count=int(times.size),
    )


def advanced_stats(samples: Sequence[TimedSample]) -> AdvancedStats:
    """
    Percentiles, dispersion and quality scores over ``samples``.

    Filtering by device is left to the caller. The jitter index uses the
    samples in arrival order, everything else the sorted response times.
    """
    if len(samples) == 0:
        return AdvancedStats.zero()

    chronological = _response_times(samples)
    times = np.sort(chronological)
    mean = float(np.mean(times))
    std_dev = float(np.std(times))  # population (ddof=0)

    coefficient_of_variation = std_dev / mean * 100.0 if mean > 0 else 0.0
    consistency_ratio = std_dev / mean * 100.0 if mean > 0 else 100.0

    if chronological.size > 1:
        jitter_index = float(np.mean(np.abs(np.diff(chronological))))
    else:
        jitter_index = 0.0

    stability = stability_score(coefficient_of_variation)
    consistency = consistency_score(consistency_ratio)
    performance = performance_score(mean)
    reliability = reliability_score(stability, consistency)

    return AdvancedStats(
        stability=round_to(stability, Precision.PERCENTAGE),
        consistency=round_to(consistency, Precision.PERCENTAGE),
        performance=round_to(performance, Precision.PERCENTAGE),
        reliability=round_to(reliability, Precision.PERCENTAGE),
        median=round_to(percentile(times, 50), Precision.LATENCY),
        p95=round_to(percentile(times, 95), Precision.LATENCY),
        p99=round_to(percentile(times, 99), Precision.LATENCY),
        standard_deviation=round_to(std_dev, Precision.LATENCY),
        coefficient_of_variation=round_to(coefficient_of_variation, Precision.PERCENTAGE),
        jitter_index=round_to(jitter_index, Precision.LATENCY),
    )


def summarize_latency(
    samples: Sequence[TimedSample],
    trial_count: int = DEFAULT_TRIAL_COUNT,
) -> LatencySummary:
    """
    Combine per-device and overall figures for one test session.

    ``trial_count`` is the number of trials planned per device; adequacy is
    measured against both devices' worth of trials.
    """
    overall = basic_stats(samples)
    mouse = basic_stats(samples, "mouse")
    keyboard = basic_stats(samples, "keyboard")
    advanced = advanced_stats(samples)

    if mouse.count and keyboard.count:
        device_difference = round_to(abs(mouse.avg - keyboard.avg), Precision.LATENCY)
    else:
        device_difference = 0.0

    return LatencySummary(
        overall=overall,
        mouse=mouse,
        keyboard=keyboard,
        advanced=advanced,
        latency_range=round_to(overall.max - overall.min, Precision.LATENCY),
        device_difference=device_difference,
        sample_adequacy=round_to(
            sample_adequacy_score(overall.count, 2 * trial_count), Precision.PERCENTAGE
        ),
        rating=rating_band(advanced.reliability),
    )
