"""Statistics engine (rounding, scoring, latency and report-rate reductions).

Modules here are free of I/O and GUI dependencies: each function takes an
already-collected sequence of samples or events and returns a freshly built,
fully-populated result record.
"""

from .latency import (
    AdvancedStats,
    BasicStats,
    LatencySummary,
    TimedSample,
    advanced_stats,
    basic_stats,
    summarize_latency,
)
from .precision import Precision, percentile, round_to
from .rate import (
    ReportRateStats,
    TimedEvent,
    keyboard_report_rate_stats,
    pointer_report_rate_stats,
    report_rate_stats,
)

__all__ = [
    "AdvancedStats",
    "BasicStats",
    "LatencySummary",
    "Precision",
    "ReportRateStats",
    "TimedEvent",
    "TimedSample",
    "advanced_stats",
    "basic_stats",
    "keyboard_report_rate_stats",
    "percentile",
    "pointer_report_rate_stats",
    "report_rate_stats",
    "round_to",
    "summarize_latency",
]
