import pytest

from hidbench.analysis.latency import (
    AdvancedStats,
    BasicStats,
    TimedSample,
    advanced_stats,
    basic_stats,
    summarize_latency,
)
from hidbench.analysis.precision import Precision, round_to


def _samples(times, device="mouse"):
    return [
        TimedSample(occurred_at=1_700_000_000.0 + i, response_time_ms=t, device_class=device)
        for i, t in enumerate(times)
    ]


SCENARIO = _samples([10, 12, 11, 13, 10, 50])


def test_basic_stats_empty_is_zero() -> None:
    assert basic_stats([]) == BasicStats(avg=0, min=0, max=0, count=0)
    assert basic_stats(SCENARIO, "keyboard") == BasicStats.zero()


def test_basic_stats_scenario() -> None:
    stats = basic_stats(SCENARIO, "mouse")
    assert stats.min == 10
    assert stats.max == 50
    assert stats.avg == 17.67
    assert stats.count == 6


def test_basic_stats_filters_by_device() -> None:
    mixed = _samples([10, 20], "mouse") + _samples([30.5, 40.25, 50], "keyboard")
    assert basic_stats(mixed, "mouse").count == 2
    keyboard = basic_stats(mixed, "keyboard")
    assert keyboard.count == 3
    assert keyboard.min == 30.5
    assert keyboard.avg == round_to((30.5 + 40.25 + 50) / 3, Precision.LATENCY)
    assert basic_stats(mixed).count == 5


def test_advanced_stats_empty_is_zero() -> None:
    assert advanced_stats([]) == AdvancedStats.zero()


def test_advanced_stats_scenario_uses_interpolated_percentiles() -> None:
    stats = advanced_stats(SCENARIO)
    assert stats.median == 11.5
    assert stats.p95 == 40.75
    assert stats.p99 == 48.15
    assert stats.standard_deviation == 14.5
    assert stats.coefficient_of_variation == pytest.approx(82.07, abs=0.01)
    assert stats.jitter_index == 9.6
    assert stats.performance == 57.0
    assert stats.stability == 0.0
    assert stats.consistency == 0.0
    assert stats.reliability == 0.0


def test_advanced_stats_identical_values_are_maximally_stable() -> None:
    stats = advanced_stats(_samples([10.0] * 8))
    assert stats.stability == 100.0
    assert stats.consistency == 100.0
    assert stats.reliability == 100.0
    assert stats.performance == 80.0
    assert stats.standard_deviation == 0.0
    assert stats.jitter_index == 0.0


def test_advanced_stats_golden_scores() -> None:
    # mean 8, population std 1 -> CV 12.5%
    stats = advanced_stats(_samples([7.0, 9.0, 7.0, 9.0]))
    assert stats.coefficient_of_variation == 12.5
    assert stats.stability == 72.5
    assert stats.consistency == 52.0
    assert stats.performance == 88.0
    assert stats.reliability == 64.3
    assert stats.jitter_index == 2.0


def test_jitter_index_uses_arrival_order() -> None:
    ascending = advanced_stats(_samples([1.0, 2.0, 3.0, 4.0]))
    zigzag = advanced_stats(_samples([1.0, 4.0, 2.0, 3.0]))
    assert ascending.jitter_index == 1.0
    assert zigzag.jitter_index == 2.0
    assert ascending.median == zigzag.median


def test_single_sample_has_no_jitter() -> None:
    stats = advanced_stats(_samples([15.0]))
    assert stats.jitter_index == 0.0
    assert stats.median == stats.p95 == stats.p99 == 15.0


def test_percentile_ordering_property() -> None:
    times = [3.2, 18.0, 7.7, 5.1, 44.9, 6.0, 6.6, 12.4, 9.9, 5.5]
    stats = advanced_stats(_samples(times))
    assert min(times) <= stats.median <= max(times)
    assert min(times) <= stats.p95 <= max(times)
    assert stats.p95 <= stats.p99


@pytest.mark.parametrize(
    "times",
    [
        [0.0, 0.0, 0.0],
        [1e-6, 1e6],
        [10.0] * 30 + [5000.0],
        [250.0, 251.0, 249.0],
    ],
)
def test_scores_bounded_for_pathological_input(times) -> None:
    stats = advanced_stats(_samples(times))
    for score in (stats.stability, stats.consistency, stats.performance, stats.reliability):
        assert 0.0 <= score <= 100.0


def test_outputs_already_at_target_precision() -> None:
    stats = advanced_stats(_samples([10.123, 12.987, 11.555, 13.0001, 9.87654]))
    for name in ("stability", "consistency", "performance", "reliability", "coefficient_of_variation"):
        value = getattr(stats, name)
        assert round_to(value, Precision.PERCENTAGE) == value
    for name in ("median", "p95", "p99", "standard_deviation", "jitter_index"):
        value = getattr(stats, name)
        assert round_to(value, Precision.LATENCY) == value
    basic = basic_stats(_samples([10.123, 12.987]))
    assert round_to(basic.avg, Precision.LATENCY) == basic.avg


def test_inputs_are_not_mutated() -> None:
    samples = _samples([5.0, 1.0, 3.0])
    snapshot = list(samples)
    advanced_stats(samples)
    assert samples == snapshot


def test_summarize_latency() -> None:
    samples = _samples([10.0, 12.0], "mouse") + _samples([20.0, 24.0], "keyboard")
    summary = summarize_latency(samples, trial_count=2)
    assert summary.mouse.avg == 11.0
    assert summary.keyboard.avg == 22.0
    assert summary.device_difference == 11.0
    assert summary.latency_range == 14.0
    assert summary.sample_adequacy == 100.0
    assert summary.rating in {"excellent", "fair", "poor"}
    assert summary.as_dict()["overall"]["count"] == 4


def test_summarize_latency_single_device() -> None:
    summary = summarize_latency(_samples([10.0] * 5, "keyboard"), trial_count=20)
    assert summary.device_difference == 0.0
    assert summary.sample_adequacy == 12.5
    assert summary.rating == "excellent"


def test_summarize_latency_empty() -> None:
    summary = summarize_latency([])
    assert summary.overall == BasicStats.zero()
    assert summary.advanced == AdvancedStats.zero()
    assert summary.latency_range == 0.0
    assert summary.rating == "poor"


def test_huge_response_times_do_not_raise() -> None:
    basic = basic_stats(_samples([1e307]))
    assert basic.avg == 1e307
    assert basic.max == 1e307

    stats = advanced_stats(_samples([1e307, 1e306]))
    assert stats.median == pytest.approx(5.5e306)
    for score in (stats.stability, stats.consistency, stats.performance, stats.reliability):
        assert 0.0 <= score <= 100.0
