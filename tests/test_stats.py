from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from loadprobe.metrics import AggregateResult, Stats, compute_stats, percentile_index


def _result(latencies: list[float], duration_sec: float = 1.0) -> AggregateResult:
    result = AggregateResult(total=len(latencies), succeeded=len(latencies), latencies=list(latencies))
    result.freeze(duration_sec)
    return result


def test_nearest_rank_one_to_hundred_ms() -> None:
    latencies = [i / 1000 for i in range(1, 101)]
    stats = compute_stats(_result(latencies, duration_sec=2.0))
    assert stats.p50 == pytest.approx(0.050)
    assert stats.p90 == pytest.approx(0.090)
    assert stats.p99 == pytest.approx(0.099)
    assert stats.average == pytest.approx(0.0505)
    assert stats.rps == pytest.approx(50.0)


def test_empty_latencies_give_zero_stats() -> None:
    assert compute_stats(_result([])) == Stats()
    assert compute_stats(AggregateResult()) == Stats(0.0, 0.0, 0.0, 0.0, 0.0)


def test_singleton_latency() -> None:
    stats = compute_stats(_result([0.042]))
    assert stats.p50 == stats.p90 == stats.p99 == 0.042
    assert stats.average == pytest.approx(0.042)


def test_input_order_is_preserved() -> None:
    latencies = [0.3, 0.1, 0.2, 0.5, 0.4]
    result = _result(latencies)
    compute_stats(result)
    assert result.latencies == latencies


def test_throughput_uses_measured_duration() -> None:
    result = AggregateResult(total=30, succeeded=20, failed=10, latencies=[0.01] * 30)
    result.freeze(1.5)
    assert compute_stats(result).rps == pytest.approx(20.0)


def test_zero_duration_does_not_divide() -> None:
    result = AggregateResult(total=1, succeeded=1, latencies=[0.01])
    assert compute_stats(result).rps == 0.0


@pytest.mark.parametrize(
    ("n", "p", "expected"),
    [
        (100, 50, 49),
        (100, 90, 89),
        (100, 99, 98),
        (100, 100, 99),
        (100, 0, 0),
        (1, 99, 0),
        (10, 99, 9),
        (3, 50, 1),
        (4, 50, 1),
    ],
)
def test_percentile_index(n: int, p: float, expected: int) -> None:
    assert percentile_index(n, p) == expected


def test_percentile_index_requires_samples() -> None:
    with pytest.raises(ValueError):
        percentile_index(0, 50)


@given(st.lists(st.floats(min_value=0.0, max_value=60.0, allow_nan=False), min_size=1, max_size=500))
def test_percentiles_are_ordered(latencies: list[float]) -> None:
    stats = compute_stats(_result(latencies))
    assert stats.p50 <= stats.p90 <= stats.p99
    assert min(latencies) <= stats.p50
    assert stats.p99 <= max(latencies)
