from __future__ import annotations

from loadprobe.metrics.models import AggregateResult, Outcome, Stats
from loadprobe.metrics.stats import compute_stats, percentile_index

__all__ = ["AggregateResult", "Outcome", "Stats", "compute_stats", "percentile_index"]
