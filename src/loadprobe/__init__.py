from __future__ import annotations

from loadprobe.config import RunConfig
from loadprobe.loadgen import run, run_load
from loadprobe.metrics import AggregateResult, Stats, compute_stats

__all__ = ["AggregateResult", "RunConfig", "Stats", "compute_stats", "run", "run_load"]
