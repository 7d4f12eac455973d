from __future__ import annotations

import logging
import math

import numpy as np

from loadprobe.metrics.models import AggregateResult, Stats

logger = logging.getLogger(__name__)


def percentile_index(n: int, p: float) -> int:
    """Nearest-rank index into ``n`` sorted samples: ``ceil(p/100 * n) - 1``."""
    if n <= 0:
        msg = f"percentile of an empty sample set (n={n})"
        raise ValueError(msg)
    idx = math.ceil(p * n / 100) - 1
    return min(max(idx, 0), n - 1)


def compute_stats(result: AggregateResult) -> Stats:
    n = len(result.latencies)
    if n == 0:
        logger.debug("No latencies recorded, returning zero stats")
        return Stats()

    # np.sort returns a copy; the caller's list keeps its arrival order.
    ordered = np.sort(np.asarray(result.latencies, dtype=np.float64))
    rps = result.total / result.duration_sec if result.duration_sec > 0 else 0.0
    stats = Stats(
        average=float(ordered.mean()),
        p50=float(ordered[percentile_index(n, 50)]),
        p90=float(ordered[percentile_index(n, 90)]),
        p99=float(ordered[percentile_index(n, 99)]),
        rps=rps,
    )
    logger.debug(
        f"Stats computed: n={n}, avg={stats.average:.6f}s, "
        f"p50={stats.p50:.6f}s, p99={stats.p99:.6f}s, rps={stats.rps:.2f}"
    )
    return stats
