from __future__ import annotations

import sys
from typing import TextIO

from loadprobe.config import RunConfig
from loadprobe.metrics import AggregateResult, Stats, compute_stats


def format_latency(seconds: float) -> str:
    # Microsecond resolution.
    return f"{seconds * 1000:.3f}ms"


def render_report(config: RunConfig, result: AggregateResult, stats: Stats | None = None) -> str:
    if stats is None:
        stats = compute_stats(result)
    lines = [
        "",
        "--- loadprobe results ---",
        f"Target:       {config.method} {config.url}",
        f"Duration:     {result.duration_sec:.3f}s",
        f"Concurrency:  {config.concurrency}",
        "",
        f"Requests:     {result.total} total, {result.succeeded} succeeded, {result.failed} failed",
        "",
        "Latency:",
        f"  Average:    {format_latency(stats.average)}",
        f"  P50:        {format_latency(stats.p50)}",
        f"  P90:        {format_latency(stats.p90)}",
        f"  P99:        {format_latency(stats.p99)}",
        "",
        f"Throughput:   {stats.rps:.2f} req/s",
    ]
    if result.status_codes:
        lines.append("Status codes:")
        for code, count in sorted(result.status_codes.items()):
            lines.append(f"  [{code}]        {count}")
        lines.append("")
    if result.errors:
        lines.append("Errors:")
        for message, count in sorted(result.errors.items(), key=lambda item: (-item[1], item[0])):
            lines.append(f"  ({count}) {message}")
        lines.append("")
    return "\n".join(lines) + "\n"


def print_report(config: RunConfig, result: AggregateResult, stream: TextIO | None = None) -> None:
    (stream or sys.stdout).write(render_report(config, result))
