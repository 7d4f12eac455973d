from __future__ import annotations

from loadprobe.report.text import format_latency, print_report, render_report

__all__ = ["format_latency", "print_report", "render_report"]
