from __future__ import annotations

from loadprobe.loadgen.client import build_client, describe_error
from loadprobe.loadgen.engine import QUEUE_SLACK, run, run_load
from loadprobe.loadgen.worker import DEADLINE_EXCEEDED, deliver, run_worker

__all__ = [
    "DEADLINE_EXCEEDED",
    "QUEUE_SLACK",
    "build_client",
    "deliver",
    "describe_error",
    "run",
    "run_load",
    "run_worker",
]
