from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import Sequence

from loadprobe.config.models import ConfigError, RunConfig

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
# Longest units first so "ms" wins over "m".
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


@dataclass(frozen=True, slots=True)
class CliOptions:
    config: RunConfig
    log_level: str = "WARNING"
    log_file: str | None = None


def parse_duration(text: str) -> float:
    """Parse a duration such as ``250ms``, ``1.5s`` or ``1m30s`` into seconds."""
    value = text.strip()
    if value == "0":
        return 0.0
    sign = 1.0
    if value[:1] in ("+", "-"):
        sign = -1.0 if value[0] == "-" else 1.0
        value = value[1:]
    if not value:
        msg = f"invalid duration {text!r}"
        raise ConfigError(msg)
    total = 0.0
    pos = 0
    while pos < len(value):
        match = _COMPONENT.match(value, pos)
        if match is None:
            msg = f"invalid duration {text!r}"
            raise ConfigError(msg)
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadprobe",
        description="Drive concurrent HTTP load against a single target",
        exit_on_error=False,
    )
    parser.add_argument("--url", default="", help="Target URL to test (required)")
    parser.add_argument("--method", default="GET", help="HTTP method")
    parser.add_argument("--concurrency", type=int, default=10, help="Number of concurrent workers")
    parser.add_argument("--duration", default="10s", help="Test duration, e.g. 30s or 1m")
    parser.add_argument("--timeout", default="10s", help="Per-request timeout, e.g. 500ms")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (logs go to stderr)",
    )
    parser.add_argument("--log-file", default=None, help="Optional file to also write logs to")
    return parser


def parse_cli(argv: Sequence[str] | None = None) -> CliOptions:
    parser = build_parser()
    try:
        args, extras = parser.parse_known_args(argv)
    except argparse.ArgumentError as exc:
        raise ConfigError(str(exc)) from exc
    if extras:
        msg = f"unrecognized arguments: {' '.join(extras)}"
        raise ConfigError(msg)
    config = RunConfig(
        url=args.url,
        method=args.method,
        concurrency=args.concurrency,
        duration_sec=parse_duration(args.duration),
        timeout_sec=parse_duration(args.timeout),
    )
    config.validate()
    return CliOptions(config=config, log_level=args.log_level, log_file=args.log_file)


def parse_args(argv: Sequence[str] | None = None) -> RunConfig:
    return parse_cli(argv).config
