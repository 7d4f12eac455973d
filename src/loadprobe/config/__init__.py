from __future__ import annotations

from loadprobe.config.models import ConfigError, HttpMethod, RunConfig
from loadprobe.config.parser import CliOptions, build_parser, parse_args, parse_cli, parse_duration

__all__ = [
    "CliOptions",
    "ConfigError",
    "HttpMethod",
    "RunConfig",
    "build_parser",
    "parse_args",
    "parse_cli",
    "parse_duration",
]
