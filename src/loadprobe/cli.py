from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence

from loadprobe.config import ConfigError, parse_cli
from loadprobe.loadgen import run_load
from loadprobe.logging_config import setup_logging
from loadprobe.report import print_report

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        options = parse_cli(argv)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    setup_logging(level=options.log_level, log_file=options.log_file)
    config = options.config
    try:
        result = asyncio.run(run_load(config))
    except KeyboardInterrupt:
        logger.warning("Run interrupted")
        return 130

    try:
        print_report(config, result)
    except OSError as exc:
        print(f"error writing report: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
