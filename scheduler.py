from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from config import load_config
from controller import EXIT_FATAL, EXIT_OK, run
from errors import ConfigError, MissingInputError, ReadError
from utils.logging_setup import LOGGER_NAME
from work_queue import resolve_work_queue


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the source feeder repeatedly on a fixed interval.")
    parser.add_argument("--config", default="config.yaml")
    parser.add_argument("--interval-seconds", type=int, default=24 * 60 * 60)
    parser.add_argument("--max-runs", type=int, default=None, help="Stop after this many runs (default: forever)")
    parser.add_argument("--skip-generation", action="store_true")
    parser.add_argument("--urls-file", default=None)
    parser.add_argument("--ledger-file", default=None)
    args = parser.parse_args()
    return run_forever(
        args.config,
        interval_seconds=args.interval_seconds,
        max_runs=args.max_runs,
        generate=not args.skip_generation,
        urls_file=args.urls_file,
        ledger_file=args.ledger_file,
    )


def run_forever(
    config_path: str,
    *,
    interval_seconds: float,
    generate: bool,
    max_runs: Optional[int] = None,
    urls_file: Optional[str] = None,
    ledger_file: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Call `run` until it fails or `max_runs` is reached.

    After each run the work queue is resolved again and the number of URLs
    still pending (failed, skipped, or newly listed) is logged.
    """
    logger = logging.getLogger(LOGGER_NAME)
    runs = 0
    while True:
        rc = run(config_path, dry_run=False, generate=generate, urls_file=urls_file, ledger_file=ledger_file)
        runs += 1
        if rc != EXIT_OK:
            logger.error("Run %s exited with %s; stopping", runs, rc)
            return rc

        try:
            pending = pending_count(config_path, urls_file=urls_file, ledger_file=ledger_file)
        except (ConfigError, MissingInputError, ReadError) as e:
            logger.error("Run %s: cannot resolve remaining URLs: %s", runs, e)
            return EXIT_FATAL

        if max_runs is not None and runs >= max_runs:
            logger.info("Run %s finished; %s URLs still pending; run limit reached", runs, pending)
            return EXIT_OK
        logger.info("Run %s finished; %s URLs still pending; next run in %ss", runs, pending, interval_seconds)
        sleep(interval_seconds)


def pending_count(config_path: str, *, urls_file: Optional[str] = None, ledger_file: Optional[str] = None) -> int:
    app_config = load_config(config_path)
    urls_path = Path(urls_file) if urls_file else app_config.input.urls_file
    ledger_path = Path(ledger_file) if ledger_file else app_config.input.ledger_file
    return len(resolve_work_queue(urls_path, ledger_path))


if __name__ == "__main__":
    raise SystemExit(main())
