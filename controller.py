from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd
from dotenv import load_dotenv

from agents.base import BaseDriver
from agents.notebooklm import NotebookLMDriver
from config import Credentials, load_config, load_credentials_from_env
from errors import ConfigError, MissingInputError, ReadError, UIDriverError, WriteError
from models import OutcomeStatus, RunSummary, SubmissionOutcome
from utils.browser import BrowserClient
from utils.deadline import Deadline
from utils.ledger import mark_processed
from utils.logging_setup import LOGGER_NAME, setup_logging
from work_queue import resolve_work_queue


EXIT_OK = 0
EXIT_FATAL = 2


def main() -> int:
    parser = argparse.ArgumentParser(description="Add new URLs as notebook sources and generate an audio overview.")
    parser.add_argument("--config", default="config.yaml")
    parser.add_argument("--dry-run", action="store_true", help="List pending URLs without opening a browser")
    parser.add_argument("--skip-generation", action="store_true", help="Add sources but do not trigger generation")
    parser.add_argument("--urls-file", default=None, help="Override input.urls_file from the config")
    parser.add_argument("--ledger-file", default=None, help="Override input.ledger_file from the config")
    args = parser.parse_args()
    return run(
        args.config,
        dry_run=bool(args.dry_run),
        generate=not args.skip_generation,
        urls_file=args.urls_file,
        ledger_file=args.ledger_file,
    )


def run(
    config_path: str,
    *,
    dry_run: bool,
    generate: bool,
    urls_file: Optional[str] = None,
    ledger_file: Optional[str] = None,
) -> int:

    load_dotenv()
    try:
        app_config = load_config(config_path)
    except ConfigError as e:
        logging.getLogger(LOGGER_NAME).error("Configuration error: %s", e)
        return EXIT_FATAL

    logger = setup_logging(app_config.output.log_dir)

    urls_path = Path(urls_file) if urls_file else app_config.input.urls_file
    ledger_path = Path(ledger_file) if ledger_file else app_config.input.ledger_file

    credentials: Credentials | None = None
    if not dry_run:
        try:
            credentials = load_credentials_from_env()
        except ConfigError as e:
            logger.error("Configuration error: %s", e)
            return EXIT_FATAL

    try:
        queue = resolve_work_queue(urls_path, ledger_path)
    except (MissingInputError, ReadError) as e:
        logger.error("Error getting new URLs: %s", e)
        return EXIT_FATAL

    if not queue:
        logger.info("No new URLs to process")
        return EXIT_OK

    logger.info("Found %s new URLs to process", len(queue))

    if dry_run:
        for url in queue:
            logger.info("Pending: %s", url)
        return EXIT_OK

    if credentials is None:
        logger.error("Configuration error: no credentials loaded")
        return EXIT_FATAL

    deadline = Deadline(app_config.browser.run_timeout_seconds)
    client = BrowserClient(
        headless=_env_bool("HEADLESS", default=app_config.browser.headless),
        window_width=app_config.browser.window_width,
        window_height=app_config.browser.window_height,
        timeout_ms=int(app_config.browser.action_timeout_seconds * 1000),
    )

    try:
        with client.open_page() as page:
            driver = NotebookLMDriver(
                page,
                notebook=app_config.notebook,
                browser=app_config.browser,
                selectors=app_config.selectors,
                deadline=deadline,
                logger=logger,
            )
            try:
                driver.restore_session(credentials)
            except UIDriverError as e:
                logger.error("Error during login: %s", e)
                return EXIT_FATAL

            summary = submit_pending(
                queue,
                driver=driver,
                ledger_path=ledger_path,
                deadline=deadline,
                logger=logger,
                error_log_path=app_config.output.log_dir / "submission_errors.log",
            )

            if generate and app_config.generation.enabled:
                summary.generation_triggered = _trigger_generation(driver, summary=summary, deadline=deadline, logger=logger)
    except Exception as e:
        logger.exception("Browser session failed: %s", e)
        return EXIT_FATAL

    output_dir = app_config.output.dir
    _write_json(output_dir / app_config.output.run_report_json, summary)
    _write_csv(output_dir / app_config.output.run_report_csv, summary)

    logger.info(
        "Done. Found=%s Processed=%s Unrecorded=%s Failed=%s Skipped=%s Generation=%s",
        len(queue),
        summary.count("processed"),
        summary.count("unrecorded"),
        summary.count("failed"),
        summary.count("skipped"),
        "started" if summary.generation_triggered else "not started",
    )
    return EXIT_OK


def submit_pending(
    queue: list[str],
    *,
    driver: BaseDriver,
    ledger_path: Path,
    deadline: Deadline,
    logger,
    error_log_path: Optional[Path] = None,
) -> RunSummary:
    """
    Submit each queued URL in order and record successes in the ledger.

    The ledger is appended to only after the driver reports success. A driver
    failure or a ledger write failure affects only that URL. Once the deadline
    has elapsed the remaining URLs are skipped and stay eligible for the next run.
    """
    summary = RunSummary()
    for index, url in enumerate(queue, start=1):
        if deadline.expired():
            logger.warning("Run timeout elapsed; skipping %s remaining URLs", len(queue) - index + 1)
            for rest in queue[index - 1 :]:
                summary.outcomes.append(_outcome(rest, "skipped", "run timeout elapsed"))
            break

        logger.info("Processing %s/%s: %s", index, len(queue), url)
        try:
            driver.submit_source(url)
        except UIDriverError as e:
            logger.error("Error adding %s: %s", url, e)
            if error_log_path is not None:
                try:
                    _append_error_log(error_log_path, url, str(e))
                except OSError as log_err:
                    logger.warning("Could not write error log %s: %s", error_log_path, log_err)
            summary.outcomes.append(_outcome(url, "failed", str(e)))
            continue

        try:
            mark_processed(ledger_path, url)
        except WriteError as e:
            logger.warning("Could not mark URL as processed: %s", e)
            summary.outcomes.append(_outcome(url, "unrecorded", str(e)))
            continue

        summary.outcomes.append(_outcome(url, "processed", None))
    return summary


def _trigger_generation(driver: BaseDriver, *, summary: RunSummary, deadline: Deadline, logger) -> bool:
    if summary.submitted == 0:
        logger.info("No sources were added this run; skipping audio generation")
        return False
    if deadline.expired():
        logger.warning("Run timeout elapsed; skipping audio generation")
        return False
    try:
        driver.trigger_generation()
    except UIDriverError as e:
        logger.error("Error generating audio: %s", e)
        return False
    return True


def _outcome(url: str, status: OutcomeStatus, error: Optional[str]) -> SubmissionOutcome:
    return SubmissionOutcome(url=url, status=status, error=error, finished_at=datetime.now())


def _write_json(path: Path, summary: RunSummary) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "generation_triggered": summary.generation_triggered,
        "outcomes": [o.to_json_dict() for o in summary.outcomes],
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _write_csv(path: Path, summary: RunSummary) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([o.to_json_dict() for o in summary.outcomes])
    if df.empty:
        df = pd.DataFrame(columns=["url", "status", "error", "finished_at"])
    df.to_csv(path, index=False)


def _env_bool(key: str, *, default: bool) -> bool:
    val = os.environ.get(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _append_error_log(path: Path, url: str, message: str) -> None:
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8", errors="ignore") as f:
        f.write(f"{ts} {url} {message}\n")


if __name__ == "__main__":
    raise SystemExit(main())
