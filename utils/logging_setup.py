from __future__ import annotations

import logging
from pathlib import Path


LOGGER_NAME = "notebookFeeder"


def setup_logging(log_dir: Path, *, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the run logger: everything to `run.log` and the console, and
    warnings and errors (failed submissions, unrecorded URLs) also to `errors.log`.

    Safe to call once per run in the same process; handlers from an earlier
    run are closed and replaced.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    console_fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S")

    run_handler = logging.FileHandler(log_dir / "run.log", encoding="utf-8")
    run_handler.setFormatter(file_fmt)

    errors_handler = logging.FileHandler(log_dir / "errors.log", encoding="utf-8")
    errors_handler.setFormatter(file_fmt)
    errors_handler.setLevel(logging.WARNING)

    console = logging.StreamHandler()
    console.setFormatter(console_fmt)

    for handler in (run_handler, errors_handler, console):
        logger.addHandler(handler)
    return logger
