from __future__ import annotations

from pathlib import Path
from typing import Iterable

from errors import MissingInputError, ReadError
from utils.ledger import read_ledger


def read_candidate_lines(path: Path) -> list[str]:
    try:
        f = path.open("r", encoding="utf-8")
    except OSError as e:
        raise MissingInputError(f"Cannot open URLs file {path}: {e}") from e

    with f:
        try:
            return [line.rstrip("\n") for line in f]
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Error reading URLs file {path}: {e}") from e


def candidate_urls(lines: Iterable[str]) -> list[str]:
    """Trimmed candidate URLs in file order, without blanks and `#` comments.

    Duplicates are kept: a URL listed twice is submitted twice.
    """
    out: list[str] = []
    for line in lines:
        url = line.strip()
        if not url or url.startswith("#"):
            continue
        out.append(url)
    return out


def resolve_work_queue(candidates_path: Path, ledger_path: Path) -> list[str]:
    candidates = candidate_urls(read_candidate_lines(candidates_path))
    processed = read_ledger(ledger_path)
    return [url for url in candidates if url not in processed]
