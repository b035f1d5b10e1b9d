from __future__ import annotations

import os
from pathlib import Path

from errors import ReadError, WriteError


def read_ledger(path: Path) -> set[str]:
    """
    Return the set of URLs recorded in the processed ledger.

    A ledger that does not exist yet is an empty ledger (first run). Any other
    failure to open or scan the file raises ReadError.
    """
    try:
        f = path.open("r", encoding="utf-8")
    except FileNotFoundError:
        return set()
    except OSError as e:
        raise ReadError(f"Cannot open ledger {path}: {e}") from e

    with f:
        try:
            return {line.strip() for line in f if line.strip()}
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Error reading ledger {path}: {e}") from e


def mark_processed(path: Path, url: str) -> None:
    """
    Append `url` to the ledger as one line, durable before returning.

    A ledger whose last line has no terminator (hand-edited, older tools) gets
    one first, in the same write, so neither URL is glued onto the other.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("ab+") as f:
            line = f"{url}\n"
            if f.seek(0, os.SEEK_END) > 0:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    line = "\n" + line
            f.write(line.encode("utf-8"))
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        raise WriteError(f"Cannot append to ledger {path}: {e}") from e
