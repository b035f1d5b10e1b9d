from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator


_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


@dataclass(frozen=True)
class BrowserClient:
    headless: bool = True
    window_width: int = 1920
    window_height: int = 1080
    timeout_ms: int = 30_000

    @contextmanager
    def open_page(self) -> Iterator[Any]:
        try:
            from playwright.sync_api import sync_playwright  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError(
                "Playwright is not installed. Install with `pip install playwright` and "
                "`python -m playwright install chromium`."
            ) from e

        with sync_playwright() as p:  # pragma: no cover
            browser = p.chromium.launch(headless=self.headless, args=_CHROMIUM_ARGS)
            try:
                context = browser.new_context(
                    viewport={"width": self.window_width, "height": self.window_height},
                )
                page = context.new_page()
                page.set_default_timeout(self.timeout_ms)
                yield page
            finally:
                browser.close()
