from __future__ import annotations

import logging
from typing import Any

from agents.base import BaseDriver
from errors import UIDriverError
from utils.polling import wait_until
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config import BrowserConfig, Credentials, NotebookConfig, SelectorConfig
    from utils.deadline import Deadline


# Tokens are passed as evaluate() arguments, never formatted into the script.
_STORE_TOKENS_JS = """
([accessToken, refreshToken]) => {
  localStorage.setItem('access_token', accessToken);
  localStorage.setItem('refresh_token', refreshToken);
}
"""


class NotebookLMDriver(BaseDriver):
    def __init__(
        self,
        page: Any,
        *,
        notebook: "NotebookConfig",
        browser: "BrowserConfig",
        selectors: "SelectorConfig",
        deadline: "Deadline",
        logger: logging.Logger,
    ):
        super().__init__(logger=logger)
        self.page = page
        self.notebook = notebook
        self.browser = browser
        self.selectors = selectors
        self.deadline = deadline

    def restore_session(self, credentials: "Credentials") -> None:
        self.logger.info("Restoring session at %s", self.notebook.url)
        try:
            self.page.goto(self.notebook.url, wait_until="domcontentloaded", timeout=self._timeout_ms("open notebook"))
            self.page.evaluate(_STORE_TOKENS_JS, [credentials.access_token, credentials.refresh_token])
            self.page.reload(wait_until="domcontentloaded", timeout=self._timeout_ms("reload notebook"))
            self.page.wait_for_selector(
                self.selectors.add_source_button,
                state="visible",
                timeout=self._timeout_ms("wait for notebook"),
            )
        except UIDriverError:
            raise
        except Exception as e:
            raise UIDriverError(f"session restore failed: {type(e).__name__}: {e}") from e
        self.logger.info("Session restored")

    def submit_source(self, url: str) -> None:
        self.logger.info("Adding source: %s", url)
        sel = self.selectors
        try:
            self.page.click(sel.add_source_button, timeout=self._timeout_ms("open add-source dialog"))
            self.page.fill(sel.url_input, url, timeout=self._timeout_ms("enter URL"))
            self.page.click(sel.confirm_add_button, timeout=self._timeout_ms("confirm source"))
            # The dialog closes once the notebook has accepted the source.
            wait_until(
                lambda: not self.page.is_visible(sel.url_input),
                timeout_seconds=self._timeout_ms("wait for source") / 1000,
                interval_seconds=self.browser.poll_interval_seconds,
                description=f"source dialog to close for {url}",
            )
        except UIDriverError:
            raise
        except Exception as e:
            raise UIDriverError(f"failed to add {url}: {type(e).__name__}: {e}") from e
        self.logger.info("Added source: %s", url)

    def trigger_generation(self) -> None:
        self.logger.info("Triggering audio generation")
        sel = self.selectors
        try:
            self.page.click(sel.studio_button, timeout=self._timeout_ms("open studio"))
            self.page.click(sel.generate_button, timeout=self._timeout_ms("click generate"))
        except UIDriverError:
            raise
        except Exception as e:
            raise UIDriverError(f"failed to trigger generation: {type(e).__name__}: {e}") from e
        self.logger.info("Audio generation started")

    def _timeout_ms(self, step: str) -> int:
        if self.deadline.expired():
            raise UIDriverError(f"{step}: run timeout elapsed")
        return self.deadline.clamp_ms(self.browser.action_timeout_seconds)
