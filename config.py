from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from errors import ConfigError


DEFAULT_NOTEBOOK_URL = "https://notebooklm.google.com"


@dataclass(frozen=True)
class NotebookConfig:
    url: str


@dataclass(frozen=True)
class InputConfig:
    urls_file: Path
    ledger_file: Path


@dataclass(frozen=True)
class OutputConfig:
    dir: Path
    log_dir: Path
    run_report_json: str
    run_report_csv: str


@dataclass(frozen=True)
class BrowserConfig:
    headless: bool
    window_width: int
    window_height: int
    action_timeout_seconds: float
    run_timeout_seconds: float
    poll_interval_seconds: float


@dataclass(frozen=True)
class SelectorConfig:
    add_source_button: str
    url_input: str
    confirm_add_button: str
    studio_button: str
    generate_button: str


@dataclass(frozen=True)
class GenerationConfig:
    enabled: bool


@dataclass(frozen=True)
class AppConfig:
    notebook: NotebookConfig
    input: InputConfig
    output: OutputConfig
    browser: BrowserConfig
    selectors: SelectorConfig
    generation: GenerationConfig


@dataclass(frozen=True)
class Credentials:
    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False, default="")


_DEFAULT_SELECTORS = {
    "add_source_button": "//button[contains(., 'Add source')]",
    "url_input": "input[type='url']",
    "confirm_add_button": "//button[normalize-space(.)='Add']",
    "studio_button": "//button[contains(., 'Studio')]",
    "generate_button": "//button[contains(., 'Generate')]",
}


def _require_dict(obj: Any, path: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigError(f"Expected mapping at {path}")
    return obj


def _positive(value: Any, path: str) -> float:
    try:
        num = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Expected a number at {path}") from e
    if num <= 0:
        raise ConfigError(f"Expected {path} to be positive")
    return num


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("Missing dependency PyYAML. Install with `pip install -e .`.") from e

    cfg_path = Path(path)
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {cfg_path}: {e}") from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e

    # An empty file means "all defaults".
    root = _require_dict(raw if raw is not None else {}, "root")

    notebook_raw = _require_dict(root.get("notebook", {}), "notebook")
    input_raw = _require_dict(root.get("input", {}), "input")
    output_raw = _require_dict(root.get("output", {}), "output")
    browser_raw = _require_dict(root.get("browser", {}), "browser")
    selectors_raw = _require_dict(root.get("selectors", {}), "selectors")
    generation_raw = _require_dict(root.get("generation", {}), "generation")

    notebook = NotebookConfig(url=str(notebook_raw.get("url", DEFAULT_NOTEBOOK_URL)).strip())
    if not notebook.url:
        raise ConfigError("Expected notebook.url to be non-empty")

    input_cfg = InputConfig(
        urls_file=Path(str(input_raw.get("urls_file", "urls.txt"))),
        ledger_file=Path(str(input_raw.get("ledger_file", ".processed_urls.txt"))),
    )
    if input_cfg.urls_file == input_cfg.ledger_file:
        raise ConfigError("input.urls_file and input.ledger_file must be different files")

    output = OutputConfig(
        dir=Path(str(output_raw.get("dir", "output"))),
        log_dir=Path(str(output_raw.get("log_dir", "logs"))),
        run_report_json=str(output_raw.get("run_report_json", "run_report.json")),
        run_report_csv=str(output_raw.get("run_report_csv", "run_report.csv")),
    )
    browser = BrowserConfig(
        headless=bool(browser_raw.get("headless", True)),
        window_width=int(browser_raw.get("window_width", 1920)),
        window_height=int(browser_raw.get("window_height", 1080)),
        action_timeout_seconds=_positive(browser_raw.get("action_timeout_seconds", 30), "browser.action_timeout_seconds"),
        run_timeout_seconds=_positive(browser_raw.get("run_timeout_seconds", 300), "browser.run_timeout_seconds"),
        poll_interval_seconds=_positive(browser_raw.get("poll_interval_seconds", 0.5), "browser.poll_interval_seconds"),
    )

    unknown = set(selectors_raw) - set(_DEFAULT_SELECTORS)
    if unknown:
        raise ConfigError(f"Unknown selectors: {', '.join(sorted(unknown))}")
    merged = {k: str(selectors_raw.get(k) or v) for k, v in _DEFAULT_SELECTORS.items()}
    selectors = SelectorConfig(**merged)

    generation = GenerationConfig(enabled=bool(generation_raw.get("enabled", True)))

    return AppConfig(
        notebook=notebook,
        input=input_cfg,
        output=output,
        browser=browser,
        selectors=selectors,
        generation=generation,
    )


def load_credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    env = os.environ if environ is None else environ
    access_token = env.get("GOOGLE_ACCESS_TOKEN", "").strip()
    refresh_token = env.get("GOOGLE_REFRESH_TOKEN", "").strip()
    if not access_token:
        raise ConfigError("Missing GOOGLE_ACCESS_TOKEN")
    return Credentials(access_token=access_token, refresh_token=refresh_token)
