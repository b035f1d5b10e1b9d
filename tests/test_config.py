import tempfile
import unittest
from pathlib import Path

from config import load_config, load_credentials_from_env
from errors import ConfigError


class TestConfig(unittest.TestCase):
    def test_load_config_parses_expected_schema(self) -> None:
        try:
            import yaml  # noqa: F401
        except Exception:
            raise unittest.SkipTest("PyYAML not installed")

        with tempfile.TemporaryDirectory() as d:
            cfg = Path(d) / "config.yaml"
            cfg.write_text(
                """
notebook:
  url: https://notebooklm.google.com/notebook/abc
input:
  urls_file: data/urls.txt
  ledger_file: data/.processed_urls.txt
output:
  dir: out
  log_dir: out/logs
  run_report_json: report.json
  run_report_csv: report.csv
browser:
  headless: false
  action_timeout_seconds: 12
  run_timeout_seconds: 60
  poll_interval_seconds: 0.25
selectors:
  url_input: "textarea[aria-label='URL']"
generation:
  enabled: false
""".strip(),
                encoding="utf-8",
            )

            app = load_config(cfg)
            self.assertEqual(app.notebook.url, "https://notebooklm.google.com/notebook/abc")
            self.assertEqual(app.input.urls_file, Path("data/urls.txt"))
            self.assertEqual(app.input.ledger_file, Path("data/.processed_urls.txt"))
            self.assertEqual(app.output.log_dir, Path("out/logs"))
            self.assertEqual(app.output.run_report_csv, "report.csv")
            self.assertFalse(app.browser.headless)
            self.assertEqual(app.browser.window_width, 1920)
            self.assertEqual(app.browser.action_timeout_seconds, 12)
            self.assertEqual(app.browser.run_timeout_seconds, 60)
            self.assertEqual(app.browser.poll_interval_seconds, 0.25)
            self.assertEqual(app.selectors.url_input, "textarea[aria-label='URL']")
            self.assertEqual(app.selectors.add_source_button, "//button[contains(., 'Add source')]")
            self.assertFalse(app.generation.enabled)

    def test_empty_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            cfg = Path(d) / "config.yaml"
            cfg.write_text("", encoding="utf-8")
            app = load_config(cfg)
            self.assertEqual(app.notebook.url, "https://notebooklm.google.com")
            self.assertEqual(app.input.urls_file, Path("urls.txt"))
            self.assertEqual(app.input.ledger_file, Path(".processed_urls.txt"))
            self.assertEqual(app.browser.run_timeout_seconds, 300)
            self.assertTrue(app.generation.enabled)

    def test_load_config_rejects_non_positive_timeout(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            cfg = Path(d) / "config.yaml"
            cfg.write_text("browser:\n  run_timeout_seconds: 0\n", encoding="utf-8")
            with self.assertRaises(ConfigError) as ctx:
                load_config(cfg)
            self.assertIn("browser.run_timeout_seconds", str(ctx.exception))

    def test_load_config_rejects_unknown_selector(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            cfg = Path(d) / "config.yaml"
            cfg.write_text("selectors:\n  upload_button: '#x'\n", encoding="utf-8")
            with self.assertRaises(ValueError) as ctx:
                load_config(cfg)
            self.assertIn("upload_button", str(ctx.exception))

    def test_load_config_rejects_same_urls_and_ledger_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            cfg = Path(d) / "config.yaml"
            cfg.write_text("input:\n  urls_file: a.txt\n  ledger_file: a.txt\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(cfg)

    def test_missing_config_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(ConfigError):
                load_config(Path(d) / "missing.yaml")


class TestCredentials(unittest.TestCase):
    def test_credentials_from_env(self) -> None:
        creds = load_credentials_from_env({"GOOGLE_ACCESS_TOKEN": " at ", "GOOGLE_REFRESH_TOKEN": "rt"})
        self.assertEqual(creds.access_token, "at")
        self.assertEqual(creds.refresh_token, "rt")

    def test_refresh_token_is_optional(self) -> None:
        creds = load_credentials_from_env({"GOOGLE_ACCESS_TOKEN": "at"})
        self.assertEqual(creds.refresh_token, "")

    def test_missing_access_token_raises(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            load_credentials_from_env({"GOOGLE_REFRESH_TOKEN": "rt"})
        self.assertIn("GOOGLE_ACCESS_TOKEN", str(ctx.exception))

    def test_tokens_are_hidden_from_repr(self) -> None:
        creds = load_credentials_from_env({"GOOGLE_ACCESS_TOKEN": "secret-a", "GOOGLE_REFRESH_TOKEN": "secret-r"})
        self.assertNotIn("secret", repr(creds))
