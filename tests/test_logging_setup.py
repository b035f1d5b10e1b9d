import logging
import tempfile
import unittest
from pathlib import Path

from utils.logging_setup import setup_logging


class TestSetupLogging(unittest.TestCase):
    def test_warnings_also_go_to_errors_log(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            log_dir = Path(d) / "logs"
            logger = setup_logging(log_dir)
            logger.info("Adding source: https://a")
            logger.warning("Could not mark URL as processed: https://b")
            for handler in list(logger.handlers):
                handler.flush()

            run_log = (log_dir / "run.log").read_text(encoding="utf-8")
            errors_log = (log_dir / "errors.log").read_text(encoding="utf-8")
            self.assertIn("https://a", run_log)
            self.assertIn("https://b", run_log)
            self.assertNotIn("https://a", errors_log)
            self.assertIn("WARNING", errors_log)
            self.assertIn("https://b", errors_log)

            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

    def test_repeated_setup_replaces_handlers(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            first = setup_logging(Path(d) / "one")
            second = setup_logging(Path(d) / "two", level=logging.WARNING)
            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), 3)
            self.assertEqual(second.level, logging.WARNING)
            files = {Path(h.baseFilename).parent.name for h in second.handlers if isinstance(h, logging.FileHandler)}
            self.assertEqual(files, {"two"})

            for handler in list(second.handlers):
                second.removeHandler(handler)
                handler.close()
