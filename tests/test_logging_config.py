# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest
from unittest.mock import patch

from src.config.logging_config import ROOT_LOGGER_NAME, setup_logging


def _stream_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
    ]


class TestLoggingConfig(unittest.TestCase):
    """setup_logging handler wiring."""

    def setUp(self) -> None:
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._reset()

    def tearDown(self) -> None:
        self._reset()

    def _reset(self) -> None:
        for handler in self.root_logger.handlers:
            handler.close()
        self.root_logger.handlers.clear()

    def test_creates_run_file_in_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent.name, "logs")
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_captures_debug(self) -> None:
        setup_logging()
        file_handlers = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_defaults_to_warning(self) -> None:
        with patch("src.config.settings.Settings.CONSOLE_LOG_LEVEL", "WARNING"):
            setup_logging()
        handlers = _stream_handlers(self.root_logger)
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)

    def test_console_level_from_settings(self) -> None:
        with patch("src.config.settings.Settings.CONSOLE_LOG_LEVEL", "info"):
            setup_logging()
        self.assertEqual(
            _stream_handlers(self.root_logger)[0].level, logging.INFO
        )

    def test_unknown_console_level_falls_back(self) -> None:
        with patch("src.config.settings.Settings.CONSOLE_LOG_LEVEL", "LOUD"):
            setup_logging()
        self.assertEqual(
            _stream_handlers(self.root_logger)[0].level, logging.WARNING
        )

    def test_console_false_is_file_only(self) -> None:
        """TUI runs must not write to stderr."""
        setup_logging(console=False)
        self.assertEqual(_stream_handlers(self.root_logger), [])
        self.assertEqual(len(self.root_logger.handlers), 1)

    def test_repeated_calls_reuse_file(self) -> None:
        first = setup_logging()
        count = len(self.root_logger.handlers)
        second = setup_logging()
        self.assertEqual(first, second)
        self.assertEqual(count, len(self.root_logger.handlers))

    def test_child_loggers_propagate(self) -> None:
        setup_logging()
        child = logging.getLogger(f"{ROOT_LOGGER_NAME}.api")
        self.assertTrue(child.propagate)
        self.assertEqual(child.getEffectiveLevel(), logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
