"""Tests for logging setup."""

import json
import logging

from semantic_forms.logs import LOGGER_NAME, disable_logging, enable_logging, logger, setup_logging
from semantic_forms.reflection.sqla import SQLAlchemyReflector

from conftest import Author


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler_writes_json_lines(self, tmp_path):
        """Test records are written as one JSON object per line."""
        path = tmp_path / "forms.jsonl"
        setup_logging(console=False, file_path=str(path))
        logger.info("rendered form")
        for handler in logger.handlers:
            handler.flush()

        record = json.loads(path.read_text().splitlines()[0])
        assert record["message"] == "rendered form"
        assert record["level"] == "INFO"
        assert record["logger"] == LOGGER_NAME

    def test_verbose_level(self):
        setup_logging(console=True, verbose=True)
        assert logger.level == logging.DEBUG
        setup_logging(console=True)
        assert logger.level == logging.INFO

    def test_handlers_are_replaced(self):
        """Test repeated setup does not stack handlers."""
        setup_logging(console=True)
        setup_logging(console=True)
        managed = [h for h in logger.handlers if getattr(h, "_semantic_forms", False)]
        assert len(managed) == 1

    def test_disable_and_enable(self):
        disable_logging()
        assert logger.disabled
        enable_logging()
        assert not logger.disabled


class TestWarnings:
    """Tests for logged warnings."""

    def test_find_all_without_session(self, caplog):
        """Test loading records without a session logs a warning."""
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            assert SQLAlchemyReflector().find_all(Author) == []
        assert "No session configured" in caplog.text
