"""Tests for structlog configuration."""

import json
import logging

import pytest
import structlog

from timebill.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self):
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("timebill").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self):
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("timebill").level == logging.WARNING

    def test_human_mode_output(self):
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("timebill.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("timebill.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "timebill.test"
        assert "timestamp" in parsed

    def test_ledger_logs_are_structured(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("timebill.domain.ledger").info("Logged %s hours", 2)

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Logged 2 hours"
        assert parsed["level"] == "info"
        assert parsed["logger"] == "timebill.domain.ledger"

    def test_quiet_mode_hides_info(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=False, log_json=True)

        logging.getLogger("timebill.domain.ledger").info("Created invoice")

        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("sqlalchemy.engine").debug("SELECT 1")
        logging.getLogger("fpdf.output").debug("font subsetting")
        logging.getLogger("fontTools.subset").info("glyphs retained")
        logging.getLogger("PIL.PngImagePlugin").debug("STREAM b'IHDR'")

        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self):
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_context_is_bound_to_records(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=True, log_json=True, context={"command": "invoice"})

        logging.getLogger("timebill.render.base").info("Wrote invoice %s", "INV-001")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Wrote invoice INV-001"
        assert parsed["command"] == "invoice"

    def test_context_is_reset_between_runs(self, capfd: pytest.CaptureFixture[str]):
        configure_logging(verbose=True, log_json=True, context={"command": "log"})
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("timebill.domain.ledger").info("Logged time")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert "command" not in parsed
