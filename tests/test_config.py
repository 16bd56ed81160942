import json
import logging

import pytest
from pydantic import ValidationError

from sms_parser.config import Settings
from sms_parser.logging_config import ServiceJsonFormatter, setup_logging


class TestSettings:
    def test_defaults(self, settings):
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.dedup_window_minutes == 5
        assert settings.dedup_unidentified_window_seconds == 60
        assert settings.recurring_min_occurrences == 3
        assert settings.recurring_amount_tolerance == pytest.approx(0.05)
        assert settings.recurring_interval_tolerance == pytest.approx(0.20)
        assert settings.parse_workers == 1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SMS_PARSER_DEDUP_WINDOW_MINUTES", "10")
        monkeypatch.setenv("SMS_PARSER_LOG_JSON", "true")
        monkeypatch.setenv("SMS_PARSER_PARSE_WORKERS", "4")

        settings = Settings(_env_file=None)

        assert settings.dedup_window_minutes == 10
        assert settings.log_json is True
        assert settings.parse_workers == 4

    @pytest.mark.parametrize(
        "field, value",
        [
            ("SMS_PARSER_PARSE_WORKERS", "0"),
            ("SMS_PARSER_RECURRING_MIN_OCCURRENCES", "1"),
            ("SMS_PARSER_RECURRING_AMOUNT_TOLERANCE", "1.5"),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, field, value):
        monkeypatch.setenv(field, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestLogging:
    def test_json_output(self, capsys):
        setup_logging("DEBUG", json_output=True, service_name="sms-parser-test")
        logging.getLogger("sms_parser.test").info("sync finished")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "sync finished"
        assert record["name"] == "sms_parser.test"
        assert record["level"] == "INFO"
        assert record["service"] == "sms-parser-test"
        assert "timestamp" in record

    def test_text_output(self, capsys):
        setup_logging("INFO")
        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, ServiceJsonFormatter)

        logging.getLogger("sms_parser.test").debug("hidden")
        logging.getLogger("sms_parser.test").warning("shown")
        out = capsys.readouterr().out
        assert "shown" in out
        assert "hidden" not in out
