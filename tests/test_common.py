"""Tests for common utilities and configuration."""

import json
import logging

import pytest
from pydantic import ValidationError as SettingsValidationError

from config import Config
from shortlink.common.validators import normalize_url, clean_optional, is_valid_alias
from shortlink.common.logging_config import JSONFormatter, setup_logging


class TestNormalizeURL:
    """Test URL normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "http://example.com"),
            ("www.example.com", "http://www.example.com"),
            ("example.com/path?q=1", "http://example.com/path?q=1"),
            ("http://example.com", "http://example.com"),
            ("https://example.com", "https://example.com"),
            ("ftp://example.com", "http://ftp://example.com"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_url(raw) == expected

    def test_normalize_is_idempotent(self):
        once = normalize_url("example.com")
        assert normalize_url(once) == once


class TestValidators:
    """Test validation utilities."""

    def test_clean_optional(self):
        assert clean_optional(None) is None
        assert clean_optional("") is None
        assert clean_optional("   ") is None
        assert clean_optional("  promo ") == "promo"

    def test_valid_aliases(self):
        for alias in ("promo", "a", "test-code", "test_code", "ABC123", "summer.sale", "abc@123", "~me"):
            valid, error = is_valid_alias(alias)
            assert valid, error

    def test_invalid_aliases(self):
        valid, error = is_valid_alias("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_alias("a" * 65)
        assert not valid
        assert "at most" in error.lower()

        for alias in ("bad/alias", "has space", "tab\tx", "r?x", "a#b", "50%off", "nul\x00"):
            valid, _ = is_valid_alias(alias)
            assert not valid


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "shortlink.log"

        setup_logging(level="INFO")
        logger = setup_logging(level="DEBUG", log_file=str(log_file))

        assert logger.name == "shortlink"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logger.info("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()

    def test_json_formatter_escapes_messages(self):
        record = logging.LogRecord(
            name="shortlink.service",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg='Created short URL: %s -> %s',
            args=("promo", 'http://example.com/?q="x"'),
            exc_info=None,
        )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "shortlink.service"
        assert payload["message"] == 'Created short URL: promo -> http://example.com/?q="x"'


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "REDIS_URL", "SHORT_CODE_LENGTH", "RETENTION_DAYS", "CLEANUP_INTERVAL_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        config = Config(_env_file=None)

        assert config.short_code_length == 8
        assert config.retention_days == 7
        assert config.cleanup_interval_seconds == 86400
        assert config.redis_url is None
        assert config.database_url.startswith("postgresql://")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "memory://")
        monkeypatch.setenv("RETENTION_DAYS", "3")

        config = Config(_env_file=None)

        assert config.database_url == "memory://"
        assert config.retention_days == 3

    def test_rejects_odd_short_code_length(self):
        with pytest.raises(SettingsValidationError):
            Config(_env_file=None, short_code_length=7)

    @pytest.mark.parametrize("field", ["retention_days", "cleanup_interval_seconds", "request_timeout_seconds"])
    def test_rejects_non_positive_durations(self, field):
        with pytest.raises(SettingsValidationError):
            Config(_env_file=None, **{field: 0})
