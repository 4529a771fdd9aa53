"""Unit tests for config.py - Configuration management."""

import os
from unittest.mock import patch

import config
from config import (
    Config,
    KongConfig,
    LoggingConfig,
    get_config,
    load_config,
    reset_config,
)


class TestKongConfig:
    """Tests for KongConfig class."""

    def test_default_values(self):
        """Test default configuration values."""
        cfg = KongConfig()
        assert cfg.admin_url == "http://localhost:8001"
        assert cfg.timeout == 10
        assert cfg.verify_tls is True
        assert cfg.admin_token == ""

    def test_from_env(self):
        """Test loading configuration from environment variables."""
        env_vars = {
            "KONG_ADMIN_URL": "https://kong.internal:8444/",
            "KONG_ADMIN_TIMEOUT": "30",
            "KONG_ADMIN_VERIFY_TLS": "false",
            "KONG_ADMIN_TOKEN": "s3cret",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            cfg = KongConfig.from_env()
        assert cfg.admin_url == "https://kong.internal:8444"
        assert cfg.timeout == 30
        assert cfg.verify_tls is False
        assert cfg.admin_token == "s3cret"

    def test_from_env_defaults(self):
        """Test that defaults are used when env vars not set."""
        with patch.dict(os.environ, {}, clear=True):
            cfg = KongConfig.from_env()
        assert cfg.admin_url == "http://localhost:8001"
        assert cfg.verify_tls is True

    def test_token_not_in_repr(self):
        """Test that the admin token is not exposed in repr."""
        cfg = KongConfig(admin_token="secret123")
        assert "secret123" not in repr(cfg)


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        cfg = LoggingConfig()
        assert cfg.level == "INFO"
        assert "%(message)s" in cfg.format

    def test_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            cfg = LoggingConfig.from_env()
        assert cfg.level == "DEBUG"


class TestConfig:
    """Tests for the main Config object and singleton helpers."""

    def test_default(self):
        cfg = Config.default()
        assert isinstance(cfg.kong, KongConfig)
        assert isinstance(cfg.logging, LoggingConfig)

    def test_load_config_singleton(self):
        with patch.dict(os.environ, {"KONG_ADMIN_URL": "http://kong:8001"}, clear=True):
            first = load_config()
            second = get_config()
        assert first is second
        assert first.kong.admin_url == "http://kong:8001"

    def test_reset_config(self):
        load_config()
        assert config.config is not None
        reset_config()
        assert config.config is None
