"""
Configuration module for the Kong plugin operator.

Loads configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class KongConfig:
    """Kong Admin API connection configuration."""

    admin_url: str = "http://localhost:8001"
    timeout: int = 10  # seconds
    verify_tls: bool = True
    admin_token: str = field(default="", repr=False)  # Never log token

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            admin_url=os.getenv("KONG_ADMIN_URL", "http://localhost:8001").rstrip("/"),
            timeout=int(os.getenv("KONG_ADMIN_TIMEOUT", "10")),
            verify_tls=os.getenv("KONG_ADMIN_VERIFY_TLS", "true").lower() == "true",
            admin_token=os.getenv("KONG_ADMIN_TOKEN", ""),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=os.getenv(
                "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
        )


@dataclass
class Config:
    """Main configuration object."""

    kong: KongConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            kong=KongConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            kong=KongConfig(),
            logging=LoggingConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
