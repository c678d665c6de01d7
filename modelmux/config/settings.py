"""
Application settings and configuration.

This module centralizes all configuration for modelmux. Values come from
the process environment, with a ``.env`` file in the working directory
loaded first. Settings are read once at startup; the provider registry and
middleware list built from them are not changed afterwards.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from modelmux.config.model_catalog import DEFAULT_MODEL_NAME

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _optional_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value not in (None, "") else None


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value not in (None, "") else None


class Settings:
    """
    Application settings with environment variable support.

    Attributes:
        ENVIRONMENT: "development" or "production"
        LOG_LEVEL: Name of the logging threshold
        MIDDLEWARE: Ordered names of built-in middleware stages
        DEFAULT_MODEL: Model identifier used when none is given
        DEFAULT_TEMPERATURE: Temperature applied by the "defaults" stage
        DEFAULT_MAX_TOKENS: Max tokens applied by the "defaults" stage
        CACHE_MAX_ENTRIES: Capacity of the "cache" stage
        BLOCKED_TERMS: Terms rejected by the "guardrails" stage
        AWS_REGION: Region for the Bedrock provider
    """

    def __init__(self, load_env_file: bool = True):
        """Initialize application settings."""
        if load_env_file:
            load_dotenv()

        self.ENVIRONMENT = os.environ.get("MODELMUX_ENV", "production").lower()

        # Logging settings
        default_level = "DEBUG" if self.ENVIRONMENT == "development" else "WARNING"
        self.LOG_LEVEL = os.environ.get("MODELMUX_LOG_LEVEL", default_level).upper()

        # Model and middleware settings
        self.DEFAULT_MODEL = os.environ.get("MODELMUX_DEFAULT_MODEL", DEFAULT_MODEL_NAME)
        self.MIDDLEWARE = _split_list(os.environ.get("MODELMUX_MIDDLEWARE", "logging"))
        self.DEFAULT_TEMPERATURE = _optional_float(
            os.environ.get("MODELMUX_DEFAULT_TEMPERATURE")
        )
        self.DEFAULT_MAX_TOKENS = _optional_int(os.environ.get("MODELMUX_DEFAULT_MAX_TOKENS"))
        self.CACHE_MAX_ENTRIES = int(os.environ.get("MODELMUX_CACHE_MAX_ENTRIES", "256"))
        self.BLOCKED_TERMS = _split_list(os.environ.get("MODELMUX_BLOCKED_TERMS", ""))

        # Provider settings
        self.AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")

    @property
    def log_level(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        return _LOG_LEVELS.get(self.LOG_LEVEL, logging.WARNING)

    def get_all_settings(self) -> Dict[str, Any]:
        """
        Get all settings as a dictionary.

        Returns:
            dict: All settings
        """
        settings_dict = {}
        for attr in dir(self):
            if attr.isupper():
                settings_dict[attr] = getattr(self, attr)
        return settings_dict


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings.

    Returns:
        Settings: Application settings (created on first use)
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
