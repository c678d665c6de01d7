"""
Unit tests for application settings and the model catalog.
"""

import logging
from unittest.mock import patch

import pytest

from modelmux.config.model_catalog import DEFAULT_MODEL_NAME, get_model_entry, list_models
from modelmux.config.providers.registry import build_default_registry
from modelmux.config.settings import Settings


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, clean_env):
        settings = Settings(load_env_file=False)

        assert settings.ENVIRONMENT == "production"
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.MIDDLEWARE == ["logging"]
        assert settings.DEFAULT_MODEL == DEFAULT_MODEL_NAME
        assert settings.DEFAULT_TEMPERATURE is None
        assert settings.DEFAULT_MAX_TOKENS is None
        assert settings.CACHE_MAX_ENTRIES == 256
        assert settings.BLOCKED_TERMS == []
        assert settings.AWS_REGION == "us-east-1"

    def test_development_logs_debug(self, clean_env):
        with patch.dict("os.environ", {"MODELMUX_ENV": "development"}):
            settings = Settings(load_env_file=False)

        assert settings.log_level == logging.DEBUG

    def test_environment_overrides(self, clean_env):
        with patch.dict(
            "os.environ",
            {
                "MODELMUX_LOG_LEVEL": "info",
                "MODELMUX_MIDDLEWARE": "logging, cache ,defaults",
                "MODELMUX_DEFAULT_TEMPERATURE": "0.2",
                "MODELMUX_DEFAULT_MAX_TOKENS": "512",
                "MODELMUX_CACHE_MAX_ENTRIES": "16",
                "MODELMUX_BLOCKED_TERMS": "password,ssn",
                "AWS_REGION": "eu-west-1",
            },
        ):
            settings = Settings(load_env_file=False)

        assert settings.log_level == logging.INFO
        assert settings.MIDDLEWARE == ["logging", "cache", "defaults"]
        assert settings.DEFAULT_TEMPERATURE == 0.2
        assert settings.DEFAULT_MAX_TOKENS == 512
        assert settings.CACHE_MAX_ENTRIES == 16
        assert settings.BLOCKED_TERMS == ["password", "ssn"]
        assert settings.AWS_REGION == "eu-west-1"

    def test_empty_middleware_list(self, clean_env):
        with patch.dict("os.environ", {"MODELMUX_MIDDLEWARE": ""}):
            assert Settings(load_env_file=False).MIDDLEWARE == []

    def test_unknown_log_level_falls_back(self, clean_env):
        with patch.dict("os.environ", {"MODELMUX_LOG_LEVEL": "LOUD"}):
            assert Settings(load_env_file=False).log_level == logging.WARNING

    def test_get_all_settings(self, clean_env):
        all_settings = Settings(load_env_file=False).get_all_settings()

        assert all_settings["MIDDLEWARE"] == ["logging"]
        assert "log_level" not in all_settings


class TestModelCatalog:
    """Test the static model catalog."""

    def test_default_model_in_catalog(self):
        assert get_model_entry(DEFAULT_MODEL_NAME) is not None

    def test_unknown_entry(self):
        assert get_model_entry("no-such-model") is None

    @pytest.mark.parametrize("entry", list_models(), ids=lambda e: e.id)
    def test_every_identifier_resolves(self, entry):
        """Test that catalog identifiers match a registered provider."""
        match = build_default_registry().match(entry.api_identifier)

        assert match.model_name
        namespace = entry.api_identifier.split(":")[0]
        assert match.is_default == (namespace not in ("anthropic", "bedrock"))
