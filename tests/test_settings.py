# ABOUTME: Tests for the pydantic-settings configuration
# ABOUTME: Defaults, LANGRANK_ environment overrides and the cached global instance

from pathlib import Path

import pytest
from pydantic import ValidationError

from langrank.config import Config, get_config, reload_config


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        config = Config()

        assert config.headless is True
        assert config.source_timeout_seconds == 90.0
        assert config.navigation_attempts == 2
        assert config.output_path == Path("reports/language_rankings.pdf")
        assert config.report_title is None
        assert config.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LANGRANK_HEADLESS", "false")
        monkeypatch.setenv("LANGRANK_SOURCE_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("LANGRANK_REPORT_TITLE", "Languages 2024")

        config = Config()

        assert config.headless is False
        assert config.source_timeout_seconds == 30.0
        assert config.report_title == "Languages 2024"

    def test_timeout_must_be_positive(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LANGRANK_SOURCE_TIMEOUT_SECONDS", "0")

        with pytest.raises(ValidationError):
            Config()

    def test_get_config_is_cached_until_reload(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        first = reload_config()

        assert get_config() is first

        monkeypatch.setenv("LANGRANK_NAVIGATION_ATTEMPTS", "5")
        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.navigation_attempts == 5
        monkeypatch.delenv("LANGRANK_NAVIGATION_ATTEMPTS")
        reload_config()
