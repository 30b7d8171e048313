"""Tests for jules_bridge/config/settings.py."""

from pathlib import Path

import pytest

from jules_bridge.config.settings import BridgeSettings, load_settings
from jules_bridge.exceptions import ConfigurationError


class TestBridgeSettings:
    def test_defaults(self, monkeypatch):
        for name in ("JULES_API_BASE_URL", "LOG_LEVEL", "WORKSPACE", "PR_BRANCH", "KEYRING_SERVICE"):
            monkeypatch.delenv(f"JULES_BRIDGE_{name}", raising=False)

        settings = BridgeSettings()

        assert settings.jules_api_base_url == "https://jules.googleapis.com"
        assert settings.github_api_base_url == "https://api.github.com"
        assert settings.keyring_service == "jules-bridge"
        assert settings.log_level == "WARNING"
        assert settings.workspace is None
        assert settings.pr_branch == "jules-branch"
        assert settings.pr_title == "Jules PR"
        assert settings.pr_body == "This is a PR created by Jules."

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("JULES_BRIDGE_JULES_API_BASE_URL", "https://jules.test/")
        monkeypatch.setenv("JULES_BRIDGE_LOG_LEVEL", "debug")
        monkeypatch.setenv("JULES_BRIDGE_WORKSPACE", str(tmp_path))

        settings = BridgeSettings()

        assert settings.jules_api_base_url == "https://jules.test"
        assert settings.log_level == "DEBUG"
        assert settings.workspace == Path(tmp_path)


class TestLoadSettings:
    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("JULES_BRIDGE_LOG_LEVEL", "INFO")

        assert load_settings(log_level=None).log_level == "INFO"

    def test_explicit_override_wins(self, monkeypatch):
        monkeypatch.setenv("JULES_BRIDGE_LOG_LEVEL", "INFO")

        assert load_settings(log_level="error").log_level == "ERROR"

    def test_invalid_value_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_settings(log_level="LOUD")
