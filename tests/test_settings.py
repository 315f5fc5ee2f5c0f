"""
Tests for environment-driven settings and startup preconditions.
"""

import logging

import pytest

import main
from discord_mcp.config.settings import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DISCORD_TOKEN", "API_KEY", "ALLOWED_GUILDS", "ALLOWED_CHANNELS", "ALLOWED_ORIGINS",
                 "API_HOST", "API_PORT", "MIN_REQUEST_INTERVAL_MS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.discord_token is None
        assert settings.api_key is None
        assert settings.auth_enabled is False
        assert settings.allowed_guilds == []
        assert settings.allowed_channels == []
        assert settings.allowed_origins == []
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 8000
        assert settings.min_request_interval == pytest.approx(0.1)
        assert settings.log_level == "INFO"

    def test_parses_environment(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "token")
        clean_env.setenv("API_KEY", "secret")
        clean_env.setenv("ALLOWED_GUILDS", "1, 2,,3")
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
        clean_env.setenv("MIN_REQUEST_INTERVAL_MS", "250")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.require_token() == "token"
        assert settings.auth_enabled is True
        assert settings.allowed_guilds == [1, 2, 3]
        assert settings.allowed_origins == ["https://a.example", "https://b.example"]
        assert settings.min_request_interval == pytest.approx(0.25)
        assert settings.log_level == "DEBUG"

    def test_blank_token_counts_as_missing(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "   ")
        assert Settings().require_token() is None


class TestMain:

    def test_exits_with_one_without_token(self, clean_env):
        clean_env.setattr(main, "settings", Settings())
        assert main.main() == 1

    def test_exits_with_one_on_startup_failure(self, clean_env):
        clean_env.setenv("DISCORD_TOKEN", "token")
        clean_env.setattr(main, "settings", Settings())

        def broken_server(token):
            raise RuntimeError("login failed")

        clean_env.setattr(main, "DiscordMCPServer", broken_server)
        assert main.main() == 1

    @pytest.mark.parametrize("name, level", [
        ("DEBUG", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("LOUD", logging.INFO),
        ("", logging.INFO),
    ])
    def test_log_level_resolution(self, name, level):
        assert main.resolve_log_level(name) == level

    def test_unknown_log_level_does_not_break_settings(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "loud")
        assert main.resolve_log_level(Settings().log_level) == logging.INFO
