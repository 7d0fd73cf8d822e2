"""Tests for the typed AppConfig dataclass."""

import dataclasses
from datetime import date

import pytest

from totd_bot.config import AppConfig, NadeoConfig


class TestNadeoConfig:
    def test_defaults_unconfigured(self):
        c = NadeoConfig()
        assert c.live_token == ""
        assert c.is_configured is False

    def test_needs_live_and_core(self):
        assert NadeoConfig(live_token="a").is_configured is False
        assert NadeoConfig(live_token="a", core_token="b").is_configured is True


class TestAppConfig:
    def test_defaults(self):
        c = AppConfig()
        assert c.port == 3000
        assert c.totd_schedule == "0 13 * * *"
        assert c.timezone == "UTC"
        assert c.epoch_start == date(2020, 7, 1)
        assert c.leaderboard_max_page == 1000
        assert isinstance(c.nadeo, NadeoConfig)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("APP_ID", "app1")
        monkeypatch.setenv("DISCORD_API_BASE", "https://discord.test/api/")
        monkeypatch.setenv("TOTD_CHANNEL_ID", "42")
        monkeypatch.setenv("TOTD_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("NADEO_LIVE_TOKEN", "live")
        c = AppConfig.from_env()
        assert c.port == 8080
        assert c.app_id == "app1"
        assert c.discord_api_base == "https://discord.test/api"
        assert c.totd_channel_id == "42"
        assert c.timezone == "Europe/Paris"
        assert c.nadeo.live_token == "live"

    def test_endpoints(self):
        c = AppConfig(app_id="app1", totd_channel_id="42")
        assert c.webhook_endpoint("tok") == "webhooks/app1/tok/messages/@original"
        assert c.totd_channel_endpoint() == "channels/42/messages"
