"""
Tests for application wiring and logging setup.
"""

from __future__ import annotations

import logging

import pytest

import main
from core.settings import Settings


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    return calls


class TestConfigureLogging:
    def test_create_app_configures_logging(self, monkeypatch: pytest.MonkeyPatch, basic_config_calls) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        main.create_app(Settings())
        assert basic_config_calls[0]["level"] == "DEBUG"

    def test_logging_is_configured_before_settings_load(
        self, monkeypatch: pytest.MonkeyPatch, basic_config_calls
    ) -> None:
        order: list[str] = []
        monkeypatch.setattr(main, "configure_logging", lambda: order.append("logging"))
        monkeypatch.setattr(main.settings, "load_settings", lambda: order.append("settings") or Settings())
        main.create_app()
        assert order == ["logging", "settings"]

    def test_unknown_level_falls_back_to_info(self, monkeypatch: pytest.MonkeyPatch, basic_config_calls) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        main.configure_logging()
        assert basic_config_calls[0]["level"] == "INFO"
