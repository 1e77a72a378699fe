"""
Tests for configuration, settings and message rendering.
"""

import logging

import pytest
from pydantic import ValidationError

from tycoon.config import EngineSettings, GameConfig, configure_logging, get_engine_settings
from tycoon.messages import Messages, format_funds


def test_default_config():
    config = GameConfig()

    assert config.starting_funds == 1500
    assert config.pass_start_bonus == 200
    assert config.jail_fine == 50
    assert config.max_logs == 6


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("TYCOON_STARTING_FUNDS", "2000")
    monkeypatch.setenv("TYCOON_JAIL_FINE", "75")
    monkeypatch.setenv("TYCOON_LOG_LEVEL", "debug")

    settings = EngineSettings()
    config = GameConfig.from_settings(settings)

    assert settings.log_level == "DEBUG"
    assert config.starting_funds == 2000
    assert config.jail_fine == 75
    assert config.pass_start_bonus == 200


def test_settings_validate_ranges(monkeypatch):
    monkeypatch.setenv("TYCOON_MAX_LOGS", "0")
    with pytest.raises(ValidationError):
        EngineSettings()


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("TYCOON_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        EngineSettings()


def test_configure_logging(monkeypatch):
    monkeypatch.setenv("TYCOON_LOG_LEVEL", "INFO")
    get_engine_settings.cache_clear()
    try:
        configure_logging()
        assert logging.getLogger("tycoon").level == logging.INFO
    finally:
        get_engine_settings.cache_clear()
        logging.getLogger("tycoon").setLevel(logging.NOTSET)


def test_format_funds():
    assert format_funds(1500) == "ZC 1,500"
    assert format_funds(25) == "ZC 25"


def test_messages_render_and_translate():
    assert Messages().render("roll", name="Alice", a=2, b=3) == "Alice rolled 2 and 3."

    custom = Messages({"roll": "{name} a lancé {a} et {b}."})
    assert custom.render("roll", name="Alice", a=2, b=3) == "Alice a lancé 2 et 3."
    assert custom.render("purchase_declined") == "Purchase declined."


def test_messages_fall_back_to_key():
    messages = Messages()
    assert messages.render("no_such_message") == "no_such_message"
    assert messages.render("roll", name="Alice") == "roll"


def test_rolling_log_is_bounded(ctx, two_player_game):
    logs = two_player_game.logs
    for i in range(10):
        logs = ctx.log(logs, "received", name="Alice", amount=format_funds(i))

    assert len(logs) == ctx.config.max_logs
    assert logs[-1] == "Alice received ZC 9."
