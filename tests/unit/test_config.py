"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from hextactics.config import Settings, get_settings
from hextactics.domain.enums import Side


def test_defaults():
    settings = Settings(_env_file=None)

    assert (settings.board_cols, settings.board_rows) == (100, 80)
    assert settings.hex_size == 35.0
    assert settings.structure_sight_range == 3
    assert settings.ai_action_delay_seconds == 0.6
    assert settings.ai_followup_delay_seconds == 0.3
    assert settings.vision_side == Side.FRIENDLY
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HEXTACTICS_BOARD_COLS", "20")
    monkeypatch.setenv("HEXTACTICS_VISION_SIDE", "hostile")

    settings = Settings(_env_file=None)

    assert settings.board_cols == 20
    assert settings.vision_side == Side.HOSTILE


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, board_cols=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ai_action_delay_seconds=-1)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
