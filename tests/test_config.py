"""設定読み込みのテスト。"""

import os
from unittest.mock import patch

import pytest

from lupus_manager.config import (
    DEFAULT_MAX_PLAYER_NAME_LENGTH,
    DEFAULT_MAX_SESSIONS,
    AppConfig,
    load_app_config,
)

_ENV_KEYS = ("LUPUS_MAX_SESSIONS", "LUPUS_MAX_PLAYER_NAME_LENGTH", "LUPUS_MIN_PLAYERS")


def _clean_env(**values: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    env.update(values)
    return env


class TestLoadAppConfig:
    def test_defaults(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = load_app_config()
        assert config == AppConfig()
        assert config.max_sessions == DEFAULT_MAX_SESSIONS
        assert config.max_player_name_length == DEFAULT_MAX_PLAYER_NAME_LENGTH
        assert config.min_players == 3

    def test_reads_env(self) -> None:
        env = _clean_env(LUPUS_MAX_SESSIONS="5", LUPUS_MAX_PLAYER_NAME_LENGTH=" 20 ", LUPUS_MIN_PLAYERS="6")
        with patch.dict(os.environ, env, clear=True):
            config = load_app_config()
        assert config == AppConfig(max_sessions=5, max_player_name_length=20, min_players=6)

    def test_empty_value_uses_default(self) -> None:
        with patch.dict(os.environ, _clean_env(LUPUS_MAX_SESSIONS="  "), clear=True):
            assert load_app_config().max_sessions == DEFAULT_MAX_SESSIONS

    def test_invalid_integer(self) -> None:
        with patch.dict(os.environ, _clean_env(LUPUS_MAX_SESSIONS="many"), clear=True):
            with pytest.raises(ValueError, match="LUPUS_MAX_SESSIONS"):
                load_app_config()

    def test_zero_sessions_rejected(self) -> None:
        with patch.dict(os.environ, _clean_env(LUPUS_MAX_SESSIONS="0"), clear=True):
            with pytest.raises(ValueError, match="1 以上"):
                load_app_config()

    def test_min_players_below_three_rejected(self) -> None:
        with patch.dict(os.environ, _clean_env(LUPUS_MIN_PLAYERS="2"), clear=True):
            with pytest.raises(ValueError, match="LUPUS_MIN_PLAYERS"):
                load_app_config()

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(AttributeError):
            config.max_sessions = 1  # type: ignore[misc]

