"""アプリケーション設定の管理。

環境変数からセッション数上限などの設定を読み込み、バリデーションを行う。
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from lupus_manager.domain.game import MIN_PLAYER_COUNT

DEFAULT_MAX_SESSIONS = 100
DEFAULT_MAX_PLAYER_NAME_LENGTH = 50


@dataclass(frozen=True)
class AppConfig:
    """アプリケーション設定を保持する値オブジェクト。"""

    max_sessions: int = DEFAULT_MAX_SESSIONS
    max_player_name_length: int = DEFAULT_MAX_PLAYER_NAME_LENGTH
    min_players: int = MIN_PLAYER_COUNT


def _read_int(name: str, default: int, minimum: int) -> int:
    value_str = os.environ.get(name, "").strip()
    if not value_str:
        return default
    try:
        value = int(value_str)
    except ValueError:
        raise ValueError(f"{name} の値が不正です: {value_str!r}")
    if value < minimum:
        raise ValueError(f"{name} は {minimum} 以上で指定してください: {value}")
    return value


def load_app_config() -> AppConfig:
    """環境変数から AppConfig を生成する。

    環境変数:
        LUPUS_MAX_SESSIONS: 同時に保持するセッション数の上限（デフォルト: 100）
        LUPUS_MAX_PLAYER_NAME_LENGTH: プレイヤー名の最大文字数（デフォルト: 50）
        LUPUS_MIN_PLAYERS: ゲーム開始に必要な最少人数（デフォルト: 3、3 未満は不可）

    Raises:
        ValueError: 値が整数でない、または下限を下回る場合
    """
    return AppConfig(
        max_sessions=_read_int("LUPUS_MAX_SESSIONS", DEFAULT_MAX_SESSIONS, 1),
        max_player_name_length=_read_int("LUPUS_MAX_PLAYER_NAME_LENGTH", DEFAULT_MAX_PLAYER_NAME_LENGTH, 1),
        min_players=_read_int("LUPUS_MIN_PLAYERS", MIN_PLAYER_COUNT, MIN_PLAYER_COUNT),
    )
