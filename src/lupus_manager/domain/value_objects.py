from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """フェーズ"""

    DAY = "day"
    NIGHT = "night"


class PlayerStatus(str, Enum):
    """生存状態"""

    ALIVE = "alive"
    DEAD = "dead"


class FailureReason(str, Enum):
    """コマンドが拒否された理由"""

    INSUFFICIENT_PLAYERS = "insufficient_players"
    EMPTY_ROSTER = "empty_roster"
    ROLE_COUNT_MISMATCH = "role_count_mismatch"
    UNKNOWN_ROLE = "unknown_role"
    GAME_NOT_STARTED = "game_not_started"
    NOT_DAY_PHASE = "not_day_phase"
    PLAYER_NOT_ALIVE = "player_not_alive"
    NO_LEADING_PLAYER = "no_leading_player"


@dataclass(frozen=True)
class Role:
    """役職定義。icon は描画側が解釈する不透明なタグ。"""

    id: str
    name: str
    description: str
    icon: str


@dataclass(frozen=True)
class ValidationFailure:
    """検証失敗の結果。状態は一切変更されていないことを表す。

    ROLE_COUNT_MISMATCH の場合のみ requested / required が設定される。
    """

    reason: FailureReason
    message: str
    requested: int | None = None
    required: int | None = None
