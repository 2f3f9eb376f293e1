"""役職レジストリ。

ゲームで使用可能な役職の静的カタログと、未割当を表す番兵役職を定義する。
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from lupus_manager.domain.value_objects import Role

WEREWOLF = Role(
    id="werewolf",
    name="人狼",
    description="夜に村人を一人襲撃する。",
    icon="moon",
)
VILLAGER = Role(
    id="villager",
    name="村人",
    description="人狼を見つけ出して処刑しよう。",
    icon="user",
)
SEER = Role(
    id="seer",
    name="占い師",
    description="夜に一人のプレイヤーの役職を知ることができる。",
    icon="eye",
)
BODYGUARD = Role(
    id="bodyguard",
    name="狩人",
    description="夜に一人のプレイヤーを襲撃から守ることができる。",
    icon="shield",
)

ROLES: tuple[Role, ...] = (WEREWOLF, VILLAGER, SEER, BODYGUARD)

UNASSIGNED_ROLE = Role(
    id="unassigned",
    name="未割当",
    description="このプレイヤーに役職を割り当ててください。",
    icon="ghost",
)

_ROLES_BY_ID: dict[str, Role] = {role.id: role for role in ROLES}


def find_role(role_id: str) -> Role | None:
    """ID で役職を検索する。レジストリにない ID（番兵含む）は None。"""
    return _ROLES_BY_ID.get(role_id)


def resolve_role(role_id: str) -> Role:
    """ID で役職を解決する。未知の ID は UNASSIGNED_ROLE にフォールバックする。"""
    return _ROLES_BY_ID.get(role_id, UNASSIGNED_ROLE)


def is_known_role(role_id: str) -> bool:
    return role_id in _ROLES_BY_ID


def zero_role_counts() -> Mapping[str, int]:
    """全役職の要求数を 0 で初期化した読み取り専用マッピングを返す。"""
    return MappingProxyType({role.id: 0 for role in ROLES})
