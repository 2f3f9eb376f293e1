"""投票集計と脱落処理（ドメインサービス）。

ここでの操作は無条件に適用される。昼フェーズ限定・生存者限定といった
制約は呼び出し側（session.py）の責務。
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from lupus_manager.domain.player import Player
from lupus_manager.domain.value_objects import FailureReason, ValidationFailure

if TYPE_CHECKING:
    from lupus_manager.domain.game import GameSession


def find_leading_player(players: Iterable[Player]) -> Player | None:
    """生存者の中で単独最多得票のプレイヤーを返す。

    以下の場合は None:
        - 生存者がいない
        - 誰も得票していない
        - 最多得票が複数人で並んでいる（同票時は処刑なし、再投票は進行役に委ねる）

    Args:
        players: 集計対象のプレイヤー

    Returns:
        単独最多得票の生存プレイヤー。決着しなければ None
    """
    alive = [p for p in players if p.is_alive]
    if not alive:
        return None

    max_votes = max(p.votes for p in alive)
    if max_votes == 0:
        return None

    top_candidates = [p for p in alive if p.votes == max_votes]
    if len(top_candidates) != 1:
        return None
    return top_candidates[0]


def cast_vote(game: GameSession, player_id: int) -> GameSession:
    """対象プレイヤーの得票を1つ加算する。存在しない ID は無視する。"""
    return game.map_players(player_id, lambda p: p.voted())


def toggle_status(game: GameSession, player_id: int) -> GameSession:
    """生存状態を反転する（脱落 ⇔ 復活）。存在しない ID は無視する。

    脱落専用の操作ではないため、同じプレイヤーに二度呼ぶと生き返る点に注意。
    """
    return game.map_players(player_id, lambda p: p.status_toggled())


def eliminate_leading_player(game: GameSession) -> tuple[GameSession, ValidationFailure | None]:
    """単独最多得票の生存プレイヤーを脱落させる。

    toggle_status と異なり、対象は集計結果から決まり、常に脱落方向にしか動かない。

    Returns:
        (セッション, 検証失敗) のタプル。同票・無投票なら NO_LEADING_PLAYER で状態は変更されない
    """
    leader = find_leading_player(game.players)
    if leader is None:
        return game, ValidationFailure(
            reason=FailureReason.NO_LEADING_PLAYER,
            message="最多得票者が決まっていません（同票または無投票）",
        )
    return game.replace_player(leader, leader.killed()), None
