from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace

from lupus_manager.domain.player import Player
from lupus_manager.domain.roles import zero_role_counts
from lupus_manager.domain.value_objects import Phase
from lupus_manager.domain.voting import find_leading_player

MIN_PLAYER_COUNT = 3


@dataclass(frozen=True)
class GameSession:
    """ゲームセッション状態（集約ルート）

    派生値（生存者数・最多得票者・要求役職数の合計）はすべてプロパティで
    読み出しのたびに再計算する。role_counts は読み取り専用のマッピング。
    """

    players: tuple[Player, ...] = ()
    started: bool = False
    turn: int = 1
    phase: Phase = Phase.DAY
    role_counts: Mapping[str, int] = field(default_factory=zero_role_counts)
    revealed: frozenset[int] = frozenset()
    next_player_id: int = 1
    log: tuple[str, ...] = ()
    min_players: int = MIN_PLAYER_COUNT

    @property
    def alive_players(self) -> tuple[Player, ...]:
        return tuple(p for p in self.players if p.is_alive)

    @property
    def living_players_count(self) -> int:
        return len(self.alive_players)

    @property
    def required_players(self) -> int:
        """開始に必要な人数。設定値が 3 未満でも 3 人は必要。"""
        return max(self.min_players, MIN_PLAYER_COUNT)

    @property
    def can_start(self) -> bool:
        return len(self.players) >= self.required_players

    @property
    def total_requested(self) -> int:
        """要求された役職数の合計"""
        return sum(self.role_counts.values())

    @property
    def leading_player(self) -> Player | None:
        """昼フェーズの最多得票者。夜フェーズ・同票・無投票なら None。"""
        if self.phase != Phase.DAY:
            return None
        return find_leading_player(self.players)

    def is_revealed(self, player_id: int) -> bool:
        return player_id in self.revealed

    def find_player(self, player_id: int, *, alive_only: bool = False) -> "Player | None":
        """ID でプレイヤーを検索する。alive_only=True の場合は生存者のみ。"""
        players = self.alive_players if alive_only else self.players
        for p in players:
            if p.id == player_id:
                return p
        return None

    def replace_player(self, old: Player, new: Player) -> "GameSession":
        """プレイヤーを差し替えた新しい GameSession を返す"""
        players = tuple(new if p is old else p for p in self.players)
        return replace(self, players=players)

    def map_players(self, player_id: int, update: Callable[[Player], Player]) -> "GameSession":
        """指定 ID のプレイヤーに update を適用する。存在しなければそのまま返す。"""
        player = self.find_player(player_id)
        if player is None:
            return self
        return self.replace_player(player, update(player))

    def add_log(self, message: str) -> "GameSession":
        return replace(self, log=self.log + (message,))
