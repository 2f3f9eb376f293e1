import random
from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from lupus_manager.domain.game import MIN_PLAYER_COUNT, GameSession
from lupus_manager.domain.player import Player
from lupus_manager.domain.roles import ROLES, UNASSIGNED_ROLE, is_known_role, resolve_role
from lupus_manager.domain.value_objects import FailureReason, Role, ValidationFailure

# --- 参加者管理 ---


def add_player(game: GameSession, name: str) -> GameSession:
    """プレイヤーを末尾に追加する。前後の空白を除いて空なら何もしない。"""
    name = name.strip()
    if not name:
        return game

    player = Player(id=game.next_player_id, name=name)
    return replace(game, players=game.players + (player,), next_player_id=game.next_player_id + 1)


def remove_player(game: GameSession, player_id: int) -> GameSession:
    """プレイヤーを削除する。存在しない ID は無視する。開始前後どちらでも可。"""
    if game.find_player(player_id) is None:
        return game
    players = tuple(p for p in game.players if p.id != player_id)
    return replace(game, players=players, revealed=game.revealed - {player_id})


def start_game(game: GameSession) -> tuple[GameSession, ValidationFailure | None]:
    """ゲームを開始する。開始済みなら何もしない。

    必要人数は game.required_players に従うため、can_start と結果が一致する。

    Args:
        game: 現在のセッション

    Returns:
        (セッション, 検証失敗) のタプル。成功時の検証失敗は None
    """
    if game.started:
        return game, None
    if not game.can_start:
        required = game.required_players
        return game, ValidationFailure(
            reason=FailureReason.INSUFFICIENT_PLAYERS,
            message=f"ゲーム開始には {required} 人以上のプレイヤーが必要です",
        )
    return replace(game, started=True), None


def reset_game(min_players: int = MIN_PLAYER_COUNT) -> GameSession:
    """新しいゲームのために、まっさらなセッションを返す。最少人数の設定は引き継ぐ。"""
    return GameSession(min_players=min_players)


# --- 配役 ---


def set_role_count(game: GameSession, role_id: str, count: int) -> tuple[GameSession, ValidationFailure | None]:
    """役職の要求数を設定する。負の値は 0 に丸める。未知の役職 ID は無視する。"""
    if not is_known_role(role_id):
        return game, ValidationFailure(reason=FailureReason.UNKNOWN_ROLE, message=f"未知の役職です: {role_id}")
    role_counts = dict(game.role_counts)
    role_counts[role_id] = max(0, count)
    return replace(game, role_counts=MappingProxyType(role_counts)), None


def build_role_pool(role_counts: Mapping[str, int]) -> list[Role]:
    """要求数どおりに役職を並べたリストを返す（レジストリ順）。"""
    pool: list[Role] = []
    for role in ROLES:
        pool.extend([role] * role_counts.get(role.id, 0))
    return pool


def shuffle_roles(roles: list[Role], rng: random.Random) -> None:
    """Fisher–Yates でリストをその場でシャッフルする。

    末尾から走査し、j は [0, i] の閉区間から一様に選ぶ。
    """
    for i in range(len(roles) - 1, 0, -1):
        j = rng.randint(0, i)
        roles[i], roles[j] = roles[j], roles[i]


def randomize_roles(
    game: GameSession, rng: random.Random | None = None
) -> tuple[GameSession, ValidationFailure | None]:
    """要求数に従って役職をランダムに配る。

    Args:
        game: 現在のセッション
        rng: テスト用の乱数生成器（None の場合は新規インスタンスを使用）

    Returns:
        (セッション, 検証失敗) のタプル。失敗時のセッションは変更されない
    """
    if not game.players:
        return game, ValidationFailure(
            reason=FailureReason.EMPTY_ROSTER,
            message="役職を割り当てる前にプレイヤーを追加してください",
        )

    requested = game.total_requested
    required = len(game.players)
    if requested != required:
        return game, ValidationFailure(
            reason=FailureReason.ROLE_COUNT_MISMATCH,
            message=f"選択された役職数 ({requested}) はプレイヤー数 ({required}) と一致する必要があります",
            requested=requested,
            required=required,
        )

    if rng is None:
        rng = random.Random()

    pool = build_role_pool(game.role_counts)
    shuffle_roles(pool, rng)

    players = tuple(
        p.with_role(pool[index] if index < len(pool) else UNASSIGNED_ROLE) for index, p in enumerate(game.players)
    )
    # 新しく配った役職は非公開から始める
    return replace(game, players=players, revealed=frozenset()), None


def assign_role_manually(game: GameSession, player_id: int, role_id: str) -> GameSession:
    """プレイヤーに役職を直接割り当てる。

    未知の役職 ID は UNASSIGNED_ROLE として扱う。生存チェックは行わない。
    """
    role = resolve_role(role_id)
    return game.map_players(player_id, lambda p: p.with_role(role))
