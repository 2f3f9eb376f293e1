"""進行役セッション管理（インフラ層）。

インメモリ辞書で GameSession を保持し、リクエスト間で状態を引き継ぐ。
ドメイン層の操作は無条件に適用されるため、画面側の制約
（昼のみ投票可・生存者のみ役職変更可など）はこの層で検証する。
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field

from lupus_manager.domain.game import MIN_PLAYER_COUNT, GameSession
from lupus_manager.domain.phases import advance_phase
from lupus_manager.domain.roles import is_known_role
from lupus_manager.domain.services import (
    add_player,
    assign_role_manually,
    randomize_roles,
    remove_player,
    reset_game,
    set_role_count,
    start_game,
)
from lupus_manager.domain.value_objects import FailureReason, Phase, ValidationFailure
from lupus_manager.domain.visibility import hide_all, toggle_reveal
from lupus_manager.domain.voting import cast_vote, eliminate_leading_player, toggle_status

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100


class SessionLimitExceeded(Exception):
    """セッション数が上限に達した。"""


@dataclass
class ModeratorSession:
    """進行役セッション（可変オブジェクト）。

    handle_* 関数が game フィールドを差し替える。
    ドメイン層の frozen dataclass とは異なり、インフラ層のセッション管理として可変設計。
    """

    game_id: str
    game: GameSession = field(default_factory=GameSession)
    rng: random.Random = field(default_factory=random.Random)


class ModeratorSessionStore:
    """進行役セッションのインメモリストア。"""

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS, min_players: int = MIN_PLAYER_COUNT) -> None:
        self._sessions: dict[str, ModeratorSession] = {}
        self._max_sessions = max_sessions
        self._min_players = min_players

    def create(self, rng: random.Random | None = None) -> ModeratorSession:
        """空のロスターで新規セッションを作成する。

        Args:
            rng: テスト用の乱数生成器

        Raises:
            SessionLimitExceeded: セッション数が上限に達している場合
        """
        if len(self._sessions) >= self._max_sessions:
            raise SessionLimitExceeded(f"セッション数が上限 ({self._max_sessions}) に達しました")

        game_id = self._generate_unique_id()
        session = ModeratorSession(
            game_id=game_id,
            game=GameSession(min_players=self._min_players),
            rng=rng if rng is not None else random.Random(),
        )
        self._sessions[game_id] = session
        logger.info("セッション作成: game_id=%s (sessions=%d)", game_id, len(self._sessions))
        return session

    def _generate_unique_id(self) -> str:
        """衝突しない一意なゲームIDを生成する。"""
        for _ in range(10):
            game_id = uuid.uuid4().hex[:8]
            if game_id not in self._sessions:
                return game_id
        raise RuntimeError("Failed to generate unique game_id")

    def get(self, game_id: str) -> ModeratorSession | None:
        return self._sessions.get(game_id)

    def save(self, session: ModeratorSession) -> None:
        self._sessions[session.game_id] = session

    def delete(self, game_id: str) -> None:
        """セッションを削除する。存在しない ID は無視する。"""
        if self._sessions.pop(game_id, None) is not None:
            logger.info("セッション削除: game_id=%s", game_id)

    def list_sessions(self) -> dict[str, ModeratorSession]:
        """全セッションを返す。"""
        return dict(self._sessions)


# --- コマンド処理関数群 ---


def _reject(session: ModeratorSession, failure: ValidationFailure) -> ValidationFailure:
    logger.info("コマンド拒否: game_id=%s reason=%s", session.game_id, failure.reason.value)
    return failure


def _require_started(session: ModeratorSession) -> ValidationFailure | None:
    if session.game.started:
        return None
    return _reject(
        session,
        ValidationFailure(reason=FailureReason.GAME_NOT_STARTED, message="ゲームがまだ開始されていません"),
    )


def handle_add_player(session: ModeratorSession, name: str) -> None:
    """プレイヤーを追加する。空の名前は無視する。"""
    before = len(session.game.players)
    game = add_player(session.game, name)
    if len(game.players) == before:
        return
    added = game.players[-1]
    session.game = game.add_log(f"[追加] {added.name}")
    logger.debug("プレイヤー追加: game_id=%s id=%d name=%s", session.game_id, added.id, added.name)


def handle_remove_player(session: ModeratorSession, player_id: int) -> None:
    player = session.game.find_player(player_id)
    if player is None:
        return
    session.game = remove_player(session.game, player_id).add_log(f"[削除] {player.name}")
    logger.debug("プレイヤー削除: game_id=%s id=%d", session.game_id, player_id)


def handle_start_game(session: ModeratorSession) -> ValidationFailure | None:
    """ゲームを開始する。人数不足なら INSUFFICIENT_PLAYERS。"""
    if session.game.started:
        return None
    game, failure = start_game(session.game)
    if failure is not None:
        return _reject(session, failure)
    session.game = game.add_log("=== ゲーム開始 ===")
    logger.info("ゲーム開始: game_id=%s players=%d", session.game_id, len(game.players))
    return None


def handle_reset_game(session: ModeratorSession) -> None:
    """セッションを新しいゲームに置き換える。最少人数の設定は引き継ぐ。"""
    session.game = reset_game(min_players=session.game.min_players)
    logger.info("ゲームリセット: game_id=%s", session.game_id)


def handle_set_role_count(session: ModeratorSession, role_id: str, count: int) -> ValidationFailure | None:
    game, failure = set_role_count(session.game, role_id, count)
    if failure is not None:
        return _reject(session, failure)
    session.game = game
    return None


def handle_randomize_roles(session: ModeratorSession) -> ValidationFailure | None:
    """要求数どおりに役職をランダムに配る。配役内容はログに残さない。"""
    failure = _require_started(session)
    if failure is not None:
        return failure
    game, failure = randomize_roles(session.game, rng=session.rng)
    if failure is not None:
        return _reject(session, failure)
    session.game = game.add_log("[配役] 役職をランダムに割り当てた")
    logger.info("ランダム配役: game_id=%s players=%d", session.game_id, len(game.players))
    return None


def handle_assign_role(session: ModeratorSession, player_id: int, role_id: str) -> ValidationFailure | None:
    """役職を手動で割り当てる。脱落したプレイヤーの役職は変更できない。"""
    failure = _require_started(session)
    if failure is not None:
        return failure
    if not is_known_role(role_id):
        return _reject(
            session, ValidationFailure(reason=FailureReason.UNKNOWN_ROLE, message=f"未知の役職です: {role_id}")
        )
    player = session.game.find_player(player_id)
    if player is None:
        return None
    if not player.is_alive:
        return _reject(
            session,
            ValidationFailure(
                reason=FailureReason.PLAYER_NOT_ALIVE,
                message=f"{player.name} は脱落しているため役職を変更できません",
            ),
        )
    session.game = assign_role_manually(session.game, player_id, role_id).add_log(
        f"[配役] {player.name} の役職を変更した"
    )
    logger.debug("手動配役: game_id=%s id=%d role=%s", session.game_id, player_id, role_id)
    return None


def handle_vote(session: ModeratorSession, player_id: int) -> ValidationFailure | None:
    """昼フェーズに生存プレイヤーへ1票を投じる。"""
    failure = _require_started(session)
    if failure is not None:
        return failure
    if session.game.phase != Phase.DAY:
        return _reject(
            session, ValidationFailure(reason=FailureReason.NOT_DAY_PHASE, message="投票は昼フェーズのみ可能です")
        )
    player = session.game.find_player(player_id)
    if player is None:
        return None
    if not player.is_alive:
        return _reject(
            session,
            ValidationFailure(
                reason=FailureReason.PLAYER_NOT_ALIVE, message=f"{player.name} は脱落しているため投票できません"
            ),
        )
    game = cast_vote(session.game, player_id)
    voted = game.find_player(player_id)
    session.game = game.add_log(f"[投票] {player.name}（得票数: {voted.votes if voted else 0}）")
    return None


def handle_toggle_status(session: ModeratorSession, player_id: int) -> ValidationFailure | None:
    """脱落/復活を切り替える。"""
    failure = _require_started(session)
    if failure is not None:
        return failure
    player = session.game.find_player(player_id)
    if player is None:
        return None
    game = toggle_status(session.game, player_id)
    label = "[脱落]" if player.is_alive else "[復活]"
    session.game = game.add_log(f"{label} {player.name}")
    logger.info("%s game_id=%s id=%d name=%s", label, session.game_id, player_id, player.name)
    return None


def handle_eliminate_leader(session: ModeratorSession) -> ValidationFailure | None:
    """昼フェーズの投票結果に従い、最多得票者を脱落させる。

    対象はサーバー側の現在の集計から決めるため、同票・無投票なら
    NO_LEADING_PLAYER を返して誰も脱落させない。
    """
    failure = _require_started(session)
    if failure is not None:
        return failure
    if session.game.phase != Phase.DAY:
        return _reject(
            session, ValidationFailure(reason=FailureReason.NOT_DAY_PHASE, message="処刑は昼フェーズのみ可能です")
        )
    leader = session.game.leading_player
    game, failure = eliminate_leading_player(session.game)
    if failure is not None:
        return _reject(session, failure)
    if leader is None:
        return None
    session.game = game.add_log(f"[脱落] {leader.name}（得票数: {leader.votes}）")
    logger.info("[処刑] game_id=%s id=%d name=%s votes=%d", session.game_id, leader.id, leader.name, leader.votes)
    return None


def handle_advance_phase(session: ModeratorSession) -> ValidationFailure | None:
    """次のフェーズへ進める。"""
    failure = _require_started(session)
    if failure is not None:
        return failure
    game = advance_phase(session.game)
    label = "昼フェーズ" if game.phase == Phase.DAY else "夜フェーズ"
    session.game = game.add_log(f"--- Turn {game.turn} （{label}） ---")
    logger.info("フェーズ進行: game_id=%s turn=%d phase=%s", session.game_id, game.turn, game.phase.value)
    return None


def handle_toggle_reveal(session: ModeratorSession, player_id: int) -> None:
    session.game = toggle_reveal(session.game, player_id)


def handle_hide_all(session: ModeratorSession) -> None:
    session.game = hide_all(session.game)
