"""役職の表示状態（進行役画面での公開/非公開）の管理。

表示状態は役職の割り当て・投票・脱落のいずれにも影響しない。
"""

from dataclasses import replace

from lupus_manager.domain.game import GameSession

HIDDEN_ROLE_LABEL = "非公開"


def reveal(game: GameSession, player_id: int) -> GameSession:
    if game.find_player(player_id) is None:
        return game
    return replace(game, revealed=game.revealed | {player_id})


def hide(game: GameSession, player_id: int) -> GameSession:
    return replace(game, revealed=game.revealed - {player_id})


def toggle_reveal(game: GameSession, player_id: int) -> GameSession:
    if game.is_revealed(player_id):
        return hide(game, player_id)
    return reveal(game, player_id)


def hide_all(game: GameSession) -> GameSession:
    return replace(game, revealed=frozenset())
