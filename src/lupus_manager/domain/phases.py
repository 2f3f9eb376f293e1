from dataclasses import replace

from lupus_manager.domain.game import GameSession
from lupus_manager.domain.value_objects import Phase


def advance_phase(game: GameSession) -> GameSession:
    """フェーズを進める。昼→夜はターン据え置き、夜→昼でターン +1。

    どちらの遷移でも全員の得票を 0 に戻し、公開中の役職をすべて隠す。
    """
    if game.phase == Phase.DAY:
        phase, turn = Phase.NIGHT, game.turn
    else:
        phase, turn = Phase.DAY, game.turn + 1

    players = tuple(p.with_votes_cleared() for p in game.players)
    return replace(game, players=players, phase=phase, turn=turn, revealed=frozenset())
