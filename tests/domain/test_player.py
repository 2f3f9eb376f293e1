import pytest

from lupus_manager.domain.player import Player
from lupus_manager.domain.roles import SEER, UNASSIGNED_ROLE
from lupus_manager.domain.value_objects import PlayerStatus


class TestPlayer:
    def test_creation_defaults(self) -> None:
        player = Player(id=1, name="Alice")
        assert player.name == "Alice"
        assert player.role is UNASSIGNED_ROLE
        assert player.status == PlayerStatus.ALIVE
        assert player.is_alive is True
        assert player.votes == 0

    def test_with_role(self) -> None:
        player = Player(id=1, name="Alice")
        updated = player.with_role(SEER)
        assert updated.role is SEER
        # 元のインスタンスは変更されない
        assert player.role is UNASSIGNED_ROLE

    def test_voted(self) -> None:
        player = Player(id=1, name="Alice").voted().voted()
        assert player.votes == 2

    def test_with_votes_cleared(self) -> None:
        player = Player(id=1, name="Alice", votes=4)
        assert player.with_votes_cleared().votes == 0

    def test_status_toggled(self) -> None:
        player = Player(id=1, name="Alice")
        dead = player.status_toggled()
        assert dead.status == PlayerStatus.DEAD
        assert dead.is_alive is False

    def test_status_toggled_twice_restores(self) -> None:
        player = Player(id=1, name="Alice")
        assert player.status_toggled().status_toggled().is_alive is True

    def test_killed_is_idempotent(self) -> None:
        player = Player(id=1, name="Alice")
        assert player.killed().status == PlayerStatus.DEAD
        assert player.killed().killed().is_alive is False

    def test_frozen(self) -> None:
        player = Player(id=1, name="Alice")
        with pytest.raises(AttributeError):
            player.votes = 3  # type: ignore[misc]
