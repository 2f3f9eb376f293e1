import pytest

from lupus_manager.domain.roles import (
    ROLES,
    UNASSIGNED_ROLE,
    WEREWOLF,
    find_role,
    is_known_role,
    resolve_role,
    zero_role_counts,
)


class TestRegistry:
    def test_role_ids(self) -> None:
        assert [r.id for r in ROLES] == ["werewolf", "villager", "seer", "bodyguard"]

    def test_ids_are_unique(self) -> None:
        ids = [r.id for r in ROLES]
        assert len(set(ids)) == len(ids)

    def test_unassigned_not_in_registry(self) -> None:
        assert UNASSIGNED_ROLE not in ROLES
        assert not is_known_role(UNASSIGNED_ROLE.id)


class TestLookup:
    def test_find_role(self) -> None:
        assert find_role("werewolf") is WEREWOLF

    def test_find_role_unknown(self) -> None:
        assert find_role("medium") is None

    def test_find_role_sentinel_is_not_found(self) -> None:
        assert find_role("unassigned") is None

    def test_resolve_role_falls_back_to_unassigned(self) -> None:
        assert resolve_role("medium") is UNASSIGNED_ROLE
        assert resolve_role("werewolf") is WEREWOLF


class TestZeroRoleCounts:
    def test_every_role_is_zero(self) -> None:
        assert zero_role_counts() == {"werewolf": 0, "villager": 0, "seer": 0, "bodyguard": 0}

    def test_read_only(self) -> None:
        counts = zero_role_counts()
        with pytest.raises(TypeError):
            counts["werewolf"] = 3  # type: ignore[index]
        assert zero_role_counts()["werewolf"] == 0
