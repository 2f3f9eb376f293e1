from lupus_manager.domain.game import GameSession
from lupus_manager.domain.player import Player
from lupus_manager.domain.roles import ROLES, UNASSIGNED_ROLE
from lupus_manager.domain.value_objects import FailureReason, Phase, PlayerStatus, Role, ValidationFailure

__all__ = [
    "ROLES",
    "UNASSIGNED_ROLE",
    "FailureReason",
    "GameSession",
    "Phase",
    "Player",
    "PlayerStatus",
    "Role",
    "ValidationFailure",
]
