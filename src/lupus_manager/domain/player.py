from dataclasses import dataclass, field, replace

from lupus_manager.domain.roles import UNASSIGNED_ROLE
from lupus_manager.domain.value_objects import PlayerStatus, Role


@dataclass(frozen=True)
class Player:
    """プレイヤーエンティティ"""

    id: int
    name: str
    role: Role = field(default=UNASSIGNED_ROLE)
    status: PlayerStatus = field(default=PlayerStatus.ALIVE)
    votes: int = 0

    @property
    def is_alive(self) -> bool:
        return self.status == PlayerStatus.ALIVE

    def with_role(self, role: Role) -> "Player":
        return replace(self, role=role)

    def voted(self) -> "Player":
        """得票を1つ加算した新しいプレイヤーを返す"""
        return replace(self, votes=self.votes + 1)

    def with_votes_cleared(self) -> "Player":
        return replace(self, votes=0)

    def status_toggled(self) -> "Player":
        """生存状態を反転した新しいプレイヤーを返す。

        脱落と復活は同じ操作なので、二度呼ぶと元の状態に戻る。
        """
        status = PlayerStatus.DEAD if self.is_alive else PlayerStatus.ALIVE
        return replace(self, status=status)

    def killed(self) -> "Player":
        """脱落状態の新しいプレイヤーを返す"""
        return replace(self, status=PlayerStatus.DEAD)
