"""Membership entity for the groups context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from groups.domain.value_objects import GroupId, MembershipId, UserId


@dataclass
class Membership:
    """The join between a user and a group, carrying role and archival state.

    Memberships are created through MembershipRegistry (which calls
    create()) so that find-or-create stays idempotent per (group, user).
    """

    id: MembershipId
    group_id: GroupId
    user_id: UserId
    inviter_id: UserId | None = None
    admin: bool = False
    archived_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        group_id: GroupId,
        user_id: UserId,
        inviter_id: UserId | None = None,
    ) -> Membership:
        """Create a new non-admin membership with a generated id."""
        return cls(
            id=MembershipId.generate(),
            group_id=group_id,
            user_id=user_id,
            inviter_id=inviter_id,
        )

    def make_admin(self) -> bool:
        """Promote the member to admin.

        Returns:
            True if the member was promoted, False if already an admin
        """
        if self.admin:
            return False
        self.admin = True
        return True

    def archive(self, at: datetime) -> None:
        self.archived_at = at

    def is_archived(self) -> bool:
        return self.archived_at is not None
