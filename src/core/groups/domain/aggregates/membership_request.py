"""MembershipRequest entity for the groups context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from groups.domain.value_objects import GroupId, MembershipRequestId, UserId


@dataclass
class MembershipRequest:
    """A request to join a group, by a known user or by email.

    The request stays pending until a response is recorded. Turning an
    approved request into a Membership is the requesting flow's job.
    """

    id: MembershipRequestId
    group_id: GroupId
    user_id: UserId | None = None
    email: str | None = None
    response: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate that the requester is identified."""
        if self.user_id is None and not self.email:
            raise ValueError("A membership request needs a user_id or an email")

    def is_pending(self) -> bool:
        return self.response is None
