"""Membership domain events.

Domain events related to users joining, being promoted in, and leaving
groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MemberAdded:
    """Event raised when a membership is created.

    Attributes:
        group_id: The ULID of the group
        user_id: The ULID of the new member
        inviter_id: The ULID of the inviting user, if any
        admin: Whether the membership was created as admin
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    user_id: str
    inviter_id: str | None
    admin: bool
    occurred_at: datetime


@dataclass(frozen=True)
class MemberPromotedToAdmin:
    """Event raised when an existing member becomes an admin.

    Attributes:
        group_id: The ULID of the group
        user_id: The ULID of the promoted member
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    user_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class MemberRemoved:
    """Event raised when a membership is removed.

    Attributes:
        group_id: The ULID of the group
        user_id: The ULID of the removed member
        was_admin: Whether the member was an admin
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    user_id: str
    was_admin: bool
    occurred_at: datetime
