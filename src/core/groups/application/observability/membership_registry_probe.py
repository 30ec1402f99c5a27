"""Protocol for membership registry observability.

Defines the interface for domain probes that capture membership
lifecycle events: joins, promotions, removals and capacity refusals.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class MembershipRegistryProbe(Protocol):
    """Domain probe for membership registry operations."""

    def member_added(
        self, group_id: str, user_id: str, inviter_id: str | None
    ) -> None:
        """Record that a new membership was created."""
        ...

    def admin_promoted(self, group_id: str, user_id: str) -> None:
        """Record that a member became an admin."""
        ...

    def member_removed(self, group_id: str, user_id: str) -> None:
        """Record that a membership was removed."""
        ...

    def capacity_exceeded(
        self, group_id: str, max_size: int, member_count: int
    ) -> None:
        """Record that a join was refused because the group is full."""
        ...

    def batch_add_stopped(
        self, group_id: str, added_count: int, requested_count: int
    ) -> None:
        """Record that add_members stopped part way through its batch."""
        ...


class DefaultMembershipRegistryProbe:
    """Default implementation of MembershipRegistryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def member_added(
        self, group_id: str, user_id: str, inviter_id: str | None
    ) -> None:
        """Record that a new membership was created."""
        self._logger.info(
            "member_added",
            group_id=group_id,
            user_id=user_id,
            inviter_id=inviter_id,
        )

    def admin_promoted(self, group_id: str, user_id: str) -> None:
        """Record that a member became an admin."""
        self._logger.info("admin_promoted", group_id=group_id, user_id=user_id)

    def member_removed(self, group_id: str, user_id: str) -> None:
        """Record that a membership was removed."""
        self._logger.info("member_removed", group_id=group_id, user_id=user_id)

    def capacity_exceeded(
        self, group_id: str, max_size: int, member_count: int
    ) -> None:
        """Record that a join was refused because the group is full."""
        self._logger.warning(
            "group_capacity_exceeded",
            group_id=group_id,
            max_size=max_size,
            member_count=member_count,
        )

    def batch_add_stopped(
        self, group_id: str, added_count: int, requested_count: int
    ) -> None:
        """Record that add_members stopped part way through its batch."""
        self._logger.warning(
            "member_batch_add_stopped",
            group_id=group_id,
            added_count=added_count,
            requested_count=requested_count,
        )
