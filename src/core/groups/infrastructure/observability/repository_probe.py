"""Domain probes for groups repository operations.

Following Domain-Oriented Observability patterns, these probes capture
storage events that matter to the group rules: saves, misses, and
uniqueness violations on memberships.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: str, is_new: bool) -> None:
        """Record that a group was successfully saved."""
        ...

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was not found."""
        ...


class MembershipRepositoryProbe(Protocol):
    """Domain probe for membership repository operations."""

    def membership_added(self, group_id: str, user_id: str) -> None:
        """Record that a membership row was inserted."""
        ...

    def duplicate_membership(self, group_id: str, user_id: str) -> None:
        """Record that an insert hit the (group, user) uniqueness constraint."""
        ...

    def membership_removed(self, group_id: str, user_id: str) -> None:
        """Record that a membership row was deleted."""
        ...

    def memberships_archived(self, group_id: str, count: int) -> None:
        """Record that a group's memberships were archived."""
        ...


class DefaultGroupRepositoryProbe:
    """Default implementation of GroupRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def group_saved(self, group_id: str, is_new: bool) -> None:
        self._logger.info("group_saved", group_id=group_id, is_new=is_new)

    def group_not_found(self, group_id: str) -> None:
        self._logger.debug("group_not_found", group_id=group_id)


class DefaultMembershipRepositoryProbe:
    """Default implementation of MembershipRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def membership_added(self, group_id: str, user_id: str) -> None:
        self._logger.debug("membership_added", group_id=group_id, user_id=user_id)

    def duplicate_membership(self, group_id: str, user_id: str) -> None:
        self._logger.warning(
            "duplicate_membership", group_id=group_id, user_id=user_id
        )

    def membership_removed(self, group_id: str, user_id: str) -> None:
        self._logger.debug("membership_removed", group_id=group_id, user_id=user_id)

    def memberships_archived(self, group_id: str, count: int) -> None:
        self._logger.info("memberships_archived", group_id=group_id, count=count)
