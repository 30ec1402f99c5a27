"""Protocol for group hierarchy observability.

Captures re-parenting, full name propagation and the archive cascade.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class GroupHierarchyProbe(Protocol):
    """Domain probe for group hierarchy operations."""

    def parent_set(self, group_id: str, parent_id: str) -> None:
        """Record that a group became a subgroup."""
        ...

    def parent_rejected(self, group_id: str, parent_id: str, reason: str) -> None:
        """Record that a parent assignment broke the hierarchy rules."""
        ...

    def full_name_propagated(self, group_id: str, subgroup_count: int) -> None:
        """Record that a rename was pushed down to subgroups."""
        ...

    def group_archived(
        self,
        group_id: str,
        discussions_archived: int,
        memberships_archived: int,
    ) -> None:
        """Record that one group of a cascade was archived."""
        ...


class DefaultGroupHierarchyProbe:
    """Default implementation of GroupHierarchyProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def parent_set(self, group_id: str, parent_id: str) -> None:
        """Record that a group became a subgroup."""
        self._logger.info("group_parent_set", group_id=group_id, parent_id=parent_id)

    def parent_rejected(self, group_id: str, parent_id: str, reason: str) -> None:
        """Record that a parent assignment broke the hierarchy rules."""
        self._logger.warning(
            "group_parent_rejected",
            group_id=group_id,
            parent_id=parent_id,
            reason=reason,
        )

    def full_name_propagated(self, group_id: str, subgroup_count: int) -> None:
        """Record that a rename was pushed down to subgroups."""
        self._logger.info(
            "group_full_name_propagated",
            group_id=group_id,
            subgroup_count=subgroup_count,
        )

    def group_archived(
        self,
        group_id: str,
        discussions_archived: int,
        memberships_archived: int,
    ) -> None:
        """Record that one group of a cascade was archived."""
        self._logger.info(
            "group_archived",
            group_id=group_id,
            discussions_archived=discussions_archived,
            memberships_archived=memberships_archived,
        )
