"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
outcomes of the group use cases.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(
        self, group_id: str, name: str, parent_id: str | None
    ) -> None:
        """Record that a group was created."""
        ...

    def group_creation_failed(self, name: str, error: str) -> None:
        """Record that group creation failed."""
        ...

    def group_renamed(self, group_id: str, name: str, full_name: str) -> None:
        """Record that a group was renamed."""
        ...

    def visibility_changed(self, group_id: str, visibility: str) -> None:
        """Record that a group's visibility was set."""
        ...

    def cascade_archived(self, group_id: str) -> None:
        """Record that an archive cascade committed."""
        ...

    def membership_race_resolved(self, group_id: str, user_id: str) -> None:
        """Record that a concurrent find-or-create was resolved by re-reading."""
        ...

    def event_publication_failed(self, event_type: str, error: str) -> None:
        """Record that a committed domain event could not be published."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def group_created(
        self, group_id: str, name: str, parent_id: str | None
    ) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            parent_id=parent_id,
        )

    def group_creation_failed(self, name: str, error: str) -> None:
        """Record that group creation failed."""
        self._logger.error("group_creation_failed", name=name, error=error)

    def group_renamed(self, group_id: str, name: str, full_name: str) -> None:
        """Record that a group was renamed."""
        self._logger.info(
            "group_renamed", group_id=group_id, name=name, full_name=full_name
        )

    def visibility_changed(self, group_id: str, visibility: str) -> None:
        """Record that a group's visibility was set."""
        self._logger.info(
            "group_visibility_changed", group_id=group_id, visibility=visibility
        )

    def cascade_archived(self, group_id: str) -> None:
        """Record that an archive cascade committed."""
        self._logger.info("group_cascade_archived", group_id=group_id)

    def membership_race_resolved(self, group_id: str, user_id: str) -> None:
        """Record that a concurrent find-or-create was resolved by re-reading."""
        self._logger.info(
            "membership_race_resolved", group_id=group_id, user_id=user_id
        )

    def event_publication_failed(self, event_type: str, error: str) -> None:
        """Record that a committed domain event could not be published."""
        self._logger.error(
            "domain_event_publication_failed", event_type=event_type, error=error
        )
