"""Group domain events.

Domain events related to group lifecycle: creation, renaming,
visibility changes, setup completion and archival.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GroupCreated:
    """Event raised when a new group is created.

    Attributes:
        group_id: The ULID of the created group
        parent_id: The ULID of the parent group, if this is a subgroup
        name: The group name
        full_name: The derived full name at creation time
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    parent_id: str | None
    name: str
    full_name: str
    occurred_at: datetime


@dataclass(frozen=True)
class GroupDetailsChanged:
    """Event raised when a group's name or description changes.

    Carries the searchable fields so the search indexer can reindex the
    group without loading it.

    Attributes:
        group_id: The ULID of the group
        name: The new name
        full_name: The recomputed full name
        description: The current description
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    name: str
    full_name: str
    description: str | None
    occurred_at: datetime


@dataclass(frozen=True)
class GroupVisibilityChanged:
    """Event raised when a group's visibility term changes.

    Attributes:
        group_id: The ULID of the group
        old_visibility: The previous visibility term
        new_visibility: The new visibility term
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    old_visibility: str
    new_visibility: str
    occurred_at: datetime


@dataclass(frozen=True)
class GroupSetupCompleted:
    """Event raised when a group is marked as set up.

    Attributes:
        group_id: The ULID of the group
        occurred_at: When the event occurred (UTC)
    """

    group_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class GroupArchived:
    """Event raised when a group is archived.

    Raised once per group in an archive cascade, parent first.

    Attributes:
        group_id: The ULID of the archived group
        parent_id: The ULID of the parent group, if this is a subgroup
        occurred_at: The archive timestamp shared by the whole cascade
    """

    group_id: str
    parent_id: str | None
    occurred_at: datetime
