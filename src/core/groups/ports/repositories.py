"""Repository protocols (ports) for the groups bounded context.

These are the storage collaborator's contract. Implementations must:
- enforce uniqueness of (group_id, user_id) for memberships and report a
  violation as DuplicateMembershipError, so find-or-create is race-safe
- maintain memberships_count atomically with membership creation and removal
- run inside the caller's transaction; the archive cascade in particular
  must be wrapped in a single transaction by the caller to be all-or-nothing
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from groups.domain.aggregates import (
    Group,
    Membership,
    MembershipRequest,
    Subscription,
    User,
)
from groups.domain.value_objects import DiscussionId, GroupId, MembershipId, UserId


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence."""

    def save(self, group: Group) -> None:
        """Persist a group aggregate.

        Creates a new group or updates an existing one. The denormalized
        counters are never written from the aggregate.

        Args:
            group: The Group aggregate to persist
        """
        ...

    def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID.

        Args:
            group_id: The unique identifier of the group

        Returns:
            The Group aggregate, or None if not found
        """
        ...

    def list_subgroups(
        self, parent_id: GroupId, include_archived: bool = False
    ) -> list[Group]:
        """List the direct subgroups of a group.

        Args:
            parent_id: The parent group
            include_archived: Whether archived subgroups are included

        Returns:
            Subgroups ordered by id (creation order)
        """
        ...

    def has_subgroups(self, group_id: GroupId) -> bool:
        """Whether any group (archived or not) names this group as parent."""
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Repository for Membership persistence and counter maintenance."""

    def add(self, membership: Membership) -> None:
        """Insert a new membership and increment the group's counter.

        Raises:
            DuplicateMembershipError: If (group_id, user_id) already exists
        """
        ...

    def save(self, membership: Membership) -> None:
        """Persist changes (admin flag, archival) to an existing membership."""
        ...

    def remove(self, membership_id: MembershipId) -> bool:
        """Delete a membership and decrement the group's counter.

        Returns:
            True if deleted, False if not found
        """
        ...

    def get(self, group_id: GroupId, user_id: UserId) -> Membership | None:
        """Retrieve the membership of a user in a group, if any."""
        ...

    def list_by_group(self, group_id: GroupId) -> list[Membership]:
        """List every membership of a group ordered by id."""
        ...

    def list_admins(self, group_id: GroupId) -> list[Membership]:
        """List admin memberships of a group ordered by user id."""
        ...

    def count_for_group(self, group_id: GroupId) -> int:
        """Return the current membership counter of a group."""
        ...

    def exists_with_email(self, group_id: GroupId, email: str) -> bool:
        """Whether a member of the group has the given email."""
        ...

    def archive_all_for_group(self, group_id: GroupId, at: datetime) -> int:
        """Set archived_at on every membership of the group.

        Returns:
            Number of memberships updated
        """
        ...


@runtime_checkable
class IMembershipRequestRepository(Protocol):
    """Read access to membership requests."""

    def exists_with_email(self, group_id: GroupId, email: str) -> bool:
        """Whether any request to join the group carries the given email."""
        ...

    def list_pending(self, group_id: GroupId) -> list[MembershipRequest]:
        """List requests that have no response yet, oldest first."""
        ...


@runtime_checkable
class IInvitationRepository(Protocol):
    """Read access to invitations sent on behalf of a group."""

    def count_pending(self, group_id: GroupId) -> int:
        """Count invitations neither accepted nor cancelled."""
        ...


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """Read access to subscriptions supplied by the billing collaborator."""

    def get_for_group(self, group_id: GroupId) -> Subscription | None:
        """Return the subscription of a top-level group, if any."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Read access to the user directory."""

    def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by id."""
        ...

    def get_many(self, user_ids: Sequence[UserId]) -> list[User]:
        """Retrieve the users that exist among ``user_ids``, in input order."""
        ...


@runtime_checkable
class IDiscussionRepository(Protocol):
    """The discussion collaborator as used by the archive cascade."""

    def list_ids_for_group(self, group_id: GroupId) -> list[DiscussionId]:
        """List ids of every discussion in the group."""
        ...

    def archive(self, discussion_id: DiscussionId, at: datetime) -> None:
        """Archive one discussion. Idempotent."""
        ...
