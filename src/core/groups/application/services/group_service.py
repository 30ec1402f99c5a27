"""Group application service for the groups bounded context.

The "front door" for callers such as an API layer. Each use case loads
the aggregates it needs, delegates the rules to MembershipRegistry,
GroupHierarchy and the Group aggregate, and runs inside a single
database transaction. Domain events are published after the commit.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from groups.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from groups.application.services.group_hierarchy import GroupHierarchy
from groups.application.services.membership_registry import MembershipRegistry
from groups.domain.aggregates import (
    Group,
    GroupFieldLimits,
    Membership,
    MembershipRequest,
    User,
)
from groups.domain.exceptions import CapacityExceededError, NotFoundError
from groups.domain.value_objects import (
    DiscussionPrivacyOption,
    GroupId,
    UserId,
    Visibility,
)
from groups.ports.exceptions import DuplicateMembershipError
from groups.ports.publisher import DomainEventPublisher
from groups.ports.repositories import IGroupRepository, ISubscriptionRepository


class GroupService:
    """Application service exposing the group lifecycle operations.

    Manages database transactions; the archive cascade in particular runs
    as one transaction so it is all-or-nothing.
    """

    def __init__(
        self,
        session: Session,
        group_repository: IGroupRepository,
        subscription_repository: ISubscriptionRepository,
        registry: MembershipRegistry,
        hierarchy: GroupHierarchy,
        limits: GroupFieldLimits | None = None,
        default_max_size: int | None = None,
        publisher: DomainEventPublisher | None = None,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            subscription_repository: Read access to billing subscriptions
            registry: Membership rules
            hierarchy: Hierarchy rules and archive cascade
            limits: Field length limits for validation
            default_max_size: max_size for new top-level groups that give none
            publisher: Optional receiver of committed domain events
            probe: Optional domain probe for observability
        """
        self._session = session
        self._groups = group_repository
        self._subscriptions = subscription_repository
        self._registry = registry
        self._hierarchy = hierarchy
        self._limits = limits or GroupFieldLimits()
        self._default_max_size = default_max_size
        self._publisher = publisher
        self._probe = probe or DefaultGroupServiceProbe()

    # -- lifecycle -----------------------------------------------------------

    def create_group(
        self,
        name: str,
        *,
        parent_id: GroupId | None = None,
        creator_id: UserId | None = None,
        **settings: object,
    ) -> Group:
        """Create a group, optionally as a subgroup, with creator as admin.

        Args:
            name: Group name
            parent_id: Parent group when creating a subgroup
            creator_id: User to appoint as the first admin
            **settings: Further Group.create() keyword arguments
                (description, max_size, visible_to, ...)

        Returns:
            The created Group aggregate

        Raises:
            NotFoundError: If the parent group does not exist
            GroupValidationError: With every invalid field
        """
        try:
            with self._session.begin():
                parent = self._load(parent_id) if parent_id is not None else None
                if parent is None and settings.get("max_size") is None:
                    settings["max_size"] = self._default_max_size
                group = Group.create(
                    name, parent=parent, limits=self._limits, **settings
                )
                self._groups.save(group)
                if creator_id is not None:
                    self._registry.add_admin(group, creator_id)
        except Exception as e:
            self._probe.group_creation_failed(name=name, error=str(e))
            raise

        self._probe.group_created(
            group_id=group.id.value,
            name=group.name,
            parent_id=parent_id.value if parent_id else None,
        )
        self._publish(group)
        return group

    def get_group(self, group_id: GroupId) -> Group:
        """Load a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        with self._session.begin():
            group = self._load(group_id)
            self._hierarchy.full_name(group)
            return group

    def rename_group(self, group_id: GroupId, new_name: str) -> Group:
        """Rename a group and propagate the full name to its subgroups."""
        with self._session.begin():
            group = self._load(group_id)
            self._hierarchy.rename_cascade(group, new_name, self._limits)

        self._probe.group_renamed(
            group_id=group.id.value, name=group.name, full_name=group.full_name or ""
        )
        self._publish(group)
        return group

    def update_description(self, group_id: GroupId, description: str | None) -> Group:
        with self._session.begin():
            group = self._load(group_id)
            group.update_description(description, self._limits)
            self._groups.save(group)
        self._publish(group)
        return group

    def set_parent(self, group_id: GroupId, parent_id: GroupId) -> Group:
        """Move a top-level group under another top-level group."""
        with self._session.begin():
            group = self._load(group_id)
            parent = self._load(parent_id)
            self._hierarchy.set_parent(group, parent)
            group.validate(parent, self._limits)
            self._groups.save(group)
        return group

    def archive_group(self, group_id: GroupId) -> list[Group]:
        """Archive a group with its discussions, memberships and subgroups.

        Returns:
            Every archived group, parent first
        """
        with self._session.begin():
            group = self._load(group_id)
            archived = self._hierarchy.archive(group)

        self._probe.cascade_archived(group_id=group.id.value)
        for archived_group in archived:
            self._publish(archived_group)
        return archived

    def subgroups(self, group_id: GroupId) -> list[Group]:
        """Direct, non-archived subgroups of a group."""
        with self._session.begin():
            return self._hierarchy.subgroups(self._load(group_id))

    def is_archived(self, group_id: GroupId) -> bool:
        with self._session.begin():
            return self._load(group_id).is_archived()

    def mark_as_setup(self, group_id: GroupId) -> Group:
        with self._session.begin():
            group = self._load(group_id)
            group.mark_as_setup()
            self._groups.save(group)
        self._publish(group)
        return group

    # -- visibility and privacy ----------------------------------------------

    def set_visibility(self, group_id: GroupId, term: Visibility | str) -> Group:
        """Apply a visibility term ("public", "parent_members" or "members").

        Raises:
            InvalidArgumentError: If the term is not recognised
            GroupValidationError: If the term does not fit the group
        """
        with self._session.begin():
            group = self._load(group_id)
            group.set_visibility(term)
            self._groups.save(group)

        self._probe.visibility_changed(
            group_id=group.id.value, visibility=group.visibility().value
        )
        self._publish(group)
        return group

    def visibility_term(self, group_id: GroupId) -> Visibility:
        with self._session.begin():
            return self._load(group_id).visibility()

    def set_discussion_privacy(
        self, group_id: GroupId, option: DiscussionPrivacyOption | str
    ) -> Group:
        with self._session.begin():
            group = self._load(group_id)
            group.set_discussion_privacy(option)
            self._groups.save(group)
        return group

    def discussion_private_default(self, group_id: GroupId) -> bool | None:
        """Default ``private`` flag for a new discussion in the group."""
        with self._session.begin():
            return self._load(group_id).discussion_private_default()

    # -- membership ----------------------------------------------------------

    def add_member(
        self,
        group_id: GroupId,
        user_id: UserId,
        inviter_id: UserId | None = None,
    ) -> Membership:
        """Add a member, or return the existing membership.

        Raises:
            CapacityExceededError: If the top-level group is full
        """
        try:
            with self._session.begin():
                group = self._load(group_id)
                membership = self._registry.add_member(group, user_id, inviter_id)
        except DuplicateMembershipError:
            return self._resolve_membership_race(group_id, user_id)

        self._publish(group)
        return membership

    def add_members(
        self,
        group_id: GroupId,
        user_ids: Iterable[UserId],
        inviter_id: UserId | None = None,
    ) -> list[Membership]:
        """Add several members in order.

        Best effort: the first CapacityExceededError stops the batch and is
        re-raised after the memberships created before it are committed.
        """
        stopped: CapacityExceededError | None = None
        with self._session.begin():
            group = self._load(group_id)
            try:
                memberships = self._registry.add_members(group, user_ids, inviter_id)
            except CapacityExceededError as e:
                stopped = e
        self._publish(group)
        if stopped is not None:
            raise stopped
        return memberships

    def add_admin(
        self,
        group_id: GroupId,
        user_id: UserId,
        inviter_id: UserId | None = None,
    ) -> Membership:
        with self._session.begin():
            group = self._load(group_id)
            membership = self._registry.add_admin(group, user_id, inviter_id)
        self._publish(group)
        return membership

    def remove_member(self, group_id: GroupId, user_id: UserId) -> bool:
        with self._session.begin():
            group = self._load(group_id)
            removed = self._registry.remove_member(group, user_id)
        self._publish(group)
        return removed

    def membership_of(self, group_id: GroupId, user_id: UserId) -> Membership | None:
        with self._session.begin():
            return self._registry.membership_of(self._load(group_id), user_id)

    def remaining_invitations(self, group_id: GroupId) -> int:
        """Invitations the group can still send; may be negative.

        Raises:
            InvalidArgumentError: If the group has no max_size
        """
        with self._session.begin():
            return self._registry.remaining_invitations(self._load(group_id))

    def has_member_with_email(self, group_id: GroupId, email: str) -> bool:
        with self._session.begin():
            return self._registry.has_member_with_email(self._load(group_id), email)

    def has_request_with_email(self, group_id: GroupId, email: str) -> bool:
        with self._session.begin():
            return self._registry.has_request_with_email(self._load(group_id), email)

    def admins(self, group_id: GroupId) -> list[User]:
        with self._session.begin():
            return self._registry.admins(self._load(group_id))

    def pending_requests(self, group_id: GroupId) -> list[MembershipRequest]:
        with self._session.begin():
            return self._registry.pending_requests(self._load(group_id))

    def contact_person(self, group_id: GroupId) -> User | None:
        with self._session.begin():
            return self._registry.contact_person(self._load(group_id))

    def admin_email(self, group_id: GroupId) -> str:
        """Email of the group's contact person.

        Raises:
            NotFoundError: If the group has no admin
        """
        with self._session.begin():
            return self._registry.admin_email(self._load(group_id))

    # -- billing -------------------------------------------------------------

    def is_paying(self, group_id: GroupId) -> bool:
        with self._session.begin():
            group = self._load(group_id)
            return group.is_paying(self._subscriptions.get_for_group(group.id))

    # -- helpers -------------------------------------------------------------

    def _load(self, group_id: GroupId) -> Group:
        group = self._groups.get_by_id(group_id)
        if group is None:
            raise NotFoundError(f"Group {group_id} not found")
        return group

    def _resolve_membership_race(
        self, group_id: GroupId, user_id: UserId
    ) -> Membership:
        # The failed transaction was rolled back; read what the winner wrote.
        with self._session.begin():
            membership = self._registry.membership_of(self._load(group_id), user_id)
        if membership is None:
            raise NotFoundError(
                f"Membership of user {user_id} in group {group_id} not found"
            )
        self._probe.membership_race_resolved(
            group_id=group_id.value, user_id=user_id.value
        )
        return membership

    def _publish(self, group: Group) -> None:
        events = group.collect_events()
        if self._publisher is None:
            return
        for event in events:
            try:
                self._publisher.publish(event)
            except Exception as e:
                self._probe.event_publication_failed(
                    event_type=type(event).__name__, error=str(e)
                )
