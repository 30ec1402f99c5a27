"""Membership registry for the groups bounded context.

Owns creation and lookup of memberships: capacity-limited joining,
idempotent find-or-create, admin promotion and the derived admin
collections (contact person, admin email).
"""

from __future__ import annotations

from collections.abc import Iterable

from groups.application.observability import (
    DefaultMembershipRegistryProbe,
    MembershipRegistryProbe,
)
from groups.domain.aggregates import Group, Membership, MembershipRequest, User
from groups.domain.exceptions import (
    CapacityExceededError,
    InvalidArgumentError,
    NotFoundError,
)
from groups.domain.value_objects import UserId
from groups.ports.repositories import (
    IInvitationRepository,
    IMembershipRepository,
    IMembershipRequestRepository,
    IUserRepository,
)


class MembershipRegistry:
    """Creates, promotes and looks up memberships of a group.

    All writes go through the membership repository, which enforces the
    (group, user) uniqueness and maintains the group's member counter.
    """

    def __init__(
        self,
        membership_repository: IMembershipRepository,
        membership_request_repository: IMembershipRequestRepository,
        invitation_repository: IInvitationRepository,
        user_repository: IUserRepository,
        probe: MembershipRegistryProbe | None = None,
    ):
        """Initialize MembershipRegistry with dependencies.

        Args:
            membership_repository: Storage for memberships and the counter
            membership_request_repository: Read access to join requests
            invitation_repository: Read access to pending invitations
            user_repository: Read access to the user directory
            probe: Optional domain probe for observability
        """
        self._memberships = membership_repository
        self._requests = membership_request_repository
        self._invitations = invitation_repository
        self._users = user_repository
        self._probe = probe or DefaultMembershipRegistryProbe()

    def add_member(
        self,
        group: Group,
        user_id: UserId,
        inviter_id: UserId | None = None,
    ) -> Membership:
        """Add a user to a group, or return their existing membership.

        Top-level groups with a max_size refuse new members once the member
        count has reached max_size. Subgroups are not capacity-limited.

        Args:
            group: The group to join
            user_id: The joining user
            inviter_id: The user who invited them, if any

        Returns:
            The new or existing membership

        Raises:
            CapacityExceededError: If the top-level group is full
            DuplicateMembershipError: If a concurrent request created the
                membership between the lookup and the insert
        """
        existing = self._memberships.get(group.id, user_id)
        if existing is not None:
            return existing

        if group.is_top_level() and group.max_size is not None:
            member_count = self._memberships.count_for_group(group.id)
            if member_count >= group.max_size:
                self._probe.capacity_exceeded(
                    group_id=group.id.value,
                    max_size=group.max_size,
                    member_count=member_count,
                )
                raise CapacityExceededError(
                    group_id=group.id.value,
                    max_size=group.max_size,
                    member_count=member_count,
                )
        return self._create(group, user_id, inviter_id)

    def add_members(
        self,
        group: Group,
        user_ids: Iterable[UserId],
        inviter_id: UserId | None = None,
    ) -> list[Membership]:
        """Add several users in order.

        This is a best-effort batch, not a transaction: the first failure
        stops the batch and is re-raised, and memberships created before it
        are kept.

        Returns:
            Memberships in the same order as ``user_ids``
        """
        requested = list(user_ids)
        memberships: list[Membership] = []
        for user_id in requested:
            try:
                memberships.append(self.add_member(group, user_id, inviter_id))
            except CapacityExceededError:
                self._probe.batch_add_stopped(
                    group_id=group.id.value,
                    added_count=len(memberships),
                    requested_count=len(requested),
                )
                raise
        return memberships

    def add_admin(
        self,
        group: Group,
        user_id: UserId,
        inviter_id: UserId | None = None,
    ) -> Membership:
        """Find or create the user's membership and make it an admin.

        Idempotent. Admins are not capacity-limited, so an admin can always
        be appointed to a full group.
        """
        membership = self._find_or_create(group, user_id, inviter_id)
        if membership.make_admin():
            self._memberships.save(membership)
            group.record_admin_promoted(membership)
            self._probe.admin_promoted(
                group_id=group.id.value, user_id=user_id.value
            )
        return membership

    def remove_member(self, group: Group, user_id: UserId) -> bool:
        """Remove a user's membership.

        Returns:
            True if a membership was removed, False if there was none
        """
        membership = self._memberships.get(group.id, user_id)
        if membership is None:
            return False
        removed = self._memberships.remove(membership.id)
        if removed:
            group.record_member_removed(membership)
            self._probe.member_removed(group_id=group.id.value, user_id=user_id.value)
        return removed

    def membership_of(self, group: Group, user_id: UserId) -> Membership | None:
        return self._memberships.get(group.id, user_id)

    def remaining_invitations(self, group: Group) -> int:
        """Invitations the group can still send.

        max_size minus members minus pending invitations. The result may be
        negative, meaning the group is over capacity; it is not clamped.

        Raises:
            InvalidArgumentError: If the group has no max_size
        """
        if group.max_size is None:
            raise InvalidArgumentError(f"Group {group.id} has no max_size")
        return (
            group.max_size
            - self._memberships.count_for_group(group.id)
            - self._invitations.count_pending(group.id)
        )

    def has_member_with_email(self, group: Group, email: str) -> bool:
        return self._memberships.exists_with_email(group.id, email)

    def has_request_with_email(self, group: Group, email: str) -> bool:
        return self._requests.exists_with_email(group.id, email)

    def pending_requests(self, group: Group) -> list[MembershipRequest]:
        return self._requests.list_pending(group.id)

    def admins(self, group: Group) -> list[User]:
        """Users holding an admin membership, ordered by user id."""
        admin_memberships = self._memberships.list_admins(group.id)
        return self._users.get_many([m.user_id for m in admin_memberships])

    def contact_person(self, group: Group) -> User | None:
        """The admin with the lowest user id, or None if there are no admins."""
        admin_memberships = self._memberships.list_admins(group.id)
        if not admin_memberships:
            return None
        lowest = min(admin_memberships, key=lambda m: m.user_id.value)
        return self._users.get_by_id(lowest.user_id)

    def admin_email(self, group: Group) -> str:
        """Email of the contact person.

        Raises:
            NotFoundError: If the group has no admin
        """
        contact = self.contact_person(group)
        if contact is None:
            raise NotFoundError(f"Group {group.id} has no admin")
        return contact.email

    def _find_or_create(
        self,
        group: Group,
        user_id: UserId,
        inviter_id: UserId | None,
    ) -> Membership:
        existing = self._memberships.get(group.id, user_id)
        if existing is not None:
            return existing
        return self._create(group, user_id, inviter_id)

    def _create(
        self,
        group: Group,
        user_id: UserId,
        inviter_id: UserId | None,
    ) -> Membership:
        membership = Membership.create(
            group_id=group.id, user_id=user_id, inviter_id=inviter_id
        )
        self._memberships.add(membership)
        group.record_member_added(membership)
        self._probe.member_added(
            group_id=group.id.value,
            user_id=user_id.value,
            inviter_id=inviter_id.value if inviter_id else None,
        )
        return membership
