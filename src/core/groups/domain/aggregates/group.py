"""Group aggregate for the groups context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

from groups.domain.events import (
    GroupArchived,
    GroupCreated,
    GroupDetailsChanged,
    GroupSetupCompleted,
    GroupVisibilityChanged,
    MemberAdded,
    MemberPromotedToAdmin,
    MemberRemoved,
)
from groups.domain.exceptions import GroupValidationError
from groups.domain.policies import discussion_privacy, visibility
from groups.domain.value_objects import (
    DiscussionPrivacyOption,
    FieldError,
    GroupId,
    MembershipGrantedUpon,
    PaymentPlan,
    Visibility,
)

if TYPE_CHECKING:
    from groups.domain.aggregates.membership import Membership
    from groups.domain.aggregates.subscription import Subscription
    from groups.domain.events import DomainEvent

FULL_NAME_SEPARATOR = " - "

_E = TypeVar("_E", bound=StrEnum)


@dataclass(frozen=True)
class GroupFieldLimits:
    """Length limits applied by group field validation."""

    name_max_length: int = 250
    description_max_length: int = 250


def calculate_full_name(name: str, parent_name: str | None) -> str:
    """Derive a group's full name.

    The full name of a top-level group is its name; a subgroup's full name
    is prefixed with its parent's name.
    """
    if parent_name is None:
        return name
    return f"{parent_name}{FULL_NAME_SEPARATOR}{name}"


def _coerce(
    enum_cls: type[_E],
    value: _E | str | None,
    default: _E,
    field_name: str,
    errors: list[FieldError],
) -> _E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append(
            FieldError(field_name, f"{value!r} is not one of: {allowed}")
        )
        return default


@dataclass
class Group:
    """Group aggregate: a unit of collaboration with members and subgroups.

    A group is either top-level or a subgroup of a top-level group; the
    parent is referenced by id only, never owned.

    Business rules:
    - Hierarchy depth is at most two (a parent must itself be top-level)
    - full_name is the name for a top-level group, "<parent> - <name>" otherwise
    - Exactly one visibility term holds; parent-members visibility is only
      for subgroups hidden from the public
    - discussion_privacy_options defaults to public_or_private and
      membership_granted_upon to approval
    - memberships_count and discussions_count are maintained by storage
      and are read-only here

    Event collection:
    - Mutating operations record domain events
    - Events can be collected via collect_events() after persistence
    """

    id: GroupId
    name: str
    full_name: str | None = None
    parent_id: GroupId | None = None
    description: str | None = None
    max_size: int | None = None
    category_id: str | None = None
    payment_plan: PaymentPlan = PaymentPlan.UNDETERMINED
    discussion_privacy_options: DiscussionPrivacyOption = (
        DiscussionPrivacyOption.PUBLIC_OR_PRIVATE
    )
    membership_granted_upon: MembershipGrantedUpon = MembershipGrantedUpon.APPROVAL
    is_visible_to_public: bool = False
    is_visible_to_parent_members: bool = False
    parent_members_can_see_discussions: bool = False
    members_can_add_members: bool = False
    can_start_group: bool = True
    archived_at: datetime | None = None
    setup_completed_at: datetime | None = None
    memberships_count: int = 0
    discussions_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(
        cls,
        name: str,
        *,
        parent: Group | None = None,
        description: str | None = None,
        max_size: int | None = None,
        category_id: str | None = None,
        payment_plan: PaymentPlan | str | None = None,
        discussion_privacy_options: DiscussionPrivacyOption | str | None = None,
        membership_granted_upon: MembershipGrantedUpon | str | None = None,
        visible_to: Visibility | str | None = None,
        parent_members_can_see_discussions: bool = False,
        members_can_add_members: bool = False,
        can_start_group: bool = True,
        limits: GroupFieldLimits | None = None,
    ) -> Group:
        """Factory method for creating a new group.

        Applies the creation defaults, coerces raw enum values, then runs
        every validation rule and raises all problems together.

        Args:
            name: The group name
            parent: The parent group when creating a subgroup
            description: Optional description
            max_size: Member capacity; None means unlimited
            category_id: Optional category reference
            payment_plan: Payment plan (default undetermined)
            discussion_privacy_options: Discussion privacy setting
                (default public_or_private)
            membership_granted_upon: Membership admission setting
                (default approval)
            visible_to: Visibility term (default members)
            parent_members_can_see_discussions: Subgroup discussion visibility
            members_can_add_members: Whether non-admins may add members
            can_start_group: Whether the group may start subgroups
            limits: Field length limits

        Returns:
            A new Group with a GroupCreated event recorded

        Raises:
            GroupValidationError: With every invalid field
        """
        errors: list[FieldError] = []
        group = cls(
            id=GroupId.generate(),
            name=name,
            parent_id=parent.id if parent is not None else None,
            description=description,
            max_size=max_size,
            category_id=category_id,
            payment_plan=_coerce(
                PaymentPlan,
                payment_plan,
                PaymentPlan.UNDETERMINED,
                "payment_plan",
                errors,
            ),
            discussion_privacy_options=_coerce(
                DiscussionPrivacyOption,
                discussion_privacy_options,
                DiscussionPrivacyOption.PUBLIC_OR_PRIVATE,
                "discussion_privacy_options",
                errors,
            ),
            membership_granted_upon=_coerce(
                MembershipGrantedUpon,
                membership_granted_upon,
                MembershipGrantedUpon.APPROVAL,
                "membership_granted_upon",
                errors,
            ),
            parent_members_can_see_discussions=parent_members_can_see_discussions,
            members_can_add_members=members_can_add_members,
            can_start_group=can_start_group,
        )
        term = _coerce(Visibility, visible_to, Visibility.MEMBERS, "visible_to", errors)
        group.is_visible_to_public, group.is_visible_to_parent_members = (
            visibility.apply_visibility_term(term)
        )
        group.full_name = calculate_full_name(
            name, parent.name if parent is not None else None
        )

        errors.extend(group.validation_errors(parent, limits))
        if errors:
            raise GroupValidationError(errors)

        group._pending_events.append(
            GroupCreated(
                group_id=group.id.value,
                parent_id=group.parent_id.value if group.parent_id else None,
                name=group.name,
                full_name=group.full_name,
                occurred_at=group.created_at,
            )
        )
        return group

    # -- hierarchy -----------------------------------------------------------

    def is_top_level(self) -> bool:
        """A group without a parent."""
        return self.parent_id is None

    def is_subgroup(self) -> bool:
        """A group with a parent."""
        return not self.is_top_level()

    def parent_errors(self, parent: Group | None) -> list[FieldError]:
        """Check that ``parent`` may be this group's parent."""
        if parent is None:
            return []
        if parent.id == self.id:
            return [FieldError("base", "Can't set a group as its own parent")]
        if parent.parent_id is not None:
            return [FieldError("base", "Can't set a subgroup as parent")]
        return []

    def attach_to(self, parent: Group) -> None:
        """Make this group a subgroup of ``parent`` and recompute full_name.

        Callers are expected to have checked parent_errors() first.
        """
        self.parent_id = parent.id
        self.full_name = calculate_full_name(self.name, parent.name)
        self._touch()

    def refresh_full_name(self, parent_name: str | None) -> str:
        """Recompute full_name from the current name and ``parent_name``."""
        self.full_name = calculate_full_name(self.name, parent_name)
        self._touch()
        return self.full_name

    # -- naming --------------------------------------------------------------

    def rename(
        self,
        new_name: str,
        parent_name: str | None,
        limits: GroupFieldLimits | None = None,
    ) -> bool:
        """Rename the group and recompute its full name.

        Renaming to the current name changes nothing and records no event.

        Args:
            new_name: The new name
            parent_name: Name of the parent group, None for a top-level group
            limits: Field length limits

        Returns:
            True if the name changed

        Raises:
            GroupValidationError: If the name is invalid
        """
        errors = self._name_errors(new_name, limits or GroupFieldLimits())
        if errors:
            raise GroupValidationError(errors)
        if new_name == self.name:
            return False

        self.name = new_name
        self.refresh_full_name(parent_name)
        self._record_searchable_change()
        return True

    def update_description(
        self, description: str | None, limits: GroupFieldLimits | None = None
    ) -> None:
        """Replace the description.

        Raises:
            GroupValidationError: If the description is too long
        """
        errors = self._description_errors(description, limits or GroupFieldLimits())
        if errors:
            raise GroupValidationError(errors)
        self.description = description
        self._touch()
        self._record_searchable_change()

    # -- visibility ----------------------------------------------------------

    def visibility(self) -> Visibility:
        """The semantic visibility term derived from the stored flags."""
        return visibility.derive_visibility(
            self.is_visible_to_public, self.is_visible_to_parent_members
        )

    def set_visibility(self, term: Visibility | str) -> None:
        """Apply a visibility term.

        The new flags are validated before being stored; on failure the
        group is left unchanged.

        Raises:
            InvalidArgumentError: If the term is not recognised
            GroupValidationError: If the term is inconsistent with the group
        """
        old = self.visibility()
        is_public, is_parent_members = visibility.apply_visibility_term(term)

        errors = visibility.visibility_errors(
            is_visible_to_public=is_public,
            is_visible_to_parent_members=is_parent_members,
            is_subgroup=self.is_subgroup(),
            parent_members_can_see_discussions=self.parent_members_can_see_discussions,
        )
        errors.extend(
            discussion_privacy.privacy_option_errors(
                self.discussion_privacy_options, is_visible_to_public=is_public
            )
        )
        if errors:
            raise GroupValidationError(errors)

        self.is_visible_to_public = is_public
        self.is_visible_to_parent_members = is_parent_members
        new = self.visibility()
        if new != old:
            self._touch()
            self._pending_events.append(
                GroupVisibilityChanged(
                    group_id=self.id.value,
                    old_visibility=old.value,
                    new_visibility=new.value,
                    occurred_at=self.updated_at,
                )
            )

    def is_hidden_from_public(self) -> bool:
        return not self.is_visible_to_public

    def is_subgroup_of_hidden_parent(self, parent: Group | None) -> bool:
        """Whether this is a subgroup whose parent is hidden from the public."""
        return (
            self.is_subgroup()
            and parent is not None
            and parent.is_hidden_from_public()
        )

    # -- discussions ---------------------------------------------------------

    def set_discussion_privacy(self, option: DiscussionPrivacyOption | str) -> None:
        """Change which discussion privacy settings the group allows.

        Raises:
            GroupValidationError: If the option is unknown or incompatible
                with the group's visibility
        """
        errors: list[FieldError] = []
        coerced = _coerce(
            DiscussionPrivacyOption,
            option,
            self.discussion_privacy_options,
            "discussion_privacy_options",
            errors,
        )
        if not errors:
            errors.extend(
                discussion_privacy.privacy_option_errors(
                    coerced, is_visible_to_public=self.is_visible_to_public
                )
            )
        if errors:
            raise GroupValidationError(errors)
        self.discussion_privacy_options = coerced
        self._touch()

    def discussion_private_default(self) -> bool | None:
        """Default ``private`` flag for a discussion started in this group."""
        return discussion_privacy.default_privacy(self.discussion_privacy_options)

    def private_discussions_only(self) -> bool:
        return discussion_privacy.private_discussions_only(
            self.discussion_privacy_options
        )

    def public_discussions_only(self) -> bool:
        return discussion_privacy.public_discussions_only(
            self.discussion_privacy_options
        )

    # -- lifecycle -----------------------------------------------------------

    def archive(self, at: datetime) -> None:
        """Soft-delete the group at ``at``.

        Only the group itself; the cascade through discussions, memberships
        and subgroups belongs to GroupHierarchy.
        """
        self.archived_at = at
        self._touch()
        self._pending_events.append(
            GroupArchived(
                group_id=self.id.value,
                parent_id=self.parent_id.value if self.parent_id else None,
                occurred_at=at,
            )
        )

    def is_archived(self) -> bool:
        return self.archived_at is not None

    def mark_as_setup(self, at: datetime | None = None) -> None:
        """Record that the group finished its setup flow."""
        self.setup_completed_at = at or datetime.now(UTC)
        self._touch()
        self._pending_events.append(
            GroupSetupCompleted(
                group_id=self.id.value, occurred_at=self.setup_completed_at
            )
        )

    def is_setup(self) -> bool:
        return self.setup_completed_at is not None

    # -- billing -------------------------------------------------------------

    def has_manual_subscription(self) -> bool:
        return self.payment_plan == PaymentPlan.MANUAL_SUBSCRIPTION

    def is_paying(self, subscription: Subscription | None) -> bool:
        """Whether the group pays, given its subscription (if any).

        A manual subscription counts as paying; otherwise the group needs a
        subscription with a positive amount.
        """
        if self.has_manual_subscription():
            return True
        return subscription is not None and subscription.amount > 0

    # -- membership events ---------------------------------------------------

    def record_member_added(self, membership: Membership) -> None:
        """Record that ``membership`` was created for this group."""
        self._pending_events.append(
            MemberAdded(
                group_id=self.id.value,
                user_id=membership.user_id.value,
                inviter_id=membership.inviter_id.value
                if membership.inviter_id
                else None,
                admin=membership.admin,
                occurred_at=membership.created_at,
            )
        )

    def record_admin_promoted(self, membership: Membership) -> None:
        """Record that the member of ``membership`` became an admin."""
        self._pending_events.append(
            MemberPromotedToAdmin(
                group_id=self.id.value,
                user_id=membership.user_id.value,
                occurred_at=datetime.now(UTC),
            )
        )

    def record_member_removed(self, membership: Membership) -> None:
        """Record that ``membership`` was removed from this group."""
        self._pending_events.append(
            MemberRemoved(
                group_id=self.id.value,
                user_id=membership.user_id.value,
                was_admin=membership.admin,
                occurred_at=datetime.now(UTC),
            )
        )

    # -- validation ----------------------------------------------------------

    def validation_errors(
        self,
        parent: Group | None,
        limits: GroupFieldLimits | None = None,
    ) -> list[FieldError]:
        """Collect every invariant violation of the group.

        Args:
            parent: The loaded parent group, None for a top-level group
            limits: Field length limits

        Returns:
            All problems found; empty when the group is valid
        """
        limits = limits or GroupFieldLimits()
        errors = self._name_errors(self.name, limits)
        errors.extend(self._description_errors(self.description, limits))
        if self.max_size is not None and self.max_size < 0:
            errors.append(FieldError("max_size", "must not be negative"))
        errors.extend(self.parent_errors(parent))
        errors.extend(
            visibility.visibility_errors(
                is_visible_to_public=self.is_visible_to_public,
                is_visible_to_parent_members=self.is_visible_to_parent_members,
                is_subgroup=self.is_subgroup(),
                parent_members_can_see_discussions=self.parent_members_can_see_discussions,
            )
        )
        errors.extend(
            discussion_privacy.privacy_option_errors(
                self.discussion_privacy_options,
                is_visible_to_public=self.is_visible_to_public,
            )
        )
        return errors

    def validate(
        self, parent: Group | None, limits: GroupFieldLimits | None = None
    ) -> None:
        """Raise GroupValidationError with every invariant violation."""
        errors = self.validation_errors(parent, limits)
        if errors:
            raise GroupValidationError(errors)

    @staticmethod
    def _name_errors(name: str, limits: GroupFieldLimits) -> list[FieldError]:
        if not name or not name.strip():
            return [FieldError("name", "can't be blank")]
        if len(name) > limits.name_max_length:
            return [
                FieldError(
                    "name",
                    f"is too long (maximum is {limits.name_max_length} characters)",
                )
            ]
        return []

    @staticmethod
    def _description_errors(
        description: str | None, limits: GroupFieldLimits
    ) -> list[FieldError]:
        if description is not None and len(description) > limits.description_max_length:
            return [
                FieldError(
                    "description",
                    f"is too long (maximum is {limits.description_max_length} characters)",
                )
            ]
        return []

    # -- events --------------------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)

    def _record_searchable_change(self) -> None:
        self._pending_events.append(
            GroupDetailsChanged(
                group_id=self.id.value,
                name=self.name,
                full_name=self.full_name or self.name,
                description=self.description,
                occurred_at=self.updated_at,
            )
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events.

        Returns:
            List of pending domain events
        """
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
