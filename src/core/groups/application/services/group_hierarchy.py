"""Group hierarchy rules for the groups bounded context.

Enforces the two-level hierarchy, keeps full names in step with parent
names, and cascades archival through discussions, memberships and
subgroups. Groups reference their parent by id; every traversal loads
the groups it visits through the repository.
"""

from __future__ import annotations

from datetime import UTC, datetime

from groups.application.observability import (
    DefaultGroupHierarchyProbe,
    GroupHierarchyProbe,
)
from groups.domain.aggregates import Group, GroupFieldLimits, calculate_full_name
from groups.domain.exceptions import GroupValidationError, NotFoundError
from groups.domain.value_objects import FieldError
from groups.ports.repositories import (
    IDiscussionRepository,
    IGroupRepository,
    IMembershipRepository,
)


class GroupHierarchy:
    """Parent assignment, name propagation and archive cascade."""

    def __init__(
        self,
        group_repository: IGroupRepository,
        membership_repository: IMembershipRepository,
        discussion_repository: IDiscussionRepository,
        probe: GroupHierarchyProbe | None = None,
    ):
        self._groups = group_repository
        self._memberships = membership_repository
        self._discussions = discussion_repository
        self._probe = probe or DefaultGroupHierarchyProbe()

    def set_parent(self, group: Group, parent: Group) -> None:
        """Make ``group`` a subgroup of ``parent``.

        Raises:
            GroupValidationError: If ``parent`` is itself a subgroup, is the
                group itself, or ``group`` already has subgroups of its own
        """
        errors = group.parent_errors(parent)
        if not errors and self._groups.has_subgroups(group.id):
            errors.append(
                FieldError("base", "Can't make a group with subgroups a subgroup")
            )
        if errors:
            self._probe.parent_rejected(
                group_id=group.id.value,
                parent_id=parent.id.value,
                reason=errors[0].message,
            )
            raise GroupValidationError(errors)

        group.attach_to(parent)
        self._probe.parent_set(group_id=group.id.value, parent_id=parent.id.value)

    def parent_of(self, group: Group) -> Group | None:
        """Load the parent of a subgroup.

        Raises:
            NotFoundError: If the group names a parent that does not exist
        """
        if group.parent_id is None:
            return None
        parent = self._groups.get_by_id(group.parent_id)
        if parent is None:
            raise NotFoundError(f"Parent group {group.parent_id} not found")
        return parent

    def calculate_full_name(self, group: Group) -> str:
        """The group's name, prefixed with its parent's name for a subgroup."""
        parent = self.parent_of(group)
        return calculate_full_name(group.name, parent.name if parent else None)

    def full_name(self, group: Group) -> str:
        """The cached full name, computed and cached on first read."""
        if group.full_name is None:
            group.full_name = self.calculate_full_name(group)
        return group.full_name

    def subgroups(self, group: Group) -> list[Group]:
        """Direct, non-archived subgroups of ``group``."""
        return self._groups.list_subgroups(group.id)

    def rename_cascade(
        self,
        group: Group,
        new_name: str,
        limits: GroupFieldLimits | None = None,
    ) -> list[Group]:
        """Rename a group and push its new name into subgroup full names.

        The group itself is validated and saved. Subgroups only have their
        full name recomputed and saved, without re-running validation. An
        unchanged name saves nothing.

        Returns:
            The subgroups whose full name was updated

        Raises:
            GroupValidationError: If the new name is invalid
        """
        parent = self.parent_of(group)
        if not group.rename(new_name, parent.name if parent else None, limits):
            return []
        self._groups.save(group)

        subgroups = self._groups.list_subgroups(group.id)
        for subgroup in subgroups:
            subgroup.refresh_full_name(group.name)
            self._groups.save(subgroup)

        self._probe.full_name_propagated(
            group_id=group.id.value, subgroup_count=len(subgroups)
        )
        return subgroups

    def archive(self, group: Group, at: datetime | None = None) -> list[Group]:
        """Archive a group and everything below it.

        Order per group: its discussions, the group itself, its memberships,
        then each non-archived subgroup in full before the next. One
        timestamp is used for the whole cascade.

        A failure part way leaves the earlier writes in place; callers that
        need all-or-nothing must run this inside a single transaction.

        Returns:
            Every archived group, parent first
        """
        at = at or datetime.now(UTC)

        discussion_ids = self._discussions.list_ids_for_group(group.id)
        for discussion_id in discussion_ids:
            self._discussions.archive(discussion_id, at)

        group.archive(at)
        self._groups.save(group)

        archived_memberships = self._memberships.archive_all_for_group(group.id, at)
        self._probe.group_archived(
            group_id=group.id.value,
            discussions_archived=len(discussion_ids),
            memberships_archived=archived_memberships,
        )

        archived = [group]
        for subgroup in self._groups.list_subgroups(group.id):
            archived.extend(self.archive(subgroup, at))
        return archived
