"""SQLAlchemy implementation of IGroupRepository.

Group rows carry every group setting plus two denormalized counters. The
counters belong to the membership and discussion repositories: save()
copies the aggregate's settings but never its counter snapshots.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from groups.domain.aggregates import Group
from groups.domain.value_objects import (
    DiscussionPrivacyOption,
    GroupId,
    MembershipGrantedUpon,
    PaymentPlan,
)
from groups.infrastructure.models import GroupModel
from groups.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from groups.ports.repositories import IGroupRepository
from infrastructure.database import as_utc


class GroupRepository(IGroupRepository):
    """Repository for Group aggregates.

    Runs inside the caller's transaction; it flushes but never commits.
    """

    def __init__(
        self, session: Session, probe: GroupRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: Session owned by the application service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    def save(self, group: Group) -> None:
        """Insert or update the group's settings.

        Args:
            group: The Group aggregate to persist
        """
        model = self._session.get(GroupModel, group.id.value)
        is_new = model is None
        if model is None:
            model = GroupModel(id=group.id.value, created_at=group.created_at)
            self._session.add(model)

        model.parent_id = group.parent_id.value if group.parent_id else None
        model.name = group.name
        model.full_name = group.full_name
        model.description = group.description
        model.max_size = group.max_size
        model.category_id = group.category_id
        model.payment_plan = group.payment_plan.value
        model.discussion_privacy_options = group.discussion_privacy_options.value
        model.membership_granted_upon = group.membership_granted_upon.value
        model.is_visible_to_public = group.is_visible_to_public
        model.is_visible_to_parent_members = group.is_visible_to_parent_members
        model.parent_members_can_see_discussions = (
            group.parent_members_can_see_discussions
        )
        model.members_can_add_members = group.members_can_add_members
        model.can_start_group = group.can_start_group
        model.archived_at = group.archived_at
        model.setup_completed_at = group.setup_completed_at

        self._session.flush()
        self._probe.group_saved(group.id.value, is_new)

    def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID.

        Args:
            group_id: The unique identifier of the group

        Returns:
            The Group aggregate, or None if not found
        """
        model = self._session.get(GroupModel, group_id.value, populate_existing=True)
        if model is None:
            self._probe.group_not_found(group_id.value)
            return None
        return self._to_domain(model)

    def list_subgroups(
        self, parent_id: GroupId, include_archived: bool = False
    ) -> list[Group]:
        stmt = select(GroupModel).where(GroupModel.parent_id == parent_id.value)
        if not include_archived:
            stmt = stmt.where(GroupModel.archived_at.is_(None))
        stmt = stmt.order_by(GroupModel.id)
        models = self._session.scalars(stmt).all()
        return [self._to_domain(model) for model in models]

    def has_subgroups(self, group_id: GroupId) -> bool:
        stmt = select(exists().where(GroupModel.parent_id == group_id.value))
        return bool(self._session.scalar(stmt))

    @staticmethod
    def _to_domain(model: GroupModel) -> Group:
        return Group(
            id=GroupId(value=model.id),
            name=model.name,
            full_name=model.full_name,
            parent_id=GroupId(value=model.parent_id) if model.parent_id else None,
            description=model.description,
            max_size=model.max_size,
            category_id=model.category_id,
            payment_plan=PaymentPlan(model.payment_plan),
            discussion_privacy_options=DiscussionPrivacyOption(
                model.discussion_privacy_options
            ),
            membership_granted_upon=MembershipGrantedUpon(
                model.membership_granted_upon
            ),
            is_visible_to_public=model.is_visible_to_public,
            is_visible_to_parent_members=model.is_visible_to_parent_members,
            parent_members_can_see_discussions=(
                model.parent_members_can_see_discussions
            ),
            members_can_add_members=model.members_can_add_members,
            can_start_group=model.can_start_group,
            archived_at=as_utc(model.archived_at),
            setup_completed_at=as_utc(model.setup_completed_at),
            memberships_count=model.memberships_count,
            discussions_count=model.discussions_count,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
