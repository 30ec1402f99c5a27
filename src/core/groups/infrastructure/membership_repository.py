"""SQLAlchemy implementation of IMembershipRepository.

Membership inserts and deletes also move the group's memberships_count
with an SQL increment in the same transaction, so the counter never
drifts from the rows even under concurrent joins.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from groups.domain.aggregates import Membership
from groups.domain.value_objects import GroupId, MembershipId, UserId
from groups.infrastructure.models import GroupModel, MembershipModel, UserModel
from groups.infrastructure.observability import (
    DefaultMembershipRepositoryProbe,
    MembershipRepositoryProbe,
)
from groups.ports.exceptions import DuplicateMembershipError
from groups.ports.repositories import IMembershipRepository
from infrastructure.database import as_utc

# PostgreSQL reports the constraint name, SQLite the column list.
_UNIQUE_VIOLATION_MARKERS = (
    "uq_memberships_group_user",
    "memberships.group_id, memberships.user_id",
)


class MembershipRepository(IMembershipRepository):
    """Repository for memberships and the group member counter."""

    def __init__(
        self, session: Session, probe: MembershipRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: Session owned by the application service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMembershipRepositoryProbe()

    def add(self, membership: Membership) -> None:
        """Insert a membership and increment the group's counter.

        Raises:
            DuplicateMembershipError: If (group_id, user_id) already exists.
                The session's transaction is unusable afterwards and must be
                rolled back by the caller.
        """
        model = MembershipModel(
            id=membership.id.value,
            group_id=membership.group_id.value,
            user_id=membership.user_id.value,
            inviter_id=membership.inviter_id.value if membership.inviter_id else None,
            admin=membership.admin,
            archived_at=membership.archived_at,
            created_at=membership.created_at,
        )
        self._session.add(model)
        try:
            self._session.flush()
        except IntegrityError as e:
            if any(marker in str(e) for marker in _UNIQUE_VIOLATION_MARKERS):
                self._probe.duplicate_membership(
                    membership.group_id.value, membership.user_id.value
                )
                raise DuplicateMembershipError(
                    f"User {membership.user_id} is already a member of "
                    f"group {membership.group_id}"
                ) from e
            raise

        self._adjust_counter(membership.group_id.value, 1)
        self._probe.membership_added(
            membership.group_id.value, membership.user_id.value
        )

    def save(self, membership: Membership) -> None:
        model = self._session.get(MembershipModel, membership.id.value)
        if model is None:
            raise LookupError(f"Membership {membership.id} does not exist")
        model.admin = membership.admin
        model.archived_at = membership.archived_at
        self._session.flush()

    def remove(self, membership_id: MembershipId) -> bool:
        """Delete a membership and decrement the group's counter.

        Returns:
            True if deleted, False if not found
        """
        model = self._session.get(MembershipModel, membership_id.value)
        if model is None:
            return False

        group_id, user_id = model.group_id, model.user_id
        self._session.delete(model)
        self._session.flush()
        self._adjust_counter(group_id, -1)
        self._probe.membership_removed(group_id, user_id)
        return True

    def get(self, group_id: GroupId, user_id: UserId) -> Membership | None:
        stmt = select(MembershipModel).where(
            MembershipModel.group_id == group_id.value,
            MembershipModel.user_id == user_id.value,
        )
        model = self._session.scalars(stmt).one_or_none()
        return self._to_domain(model) if model is not None else None

    def list_by_group(self, group_id: GroupId) -> list[Membership]:
        stmt = (
            select(MembershipModel)
            .where(MembershipModel.group_id == group_id.value)
            .order_by(MembershipModel.id)
        )
        return [self._to_domain(m) for m in self._session.scalars(stmt).all()]

    def list_admins(self, group_id: GroupId) -> list[Membership]:
        stmt = (
            select(MembershipModel)
            .where(
                MembershipModel.group_id == group_id.value,
                MembershipModel.admin.is_(True),
            )
            .order_by(MembershipModel.user_id)
        )
        return [self._to_domain(m) for m in self._session.scalars(stmt).all()]

    def count_for_group(self, group_id: GroupId) -> int:
        stmt = select(GroupModel.memberships_count).where(
            GroupModel.id == group_id.value
        )
        return self._session.scalar(stmt) or 0

    def exists_with_email(self, group_id: GroupId, email: str) -> bool:
        stmt = select(
            exists()
            .where(MembershipModel.group_id == group_id.value)
            .where(MembershipModel.user_id == UserModel.id)
            .where(UserModel.email == email)
        )
        return bool(self._session.scalar(stmt))

    def archive_all_for_group(self, group_id: GroupId, at: datetime) -> int:
        """Set archived_at on every membership of the group.

        Returns:
            Number of memberships updated
        """
        result = self._session.execute(
            update(MembershipModel)
            .where(MembershipModel.group_id == group_id.value)
            .values(archived_at=at)
        )
        count = result.rowcount
        self._probe.memberships_archived(group_id.value, count)
        return count

    def _adjust_counter(self, group_id: str, delta: int) -> None:
        self._session.execute(
            update(GroupModel)
            .where(GroupModel.id == group_id)
            .values(memberships_count=GroupModel.memberships_count + delta)
        )

    @staticmethod
    def _to_domain(model: MembershipModel) -> Membership:
        return Membership(
            id=MembershipId(value=model.id),
            group_id=GroupId(value=model.group_id),
            user_id=UserId(value=model.user_id),
            inviter_id=UserId(value=model.inviter_id) if model.inviter_id else None,
            admin=model.admin,
            archived_at=as_utc(model.archived_at),
            created_at=as_utc(model.created_at),
        )
