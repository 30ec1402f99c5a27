"""SQLAlchemy implementation of IInvitationRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from groups.domain.value_objects import GroupId
from groups.infrastructure.models import InvitationModel
from groups.ports.repositories import IInvitationRepository


class InvitationRepository(IInvitationRepository):
    """Counts the invitations a group still has outstanding."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count_pending(self, group_id: GroupId) -> int:
        stmt = select(func.count(InvitationModel.id)).where(
            InvitationModel.group_id == group_id.value,
            InvitationModel.accepted_at.is_(None),
            InvitationModel.cancelled_at.is_(None),
        )
        return self._session.scalar(stmt) or 0
