"""SQLAlchemy implementation of IDiscussionRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from groups.domain.value_objects import DiscussionId, GroupId
from groups.infrastructure.models import DiscussionModel
from groups.ports.repositories import IDiscussionRepository


class DiscussionRepository(IDiscussionRepository):
    """The parts of discussion storage the archive cascade touches."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_ids_for_group(self, group_id: GroupId) -> list[DiscussionId]:
        stmt = (
            select(DiscussionModel.id)
            .where(DiscussionModel.group_id == group_id.value)
            .order_by(DiscussionModel.id)
        )
        return [DiscussionId(value=value) for value in self._session.scalars(stmt)]

    def archive(self, discussion_id: DiscussionId, at: datetime) -> None:
        """Archive one discussion, keeping the first archive time."""
        self._session.execute(
            update(DiscussionModel)
            .where(
                DiscussionModel.id == discussion_id.value,
                DiscussionModel.archived_at.is_(None),
            )
            .values(archived_at=at)
        )
