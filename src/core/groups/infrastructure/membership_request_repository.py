"""SQLAlchemy implementation of IMembershipRequestRepository."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from groups.domain.aggregates import MembershipRequest
from groups.domain.value_objects import GroupId, MembershipRequestId, UserId
from groups.infrastructure.models import MembershipRequestModel
from groups.ports.repositories import IMembershipRequestRepository
from infrastructure.database import as_utc


class MembershipRequestRepository(IMembershipRequestRepository):
    """Read access to requests to join a group."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def exists_with_email(self, group_id: GroupId, email: str) -> bool:
        stmt = select(
            exists().where(
                MembershipRequestModel.group_id == group_id.value,
                MembershipRequestModel.email == email,
            )
        )
        return bool(self._session.scalar(stmt))

    def list_pending(self, group_id: GroupId) -> list[MembershipRequest]:
        stmt = (
            select(MembershipRequestModel)
            .where(
                MembershipRequestModel.group_id == group_id.value,
                MembershipRequestModel.response.is_(None),
            )
            .order_by(MembershipRequestModel.created_at, MembershipRequestModel.id)
        )
        return [
            MembershipRequest(
                id=MembershipRequestId(value=model.id),
                group_id=GroupId(value=model.group_id),
                user_id=UserId(value=model.user_id) if model.user_id else None,
                email=model.email,
                response=model.response,
                created_at=as_utc(model.created_at),
            )
            for model in self._session.scalars(stmt).all()
        ]
