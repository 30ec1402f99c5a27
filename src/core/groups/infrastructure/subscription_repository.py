"""SQLAlchemy implementation of ISubscriptionRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from groups.domain.aggregates import Subscription
from groups.domain.value_objects import GroupId
from groups.infrastructure.models import SubscriptionModel
from groups.ports.repositories import ISubscriptionRepository


class SubscriptionRepository(ISubscriptionRepository):
    """Reads the billing subscription of a top-level group."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_for_group(self, group_id: GroupId) -> Subscription | None:
        stmt = select(SubscriptionModel).where(
            SubscriptionModel.group_id == group_id.value
        )
        model = self._session.scalars(stmt).one_or_none()
        if model is None:
            return None
        return Subscription(group_id=group_id, amount=Decimal(model.amount))
