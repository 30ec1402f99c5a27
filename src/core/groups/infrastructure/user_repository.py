"""SQLAlchemy implementation of IUserRepository.

Users are owned by the user directory; this repository only reads them.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from groups.domain.aggregates import User
from groups.domain.value_objects import UserId
from groups.infrastructure.models import UserModel
from groups.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """Read-only repository for User read models."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User, or None if not found
        """
        model = self._session.get(UserModel, user_id.value)
        return self._to_domain(model) if model is not None else None

    def get_many(self, user_ids: Sequence[UserId]) -> list[User]:
        """Retrieve the users that exist among ``user_ids``, in input order."""
        if not user_ids:
            return []
        stmt = select(UserModel).where(UserModel.id.in_([u.value for u in user_ids]))
        by_id = {model.id: model for model in self._session.scalars(stmt).all()}
        return [
            self._to_domain(by_id[user_id.value])
            for user_id in user_ids
            if user_id.value in by_id
        ]

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(id=UserId(value=model.id), email=model.email, name=model.name)
