"""Integration test fixtures for database tests.

These fixtures run the real repositories against an in-memory SQLite
database shared through a StaticPool, so no external services are needed.
"""

from collections.abc import Generator
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from ulid import ULID

import groups.infrastructure.models  # noqa: F401  registers tables on Base
from groups.application.services import GroupService
from groups.dependencies import get_group_service
from groups.domain.value_objects import GroupId, UserId
from groups.infrastructure.models import (
    DiscussionModel,
    InvitationModel,
    MembershipRequestModel,
    SubscriptionModel,
    UserModel,
)
from infrastructure.database import Base, create_session_factory
from infrastructure.settings import GroupRuleSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    factory = create_session_factory(engine)
    with factory() as session:
        yield session


@pytest.fixture
def group_service(session: Session) -> GroupService:
    return get_group_service(session, settings=GroupRuleSettings(_env_file=None))


class Seeder:
    """Writes rows owned by other collaborators (users, discussions, ...)."""

    def __init__(self, session: Session):
        self._session = session

    def user(self, email: str, name: str | None = None) -> UserId:
        user_id = UserId.generate()
        with self._session.begin():
            self._session.add(UserModel(id=user_id.value, email=email, name=name))
        return user_id

    def discussion(self, group_id: GroupId, title: str = "Welcome") -> str:
        discussion_id = str(ULID())
        with self._session.begin():
            self._session.add(
                DiscussionModel(id=discussion_id, group_id=group_id.value, title=title)
            )
        return discussion_id

    def invitation(
        self, group_id: GroupId, email: str, accepted: bool = False
    ) -> None:
        with self._session.begin():
            self._session.add(
                InvitationModel(
                    id=str(ULID()),
                    group_id=group_id.value,
                    recipient_email=email,
                    accepted_at=datetime.now(UTC) if accepted else None,
                )
            )

    def membership_request(
        self, group_id: GroupId, email: str, response: str | None = None
    ) -> None:
        with self._session.begin():
            self._session.add(
                MembershipRequestModel(
                    id=str(ULID()),
                    group_id=group_id.value,
                    email=email,
                    response=response,
                )
            )

    def subscription(self, group_id: GroupId, amount: str) -> None:
        with self._session.begin():
            self._session.add(
                SubscriptionModel(
                    id=str(ULID()), group_id=group_id.value, amount=Decimal(amount)
                )
            )


@pytest.fixture
def seed(session: Session) -> Seeder:
    return Seeder(session)
