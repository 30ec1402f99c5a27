"""Database infrastructure - shared ORM base and engine factories."""

from infrastructure.database.engines import (
    build_url,
    create_session_factory,
    create_write_engine,
)
from infrastructure.database.models import Base, TimestampMixin, as_utc

__all__ = [
    "Base",
    "TimestampMixin",
    "as_utc",
    "build_url",
    "create_session_factory",
    "create_write_engine",
]
