"""Database engine and session factory creation.

The group rules run as synchronous request-scoped use cases, so the
storage collaborator uses a plain (non-async) SQLAlchemy engine.
"""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.settings import DatabaseSettings, get_database_settings

__all__ = [
    "build_url",
    "create_session_factory",
    "create_write_engine",
]


def build_url(settings: DatabaseSettings) -> str:
    """Build the database URL from settings.

    Username and password are percent-encoded by SQLAlchemy's URL builder.

    Args:
        settings: Database connection settings

    Returns:
        Connection URL string with credentials rendered
    """
    url = URL.create(
        drivername=settings.drivername,
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)


def create_write_engine(settings: DatabaseSettings | None = None) -> Engine:
    """Create the engine used for group reads and writes.

    Args:
        settings: Database connection settings, read from the environment
            when omitted

    Returns:
        Configured engine with a bounded connection pool
    """
    settings = settings or get_database_settings()
    return create_engine(
        build_url(settings),
        pool_size=settings.pool_size,
        max_overflow=0,  # No overflow - strict pool limit
        pool_pre_ping=True,
        echo=settings.echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to ``engine``.

    ``expire_on_commit`` is disabled so aggregates returned from a use
    case stay readable after its transaction commits.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
