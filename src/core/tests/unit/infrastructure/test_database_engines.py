"""Unit tests for database engine and session factory creation."""

from unittest.mock import patch

from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from infrastructure.database.engines import (
    build_url,
    create_session_factory,
    create_write_engine,
)
from infrastructure.settings import DatabaseSettings, get_database_settings


def _settings(**overrides) -> DatabaseSettings:
    values = dict(
        host="db",
        port=5433,
        database="groups",
        username="app",
        password=SecretStr("p@ss word"),
    )
    values.update(overrides)
    return DatabaseSettings(**values)


class TestBuildUrl:
    def test_renders_credentials_and_location(self):
        url = build_url(_settings())

        assert url.startswith("postgresql+psycopg://app:")
        assert url.endswith("@db:5433/groups")

    def test_percent_encodes_password(self):
        url = build_url(_settings())

        assert "p@ss word" not in url
        assert "p%40ss" in url


class TestCreateWriteEngine:
    def test_passes_pool_settings(self):
        with patch("infrastructure.database.engines.create_engine") as mock_create:
            create_write_engine(_settings(pool_size=7, echo=True))

        kwargs = mock_create.call_args[1]
        assert kwargs["pool_size"] == 7
        assert kwargs["max_overflow"] == 0
        assert kwargs["pool_pre_ping"] is True
        assert kwargs["echo"] is True

    def test_reads_environment_when_settings_omitted(self, monkeypatch):
        monkeypatch.setenv("GROUPCORE_DB_HOST", "envdb")
        get_database_settings.cache_clear()

        try:
            with patch("infrastructure.database.engines.create_engine") as mock_create:
                create_write_engine()
        finally:
            get_database_settings.cache_clear()

        assert "@envdb:5432/" in mock_create.call_args[0][0]


class TestCreateSessionFactory:
    def test_sessions_keep_state_after_commit(self):
        engine = create_engine("sqlite://")

        factory = create_session_factory(engine)

        with factory() as session:
            assert isinstance(session, Session)
            assert session.expire_on_commit is False
        engine.dispose()
