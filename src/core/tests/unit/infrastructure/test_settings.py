"""Unit tests for infrastructure settings."""

import pytest
from pydantic import SecretStr, ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    GroupRuleSettings,
    get_database_settings,
    get_group_rule_settings,
)


class TestDatabaseSettings:
    def test_defaults(self):
        settings = DatabaseSettings(_env_file=None)

        assert settings.drivername == "postgresql+psycopg"
        assert settings.port == 5432
        assert settings.pool_size == 5
        assert settings.echo is False

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("GROUPCORE_DB_HOST", "db.internal")
        monkeypatch.setenv("GROUPCORE_DB_PASSWORD", "s3cret")

        settings = DatabaseSettings(_env_file=None)

        assert settings.host == "db.internal"
        assert settings.password.get_secret_value() == "s3cret"

    def test_connection_string_hides_password(self):
        settings = DatabaseSettings(
            username="groups", password=SecretStr("s3cret"), host="db", database="g"
        )

        assert settings.connection_string == "postgresql+psycopg://groups@db:5432/g"
        assert "s3cret" not in settings.connection_string

    def test_pool_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_size=0)

    def test_pool_size_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_size=101)


class TestGroupRuleSettings:
    def test_defaults(self):
        settings = GroupRuleSettings(_env_file=None)

        assert settings.name_max_length == 250
        assert settings.description_max_length == 250
        assert settings.default_max_size is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("GROUPCORE_GROUPS_DEFAULT_MAX_SIZE", "300")

        assert GroupRuleSettings(_env_file=None).default_max_size == 300

    def test_name_max_length_must_fit_a_short_name(self):
        with pytest.raises(ValidationError, match="must be at least 3"):
            GroupRuleSettings(name_max_length=2)

    def test_name_max_length_fits_the_name_column(self):
        assert GroupRuleSettings(name_max_length=255).name_max_length == 255
        with pytest.raises(ValidationError):
            GroupRuleSettings(name_max_length=256)

    def test_default_max_size_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            GroupRuleSettings(default_max_size=-1)


class TestSettingsGetters:
    def test_group_rule_settings_are_cached(self):
        get_group_rule_settings.cache_clear()

        assert get_group_rule_settings() is get_group_rule_settings()

        get_group_rule_settings.cache_clear()

    def test_database_settings_are_cached(self):
        get_database_settings.cache_clear()

        assert get_database_settings() is get_database_settings()

        get_database_settings.cache_clear()
