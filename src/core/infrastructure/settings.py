"""Configuration for group-core.

Every section reads GROUPCORE_* environment variables (or a local .env).
The defaults target a local Postgres; only the password has no usable
default outside development.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings for the storage collaborator.

    Environment variables:
        GROUPCORE_DB_DRIVERNAME: SQLAlchemy driver (default: postgresql+psycopg)
        GROUPCORE_DB_HOST: Database host (default: localhost)
        GROUPCORE_DB_PORT: Database port (default: 5432)
        GROUPCORE_DB_DATABASE: Database name (default: groupcore)
        GROUPCORE_DB_USERNAME: Database user (default: groupcore)
        GROUPCORE_DB_PASSWORD: Database password (required in production)
        GROUPCORE_DB_POOL_SIZE: Connections kept in the pool (default: 5)
        GROUPCORE_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUPCORE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    drivername: str = Field(
        default="postgresql+psycopg", description="SQLAlchemy driver name"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="groupcore", description="Database name")
    username: str = Field(default="groupcore", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=5,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"{self.drivername}://{self.username}@{self.host}:{self.port}/{self.database}"


class GroupRuleSettings(BaseSettings):
    """Tunables for group field validation and creation defaults.

    Environment variables:
        GROUPCORE_GROUPS_NAME_MAX_LENGTH: Longest accepted group name, at most
            255 (default: 250)
        GROUPCORE_GROUPS_DESCRIPTION_MAX_LENGTH: Longest description (default: 250)
        GROUPCORE_GROUPS_DEFAULT_MAX_SIZE: max_size applied to new top-level
            groups when none is given (default: unset, meaning unlimited)
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUPCORE_GROUPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Bounded by the width of the groups.name column.
    name_max_length: int = Field(default=250, ge=1, le=255)
    description_max_length: int = Field(default=250, ge=0)
    default_max_size: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_lengths(self) -> "GroupRuleSettings":
        """Validate that names can be at least as long as a full name separator."""
        if self.name_max_length < 3:
            raise ValueError(
                f"name_max_length ({self.name_max_length}) must be at least 3"
            )
        return self


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_group_rule_settings() -> GroupRuleSettings:
    """Get cached group rule settings."""
    return GroupRuleSettings()
