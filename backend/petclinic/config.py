"""
PetClinic Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the storage bootstrap, the app factory and the middleware.
When:  Loaded once at module import time; validated before the app starts.

Every option that shapes the store connection is enumerated here. Nothing
else in the codebase reads environment variables, and nothing mutates the
settings after startup.
"""

from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


# Consistency levels understood by the store; the session maps each one onto
# a transaction isolation level for server-side SQL dialects.
CONSISTENCY_LEVELS = {
    "ONE": "READ COMMITTED",
    "LOCAL_ONE": "READ COMMITTED",
    "QUORUM": "REPEATABLE READ",
    "LOCAL_QUORUM": "REPEATABLE READ",
    "EACH_QUORUM": "SERIALIZABLE",
    "ALL": "SERIALIZABLE",
}

SUPPORTED_DRIVERS = {"postgresql+asyncpg", "sqlite+aiosqlite"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local development store.
    Attributes are grouped by concern for readability.
    """

    # ── Store Connection ──────────────────────────────────────────────────
    # SQLAlchemy async driver used to reach the store.
    store_driver: str = Field(default="postgresql+asyncpg")

    # Comma-separated host list. The first host is the primary contact point;
    # asyncpg tries the others in order when it cannot reach it.
    contact_points: str = Field(default="localhost")
    store_port: int = Field(default=5432, ge=1, le=65535)

    # Database name, or the file path for sqlite.
    store_database: str = Field(default="petclinic")

    # Namespace holding every petclinic table (a SQL schema on PostgreSQL).
    keyspace: str = Field(default="petclinic", min_length=1, max_length=48)

    # ── Authentication ────────────────────────────────────────────────────
    auth_mode: str = Field(default="none")
    store_username: str = Field(default="")
    store_password: str = Field(default="")

    # ── Consistency & Timeouts ────────────────────────────────────────────
    consistency_level: str = Field(default="LOCAL_QUORUM")

    # Applied to every single storage call; a timeout surfaces as StorageError.
    request_timeout: float = Field(default=20.0, gt=0, le=300)
    connect_timeout: float = Field(default=20.0, gt=0, le=300)

    # Startup probe attempts before the process gives up on the store.
    connect_attempts: int = Field(default=3, ge=1, le=10)
    connect_min_wait: float = Field(default=1.0, ge=0)
    connect_max_wait: float = Field(default=10.0, ge=0)

    # ── Schema Bootstrap ──────────────────────────────────────────────────
    # `create_if_not_exists` creates the keyspace and tables on first run.
    schema_action: str = Field(default="create_if_not_exists")

    # ── Pool ──────────────────────────────────────────────────────────────
    db_pool_size: int = Field(default=20, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:4200")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=9966, ge=1024, le=65535)
    log_level: str = Field(default="INFO")

    # ── Validators ────────────────────────────────────────────────────────

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("consistency_level")
    @classmethod
    def validate_consistency_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in CONSISTENCY_LEVELS:
            raise ValueError(
                f"Invalid consistency_level '{v}'. Must be one of: {sorted(CONSISTENCY_LEVELS)}"
            )
        return upper

    @field_validator("store_driver")
    @classmethod
    def validate_store_driver(cls, v: str) -> str:
        if v not in SUPPORTED_DRIVERS:
            raise ValueError(f"Invalid store_driver '{v}'. Must be one of: {sorted(SUPPORTED_DRIVERS)}")
        return v

    @field_validator("auth_mode")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        lower = v.lower()
        if lower not in {"none", "password"}:
            raise ValueError(f"Invalid auth_mode '{v}'. Must be 'none' or 'password'")
        return lower

    @field_validator("schema_action")
    @classmethod
    def validate_schema_action(cls, v: str) -> str:
        lower = v.lower()
        if lower not in {"none", "create_if_not_exists"}:
            raise ValueError(
                f"Invalid schema_action '{v}'. Must be 'none' or 'create_if_not_exists'"
            )
        return lower

    @field_validator("keyspace")
    @classmethod
    def validate_keyspace(cls, v: str) -> str:
        if not v.replace("_", "").isalnum() or v[0].isdigit():
            raise ValueError(f"Invalid keyspace '{v}'. Use letters, digits and underscores")
        return v.lower()

    @model_validator(mode="after")
    def validate_credentials(self) -> "Settings":
        if self.auth_mode == "password" and not self.store_username:
            raise ValueError("auth_mode 'password' requires STORE_USERNAME")
        if not self.contact_point_list and not self.is_embedded:
            raise ValueError("At least one contact point is required")
        return self

    # ── Derived Values ────────────────────────────────────────────────────

    @property
    def contact_point_list(self) -> List[str]:
        return [host.strip() for host in self.contact_points.split(",") if host.strip()]

    @property
    def is_embedded(self) -> bool:
        """True when the store is an embedded file (sqlite) without schemas."""
        return self.store_driver.startswith("sqlite")

    @property
    def isolation_level(self) -> str:
        return CONSISTENCY_LEVELS[self.consistency_level]

    @property
    def store_url(self) -> URL:
        """
        Builds the SQLAlchemy URL from the enumerated connection options.

        Multiple contact points become repeated `host=` query entries, which
        the asyncpg dialect turns into a multi-host connection.
        """
        if self.is_embedded:
            return URL.create(self.store_driver, database=self.store_database)

        username = self.store_username if self.auth_mode == "password" else None
        password = self.store_password if self.auth_mode == "password" else None
        hosts = self.contact_point_list
        if len(hosts) == 1:
            return URL.create(
                self.store_driver,
                username=username,
                password=password,
                host=hosts[0],
                port=self.store_port,
                database=self.store_database,
            )
        return URL.create(
            self.store_driver,
            username=username,
            password=password,
            database=self.store_database,
            query={"host": [f"{host}:{self.store_port}" for host in hosts]},
        )

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported by the app factory and dependencies.
settings = Settings()
