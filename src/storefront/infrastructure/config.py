"""Application settings read from the environment.

A ``.env`` file found from the current working directory upwards is
loaded first (python-dotenv); variables already set in the environment
win.  A ``Settings`` instance is built once by the composition root and
passed down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_SECRET_KEY = "change-this-secret-in-production"
PRODUCTION_ENVIRONMENTS = ("production", "prod")

_TRUE_VALUES = ("1", "true", "yes", "on")


class ConfigurationError(ValueError):
    """The environment describes an unusable configuration."""


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///storefront.db"
    # Ignored for SQLite, which serialises writers with BEGIN IMMEDIATE.
    db_isolation: str = "SERIALIZABLE"
    secret_key: str = DEFAULT_SECRET_KEY
    token_algorithm: str = "HS256"
    token_expire_minutes: int = 60 * 24
    log_level: str = "INFO"
    log_json: bool = False
    environment: str = "development"

    @classmethod
    def from_env(cls, env_file: str | None = None) -> Settings:
        load_dotenv(env_file or find_dotenv(usecwd=True))

        try:
            expire = int(os.getenv("STOREFRONT_TOKEN_EXPIRE_MINUTES", str(cls.token_expire_minutes)))
        except ValueError as exc:
            raise ConfigurationError("STOREFRONT_TOKEN_EXPIRE_MINUTES must be an integer") from exc

        settings = cls(
            database_url=os.getenv("STOREFRONT_DATABASE_URL", cls.database_url),
            db_isolation=os.getenv("STOREFRONT_DB_ISOLATION", cls.db_isolation).upper(),
            secret_key=os.getenv("STOREFRONT_SECRET_KEY", cls.secret_key),
            token_algorithm=os.getenv("STOREFRONT_TOKEN_ALGORITHM", cls.token_algorithm),
            token_expire_minutes=expire,
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", cls.log_level).upper(),
            log_json=os.getenv("STOREFRONT_LOG_JSON", "false").lower() in _TRUE_VALUES,
            environment=os.getenv("STOREFRONT_ENVIRONMENT", cls.environment).lower(),
        )
        settings.validate()
        return settings

    @property
    def is_production(self) -> bool:
        return self.environment in PRODUCTION_ENVIRONMENTS

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def validate(self) -> None:
        if self.token_expire_minutes <= 0:
            raise ConfigurationError("Token lifetime must be positive")
        if self.is_production and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigurationError(
                "STOREFRONT_SECRET_KEY must be set to a unique value in production"
            )
