"""
Environment-driven settings.

Every value has a local-development default so the API starts against a
stock Postgres container without any configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "users_db"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def dsn(self) -> str:
        user = quote(self.db_user, safe="")
        password = quote(self.db_password, safe="")
        return f"postgresql://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        db_user=_env_str("DB_USER", defaults.db_user),
        db_password=_env_str("DB_PASSWORD", defaults.db_password),
        db_host=_env_str("DB_HOST", defaults.db_host),
        db_port=_env_int("DB_PORT", defaults.db_port),
        db_name=_env_str("DB_NAME", defaults.db_name),
        db_pool_min_size=_env_int("DB_POOL_MIN_SIZE", defaults.db_pool_min_size),
        db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", defaults.db_pool_max_size),
        host=_env_str("HOST", defaults.host),
        port=_env_int("PORT", defaults.port),
        log_level=_env_str("LOG_LEVEL", defaults.log_level).upper(),
    )
