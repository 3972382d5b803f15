"""
Environment-driven settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return url


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_min_size: int
    pool_max_size: int
    command_timeout_s: int
    ranking_strategy: str


def load_settings() -> Settings:
    return Settings(
        database_url=database_url(),
        pool_min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        pool_max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout_s=_env_int("DB_COMMAND_TIMEOUT_S", 30),
        ranking_strategy=_env_str("RANKING_STRATEGY", "store").lower(),
    )


def server_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def server_port() -> int:
    return _env_int("PORT", 3000)
