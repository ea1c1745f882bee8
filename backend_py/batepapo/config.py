"""Runtime configuration.

Values are read from the process environment once ``load_dotenv`` has
merged any ``.env`` file found in the working directory. ``Settings``
is a plain dataclass so tests can build one directly and hand it to
``create_app`` without touching the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str = "sqlite:///./batepapo.db"
    sweep_interval_seconds: float = 15.0
    session_timeout_seconds: float = 10.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 5000
    db_wait_tries: int = 30
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./batepapo.db"),
            sweep_interval_seconds=float(os.getenv("SWEEP_INTERVAL_SECONDS", "15")),
            session_timeout_seconds=float(os.getenv("SESSION_TIMEOUT_SECONDS", "10")),
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            db_wait_tries=int(os.getenv("DB_WAIT_TRIES", "30")),
            sql_echo=_env_bool("SQL_ECHO"),
        )
