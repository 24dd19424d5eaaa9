"""Environment-driven settings for listql.

Environment variables (read after loading a local ``.env`` file):
  LISTQL_DATABASE_URL       SQLAlchemy async URL, defaults to sqlite+aiosqlite:///:memory:
  LISTQL_JOIN_ALIAS_PREFIX  prefix of joined-table aliases (default 'join')
  LISTQL_DEFAULT_LIMIT      page size used by the GraphQL field when none is given (default 10)
  SQL_ECHO                  '1' to echo SQL, 'debug' to include parameters, '0' (default) to disable
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional, Union

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

_SETTINGS: Optional["Settings"] = None


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    join_alias_prefix: str = "join"
    default_limit: int = 10
    sql_echo: Union[bool, str] = False

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        echo_raw = (os.getenv("SQL_ECHO") or "0").strip().lower()
        if echo_raw == "debug":
            echo: Union[bool, str] = "debug"
        else:
            echo = echo_raw not in ("", "0", "false", "no")
        try:
            default_limit = int(os.getenv("LISTQL_DEFAULT_LIMIT", "10"))
        except ValueError:
            raise ValueError(f"LISTQL_DEFAULT_LIMIT must be an integer, got {os.getenv('LISTQL_DEFAULT_LIMIT')!r}") from None
        return cls(
            database_url=os.getenv("LISTQL_DATABASE_URL") or DEFAULT_DATABASE_URL,
            join_alias_prefix=os.getenv("LISTQL_JOIN_ALIAS_PREFIX") or "join",
            default_limit=default_limit,
            sql_echo=echo,
        )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached settings so the next ``get_settings`` re-reads the environment."""
    global _SETTINGS
    _SETTINGS = None


def create_engine(settings: Optional[Settings] = None, **kwargs: Any) -> AsyncEngine:
    settings = settings or get_settings()
    kwargs.setdefault("echo", settings.sql_echo)
    kwargs.setdefault("future", True)
    engine = create_async_engine(settings.database_url, **kwargs)
    if engine.dialect.name == "sqlite":
        from .adapters import install_sqlite_functions
        install_sqlite_functions(engine)
    return engine
