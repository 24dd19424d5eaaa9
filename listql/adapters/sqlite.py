from __future__ import annotations

from typing import Any

from sqlalchemy import String, event, func

from .base import BaseAdapter, LIKE_ESCAPE, escape_like

# SQLite's built-in lower() only folds ASCII; searches fold through Python instead
CASEFOLD_FUNCTION = 'listql_casefold'


def casefold(value: Any) -> Any:
    if value is None:
        return None
    return str(value).casefold()


def register_functions(dbapi_connection) -> None:
    """Register the Unicode case fold on one DB-API connection."""
    dbapi_connection.create_function(CASEFOLD_FUNCTION, 1, casefold)


def _on_connect(dbapi_connection, connection_record):  # noqa: ANN001
    register_functions(dbapi_connection)


def install_functions(engine) -> None:
    """Register the case fold on every new connection of an (async) engine."""
    sync_engine = getattr(engine, 'sync_engine', engine)
    if not event.contains(sync_engine, 'connect', _on_connect):
        event.listen(sync_engine, 'connect', _on_connect)


class SQLiteAdapter(BaseAdapter):
    name = 'sqlite'

    async def prepare(self, session) -> None:
        # Covers engines created without install_functions()
        conn = await session.connection()
        await conn.run_sync(lambda sync_conn: register_functions(sync_conn.connection.dbapi_connection))

    def contains_ci(self, col, term: Any):
        folded = getattr(func, CASEFOLD_FUNCTION)(self.as_text(col), type_=String())
        return folded.contains(casefold(escape_like(term)), escape=LIKE_ESCAPE)
