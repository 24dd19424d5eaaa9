from __future__ import annotations

import logging

from .base import BaseAdapter, escape_like
from .sqlite import SQLiteAdapter, install_functions as install_sqlite_functions
from .postgres import PostgresAdapter
from .mssql import MSSQLAdapter

logger = logging.getLogger(__name__)


def get_adapter(dialect_name: str) -> BaseAdapter:
    dn = (dialect_name or '').lower()
    if dn.startswith('postgres'):
        return PostgresAdapter()
    if dn.startswith('mssql') or 'pyodbc' in dn:
        return MSSQLAdapter()
    if dn.startswith('sqlite'):
        return SQLiteAdapter()
    logger.warning("listql: unsupported dialect %r, using the generic adapter", dialect_name)
    return BaseAdapter()


def adapter_for_session(session) -> BaseAdapter:
    """Pick the adapter matching the dialect a session is bound to."""
    bind = session.get_bind()
    engine = getattr(bind, 'sync_engine', bind)
    adapter = get_adapter(engine.dialect.name)
    logger.debug("listql: using %s adapter for dialect %s", adapter.name, engine.dialect.name)
    return adapter


__all__ = [
    'BaseAdapter',
    'SQLiteAdapter',
    'PostgresAdapter',
    'MSSQLAdapter',
    'escape_like',
    'install_sqlite_functions',
    'get_adapter',
    'adapter_for_session',
]
