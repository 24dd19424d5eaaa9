"""Strawberry surface for listable resources.

    @strawberry.type
    class Query:
        inventory_logs: ListPage = list_field(registry.get('inventory_log'))

    { inventoryLogs(offset: 0, limit: 5, search: "bolt") { recordsTotal recordsFiltered data } }

The session is taken from the GraphQL context (``db_session`` by default).
"""
import datetime as _dt
import decimal
import uuid
from typing import Any, Dict, List, Optional

import strawberry
from strawberry.scalars import JSON
from strawberry.types import Info

from .config import get_settings
from .registry import ListableResource

__all__ = ['ListPage', 'list_field', 'get_db_session']

_SESSION_KEYS = ('db_session', 'db', 'session', 'async_session')


@strawberry.type(description="One page of a listable resource with total and filtered counts.")
class ListPage:
    data: JSON
    records_total: int
    records_filtered: int


def get_db_session(info_or_ctx: Any, session_key: Optional[str] = None) -> Any:
    """Extract the AsyncSession from a Strawberry ``Info`` or a plain context.

    ``session_key`` is tried first, followed by the usual context keys.
    """
    ctx = getattr(info_or_ctx, 'context', info_or_ctx)
    if ctx is None:
        return None
    keys = ((session_key,) if session_key else ()) + _SESSION_KEYS
    for k in keys:
        if isinstance(ctx, dict):
            v = ctx.get(k)
        else:
            v = getattr(ctx, k, None)
        if v is not None:
            return v
    return None


def _jsonable(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


def _jsonable_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{k: _jsonable(v) for k, v in row.items()} for row in rows]


def list_field(
    resource: ListableResource,
    *,
    session_key: str = 'db_session',
    description: Optional[str] = None,
):
    """Build a strawberry field resolving one page of ``resource``.

    Arguments: ``offset``, ``limit`` (defaults to ``LISTQL_DEFAULT_LIMIT``),
    ``search`` and ``args`` (JSON forwarded to the resource's post-arguments
    hook).
    """
    default_limit = get_settings().default_limit

    async def resolve(
        info: Info,
        offset: int = 0,
        limit: int = default_limit,
        search: str = "",
        args: Optional[JSON] = None,
    ) -> ListPage:
        session = get_db_session(info, session_key)
        if session is None:
            raise RuntimeError(f"No database session in GraphQL context (expected '{session_key}')")
        result = await resource.get_list(session, offset, limit, search, args)
        return ListPage(
            data=_jsonable_rows(result.data),
            records_total=result.records_total,
            records_filtered=result.records_filtered,
        )

    return strawberry.field(
        resolver=resolve,
        description=description or f"Paged, searchable list of {resource.name}.",
    )
