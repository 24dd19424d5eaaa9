"""Run the list queries of a resource and package the result.

Three statements are executed for every call: the requested page of rows
(with search conditions), the unfiltered count and the filtered count. They
run one after another on the caller's session and share no transaction of
their own, so rows written concurrently may be reflected inconsistently
between the page and the counts.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .adapters import adapter_for_session
from .sql.builders import ListQueryBuilder

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]
ResultTransform = Callable[[Rows], Union[Rows, Awaitable[Rows]]]


@dataclass
class ListResult:
    data: Rows = field(default_factory=list)
    records_total: int = 0
    records_filtered: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Wire form used by DataTables-style consumers."""
        return {
            "data": self.data,
            "recordsTotal": self.records_total,
            "recordsFiltered": self.records_filtered,
        }


def count_statement(stmt: Select) -> Select:
    return select(func.count()).select_from(stmt.order_by(None).subquery())


class ListExecutor:
    def __init__(self, builder: ListQueryBuilder, result_transform: Optional[ResultTransform] = None):
        self.builder = builder
        self.result_transform = result_transform

    async def _count(self, session: AsyncSession, stmt: Select) -> int:
        res = await session.execute(count_statement(stmt))
        return int(res.scalar_one() or 0)

    async def _transform(self, rows: Rows) -> Rows:
        if self.result_transform is None:
            return rows
        out = self.result_transform(rows)
        if inspect.isawaitable(out):
            out = await out
        return out

    async def get_list(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        search: str = "",
        extra_args: Any = None,
    ) -> ListResult:
        """Return one page of rows plus total and filtered counts.

        Store errors propagate unchanged; offset and limit are passed through
        without validation.
        """
        adapter = adapter_for_session(session)
        await adapter.prepare(session)
        table = self.builder.descriptor.table

        page_stmt = self.builder.build(search, True, extra_args, adapter).offset(offset).limit(limit)
        logger.debug("listql: %s page offset=%s limit=%s search=%r", table, offset, limit, search)
        result = await session.execute(page_stmt)
        data: Rows = [dict(row) for row in result.mappings().all()]

        records_total = await self._count(session, self.builder.build(search, False, extra_args, adapter))
        records_filtered = await self._count(session, self.builder.build(search, True, extra_args, adapter))
        logger.debug(
            "listql: %s rows=%d total=%d filtered=%d", table, len(data), records_total, records_filtered
        )

        return ListResult(
            data=await self._transform(data),
            records_total=records_total,
            records_filtered=records_filtered,
        )
