from __future__ import annotations

from typing import Any

from .base import BaseAdapter, LIKE_ESCAPE, escape_like


class PostgresAdapter(BaseAdapter):
    name = 'postgres'

    def contains_ci(self, col, term: Any):
        # Native ILIKE avoids wrapping both sides in lower()
        return self.as_text(col).ilike(f"%{escape_like(term)}%", escape=LIKE_ESCAPE)
