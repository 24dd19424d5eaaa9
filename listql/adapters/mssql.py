from __future__ import annotations

from sqlalchemy import Unicode, cast

from .base import BaseAdapter, is_text_type


class MSSQLAdapter(BaseAdapter):
    name = 'mssql'

    def as_text(self, col):
        ctype = getattr(col, 'type', None)
        if is_text_type(ctype):
            return col
        # CAST(x AS NVARCHAR) without a length truncates to 30 characters
        return cast(col, Unicode(4000))
