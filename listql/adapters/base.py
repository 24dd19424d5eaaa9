from __future__ import annotations

from typing import Any

from sqlalchemy import Enum, String, cast

LIKE_ESCAPE = '/'


def is_text_type(ctype) -> bool:
    """Plain string types; Enum subclasses String but native enums need a cast."""
    return isinstance(ctype, String) and not isinstance(ctype, Enum)


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    s = str(term)
    s = s.replace(escape, escape + escape)
    s = s.replace('%', escape + '%').replace('_', escape + '_')
    return s


class BaseAdapter:
    name = 'base'

    def as_text(self, col):
        """Cast non-string columns so they can take part in a LIKE match."""
        ctype = getattr(col, 'type', None)
        if is_text_type(ctype):
            return col
        return cast(col, String())

    async def prepare(self, session) -> None:
        """Per-call connection setup before the list statements run."""
        return None

    def contains_ci(self, col, term: Any):
        """Case-insensitive "contains" predicate with wildcards escaped."""
        return self.as_text(col).icontains(escape_like(term), escape=LIKE_ESCAPE)

    def join(self, left, right, onclause, *, isouter: bool = False, full: bool = False, right_join: bool = False):
        if right_join:
            # a RIGHT JOIN b  ==  b LEFT JOIN a
            return right.join(left, onclause, isouter=True)
        return left.join(right, onclause, isouter=isouter, full=full)
