from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import or_

from .descriptors import JoinSpec

__all__ = ['is_empty_term', 'build_search_map', 'search_clause']


def is_empty_term(term: Any) -> bool:
    """Empty or missing search terms match every row and add no predicate."""
    return term is None or str(term) == ''


def build_search_map(
    primary_table: str,
    primary_columns: Iterable[str],
    aliased_joins: Iterable[Tuple[str, JoinSpec]],
    term: Any,
) -> Dict[str, Any]:
    """Map every searchable qualified column to the search term.

    Primary columns come first as ``<table>.<column>``, followed by the like
    columns of each join as ``<alias>.<column>`` in declaration order.
    """
    like: Dict[str, Any] = {}
    for c in primary_columns:
        like[f"{primary_table}.{c}"] = term
    for alias, spec in aliased_joins:
        for c in spec.like:
            like[f"{alias}.{c}"] = term
    return like


def search_clause(search_map: Mapping[str, Any], sources: Mapping[str, Any], adapter) -> Optional[Any]:
    """OR-combine case-insensitive contains predicates for a search map.

    ``sources`` maps a table name or join alias to its ``FromClause``. Unknown
    sources or columns raise ``KeyError``. Returns ``None`` when there is
    nothing to match (empty map or empty term).
    """
    preds: List[Any] = []
    for qualified, term in search_map.items():
        if is_empty_term(term):
            continue
        source_name, _, column_name = qualified.rpartition('.')
        col = sources[source_name].c[column_name]
        preds.append(adapter.contains_ci(col, term))
    if not preds:
        return None
    return or_(*preds)
