from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import MetaData, Select, Table, select

from ..adapters import BaseAdapter
from ..core.aliases import assign_aliases
from ..core.descriptors import JoinSpec, ResourceDescriptor
from ..core.search import build_search_map, is_empty_term, search_clause

# Centralized SQL builders for listable resources.

PostArguments = Callable[[Select, Any], Optional[Select]]


class ListQueryBuilder:
    """Assemble the list query of one resource.

    Every call to ``build`` returns a fresh, unexecuted ``Select``: all columns
    of the primary table plus the labelled select expressions of each join,
    the joins themselves, the soft-delete filter, the optional search group
    and whatever the ``post_arguments`` hook layers on top.
    """

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        metadata: MetaData,
        adapter: Optional[BaseAdapter] = None,
        post_arguments: Optional[PostArguments] = None,
    ):
        self.descriptor = descriptor
        self.metadata = metadata
        self.adapter = adapter or BaseAdapter()
        self.post_arguments = post_arguments

    # --- helpers -------------------------------------------------------------
    def _table(self, name: str) -> Table:
        """Look up a table by name; unknown names raise KeyError."""
        return self.metadata.tables[name]

    def primary_table(self) -> Table:
        return self._table(self.descriptor.table)

    def aliased_joins(self) -> List[Tuple[str, JoinSpec]]:
        return assign_aliases(self.descriptor.joins, self.descriptor.join_alias_prefix)

    def join_sources(self) -> List[Tuple[str, JoinSpec, Any]]:
        """Aliased FROM clauses for each join, in declaration order."""
        return [
            (alias, spec, self._table(spec.table_name).alias(alias))
            for alias, spec in self.aliased_joins()
        ]

    def select_columns(self, primary: Table, sources: List[Tuple[str, JoinSpec, Any]]) -> list:
        """Primary columns plus labelled join columns; output keys must be unique."""
        cols: list = list(primary.c)
        seen = {c.name for c in primary.c}
        for alias, spec, src in sources:
            for expr in spec.select:
                if expr.label in seen:
                    raise ValueError(
                        f"Select label '{expr.label}' of join '{alias}' collides with another selected column"
                    )
                seen.add(expr.label)
                cols.append(src.c[expr.column].label(expr.label))
        return cols

    def apply_joins(self, primary: Table, sources: List[Tuple[str, JoinSpec, Any]], adapter: Optional[BaseAdapter] = None):
        adapter = adapter or self.adapter
        from_clause: Any = primary
        for _alias, spec, src in sources:
            onclause = src.c[spec.primary_key] == primary.c[spec.condition]
            from_clause = adapter.join(
                from_clause,
                src,
                onclause,
                isouter=spec.is_outer,
                full=spec.is_full,
                right_join=spec.is_right,
            )
        return from_clause

    def search_map(self, term: Any) -> Dict[str, Any]:
        return build_search_map(
            self.descriptor.table,
            self.descriptor.search_columns,
            self.aliased_joins(),
            term,
        )

    # --- public API ----------------------------------------------------------
    def build(
        self,
        term: Any = '',
        include_conditions: bool = True,
        extra_args: Any = None,
        adapter: Optional[BaseAdapter] = None,
    ) -> Select:
        adapter = adapter or self.adapter
        primary = self.primary_table()
        sources = self.join_sources()

        stmt = select(*self.select_columns(primary, sources)).select_from(self.apply_joins(primary, sources, adapter))

        if self.descriptor.deleted_field:
            stmt = stmt.where(primary.c[self.descriptor.deleted_field].is_(None))

        if include_conditions and not is_empty_term(term):
            named_sources: Dict[str, Any] = {self.descriptor.table: primary}
            for alias, _spec, src in sources:
                named_sources[alias] = src
            clause = search_clause(self.search_map(term), named_sources, adapter)
            if clause is not None:
                stmt = stmt.where(clause)

        if self.post_arguments is not None:
            hooked = self.post_arguments(stmt, extra_args)
            if hooked is not None:
                stmt = hooked
        return stmt
