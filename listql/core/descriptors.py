"""Static declarations for listable resources.

A ``ResourceDescriptor`` names the primary table, the columns that take part
in the free-text search and the ordered list of ``JoinSpec`` entries to join.
Both are frozen value objects built once at import/startup time and shared by
every list call.

Join declarations may be given as ``JoinSpec`` instances or as plain dicts:

    {
        'table_name': 'item',
        'primary_key': 'id',
        'condition': 'item_id',
        'direction': 'left',
        'select': ['barcode as barcode', 'name as item'],
        'like': ['barcode', 'name'],
    }
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

__all__ = [
    'JOIN_DIRECTIONS',
    'SelectExpr',
    'JoinSpec',
    'ResourceDescriptor',
    'parse_select_expr',
    'normalize_join_spec',
    'joins_from_mapping',
]

# direction keyword -> (isouter, full, right)
JOIN_DIRECTIONS: Dict[str, Tuple[bool, bool, bool]] = {
    '': (False, False, False),
    'inner': (False, False, False),
    'left': (True, False, False),
    'left outer': (True, False, False),
    'right': (True, False, True),
    'right outer': (True, False, True),
    'outer': (True, True, False),
    'full': (True, True, False),
    'full outer': (True, True, False),
}

_AS_PATTERN = re.compile(r'^\s*(?P<column>\S+)\s+as\s+(?P<label>\S+)\s*$', re.IGNORECASE)


@dataclass(frozen=True)
class SelectExpr:
    """A joined-table column projected under an explicit output label."""
    column: str
    label: str

    def __post_init__(self):
        if not self.column:
            raise ValueError("Select expression requires a column name")
        if not self.label:
            raise ValueError(f"Select expression '{self.column}' requires an output label")


def parse_select_expr(raw: Any) -> SelectExpr:
    """Normalize ``'name as item'``, ``('name', 'item')`` or ``SelectExpr``."""
    if isinstance(raw, SelectExpr):
        return raw
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return SelectExpr(column=str(raw[0]), label=str(raw[1]))
    if isinstance(raw, str):
        m = _AS_PATTERN.match(raw)
        if m is None:
            raise ValueError(
                f"Select expression {raw!r} must carry an output label, e.g. '{raw.strip()} as {raw.strip()}'"
            )
        return SelectExpr(column=m.group('column'), label=m.group('label'))
    raise TypeError(f"Unsupported select expression form: {raw!r}")


def _normalize_direction(direction: Optional[str]) -> str:
    dn = ' '.join(str(direction or '').lower().split())
    if dn not in JOIN_DIRECTIONS:
        raise ValueError(f"Unknown join direction: {direction!r}")
    return dn


@dataclass(frozen=True)
class JoinSpec:
    table_name: str
    primary_key: str
    condition: str
    direction: str = 'left'
    select: Tuple[SelectExpr, ...] = ()
    like: Tuple[str, ...] = ()

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'direction', _normalize_direction(self.direction))
        object.__setattr__(self, 'select', tuple(parse_select_expr(s) for s in (self.select or ())))
        object.__setattr__(self, 'like', tuple(str(c) for c in (self.like or ())))

    @property
    def is_outer(self) -> bool:
        return JOIN_DIRECTIONS[self.direction][0]

    @property
    def is_full(self) -> bool:
        return JOIN_DIRECTIONS[self.direction][1]

    @property
    def is_right(self) -> bool:
        return JOIN_DIRECTIONS[self.direction][2]


def normalize_join_spec(raw: Any, table_name: Optional[str] = None) -> JoinSpec:
    if isinstance(raw, JoinSpec):
        return raw
    if isinstance(raw, Mapping):
        name = raw.get('table_name') or table_name
        if not name:
            raise ValueError(f"Join declaration is missing 'table_name': {raw!r}")
        return JoinSpec(
            table_name=name,
            primary_key=raw.get('primary_key', 'id'),
            condition=raw['condition'],
            direction=raw.get('direction', 'left'),
            select=tuple(raw.get('select') or ()),
            like=tuple(raw.get('like') or ()),
        )
    raise TypeError(f"Unsupported join spec form: {raw!r}")


def joins_from_mapping(mapping: Mapping[str, Mapping[str, Any]]) -> Tuple[JoinSpec, ...]:
    """Build join specs from the ``{table_name: {...}}`` declaration form."""
    return tuple(normalize_join_spec(v, table_name=k) for k, v in mapping.items())


@dataclass(frozen=True)
class ResourceDescriptor:
    table: str
    primary_key: str = 'id'
    allowed_fields: Tuple[str, ...] = ()
    searchable_columns: Tuple[str, ...] = ()
    deleted_field: Optional[str] = None
    joins: Tuple[JoinSpec, ...] = field(default_factory=tuple)
    join_alias_prefix: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'allowed_fields', tuple(self.allowed_fields or ()))
        object.__setattr__(self, 'searchable_columns', tuple(self.searchable_columns or ()))
        joins: Iterable[Any] = self.joins or ()
        if isinstance(joins, Mapping):
            normalized = joins_from_mapping(joins)
        else:
            normalized = tuple(normalize_join_spec(j) for j in joins)
        object.__setattr__(self, 'joins', normalized)
        if self.join_alias_prefix is None:
            from ..config import get_settings
            object.__setattr__(self, 'join_alias_prefix', get_settings().join_alias_prefix)

    @property
    def search_columns(self) -> Tuple[str, ...]:
        """Columns of the primary table searched; falls back to the allowed fields."""
        return self.searchable_columns or self.allowed_fields
