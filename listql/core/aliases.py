from __future__ import annotations

from typing import Iterable, List, Tuple

from .descriptors import JoinSpec

__all__ = ['join_alias', 'assign_aliases']


def join_alias(prefix: str, index: int, table_name: str) -> str:
    return f"{prefix}{index}_{table_name}"


def assign_aliases(joins: Iterable[JoinSpec], prefix: str = 'join') -> List[Tuple[str, JoinSpec]]:
    """Pair each join spec with its alias, e.g. ``join0_item``, ``join1_item``.

    The positional index keeps aliases unique when the same table is joined
    more than once.
    """
    return [(join_alias(prefix, i, spec.table_name), spec) for i, spec in enumerate(joins)]
