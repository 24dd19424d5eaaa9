from .descriptors import (
    JOIN_DIRECTIONS,
    SelectExpr,
    JoinSpec,
    ResourceDescriptor,
    parse_select_expr,
    normalize_join_spec,
    joins_from_mapping,
)
from .aliases import join_alias, assign_aliases
from .search import is_empty_term, build_search_map, search_clause

__all__ = [
    'JOIN_DIRECTIONS',
    'SelectExpr',
    'JoinSpec',
    'ResourceDescriptor',
    'parse_select_expr',
    'normalize_join_spec',
    'joins_from_mapping',
    'join_alias',
    'assign_aliases',
    'is_empty_term',
    'build_search_map',
    'search_clause',
]
