"""listql public API.

Paged, searchable list queries over SQLAlchemy tables: a primary table joined
to related tables under deterministic aliases, a case-insensitive OR search
across primary and joined columns, and total/filtered counts next to each page.

Exposes:
- ResourceDescriptor, JoinSpec, SelectExpr (static declarations)
- ListQueryBuilder, ListExecutor, ListResult
- ListableResource, ListRegistry
- Lazy: ListPage, list_field (strawberry surface, imported on first access)
"""
from __future__ import annotations

from .core.descriptors import (
    JoinSpec,
    ResourceDescriptor,
    SelectExpr,
    joins_from_mapping,
    normalize_join_spec,
)
from .core.aliases import assign_aliases
from .core.search import build_search_map
from .sql.builders import ListQueryBuilder
from .executor import ListExecutor, ListResult
from .registry import ListableResource, ListRegistry
from .config import Settings, get_settings


def __getattr__(name: str):  # PEP 562 lazy exports
    if name in {'ListPage', 'list_field'}:
        import importlib as _importlib
        return getattr(_importlib.import_module(__name__ + '.graphql'), name)
    raise AttributeError(name)


__all__ = [
    'JoinSpec',
    'ResourceDescriptor',
    'SelectExpr',
    'joins_from_mapping',
    'normalize_join_spec',
    'assign_aliases',
    'build_search_map',
    'ListQueryBuilder',
    'ListExecutor',
    'ListResult',
    'ListableResource',
    'ListRegistry',
    'Settings',
    'get_settings',
    'ListPage',
    'list_field',
]
