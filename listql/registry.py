"""Named listable resources.

A ``ListableResource`` bundles a descriptor with the table metadata it is
resolved against and its two hooks. Hooks are plain callables passed in at
registration rather than methods overridden on a subclass:

    registry = ListRegistry(Base.metadata)

    @registry.resource(INVENTORY_LOG)
    def inventory_log_arguments(query, args):
        if args and args.get('type'):
            return query.where(query.selected_columns['type'] == args['type'])
        return query
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession

from .core.descriptors import ResourceDescriptor
from .executor import ListExecutor, ListResult, ResultTransform
from .sql.builders import ListQueryBuilder, PostArguments

__all__ = ['ListableResource', 'ListRegistry']


class ListableResource:
    def __init__(
        self,
        descriptor: ResourceDescriptor,
        metadata: MetaData,
        post_arguments: Optional[PostArguments] = None,
        result_transform: Optional[ResultTransform] = None,
        name: Optional[str] = None,
    ):
        self.descriptor = descriptor
        self.metadata = metadata
        self.post_arguments = post_arguments
        self.result_transform = result_transform
        self.name = name or descriptor.table

    def __repr__(self) -> str:
        return f"ListableResource({self.name!r}, table={self.descriptor.table!r})"

    def builder(self) -> ListQueryBuilder:
        return ListQueryBuilder(self.descriptor, self.metadata, post_arguments=self.post_arguments)

    def executor(self) -> ListExecutor:
        return ListExecutor(self.builder(), result_transform=self.result_transform)

    async def get_list(
        self,
        session: AsyncSession,
        offset: int,
        limit: int,
        search: str = "",
        extra_args: Any = None,
    ) -> ListResult:
        return await self.executor().get_list(session, offset, limit, search, extra_args)


class ListRegistry:
    def __init__(self, metadata: MetaData):
        self.metadata = metadata
        self._resources: Dict[str, ListableResource] = {}

    def register(
        self,
        descriptor: ResourceDescriptor,
        *,
        name: Optional[str] = None,
        post_arguments: Optional[PostArguments] = None,
        result_transform: Optional[ResultTransform] = None,
    ) -> ListableResource:
        resource = ListableResource(
            descriptor,
            self.metadata,
            post_arguments=post_arguments,
            result_transform=result_transform,
            name=name,
        )
        if resource.name in self._resources:
            raise ValueError(f"Listable resource '{resource.name}' is already registered")
        self._resources[resource.name] = resource
        return resource

    def resource(
        self,
        descriptor: ResourceDescriptor,
        *,
        name: Optional[str] = None,
        result_transform: Optional[ResultTransform] = None,
    ) -> Callable[[PostArguments], PostArguments]:
        """Decorator form of ``register`` taking the ``post_arguments`` hook."""
        def decorator(fn: PostArguments) -> PostArguments:
            self.register(descriptor, name=name, post_arguments=fn, result_transform=result_transform)
            return fn
        return decorator

    def get(self, name: str) -> ListableResource:
        try:
            return self._resources[name]
        except KeyError:
            raise KeyError(f"Unknown listable resource: {name!r}") from None

    def names(self) -> List[str]:
        return list(self._resources.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)
