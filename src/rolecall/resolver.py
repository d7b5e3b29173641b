"""Resolve a set of roles into one effective permission set.

Resolution order for ``resolve(roles)``:

1. No roles (``None`` or empty) → default permission set; the lookup is
   not called.
2. Call the lookup once with the roles as a tuple.
3. Lookup returned ``None`` or nothing → default permission set.
4. Fold the results left to right, skipping ``None``. The first value is
   taken as-is; each later value is merged with ``combine(acc, value)``.
5. Every result was ``None`` → default permission set.

Exceptions raised by the lookup, ``combine`` or ``default`` propagate
unchanged. A ``combine`` or ``default`` that returns ``None`` raises
:class:`~rolecall.exceptions.CollaboratorContractError`.

Example::

    resolver = RoleResolver.per_role(
        PROFILES.get,
        combine=merge_permission_sets,
        default=PermissionSet.empty,
    )
    resolver.resolve(["editor", "publisher"])
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Generic, Iterable, Optional, Union

from .exceptions import CollaboratorContractError
from .sources import (
    AsyncPermissionSource,
    CombineFn,
    DefaultFn,
    FetchFn,
    PermissionSource,
    T,
    per_role_fetch,
)

logger = logging.getLogger(__name__)

Roles = Union[str, Iterable[str], None]
AsyncFetchFn = Callable[[tuple[str, ...]], Awaitable[Optional[Iterable[Optional[T]]]]]


def _normalize_roles(roles: Roles) -> tuple[str, ...]:
    # A bare string is one role, not a sequence of characters.
    if roles is None:
        return ()
    if isinstance(roles, str):
        return (roles,)
    return tuple(roles)


def _default(default: DefaultFn[T]) -> T:
    value = default()
    if value is None:
        raise CollaboratorContractError(
            "default permission set factory returned None",
            code="DEFAULT_CONTRACT_ERROR",
            collaborator="default",
        )
    return value


def _fold(
    roles: tuple[str, ...],
    fetched: Optional[Iterable[Optional[T]]],
    combine: CombineFn[T],
    default: DefaultFn[T],
) -> T:
    if fetched is None:
        logger.debug("Lookup returned None for roles %s, using default", roles)
        return _default(default)

    merged: Optional[T] = None
    seen = 0
    found = 0
    for value in fetched:
        seen += 1
        if value is None:
            continue
        found += 1
        if merged is None:
            merged = value
            continue
        merged = combine(merged, value)
        if merged is None:
            raise CollaboratorContractError(
                "combine returned None",
                code="COMBINE_CONTRACT_ERROR",
                collaborator="combine",
            )

    if merged is None:
        if seen:
            logger.debug(
                "Lookup returned %d empty entries for roles %s, using default",
                seen,
                roles,
            )
        else:
            logger.debug("Lookup found nothing for roles %s, using default", roles)
        return _default(default)

    logger.debug("Merged %d permission sets for roles %s", found, roles)
    return merged


class RoleResolver(Generic[T]):
    """Resolves roles to a single merged permission set.

    Holds no state besides its three collaborators, so one instance can be
    shared between threads as long as the collaborators allow it.

    Args:
        fetch: Lookup mapping a role tuple to permission sets.
        combine: Merge of two non-None permission sets.
        default: Factory for the "no permissions" value.
    """

    __slots__ = ("fetch", "combine", "default")

    def __init__(self, fetch: FetchFn[T], combine: CombineFn[T], default: DefaultFn[T]) -> None:
        self.fetch = fetch
        self.combine = combine
        self.default = default

    @classmethod
    def from_source(cls, source: PermissionSource[T]) -> RoleResolver[T]:
        """Bind the operations of a :class:`PermissionSource`."""
        return cls(
            source.fetch_permission_sets,
            source.combine,
            source.default_permission_set,
        )

    @classmethod
    def per_role(
        cls,
        lookup: Callable[[str], Optional[T]],
        combine: CombineFn[T],
        default: DefaultFn[T],
    ) -> RoleResolver[T]:
        """Build a resolver whose lookup calls ``lookup`` once per role."""
        return cls(per_role_fetch(lookup), combine, default)

    def resolve(self, roles: Roles = None) -> T:
        """Return the merged permission set for ``roles``.

        Never returns None. See the module docstring for the exact
        fallback rules.
        """
        role_tuple = _normalize_roles(roles)
        if not role_tuple:
            logger.debug("No roles given, using default")
            return _default(self.default)
        return _fold(role_tuple, self.fetch(role_tuple), self.combine, self.default)

    def resolve_roles(self, *roles: str) -> T:
        """Varargs form of :meth:`resolve`."""
        return self.resolve(roles)

    __call__ = resolve

    def __repr__(self) -> str:
        return f"RoleResolver(fetch={self.fetch!r}, combine={self.combine!r}, default={self.default!r})"


class AsyncRoleResolver(Generic[T]):
    """:class:`RoleResolver` for lookups that must be awaited.

    ``combine`` and ``default`` stay synchronous; only the lookup is awaited.
    """

    __slots__ = ("fetch", "combine", "default")

    def __init__(self, fetch: AsyncFetchFn[T], combine: CombineFn[T], default: DefaultFn[T]) -> None:
        self.fetch = fetch
        self.combine = combine
        self.default = default

    @classmethod
    def from_source(cls, source: AsyncPermissionSource[T]) -> AsyncRoleResolver[T]:
        return cls(
            source.fetch_permission_sets,
            source.combine,
            source.default_permission_set,
        )

    async def resolve(self, roles: Roles = None) -> T:
        role_tuple = _normalize_roles(roles)
        if not role_tuple:
            logger.debug("No roles given, using default")
            return _default(self.default)
        fetched = await self.fetch(role_tuple)
        return _fold(role_tuple, fetched, self.combine, self.default)

    async def resolve_roles(self, *roles: str) -> T:
        return await self.resolve(roles)

    def __repr__(self) -> str:
        return f"AsyncRoleResolver(fetch={self.fetch!r}, combine={self.combine!r}, default={self.default!r})"


__all__ = [
    "AsyncFetchFn",
    "AsyncRoleResolver",
    "RoleResolver",
    "Roles",
]
