"""Permission sources: the collaborators a resolver calls into.

A resolver needs three operations, supplied either as plain functions or
bundled in a strategy object:

- ``fetch_permission_sets(roles)`` — look up permission sets for roles.
  May return ``None``, an empty iterable, or ``None`` elements to signal
  missing data. Never called with an empty role tuple.
- ``combine(first, second)`` — merge two non-``None`` sets. Must return a
  non-``None`` set. Should be associative (ideally commutative) so the
  result does not depend on lookup order; this is not enforced.
- ``default_permission_set()`` — the non-``None`` "no permissions" value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Mapping, Optional, TypeVar

T = TypeVar("T")

FetchFn = Callable[[tuple[str, ...]], Optional[Iterable[Optional[T]]]]
CombineFn = Callable[[T, T], T]
DefaultFn = Callable[[], T]


class PermissionSource(ABC, Generic[T]):
    """Strategy object bundling the three collaborator operations."""

    @abstractmethod
    def fetch_permission_sets(self, roles: tuple[str, ...]) -> Optional[Iterable[Optional[T]]]:
        raise NotImplementedError

    @abstractmethod
    def combine(self, first: T, second: T) -> T:
        raise NotImplementedError

    @abstractmethod
    def default_permission_set(self) -> T:
        raise NotImplementedError


class AsyncPermissionSource(ABC, Generic[T]):
    """Like :class:`PermissionSource`, with an awaitable lookup."""

    @abstractmethod
    async def fetch_permission_sets(self, roles: tuple[str, ...]) -> Optional[Iterable[Optional[T]]]:
        raise NotImplementedError

    @abstractmethod
    def combine(self, first: T, second: T) -> T:
        raise NotImplementedError

    @abstractmethod
    def default_permission_set(self) -> T:
        raise NotImplementedError


def per_role_fetch(lookup: Callable[[str], Optional[T]]) -> FetchFn[T]:
    """Build a lookup from a per-role function.

    ``lookup`` is called once per role, in order; roles it maps to ``None``
    are dropped from the result.

    Example::

        fetch = per_role_fetch(PROFILES.get)
        fetch(("admin", "nobody"))  # -> [PROFILES["admin"]]
    """

    def fetch(roles: tuple[str, ...]) -> list[T]:
        found = []
        for role in roles:
            value = lookup(role)
            if value is not None:
                found.append(value)
        return found

    return fetch


class MappingPermissionSource(PermissionSource[T]):
    """Permission source backed by an in-memory role → permission set mapping.

    Args:
        permission_sets: Role name → permission set. Unknown roles yield nothing.
        combine: Merge function for two permission sets.
        default: Factory for the "no permissions" value.
    """

    def __init__(
        self,
        permission_sets: Mapping[str, T],
        *,
        combine: CombineFn[T],
        default: DefaultFn[T],
    ) -> None:
        self.permission_sets = permission_sets
        self._combine = combine
        self._default = default
        self._fetch = per_role_fetch(permission_sets.get)

    def fetch_permission_sets(self, roles: tuple[str, ...]) -> list[T]:
        return self._fetch(roles)

    def combine(self, first: T, second: T) -> T:
        return self._combine(first, second)

    def default_permission_set(self) -> T:
        return self._default()

    def __repr__(self) -> str:
        return f"MappingPermissionSource(roles={sorted(self.permission_sets)!r})"


__all__ = [
    "AsyncPermissionSource",
    "CombineFn",
    "DefaultFn",
    "FetchFn",
    "MappingPermissionSource",
    "PermissionSource",
    "per_role_fetch",
]
