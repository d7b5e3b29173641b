"""Ready-made permission sets and profile-based resolvers.

``PermissionSet`` is a frozen set of ``domain:action`` permission strings.
Merging is set union, which is commutative, associative and idempotent,
so results never depend on the order roles are looked up in.

Example::

    ROLE_PROFILES = {
        "viewer": ("doc:read",),
        "editor": ("doc:read", "doc:edit"),
        "publisher": ("doc:publish",),
    }
    resolver = profile_resolver(ROLE_PROFILES)
    resolver.resolve(["editor", "publisher"]).grants("doc:publish")  # True
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from pydantic import BaseModel, Field

from .resolver import RoleResolver


class PermissionSet(BaseModel):
    """Immutable bundle of granted permission strings."""

    model_config = {"frozen": True, "extra": "forbid"}

    permissions: frozenset[str] = Field(
        default_factory=frozenset,
        description="Granted permissions in domain:action format",
    )

    @classmethod
    def empty(cls) -> PermissionSet:
        """The "no permissions granted" set."""
        return cls()

    @classmethod
    def of(cls, *permissions: str) -> PermissionSet:
        return cls(permissions=frozenset(permissions))

    def merge(self, other: PermissionSet) -> PermissionSet:
        """Union of both sets. Neither input is modified."""
        if other.permissions <= self.permissions:
            return self
        return PermissionSet(permissions=self.permissions | other.permissions)

    def grants(self, permission: str) -> bool:
        return permission in self.permissions

    def __contains__(self, permission: object) -> bool:
        return permission in self.permissions

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.permissions)

    def __len__(self) -> int:
        return len(self.permissions)

    def __repr__(self) -> str:
        return f"PermissionSet({sorted(self.permissions)!r})"


def merge_permission_sets(first: PermissionSet, second: PermissionSet) -> PermissionSet:
    """Combine function for :class:`PermissionSet` values."""
    return first.merge(second)


def profile_resolver(profiles: Mapping[str, Iterable[str]]) -> RoleResolver[PermissionSet]:
    """Build a resolver from a role → permission strings mapping.

    Profiles are converted to :class:`PermissionSet` once, up front.
    Roles missing from ``profiles`` contribute nothing.
    """
    permission_sets = {
        role: PermissionSet(permissions=frozenset(permissions))
        for role, permissions in profiles.items()
    }
    return RoleResolver.per_role(
        permission_sets.get,
        combine=merge_permission_sets,
        default=PermissionSet.empty,
    )


__all__ = [
    "PermissionSet",
    "merge_permission_sets",
    "profile_resolver",
]
