"""Resolve role identifiers into one merged permission set.

Provides:
- ``RoleResolver`` / ``AsyncRoleResolver`` — lookup, merge, fall back to default.
- ``PermissionSource`` / ``MappingPermissionSource`` — collaborator strategies.
- ``PermissionSet`` / ``profile_resolver()`` — ready-made string permission sets.
"""

from .config import LogLevel, RolecallConfig, load_config_from_env
from .exceptions import CollaboratorContractError, ConfigurationError, RolecallError
from .logging import RolecallFormatter, safe_preview, setup_logging
from .profiles import PermissionSet, merge_permission_sets, profile_resolver
from .resolver import AsyncRoleResolver, RoleResolver
from .sources import (
    AsyncPermissionSource,
    MappingPermissionSource,
    PermissionSource,
    per_role_fetch,
)

__all__ = [
    "AsyncPermissionSource",
    "AsyncRoleResolver",
    "CollaboratorContractError",
    "ConfigurationError",
    "LogLevel",
    "MappingPermissionSource",
    "PermissionSet",
    "PermissionSource",
    "RoleResolver",
    "RolecallConfig",
    "RolecallError",
    "RolecallFormatter",
    "load_config_from_env",
    "merge_permission_sets",
    "per_role_fetch",
    "profile_resolver",
    "safe_preview",
    "setup_logging",
]
