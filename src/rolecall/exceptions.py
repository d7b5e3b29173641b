"""Exception hierarchy for rolecall.

Only two situations are errors here:
- invalid configuration;
- a collaborator returning ``None`` where a value is mandatory.

Missing data is never an error (it resolves to the default permission
set), and exceptions raised by collaborators propagate unchanged.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "RolecallError",
    "ConfigurationError",
    "CollaboratorContractError",
]


class RolecallError(Exception):
    """Base exception for rolecall.

    Attributes:
        code: Stable error code string (e.g. "CONFIGURATION_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(RolecallError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class CollaboratorContractError(RolecallError):
    """A collaborator returned ``None`` where a permission set is required."""

    code: str = "COLLABORATOR_CONTRACT_ERROR"
    message: str = "Collaborator returned None instead of a permission set"
