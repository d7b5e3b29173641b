"""Configuration for rolecall.

Pydantic-validated settings. ``load_config_from_env`` is the only place
that reads the process environment.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

_TRUTHY = ("true", "1", "yes", "on")


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RolecallConfig(BaseModel):
    """Settings for applications embedding rolecall."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Name of the embedding service, used as a logger name",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept level names in any case; other types go to enum validation."""
        if not isinstance(v, str):
            return v
        if v.upper() not in LogLevel.__members__:
            raise ValueError(f"Invalid log level: {v!r}")
        return v.upper()

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_config_from_env() -> RolecallConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Name of the embedding service

    Raises:
        ConfigurationError: If a variable holds an invalid value.
    """
    import os

    try:
        return RolecallConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
            service_name=os.getenv("SERVICE_NAME"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid rolecall configuration: {e}", errors=e.errors()) from e


__all__ = [
    "LogLevel",
    "RolecallConfig",
    "load_config_from_env",
]
