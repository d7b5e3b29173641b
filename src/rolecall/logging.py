"""Logging utilities for rolecall.

This module provides:
- Logging configuration from RolecallConfig
- Safe previews of logged values (role tuples can be long)
- JSON or plain-text formatting with ``extra`` fields
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, RolecallConfig, load_config_from_env

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class RolecallFormatter(logging.Formatter):
    """Formatter producing JSON (default) or plain-text lines.

    Extra fields passed via ``extra=`` are included, previewed with
    :func:`safe_preview`.
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extras = {
            key: safe_preview(value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }

        if self.json_format:
            log_data.update(extras)
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        parts.extend(f"{key}={value}" for key, value in extras.items())
        parts.append(f": {log_data['message']}")
        line = " ".join(parts)
        if "exception" in log_data:
            line = f"{line}\n{log_data['exception']}"
        return line


def setup_logging(
    config: Optional[RolecallConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Replace the root logger's handlers with one console handler.

    Args:
        config: RolecallConfig instance (if None, loads from environment)
        json_format: Force JSON (True) or plain text (False); defaults to
            ``config.log_json``
    """
    if config is None:
        config = load_config_from_env()
    if json_format is None:
        json_format = config.log_json

    level = logging.getLevelName(LogLevel(config.log_level).value)
    handler = logging.StreamHandler()
    handler.setFormatter(RolecallFormatter(json_format=json_format))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(level)


__all__ = [
    "RolecallFormatter",
    "safe_preview",
    "setup_logging",
]
