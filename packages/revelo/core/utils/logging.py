"""Logging setup for Revelo.

Modules log through ``logging.getLogger(__name__)``. Animation instances log
through :class:`InstanceLogger`, which tags every record with the instance id
so interleaved output from several instances on one page can be told apart.
:func:`configure_logging` installs a plain-text handler or, for log shipping,
the :class:`StructuredJSONFormatter` (one JSON object per line).
"""

from __future__ import annotations

from collections.abc import MutableMapping
from datetime import UTC, datetime
import json
import logging
import sys
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


class StructuredJSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record.

    Format:
    {
        "level": "WARNING",
        "message": "Effect 'reel' dropped: ...",
        "timestamp": "2026-01-29T12:00:00.000000+00:00",
        "context": {
            "logger_name": "revelo.core.timeline.builder",
            "module": "builder",
            "function": "build",
            "line": 97,
            "instance_id": 3,
            ...
        }
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            context["error_type"] = exc_type.__name__ if exc_type else None
            context["error_message"] = str(exc_value) if exc_value else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "context": context,
            },
            default=str,
        )


class InstanceLogger(logging.LoggerAdapter):
    """Adapter tagging records of one animation instance.

    The context is attached as record attributes (picked up by the
    structured formatter) and the instance id prefixes plain-text messages.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        instance_id = extra.get("instance_id")
        if instance_id is None:
            return msg, kwargs
        return f"[instance {instance_id}] {msg}", kwargs


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure root logging.

    Safe to call repeatedly; existing root handlers are replaced.

    Args:
        level: Level name, case-insensitive.
        format_string: Text format (ignored when ``structured``).
        filename: Log file; stderr when None, since stdout carries CLI output.
        structured: Emit JSON lines instead of text.

    Raises:
        ValueError: If the level name is unknown.

    Examples:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="INFO", structured=True, filename="revelo.jsonl")
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stderr)
    )
    formatter: logging.Formatter = (
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_FORMAT)
    )
    handler.setFormatter(formatter)
    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | InstanceLogger:
    """Module logger, wrapped in an :class:`InstanceLogger` when context is given.

    Args:
        name: Logger name, usually ``__name__``.
        **context: Record context such as ``instance_id``.
    """
    base = logging.getLogger(name)
    if context:
        return InstanceLogger(base, context)
    return base


__all__ = [
    "DEFAULT_FORMAT",
    "InstanceLogger",
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
]
