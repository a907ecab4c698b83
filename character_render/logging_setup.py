"""Logging for the ``character_render`` package logger.

Loader and character records carry context through ``extra=``: the
character name, the bucket being decoded, the payload generation and the
load outcome. Both formatters append whichever of those a record has.
:func:`configure_logging` installs one handler driven by
:class:`~character_render.config.RenderConfig`; calling it again replaces
that handler instead of stacking a second one.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from character_render.config import RenderConfig

PACKAGE_LOGGER = "character_render"
HANDLER_NAME = "character_render.handler"
LOG_CONTEXT_FIELDS = ("character", "bucket", "generation", "outcome")
LOG_FORMATS = ("text", "json")


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the context fields present on ``record``, in field order."""
    context: Dict[str, Any] = {}
    for name in LOG_CONTEXT_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            context[name] = value if isinstance(value, (int, float, bool)) else str(value)
    return context


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, context fields at top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ContextTextFormatter(logging.Formatter):
    """Plain text with ``key=value`` context appended in brackets."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def log_level(name: str) -> int:
    """Map a level name to its number.

    Raises:
        ValueError: If ``name`` is not a standard logging level.
    """
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_logging(config: "RenderConfig") -> logging.Handler:
    """Install the package handler from ``config`` and return it."""
    if config.log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {config.log_format}")
    level = log_level(config.log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        JsonLineFormatter() if config.log_format == "json" else ContextTextFormatter()
    )
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
