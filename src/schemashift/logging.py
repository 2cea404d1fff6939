"""
Structured logging for schemashift.

Library code never configures logging on import. Modules ask for a logger
with :func:`get_logger` and emit dotted event names with key/value context
(``connection.retry``, ``database.upgrade_recommended``, ...). The hosting
application calls :func:`configure_logging` once to choose level and output.

Output modes:
    - JSON, one object per line, with ECS field names (``@timestamp``,
      ``log.level``, ``service.name``) for shipping to a log index
    - Colored console lines for interactive use

    When ``json_format`` is None the mode follows stdout: JSON unless it is
    a terminal.

Example::

    from schemashift.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger(__name__).bind(database="postgresql")
    log.info("database.version_detected", version="15.4")

Tags:
    logging, structlog, observability, json-logging, schemashift
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

if TYPE_CHECKING:
    from schemashift.settings import MigrationSettings

_SERVICE_NAME = "schemashift"

# structlog key -> ECS key
_ECS_RENAMES = {
    "timestamp": "@timestamp",
    "level": "log.level",
}


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp ``service.name`` unless the caller already set one."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key, ecs_key in _ECS_RENAMES.items():
        if key in event_dict:
            event_dict[ecs_key] = event_dict.pop(key)
    return event_dict


def _processor_chain(json_format: bool, add_timestamp: bool) -> list[Processor]:
    chain: list[Processor] = []
    if add_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso"))
    chain += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]
    if json_format:
        chain += [_elasticsearch_compatible, structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    return chain


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "schemashift",
    add_timestamp: bool = True,
) -> None:
    """Install the schemashift processor chain as the global structlog config.

    Args:
        level: Minimum level name, case-insensitive (DEBUG, INFO, WARNING, ERROR)
        json_format: JSON lines when True, console when False, auto when None
        service: Value written to ``service.name``
        add_timestamp: Prefix each event with an ISO-8601 timestamp
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")
    if json_format is None:
        json_format = not sys.stdout.isatty()

    structlog.configure(
        processors=_processor_chain(json_format, add_timestamp),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def configure_logging_from_settings(settings: MigrationSettings) -> None:
    """Apply ``log_level`` and ``log_json`` from a settings object."""
    configure_logging(level=settings.log_level, json_format=settings.log_json)


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, usually for ``__name__``."""
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
