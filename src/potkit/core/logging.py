"""
Structured logging for potkit.

The ``Pot`` type itself never logs; it is pure data. Logging happens at the
edges, where a collaborator applies load events to a pot
(``potkit.core.lifecycle``). This module configures structlog once for the
process and hands out loggers.

Pots passed as log fields are rendered as their state summary
(``state``/``stale``/``retries_left``) rather than a repr, so a JSON line for
``logger.info("profile_shown", profile=pot)`` stays machine-readable and never
carries the loaded value itself.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="potkit")
            │
            ▼
        processor chain:
          1. TimeStamper (iso)
          2. merge_contextvars
          3. add_log_level / add_logger_name
          4. service stamp
          5. _summarize_pots
          6. JSONRenderer (non-tty) or ConsoleRenderer (tty)

        logger = get_logger(__name__)
        logger.debug("pot_transition", load_event="FetchStarted", to_state="PENDING")

Example::

    from potkit.core.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_format=True, service="profile-view")
    logger = get_logger(__name__)
    logger.info("profile_loaded", user_id=42)

Tags:
    logging, structlog, observability, potkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from potkit.core.pot import Pot


def _summarize_pots(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace Pot field values with their state summary."""
    for key, value in event_dict.items():
        if isinstance(value, Pot):
            event_dict[key] = {
                "state": value.state.value,
                "stale": value.is_stale,
                "retries_left": value.retries_left,
            }
    return event_dict


def _stamp_service(service: str) -> Processor:
    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return processor


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "potkit",
) -> None:
    """Configure structured logging for the host process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name stamped on every line
    """
    numeric_level = getattr(logging, level.upper())
    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _stamp_service(service),
        _summarize_pots,
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def configure_from_settings(settings: Any = None) -> None:
    """Configure logging from ``PotSettings`` (defaults to ``get_settings()``)."""
    if settings is None:
        from potkit.core.settings import get_settings

        settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]
