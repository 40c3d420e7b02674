"""
reqbind.observability.logging

Structured logging configuration.

Responsibilities:
- Configure `structlog` for the library's loggers from `BindSettings`
  (REQBIND_LOG_LEVEL, REQBIND_LOG_JSON).
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from reqbind.settings import BindSettings, get_settings

COMPONENT = "reqbind"


def configure_logging(settings: BindSettings | None = None) -> None:
    """
    Opt-in setup for applications that do not configure structlog themselves.

    The level applies to the `reqbind` logger tree only; the root logger just
    gets a plain stdout handler if it has none.
    """

    settings = settings or get_settings()
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    logging.getLogger(COMPONENT).setLevel(level)

    structlog.configure(
        processors=_processors(json=settings.log_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _processors(*, json: bool) -> list[Any]:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_component,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.dict_tracebacks,
        renderer,
    ]


def _add_component(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("component", COMPONENT)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# The library only emits events; it never calls `configure_logging` on import.
