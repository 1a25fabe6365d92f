"""Structured logging configuration using structlog.

Engine modules log through stdlib ``logging.getLogger(__name__)``; this
routes those records through structlog's processor chain.  Records from
``scribe_engine.<component>`` loggers are tagged with the component
(``risk``, ``tasks``, ...).  Fields passed with ``extra=`` whose key is
listed in ``ObservabilityConfig.redact_keys`` are masked, so transcript
and patient text never reaches the log stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Iterable, MutableMapping

import structlog

if TYPE_CHECKING:
    from scribe_engine.core.config import ObservabilityConfig

ENGINE_LOGGER = "scribe_engine"
REDACTED = "[redacted]"

EventDict = MutableMapping[str, Any]


def add_component(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Set ``component`` from the engine logger name."""
    package, _, rest = str(event_dict.get("logger", "")).partition(".")
    if package == ENGINE_LOGGER and rest:
        event_dict.setdefault("component", rest.split(".", 1)[0])
    return event_dict


class RedactFields:
    """Processor masking the values of the given event keys."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = frozenset(keys)

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key in self._keys.intersection(event_dict):
            event_dict[key] = REDACTED
        return event_dict


def setup_logging(config: ObservabilityConfig) -> None:
    """Route engine and library logging through structlog.

    Safe to call more than once; the root handler is replaced each time.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        add_component,
        RedactFields(config.redact_keys),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    json_logs = config.json_logs if config.json_logs is not None else not sys.stderr.isatty()
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(ENGINE_LOGGER).setLevel(level)
