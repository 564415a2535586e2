"""Structured logging setup.

The library only emits events through ``structlog.get_logger(__name__)``;
applications decide where they go. configure_logging() is a convenience that
routes structlog through stdlib logging with a console or JSON renderer.

Usage:
    from fastreflect.logging import configure_logging

    configure_logging()                          # from FASTREFLECT_* settings
    configure_logging(level="DEBUG", json_format=True)
"""

from __future__ import annotations

import logging
import sys

import structlog

from fastreflect.config import FastReflectSettings

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(
    settings: FastReflectSettings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog and the stdlib root handler.

    Args:
        settings: Source of defaults. Loaded from the environment if None.
        level: Overrides settings.log_level.
        json_format: Overrides settings.log_format.
    """
    settings = settings or FastReflectSettings()
    level_name = (level or settings.log_level).upper()
    default_level = _LEVEL_MAP.get(level_name, logging.WARNING)
    use_json = settings.log_format == "json" if json_format is None else json_format

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Don't cache - allows reconfiguration and respects level changes
        cache_logger_on_first_use=False,
    )

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(default_level)
