"""structlog configuration for collection diagnostics.

The engine logs through ``structlog.get_logger(__name__)`` and never configures
logging itself. Applications call :func:`configure_logging` once at startup to
choose the level and renderer:

    from ordered_collection.config import load_settings
    from ordered_collection.observability import configure_logging

    configure_logging(load_settings("pyproject.toml"))

Events emitted by the engine:
    ordered_collection_sorted              debug
    ordered_collection_cycle_detected      warning
    ordered_collection_dangling_reference  debug (warning with warn_on_dangling)
"""

from __future__ import annotations

import logging
from typing import TextIO

import structlog
from structlog.typing import Processor

from ordered_collection.config.loader import CollectionSettings


def configure_logging(
    settings: CollectionSettings | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog processors, level filtering, and output stream.

    Args:
        settings: Level and format to apply. Defaults to ``CollectionSettings()``.
        stream: Destination for rendered lines. Defaults to stdout.
    """
    resolved = settings if settings is not None else CollectionSettings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    final_processor: Processor
    if resolved.log_format == "json":
        final_processor = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared_processors, final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_parse_log_level(resolved.log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def reset_logging() -> None:
    """Restore structlog's default configuration."""
    structlog.reset_defaults()


def _parse_log_level(value: str) -> int:
    parsed = logging.getLevelName(value.strip().upper())
    if isinstance(parsed, int):
        return parsed
    raise ValueError(f"unsupported logging level {value!r}")


__all__ = ["configure_logging", "reset_logging"]
