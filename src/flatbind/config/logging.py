"""structlog rendering for flatbind's log records.

Two output modes:
- Human (default): console-rendered lines to stderr
- JSON (``log_json=True``): structured JSON lines to stderr

flatbind modules log through the standard library. Configuration only
touches the ``flatbind`` logger: the host's root logger, its handlers and
any global structlog setup are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from flatbind.config.settings import FlatbindSettings

PACKAGE_LOGGER = "flatbind"


class FlatbindLogHandler(logging.StreamHandler):
    """stderr handler installed by :func:`configure_logging`."""


def _build_formatter(log_json: bool) -> structlog.stdlib.ProcessorFormatter:
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Attach a structlog-formatted stderr handler to the ``flatbind`` logger.

    Repeated calls replace the handler installed by the previous call;
    handlers added by the host are kept. Records stop propagating to the
    root logger so they are not emitted twice.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    handler = FlatbindLogHandler(sys.stderr)
    handler.setFormatter(_build_formatter(log_json))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for stale in [h for h in package_logger.handlers if isinstance(h, FlatbindLogHandler)]:
        package_logger.removeHandler(stale)
        stale.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def configure_from_settings(settings: FlatbindSettings) -> None:
    """Apply the ``[logging]`` section of a :class:`FlatbindSettings`."""
    section = settings.logging
    configure_logging(verbose=section.verbose, log_json=section.json_output)
