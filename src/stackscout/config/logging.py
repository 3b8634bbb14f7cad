"""Logging setup: stdlib loggers rendered by structlog.

Everything goes to stderr; over the stdio MCP transport stdout carries the
protocol. ``--log-json`` swaps the console renderer for JSON lines.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that are chatty at INFO.
_QUIET_LOGGERS = ("mcp", "sqlalchemy")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging through one structlog-formatted stderr handler.

    Safe to call more than once; each call replaces the root handler.

    Args:
        verbose: ``stackscout.*`` loggers emit DEBUG instead of WARNING.
        log_json: Render JSON lines instead of console output.
    """
    pre_chain = _pre_chain()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("stackscout").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
