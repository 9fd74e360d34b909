"""Structured logging configuration."""
import datetime
import json
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor, EventDict

from node_release_info.constants import LOG_LEVEL

IGNORED_LOGGERS = [
    "mcp.server.session",
    "mcp.server.stdio",
    "aiohttp",
    "asyncio"
]

logging.getLogger("node_release_info").addHandler(logging.NullHandler())


def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def ignored_logger_filter(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Drop events emitted by noisy third-party loggers."""
    logger_name = getattr(logger, "name", "") or ""
    if any(ignored in logger_name for ignored in IGNORED_LOGGERS):
        raise structlog.DropEvent
    return event_dict


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
        }
        if event_dict:
            items["data"] = event_dict
        return json.dumps(items, separators=(",", ":"), default=str)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for the application.

    Logs always go to STDERR since STDOUT carries the MCP stdio transport:
    - TTY: compact single-line JSON
    - otherwise: structlog console output
    """
    level = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level)
    )
    logging.getLogger().setLevel(getattr(logging, level))

    tty_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        ignored_logger_filter,
        structlog.stdlib.add_log_level,
        add_timestamp,
        CompactJSONRenderer()
    ]

    plain_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False)
    ]

    structlog.configure(
        processors=tty_processors if sys.stderr.isatty() else plain_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Events always end up in the stdlib logger of the same name, so library
    callers that never run `configure_logging` get nothing on STDOUT.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
