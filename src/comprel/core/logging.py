"""Structured logging for comprel.

structlog renders through stdlib handlers so FastMCP, SQLAlchemy and comprel
records share one pipeline. Correlation fields live in structlog's contextvars:

- ``request_id`` and ``tool``: bound once per MCP tool call
- ``component`` / ``components``: bound for the duration of one analysis

Console outputs only show third-party records at WARNING and above; file
outputs keep everything at their level.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog
from structlog.contextvars import (
    bind_contextvars,
    bound_contextvars,
    clear_contextvars,
    get_contextvars,
)

if TYPE_CHECKING:
    from comprel.config.models import LoggingConfig, LogOutputConfig

# Loggers whose per-request chatter is capped regardless of the root level
_CAPPED_LOGGERS: dict[str, int] = {
    "mcp.server.lowlevel.server": logging.WARNING,
    "fastmcp.server.context.to_client": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}

_CONSOLE_DESTINATIONS = ("stderr", "stdout")

# First file destination of the active config, shown in CLI failures
_log_file_path: Path | None = None


# =============================================================================
# Correlation context
# =============================================================================


def bind_request(tool: str | None = None, **fields: Any) -> str:
    """Start a correlated request: new request_id plus tool and extra fields."""
    rid = uuid4().hex[:12]
    bind_contextvars(request_id=rid, **({"tool": tool} if tool else {}), **fields)
    return rid


def get_request_id() -> str | None:
    rid = get_contextvars().get("request_id")
    return rid if isinstance(rid, str) else None


def clear_request() -> None:
    """Drop every correlation field bound in this context."""
    clear_contextvars()


@contextmanager
def analysis_context(**fields: Any) -> Iterator[None]:
    """Attach analysis subjects (component names) to every log line inside."""
    with bound_contextvars(**fields):
        yield


def get_log_file_path() -> Path | None:
    """File that receives logs under the active config, if any."""
    return _log_file_path


# =============================================================================
# Configuration
# =============================================================================


class _ThirdPartyConsoleFilter(logging.Filter):
    """Pass comprel records; other libraries only at WARNING and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith("comprel") or record.levelno >= logging.WARNING


def _level(name: str | None, default: int = logging.INFO) -> int:
    if not name:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]


def _build_handler(output: LogOutputConfig, root_level: int) -> logging.Handler:
    is_console = output.destination in _CONSOLE_DESTINATIONS

    handler: logging.Handler
    if output.destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif output.destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=is_console and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_shared_processors())
    )
    handler.setLevel(_level(output.level, root_level))
    if is_console:
        handler.addFilter(_ThirdPartyConsoleFilter())
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
    stdio_server: bool = False,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        config: Logging configuration with outputs (takes precedence)
        json_format: JSON rendering when no config is given
        level: Root level when no config is given
        stdio_server: stdout carries the MCP protocol; stdout outputs are dropped
    """
    global _log_file_path
    from comprel.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    outputs = [o for o in config.outputs if not (stdio_server and o.destination == "stdout")]
    root_level = _level(config.level)

    structlog.configure(
        processors=[*_shared_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
        existing.close()
    root.setLevel(root_level)
    for name, cap in _CAPPED_LOGGERS.items():
        logging.getLogger(name).setLevel(max(cap, root_level))

    _log_file_path = next(
        (Path(o.destination) for o in outputs if o.destination not in _CONSOLE_DESTINATIONS),
        None,
    )
    for output in outputs:
        root.addHandler(_build_handler(output, root_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger routed through the stdlib logger ``name`` (default ``comprel``)."""
    return structlog.get_logger(name or "comprel")  # type: ignore[no-any-return]
