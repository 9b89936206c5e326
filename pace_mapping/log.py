"""
Logging configuration.

The package only emits events through structlog; it never configures logging
on import. Hosts call configure_logging() once, or configure structlog
themselves.

Environment:
    PACE_LOG_LEVEL: debug, info, warning, error or critical (default: warning)
"""

from __future__ import annotations

import os

import structlog

LOG_LEVEL_ENV = "PACE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "warning"


def resolve_level(level: str | None = None) -> int:
    """Translate a level name (or PACE_LOG_LEVEL) into a stdlib level number."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).lower()
    try:
        return structlog.stdlib.NAME_TO_LEVEL[name]
    except KeyError:
        raise ValueError(f"Unknown log level {name!r} (set {LOG_LEVEL_ENV} correctly)") from None


def configure_logging(level: str | None = None) -> None:
    """Configure structlog with ISO timestamps and a console renderer."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
    )
