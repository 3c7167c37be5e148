"""Structured logging for ir_engine.

structlog on top of the standard ``logging`` module. Events are snake_case
names with key/value context, for example::

    log.info("tax_settings_loaded", current="2025 (revenus 2024)")

Modules get their logger with ``get_logger(__name__)``. That only sets up
structlog's processor chain (when nobody did it before) and routes events to
the stdlib logger of the same name, so the host application's handlers and
levels decide what is shown. Root handlers are installed only by
``configure_logging``, which is meant for entry points (scripts, CLIs).

Output is a console line by default and JSON when ``IRENGINE_JSON_LOGS`` is
set. A rotating log file is added only when ``IRENGINE_LOG_FILE`` names one.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# Euro amounts are logged to the cent
AMOUNT_DECIMALS = 2

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_configured: bool = False


def round_amounts(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: round float context values to the cent."""
    for key, value in event_dict.items():
        if isinstance(value, float):
            event_dict[key] = round(value, AMOUNT_DECIMALS)
    return event_dict


def _build_handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    # No log file under pytest
    if log_file and not os.environ.get("PYTEST_CURRENT_TEST"):
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                str(path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    return handlers


def _configure_structlog(json_output: bool, cache: bool) -> None:
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        round_amounts,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=cache,
    )


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
) -> structlog.BoundLogger:
    """Install console (and optional file) handlers on the root logger.

    For entry points only: it replaces the root handlers. Runs once per process.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (AppSettings.log_level when None)
        json_output: JSON lines instead of console lines (AppSettings.json_logs when None)

    Returns:
        The root bound logger.
    """
    global _configured

    if _configured:
        return structlog.get_logger()

    from ir_engine.core.settings import get_settings

    app_settings = get_settings()
    log_level = (level or app_settings.log_level).upper()
    if json_output is None:
        json_output = app_settings.json_logs

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level, logging.INFO),
        handlers=_build_handlers(app_settings.log_file),
        force=True,
    )
    _configure_structlog(json_output, cache=True)

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Lazy logger for ``name`` (usually ``__name__``); never touches stdlib handlers."""
    if not structlog.is_configured():
        from ir_engine.core.settings import get_settings

        _configure_structlog(get_settings().json_logs, cache=False)

    return structlog.get_logger(name)
