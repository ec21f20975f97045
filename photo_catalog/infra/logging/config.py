"""Logging configuration setup.

Uses ``logging.config.dictConfig`` with every handler on the root logger;
application loggers propagate up. JSONL output for machine parsing, plain
text for local development.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from photo_catalog.core.settings.logs import LoggingSettings


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from photo_catalog.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    service_name: str = "photo-catalog",
    sql_echo: bool = False,
    capture_warnings: bool = True,
) -> None:
    """Configure logging with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        service_name: Static ``service`` field for JSON records.
        sql_echo: Log every SQL statement through the ``sqlalchemy.engine`` logger.
        capture_warnings: Forward Python warnings to logging system.

    Example:
        configure_logging(log_level="DEBUG", json_logs=False)
    """
    if capture_warnings:
        logging.captureWarnings(True)

    formatter = "json" if json_logs else "text"
    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "stream": "ext://sys.stderr",
        }

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "photo_catalog.infra.logging.formatters.JSONFormatter",
                "static": {"service": service_name},
            },
            "text": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
        "loggers": {
            "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
            "uvicorn.access": {"level": "WARNING"},
        },
    }

    logging.config.dictConfig(logging_config)
    logger.debug("Logging configured", extra={"level": log_level, "json": json_logs})
