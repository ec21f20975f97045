"""Logging configuration settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Structured logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=DEBUG, LOG_JSON=false
    """

    service_name: str = Field(
        default="photo-catalog",
        description="Service name to include in log records (static field in JSON)",
    )
    level: LogLevel = Field(
        default="INFO",
        description="Root logger level (DEBUG|INFO|WARNING|ERROR|CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        alias="LOG_JSON",
        description="Enable JSON Lines (JSONL) formatted structured logs",
    )
    console_enabled: bool = Field(
        default=True,
        description="Enable console/stderr logging",
    )
    sql_echo: bool = Field(
        default=False,
        description="Log SQL statements through the sqlalchemy.engine logger",
    )
    capture_warnings: bool = Field(
        default=True,
        description="Route Python warnings through the logging system",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Return kwargs suitable for configure_logging(...)."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "sql_echo": self.sql_echo,
            "capture_warnings": self.capture_warnings,
        }
