"""Structured log sink used by the orchestrator."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Protocol

import click

PACKAGE_LOGGER_NAME = "unified_test_orchestrator"
SUCCESS_LEVEL = 25

logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")


class LogLevel(str, Enum):
    """Severity accepted by a log sink."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARN = "WARN"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


_STDLIB_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: SUCCESS_LEVEL,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.DEBUG: logging.DEBUG,
}


class LogSink(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for write-only log sinks."""

    def log(self, level: LogLevel, message: str) -> None: ...


class LoggingLogSink:  # pylint: disable=too-few-public-methods
    """Sink forwarding messages to the package logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(PACKAGE_LOGGER_NAME)

    def log(self, level: LogLevel, message: str) -> None:
        self._logger.log(_STDLIB_LEVELS[LogLevel(level)], message)


class ConsoleLogSink:  # pylint: disable=too-few-public-methods
    """Local timestamped console writer used when no logging is configured."""

    def log(self, level: LogLevel, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        click.echo(f"[{timestamp}] [{LogLevel(level).value}] {message}", err=True)


def resolve_log_sink(sink: LogSink | None = None) -> LogSink:
    """Return the given sink, the logging sink when handlers exist, or the console writer."""
    if sink is not None:
        return sink
    if logging.getLogger(PACKAGE_LOGGER_NAME).hasHandlers():
        return LoggingLogSink()
    return ConsoleLogSink()


def emit(sink: LogSink, level: LogLevel, message: str) -> None:
    """Write one message, falling back to the console writer if the sink fails."""
    try:
        sink.log(level, message)
    except Exception:  # pylint: disable=broad-exception-caught
        ConsoleLogSink().log(level, message)
