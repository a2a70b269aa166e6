"""Run logging exports."""

from .log_sink import (
    PACKAGE_LOGGER_NAME,
    ConsoleLogSink,
    LoggingLogSink,
    LogLevel,
    LogSink,
    emit,
    resolve_log_sink,
)

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "LogLevel",
    "LogSink",
    "LoggingLogSink",
    "ConsoleLogSink",
    "emit",
    "resolve_log_sink",
]
