"""
Provides structured logging with log levels.

This module provides a structured logging system with UTC timestamps, log levels,
and key-value pair formatting for better log parsing and analysis. Lines are
written through tqdm so they do not tear progress bars.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from tqdm import tqdm

_separator = " | "


class LogLevel(Enum):
    """Log level enumeration."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_current_level = LogLevel.INFO


def set_log_level(level: LogLevel) -> None:
    """Set the current log level."""
    global _current_level
    _current_level = level


def get_log_level() -> LogLevel:
    """Get the current log level."""
    return _current_level


def parse_log_level(name: str | None, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Resolve a level name such as 'debug' or 'WARN'; unknown names give `default`."""
    if not name:
        return default
    try:
        return LogLevel[name.strip().upper()]
    except KeyError:
        return default


def _format_kv(data: Dict[str, Any]) -> str:
    """Format key-value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            # Escape quotes and newlines to keep log entries single-line.
            escaped = value.replace("\r", "\\r").replace("\n", "\\n")
            escaped = escaped.replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        elif value is None:
            parts.append(f'{key}=null')
        elif isinstance(value, bool):
            parts.append(f'{key}={str(value).lower()}')
        else:
            parts.append(f'{key}={value}')
    return _separator.join(parts)


def _write_line(text: str) -> None:
    tqdm.write(text)


def _should_log(level: LogLevel) -> bool:
    """Check if a message at the given level should be logged."""
    return level.value >= _current_level.value


def format_line(event: str, level: LogLevel, fields: Dict[str, Any]) -> str:
    """Build a single log line (without writing it)."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"
    kv_str = _format_kv(fields) if fields else ""
    if kv_str:
        return f"{header}{_separator}{kv_str}"
    return header


def log(event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'correlate.match', 'rename.applied')
        level: Log level (TRACE, DEBUG, INFO, WARN, ERROR)
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return
    _write_line(format_line(event, level, kwargs))
