"""Levelled logging to standard output and, optionally, a dated file."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, TextIO


@dataclass
class Settings:
    """Where the log file goes: ``<path>/<name>-<date>.<ext>``."""

    path: str = "logs"
    name: str = "rediskit"
    ext: str = "log"
    time_format: str = "%Y-%m-%d"


class LogLevel(IntEnum):
    """Log levels; messages below the current level are dropped."""

    CLOSE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5


_FLAGS = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "FATAL",
}

_lock = threading.Lock()
_level = LogLevel.ERROR
_log_file: TextIO | None = None


def _open_log_file(file_name: str, directory: str) -> TextIO:
    if os.path.exists(directory) and not os.access(directory, os.W_OK | os.X_OK):
        raise PermissionError(f"permission denied dir: {directory}")
    if not os.path.exists(directory):
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as exc:
            raise OSError(f"error during make dir {directory}, err: {exc}") from exc
    try:
        return open(os.path.join(directory, file_name), "a", encoding="utf-8")
    except OSError as exc:
        raise OSError(f"fail to open file, err: {exc}") from exc


def setup(settings: Settings) -> None:
    """Also write log lines to a dated file; raises OSError if it cannot be opened."""
    global _log_file
    file_name = f"{settings.name}-{datetime.now().strftime(settings.time_format)}.{settings.ext}"
    new_file = _open_log_file(file_name, settings.path)
    with _lock:
        old, _log_file = _log_file, new_file
    if old is not None:
        old.close()


def set_level(level: LogLevel) -> None:
    """Set the lowest level that is written."""
    global _level
    with _lock:
        _level = LogLevel(level)


def _format(fmt: Any, args: tuple[Any, ...]) -> str:
    if not args:
        return str(fmt)
    try:
        return str(fmt) % args
    except (TypeError, ValueError):
        return " ".join(str(part) for part in (fmt, *args))


def _log(level: LogLevel, fmt: Any, args: tuple[Any, ...], force: bool = False) -> None:
    frame = sys._getframe(2)
    location = f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
    with _lock:
        if not force and _level > level:
            return
        stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
        message = _format(fmt, args)
        if not message.endswith("\n"):
            message += "\n"
        line = f"[{_FLAGS[level]}][{location}] {stamp} {message}"
        sys.stdout.write(line)
        if _log_file is not None:
            _log_file.write(line)
            _log_file.flush()


def debug(fmt: Any, *args: Any) -> None:
    """Write a debug message."""
    _log(LogLevel.DEBUG, fmt, args)


def info(fmt: Any, *args: Any) -> None:
    """Write an informational message."""
    _log(LogLevel.INFO, fmt, args)


def warn(fmt: Any, *args: Any) -> None:
    """Write a warning."""
    _log(LogLevel.WARNING, fmt, args)


def error(fmt: Any, *args: Any) -> None:
    """Write an error."""
    _log(LogLevel.ERROR, fmt, args)


def fatal(fmt: Any, *args: Any) -> None:
    """Write a fatal message regardless of the level."""
    _log(LogLevel.FATAL, fmt, args, force=True)