"""Leveled logging to a configurable set of sinks."""

import abc
import enum
import sys
import threading
from datetime import datetime


class LogLevel(enum.IntEnum):
    """Severity of a log message, lowest first."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


_PREFIX = {
    LogLevel.DEBUG: "[DEBUG]   ",
    LogLevel.INFO: "[INFO]    ",
    LogLevel.WARNING: "[WARNING] ",
    LogLevel.ERROR: "[ERROR]   ",
    LogLevel.FATAL: "[FATAL]   ",
}


class Sink(abc.ABC):
    """Destination for formatted log messages."""

    @abc.abstractmethod
    def write(self, msg):
        """Write one formatted message."""


class StdoutSink(Sink):
    """Writes messages to standard output."""

    def write(self, msg):
        sys.stdout.write(msg)


class FileSink(Sink):
    """Writes messages to a file, flushing after each one."""

    def __init__(self, filename, mode="a"):
        self._file = open(filename, mode, encoding="utf-8")

    def write(self, msg):
        self._file.write(msg)
        self._file.flush()

    def close(self):
        """Close the underlying file."""
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return None


class Logger:
    """Process-wide logger; messages below the current level are dropped."""

    _lock = threading.Lock()
    _level = LogLevel.INFO
    _sinks = [StdoutSink()]

    @classmethod
    def log(cls, level, *args):
        """Write the concatenated ``args`` at ``level`` to every sink."""
        level = LogLevel(level)
        with cls._lock:
            if level < cls._level:
                return
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            text = "".join(str(arg) for arg in args)
            msg = f"[{timestamp}] {_PREFIX[level]}{text}\n"
            for sink in cls._sinks:
                sink.write(msg)

    @classmethod
    def debug(cls, *args):
        """Log at debug level."""
        cls.log(LogLevel.DEBUG, *args)

    @classmethod
    def info(cls, *args):
        """Log at info level."""
        cls.log(LogLevel.INFO, *args)

    @classmethod
    def warning(cls, *args):
        """Log at warning level."""
        cls.log(LogLevel.WARNING, *args)

    @classmethod
    def error(cls, *args):
        """Log at error level."""
        cls.log(LogLevel.ERROR, *args)

    @classmethod
    def fatal(cls, *args):
        """Log at fatal level."""
        cls.log(LogLevel.FATAL, *args)

    @classmethod
    def set_loglevel(cls, level):
        """Set the lowest level that is written."""
        with cls._lock:
            cls._level = LogLevel(level)

    @classmethod
    def add_sink(cls, sink):
        """Add a destination for messages."""
        with cls._lock:
            cls._sinks.append(sink)

    @classmethod
    def remove_sink(cls, sink):
        """Remove every registration of ``sink``."""
        with cls._lock:
            cls._sinks[:] = [s for s in cls._sinks if s is not sink]