"""Log levels, their colours, and options for naming log files."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class LogLevel(IntEnum):
    """Severity of a log record, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def html(self, message: str) -> str:
        """Wrap ``message`` in the HTML font tag used for this level in log files."""
        return _HTML_TEMPLATES[self].format(message)

    def ansi(self, message: str) -> str:
        """Wrap ``message`` in the true-colour terminal escape for this level."""
        red, green, blue = _CONSOLE_COLOURS[self]
        return f"\x1b[38;2;{red};{green};{blue}m{message}\x1b[0m"


# DEBUG = gray, INFO = white, WARN = yellow, ERROR = red, FATAL = blue
_HTML_TEMPLATES = {
    LogLevel.DEBUG: '<font color="#9B9B9B">{}</font>',
    LogLevel.INFO: '<font color="#FFFFFF">{}</font>',
    LogLevel.WARN: '<font color="#FFFF00">{}</font>',
    LogLevel.ERROR: '<font color="#FF0000">{}</font>',
    LogLevel.FATAL: '<font color="#0000FF">{}</font>',
}

_CONSOLE_COLOURS = {
    LogLevel.DEBUG: (128, 128, 128),
    LogLevel.INFO: (255, 255, 255),
    LogLevel.WARN: (255, 255, 0),
    LogLevel.ERROR: (255, 0, 0),
    LogLevel.FATAL: (0, 0, 255),
}


class LogOptions(IntFlag):
    """How a logger names its file; flags may be combined with ``|``."""

    DEFAULT = 0
    DATE_DIR = 0b001
    DATE_SUFFIX = 0b010
    OVER_WRITE = 0b100