"""Logging setup.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed by the application entry point through ``configure_logging``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns WARNING if invalid."""
        return cls._from_string.get(level_str.lower(), cls.WARNING)


def configure_logging(level: str | int = "warning", console: Console | None = None) -> None:
    """Route the ``smartkissan`` logger hierarchy through a Rich handler.

    Args:
        level: Level name ("debug", "info", ...) or numeric level
        console: Console to write to (defaults to stderr)
    """
    numeric = LogLevel.from_string(level) if isinstance(level, str) else level

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger("smartkissan")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
