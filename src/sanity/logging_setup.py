"""Logging setup for sanity.

Modules log through ``logging.getLogger(__name__)``. Applications that want
readable console output can call ``configure_logging`` once at startup.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig, LogLevel, SanityConfig

_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def configure_logging(level: LogLevel | str | LoggingConfig | SanityConfig = LogLevel.WARN,
                      console: Console | None = None) -> logging.Logger:
    """Install a rich handler on the ``sanity`` logger.

    Calling it again replaces the handler installed by a previous call.

    Args:
        level: Log level name, or the logging section (or whole config) to
               take it from
        console: Optional rich console (stderr by default)

    Returns:
        The configured package logger
    """
    if isinstance(level, SanityConfig):
        level = level.logging
    if isinstance(level, LoggingConfig):
        level = level.level

    level_name = level.value if isinstance(level, LogLevel) else str(level).lower()
    if level_name not in _LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Must be one of: {', '.join(_LEVELS)}")

    logger = logging.getLogger("sanity")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(_LEVELS[level_name])
    return logger
