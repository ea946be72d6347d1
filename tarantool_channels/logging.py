"""Logging for the Tarantool channel providers.

Every component logs under the ``tarantool_channels`` namespace: the
providers report selected targets at DEBUG and failed connects at
WARNING, the reconnect loop reports backoff and give-up.

Example:
    >>> from tarantool_channels.logging import configure_logging, get_logger
    >>> configure_logging(level=logging.DEBUG)
    >>> get_logger("provider").debug("Selected %s", "node1:3301")
"""

import logging
from typing import Optional


TARANTOOL_ROOT_LOGGER = "tarantool_channels"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TarantoolLoggerFactory:
    """Hands out component loggers and attaches the package handler."""

    _handler: Optional[logging.Handler] = None

    @classmethod
    def get_logger(cls, name: str = "") -> logging.Logger:
        """Get ``tarantool_channels.<name>``, or the package root if empty."""
        if name:
            return logging.getLogger(f"{TARANTOOL_ROOT_LOGGER}.{name}")
        return logging.getLogger(TARANTOOL_ROOT_LOGGER)

    @classmethod
    def configure(
        cls,
        level: int = logging.INFO,
        format_string: str = DEFAULT_FORMAT,
        handler: Optional[logging.Handler] = None,
    ) -> logging.Logger:
        """Set the package level and attach one handler.

        Calling again swaps the handler installed by the previous call
        instead of stacking another, so repeated CLI runs in one process
        do not duplicate output.

        Args:
            level: Level for the package root logger and its handler.
            format_string: Format for the handler.
            handler: Handler to attach; a ``StreamHandler`` by default.

        Returns:
            The package root logger.
        """
        logger = logging.getLogger(TARANTOOL_ROOT_LOGGER)
        logger.setLevel(level)

        if cls._handler is not None:
            logger.removeHandler(cls._handler)
        handler = handler or logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)
        cls._handler = handler
        return logger

    @classmethod
    def set_level(cls, level: int, component: str = "") -> None:
        cls.get_logger(component).setLevel(level)


def get_logger(name: str = "") -> logging.Logger:
    """Get a package logger for a component such as 'provider' or 'reconnect'."""
    return TarantoolLoggerFactory.get_logger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    return TarantoolLoggerFactory.configure(level, format_string, handler)


def set_level(level: int, component: str = "") -> None:
    TarantoolLoggerFactory.set_level(level, component)
