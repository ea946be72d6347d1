"""Caller-side retry loop around a channel provider.

Providers only try one target per call. The component owning a
connection drives the retries: it passes its own attempt counter and the
last error back to the provider and waits between attempts.
:class:`Reconnector` is that loop, with exponential backoff and jitter.
"""

import random
import socket
import time
from typing import Callable, Optional

from tarantool_channels.config import RetryConfig
from tarantool_channels.exceptions import (
    CommunicationException,
    ConfigurationException,
    RetriesExceededException,
)
from tarantool_channels.logging import get_logger
from tarantool_channels.provider import SocketChannelProvider

_logger = get_logger("reconnect")


class Reconnector:
    """Acquires a channel from a provider, retrying with backoff.

    Args:
        provider: The provider to obtain channels from.
        retry_config: Backoff settings; defaults to ``RetryConfig()``.
        max_attempts: Optional cap on attempts per :meth:`acquire` call,
            independent of the provider's own retry budget.
        sleep: Function used to wait between attempts, ``time.sleep``
            by default.
    """

    def __init__(
        self,
        provider: SocketChannelProvider,
        retry_config: Optional[RetryConfig] = None,
        max_attempts: Optional[int] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        if max_attempts is not None and max_attempts < 1:
            raise ConfigurationException("max_attempts must be at least 1")
        self._provider = provider
        self._retry_config = retry_config or RetryConfig()
        self._max_attempts = max_attempts
        self._sleep = sleep or time.sleep

    @property
    def provider(self) -> SocketChannelProvider:
        return self._provider

    def acquire(self, last_error: Optional[BaseException] = None) -> socket.socket:
        """Obtain a connected channel, retrying until success or give-up.

        Args:
            last_error: The error that made the caller reconnect, if any.

        Returns:
            A connected socket.

        Raises:
            RetriesExceededException: If the provider's budget or
                ``max_attempts`` is exhausted.
            ConfigurationException: If the provider is misconfigured.
        """
        retry_number = 0
        while True:
            try:
                channel = self._provider.get_channel(retry_number, last_error)
                if retry_number:
                    _logger.info("Channel acquired after %d retries", retry_number)
                return channel
            except RetriesExceededException:
                raise
            except CommunicationException as e:
                last_error = e.cause or e
                retry_number += 1

                if self._max_attempts is not None and retry_number >= self._max_attempts:
                    _logger.warning("Giving up after %d attempts: %s", retry_number, e)
                    raise RetriesExceededException(
                        f"Could not acquire a channel after {retry_number} attempts",
                        cause=last_error,
                    ) from e

                backoff = self.calculate_backoff(retry_number - 1)
                _logger.debug(
                    "Attempt %d failed (%s), retrying in %.2fs", retry_number, e, backoff
                )
                self._sleep(backoff)

    def calculate_backoff(self, attempt: int) -> float:
        """Calculate backoff duration with jitter.

        Args:
            attempt: The attempt number (0-based).

        Returns:
            Backoff duration in seconds.
        """
        initial = self._retry_config.initial_backoff
        multiplier = self._retry_config.multiplier
        max_backoff = self._retry_config.max_backoff
        jitter = self._retry_config.jitter

        try:
            backoff = min(initial * (multiplier ** attempt), max_backoff)
        except OverflowError:
            backoff = max_backoff

        if jitter > 0:
            jitter_amount = backoff * jitter * random.random()
            backoff = backoff + jitter_amount

        return backoff
