"""Socket channel providers with single-node and round-robin failover.

A provider turns a retry counter supplied by the owning connection into a
connected socket. It never loops or sleeps itself: each call picks one
target, tries it once, and either returns the channel or raises. The
caller decides whether to call again, and how long to wait first.

Example:
    >>> provider = RoundRobinSocketProvider(["node1:3301", "node2:3301"])
    >>> provider.retries_limit = 5
    >>> channel = provider.get_channel(0, None)
    >>> provider.last_obtained_address
    Address('node1', 3301)
"""

import socket
import threading
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple

from tarantool_channels.exceptions import (
    CommunicationException,
    ConfigurationException,
    RetriesExceededException,
)
from tarantool_channels.logging import get_logger
from tarantool_channels.network.address import Address, AddressHelper, AddressLike
from tarantool_channels.network.opener import ChannelOpener, SocketChannelOpener

_logger = get_logger("provider")


class SocketChannelProvider(ABC):
    """Interface consumed by the connection layer to (re)obtain a channel."""

    RETRY_NO_LIMIT = -1
    NO_TIMEOUT = 0

    @abstractmethod
    def get_channel(
        self, retry_number: int = 0, last_error: Optional[BaseException] = None
    ) -> socket.socket:
        """Provide a connected channel to (re)initialize a connection.

        Args:
            retry_number: Number of the current retry, reset by the caller
                after a successful connect.
            last_error: The last error the caller observed while using a
                previously provided channel, if any.

        Returns:
            A connected socket.

        Raises:
            CommunicationException: If the channel cannot be opened or the
                retry budget is exhausted.
            ConfigurationException: If the provider is misconfigured.
        """
        pass


RETRY_NO_LIMIT = SocketChannelProvider.RETRY_NO_LIMIT
NO_TIMEOUT = SocketChannelProvider.NO_TIMEOUT


def _validate_timeout(timeout) -> int:
    if not isinstance(timeout, int) or isinstance(timeout, bool):
        raise ConfigurationException(f"timeout must be an integer, got {timeout!r}")
    if timeout < 0:
        raise ConfigurationException("timeout must be non-negative")
    return timeout


def _validate_retries_limit(retries_limit) -> int:
    if not isinstance(retries_limit, int) or isinstance(retries_limit, bool):
        raise ConfigurationException(
            f"retries_limit must be an integer, got {retries_limit!r}"
        )
    if retries_limit < 0 and retries_limit != RETRY_NO_LIMIT:
        raise ConfigurationException(
            "retries_limit must be non-negative or RETRY_NO_LIMIT"
        )
    return retries_limit


class BaseSocketChannelProvider(SocketChannelProvider):
    """Shared timeout handling and channel opening for providers.

    Args:
        timeout: Connect timeout in milliseconds; ``NO_TIMEOUT`` blocks
            without a deadline.
        opener: The channel opener, ``SocketChannelOpener`` by default.
    """

    def __init__(
        self,
        timeout: int = NO_TIMEOUT,
        opener: Optional[ChannelOpener] = None,
    ):
        self._timeout = _validate_timeout(timeout)
        self._opener = opener or SocketChannelOpener()
        self._lock = threading.Lock()

    @property
    def opener(self) -> ChannelOpener:
        return self._opener

    @property
    def timeout(self) -> int:
        """Get the connect timeout in milliseconds."""
        with self._lock:
            return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        value = _validate_timeout(value)
        with self._lock:
            self._timeout = value

    def _open_channel(self, address: Address, timeout: int) -> socket.socket:
        try:
            return self._opener.open(address, timeout)
        except OSError as e:
            _logger.warning("Failed to open channel to %s: %s", address, e)
            raise CommunicationException(
                f"Failed to connect to {address}: {e}", cause=e
            ) from e


class SingleSocketChannelProvider(BaseSocketChannelProvider):
    """Provider that always targets one fixed address.

    There is nothing to fail over to, so the retry counter and last error
    are ignored; connect failures are still reported.
    """

    def __init__(
        self,
        address: AddressLike,
        timeout: int = NO_TIMEOUT,
        opener: Optional[ChannelOpener] = None,
    ):
        self._address = AddressHelper.parse(address)
        super().__init__(timeout=timeout, opener=opener)

    @property
    def address(self) -> Address:
        return self._address

    def get_channel(
        self, retry_number: int = 0, last_error: Optional[BaseException] = None
    ) -> socket.socket:
        return self._open_channel(self._address, self.timeout)

    def __repr__(self) -> str:
        return f"SingleSocketChannelProvider(address={self._address}, timeout={self._timeout})"


class RoundRobinSocketProvider(BaseSocketChannelProvider):
    """Provider cycling over a list of addresses, one per call.

    The cursor advances on every attempt, successful or not, so repeated
    calls walk the whole ring even while nodes are failing. The address
    list can be replaced at runtime with :meth:`refresh_addresses`.

    Args:
        addresses: Non-empty collection of ``host[:port]`` strings or
            ``Address`` objects, in rotation order.
        timeout: Connect timeout in milliseconds.
        retries_limit: Maximum retry number honored before giving up,
            or ``RETRY_NO_LIMIT``.
        opener: The channel opener, ``SocketChannelOpener`` by default.

    Raises:
        ConfigurationException: If the addresses are missing or invalid,
            or a parameter is out of range.
    """

    def __init__(
        self,
        addresses: Iterable[AddressLike],
        timeout: int = NO_TIMEOUT,
        retries_limit: int = RETRY_NO_LIMIT,
        opener: Optional[ChannelOpener] = None,
    ):
        self._addresses: Tuple[Address, ...] = tuple(AddressHelper.parse_list(addresses))
        self._retries_limit = _validate_retries_limit(retries_limit)
        self._cursor = 0
        self._last_obtained_address: Optional[Address] = None
        super().__init__(timeout=timeout, opener=opener)

    @property
    def addresses(self) -> Tuple[Address, ...]:
        """Get the current addresses in rotation order."""
        with self._lock:
            return self._addresses

    @property
    def address_count(self) -> int:
        with self._lock:
            return len(self._addresses)

    @property
    def last_obtained_address(self) -> Optional[Address]:
        """Get the address targeted by the most recent attempt."""
        with self._lock:
            return self._last_obtained_address

    @property
    def retries_limit(self) -> int:
        with self._lock:
            return self._retries_limit

    @retries_limit.setter
    def retries_limit(self, value: int) -> None:
        value = _validate_retries_limit(value)
        with self._lock:
            self._retries_limit = value

    def refresh_addresses(self, addresses: Iterable[AddressLike]) -> None:
        """Replace the address list as a whole.

        The new list is parsed before any state changes; on failure the
        previous list and cursor stay intact. On success rotation restarts
        from the first new address.

        Raises:
            ConfigurationException: If the list is None, empty, or holds
                an invalid address.
        """
        new_addresses = tuple(AddressHelper.parse_list(addresses))
        with self._lock:
            self._addresses = new_addresses
            self._cursor = 0
        _logger.info(
            "Refreshed addresses: %s", ", ".join(str(a) for a in new_addresses)
        )

    def get_channel(
        self, retry_number: int = 0, last_error: Optional[BaseException] = None
    ) -> socket.socket:
        with self._lock:
            retries_limit = self._retries_limit
            exhausted = retries_limit != RETRY_NO_LIMIT and retry_number >= retries_limit
            if not exhausted:
                address = self._next_address()
                timeout = self._timeout

        if exhausted:
            _logger.warning(
                "Connection retries exceeded (retry_number=%d, limit=%d)",
                retry_number,
                retries_limit,
            )
            raise RetriesExceededException(
                "Connection retries exceeded.", cause=last_error
            ) from last_error

        _logger.debug("Selected %s (retry_number=%d)", address, retry_number)
        return self._open_channel(address, timeout)

    def _next_address(self) -> Address:
        """Select the current address and advance the cursor. Lock must be held."""
        size = len(self._addresses)
        address = self._addresses[self._cursor % size]
        self._last_obtained_address = address
        self._cursor = (self._cursor + 1) % size
        return address

    def __repr__(self) -> str:
        return (
            f"RoundRobinSocketProvider(addresses={len(self._addresses)}, "
            f"timeout={self._timeout}, retries_limit={self._retries_limit})"
        )
