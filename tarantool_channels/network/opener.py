"""Opening raw byte-stream channels to cluster nodes."""

import socket
import struct
from abc import ABC, abstractmethod
from typing import Optional

from tarantool_channels.logging import get_logger
from tarantool_channels.network.address import Address, AddressHelper

_logger = get_logger("opener")


class ChannelOpener(ABC):
    """Interface for opening a connected socket to an address."""

    @abstractmethod
    def open(self, address: Address, timeout: int) -> socket.socket:
        """Open a connected channel to ``address``.

        Args:
            address: The node to connect to.
            timeout: Connect timeout in milliseconds, ``0`` to block
                without a deadline.

        Returns:
            A connected, blocking socket.

        Raises:
            OSError: If the connection cannot be established.
        """
        pass


class SocketChannelOpener(ChannelOpener):
    """Opens TCP sockets through the operating system."""

    def __init__(
        self,
        tcp_no_delay: bool = True,
        socket_keep_alive: bool = True,
        socket_send_buffer_size: Optional[int] = None,
        socket_receive_buffer_size: Optional[int] = None,
        socket_linger_seconds: Optional[int] = None,
    ):
        self._tcp_no_delay = tcp_no_delay
        self._socket_keep_alive = socket_keep_alive
        self._socket_send_buffer_size = socket_send_buffer_size
        self._socket_receive_buffer_size = socket_receive_buffer_size
        self._socket_linger_seconds = socket_linger_seconds

    @property
    def tcp_no_delay(self) -> bool:
        return self._tcp_no_delay

    @property
    def socket_keep_alive(self) -> bool:
        return self._socket_keep_alive

    def open(self, address: Address, timeout: int) -> socket.socket:
        connect_timeout = timeout / 1000.0 if timeout > 0 else None
        _logger.debug("Opening channel to %s (timeout=%sms)", address, timeout)

        sock = socket.create_connection(
            AddressHelper.to_socket_address(address), timeout=connect_timeout
        )
        try:
            sock.settimeout(None)
            self._apply_socket_options(sock)
        except BaseException:
            sock.close()
            raise

        _logger.debug("Channel to %s established (local=%s)", address, sock.getsockname())
        return sock

    def _apply_socket_options(self, sock: socket.socket) -> None:
        """Apply configured socket options to the socket."""
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, int(self._tcp_no_delay))
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(self._socket_keep_alive))

            if self._socket_send_buffer_size is not None:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, self._socket_send_buffer_size)

            if self._socket_receive_buffer_size is not None:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, self._socket_receive_buffer_size)

            if self._socket_linger_seconds is not None:
                sock.setsockopt(
                    socket.SOL_SOCKET,
                    socket.SO_LINGER,
                    struct.pack("ii", 1, self._socket_linger_seconds),
                )
        except OSError as e:
            _logger.warning("Failed to set socket options: %s", e)
