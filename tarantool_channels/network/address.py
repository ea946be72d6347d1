"""Cluster node addresses and their textual form."""

from typing import Iterable, List, Tuple, Union

from tarantool_channels.exceptions import ConfigurationException


class Address:
    """Immutable network address of a Tarantool instance.

    Two addresses are equal when host and port match exactly; no name
    resolution happens at comparison time.
    """

    DEFAULT_PORT = 3301

    __slots__ = ("_host", "_port")

    def __init__(self, host: str, port: int = DEFAULT_PORT):
        if not host:
            raise ConfigurationException("Address host cannot be empty")
        if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 65535:
            raise ConfigurationException(f"Invalid port for {host}: {port!r}")
        self._host = host
        self._port = port

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    def __str__(self) -> str:
        if ":" in self._host:
            return f"[{self._host}]:{self._port}"
        return f"{self._host}:{self._port}"

    def __repr__(self) -> str:
        return f"Address({self._host!r}, {self._port})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return False
        return self._host == other._host and self._port == other._port

    def __hash__(self) -> int:
        return hash((self._host, self._port))


AddressLike = Union[str, Address]


class AddressHelper:
    """Utility class for parsing cluster addresses."""

    @staticmethod
    def parse(address_string: AddressLike) -> Address:
        """Parse an address string into an Address object.

        Args:
            address_string: Address in format "host:port", "host",
                "[ipv6]:port" or a bare IPv6 literal. An ``Address``
                is returned unchanged.

        Returns:
            Address object.

        Raises:
            ConfigurationException: If the string is empty or the port
                is not a valid number.
        """
        if isinstance(address_string, Address):
            return address_string
        if address_string is None:
            raise ConfigurationException("Address cannot be None")
        if not isinstance(address_string, str):
            raise ConfigurationException(
                f"Address must be a string, got {type(address_string).__name__}"
            )

        address_string = address_string.strip()
        if not address_string:
            raise ConfigurationException("Address cannot be empty")

        if address_string.startswith("["):
            bracket_end = address_string.find("]")
            if bracket_end < 0:
                raise ConfigurationException(f"Unclosed bracket in address: {address_string}")
            host = address_string[1:bracket_end]
            rest = address_string[bracket_end + 1 :]
            if not rest:
                return Address(host)
            if not rest.startswith(":"):
                raise ConfigurationException(f"Malformed address: {address_string}")
            return Address(host, AddressHelper._parse_port(rest[1:], address_string))

        colon_count = address_string.count(":")
        if colon_count == 1:
            host, port_str = address_string.rsplit(":", 1)
            return Address(host, AddressHelper._parse_port(port_str, address_string))
        # several colons without brackets: a bare IPv6 literal
        return Address(address_string)

    @staticmethod
    def _parse_port(port_str: str, address_string: str) -> int:
        try:
            return int(port_str)
        except ValueError:
            raise ConfigurationException(
                f"Invalid port in address {address_string!r}: {port_str!r}"
            )

    @staticmethod
    def parse_list(address_strings: Iterable[AddressLike]) -> List[Address]:
        """Parse a non-empty collection of addresses.

        Args:
            address_strings: Address strings or ``Address`` objects. A
                single string is treated as a one-element list.

        Returns:
            List of Address objects, in the given order.

        Raises:
            ConfigurationException: If the collection is None, empty, or
                holds an invalid address.
        """
        if address_strings is None:
            raise ConfigurationException("Address list cannot be None")
        if isinstance(address_strings, (str, Address)):
            address_strings = [address_strings]

        addresses = [AddressHelper.parse(addr) for addr in address_strings]
        if not addresses:
            raise ConfigurationException("At least one address is required")
        return addresses

    @staticmethod
    def to_socket_address(address: Address) -> Tuple[str, int]:
        return address.host, address.port
