"""Channel provider configuration."""

from enum import Enum
from typing import List, Optional
import os

from tarantool_channels.exceptions import ConfigurationException
from tarantool_channels.network.opener import SocketChannelOpener
from tarantool_channels.provider import (
    NO_TIMEOUT,
    RETRY_NO_LIMIT,
    RoundRobinSocketProvider,
    SingleSocketChannelProvider,
    SocketChannelProvider,
)


class ProviderMode(Enum):
    """Which provider implementation to build."""
    SINGLE = "SINGLE"
    ROUND_ROBIN = "ROUND_ROBIN"


class RetryConfig:
    """Exponential backoff settings for the caller-side reconnect loop.

    Values are fixed at construction; build a new instance to change them.

    Args:
        initial_backoff: Wait before the first retry, in seconds.
        max_backoff: Upper bound for any single wait, in seconds.
        multiplier: Growth factor applied per failed attempt.
        jitter: Random extra fraction of the wait, 0.0 to 1.0.
    """

    DEFAULTS = {
        "initial_backoff": 1.0,
        "max_backoff": 30.0,
        "multiplier": 2.0,
        "jitter": 0.0,
    }

    def __init__(
        self,
        initial_backoff: float = 1.0,
        max_backoff: float = 30.0,
        multiplier: float = 2.0,
        jitter: float = 0.0,
    ):
        if initial_backoff <= 0:
            raise ConfigurationException("initial_backoff must be positive")
        if max_backoff < initial_backoff:
            raise ConfigurationException("max_backoff must be >= initial_backoff")
        if multiplier < 1.0:
            raise ConfigurationException("multiplier must be >= 1.0")
        if not 0.0 <= jitter <= 1.0:
            raise ConfigurationException("jitter must be between 0.0 and 1.0")
        self._initial_backoff = initial_backoff
        self._max_backoff = max_backoff
        self._multiplier = multiplier
        self._jitter = jitter

    @property
    def initial_backoff(self) -> float:
        return self._initial_backoff

    @property
    def max_backoff(self) -> float:
        return self._max_backoff

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @property
    def jitter(self) -> float:
        return self._jitter

    @classmethod
    def from_dict(cls, data: dict) -> "RetryConfig":
        unknown = set(data) - set(cls.DEFAULTS)
        if unknown:
            raise ConfigurationException(
                f"Unknown retry settings: {', '.join(sorted(unknown))}"
            )
        return cls(**{key: data.get(key, default) for key, default in cls.DEFAULTS.items()})


class ChannelProviderConfig:
    """Configuration for building a socket channel provider.

    Attributes:
        addresses: Node addresses in "host[:port]" format.
        mode: Single-node or round-robin provider.
        connection_timeout: Connect timeout in milliseconds, ``0`` for none.
        retries_limit: Retry budget, ``RETRY_NO_LIMIT`` for unlimited.
        tcp_no_delay: Disable Nagle's algorithm on opened channels.
        socket_keep_alive: Enable TCP keep-alive on opened channels.
        retry: Backoff settings for the caller-side reconnect loop.

    Example:
        Loading from YAML::

            config = ChannelProviderConfig.from_yaml("tarantool.yml")
            provider = config.create_provider()
    """

    DEFAULT_ADDRESS = "localhost:3301"

    def __init__(
        self,
        addresses: List[str] = None,
        mode: ProviderMode = ProviderMode.ROUND_ROBIN,
        connection_timeout: int = NO_TIMEOUT,
        retries_limit: int = RETRY_NO_LIMIT,
        tcp_no_delay: bool = True,
        socket_keep_alive: bool = True,
        retry: Optional[RetryConfig] = None,
    ):
        if addresses is None:
            addresses = [self.DEFAULT_ADDRESS]
        self._addresses = self._as_list(addresses)
        self._mode = mode
        self._connection_timeout = connection_timeout
        self._retries_limit = retries_limit
        self._tcp_no_delay = tcp_no_delay
        self._socket_keep_alive = socket_keep_alive
        self._retry = retry or RetryConfig()
        self._validate()

    @staticmethod
    def _as_list(addresses) -> List[str]:
        # a lone "host:port" scalar, as YAML yields for `addresses: node1:3301`
        if addresses is None:
            return []
        if isinstance(addresses, str):
            return [addresses]
        return list(addresses)

    def _validate(self) -> None:
        if not self._addresses:
            raise ConfigurationException("At least one address is required")
        if not isinstance(self._mode, ProviderMode):
            raise ConfigurationException(f"Invalid mode: {self._mode!r}")
        if self._mode == ProviderMode.SINGLE and len(self._addresses) > 1:
            raise ConfigurationException("SINGLE mode accepts exactly one address")
        if not isinstance(self._connection_timeout, int) or self._connection_timeout < 0:
            raise ConfigurationException("connection_timeout must be a non-negative integer")
        if not isinstance(self._retries_limit, int) or (
            self._retries_limit < 0 and self._retries_limit != RETRY_NO_LIMIT
        ):
            raise ConfigurationException(
                "retries_limit must be non-negative or -1 for no limit"
            )

    @property
    def addresses(self) -> List[str]:
        return self._addresses

    @addresses.setter
    def addresses(self, value: List[str]) -> None:
        self._addresses = self._as_list(value)
        self._validate()

    @property
    def mode(self) -> ProviderMode:
        return self._mode

    @mode.setter
    def mode(self, value: ProviderMode) -> None:
        self._mode = value
        self._validate()

    @property
    def connection_timeout(self) -> int:
        """Get the connect timeout in milliseconds."""
        return self._connection_timeout

    @connection_timeout.setter
    def connection_timeout(self, value: int) -> None:
        self._connection_timeout = value
        self._validate()

    @property
    def retries_limit(self) -> int:
        return self._retries_limit

    @retries_limit.setter
    def retries_limit(self, value: int) -> None:
        self._retries_limit = value
        self._validate()

    @property
    def tcp_no_delay(self) -> bool:
        return self._tcp_no_delay

    @tcp_no_delay.setter
    def tcp_no_delay(self, value: bool) -> None:
        self._tcp_no_delay = value

    @property
    def socket_keep_alive(self) -> bool:
        return self._socket_keep_alive

    @socket_keep_alive.setter
    def socket_keep_alive(self, value: bool) -> None:
        self._socket_keep_alive = value

    @property
    def retry(self) -> RetryConfig:
        return self._retry

    @retry.setter
    def retry(self, value: RetryConfig) -> None:
        self._retry = value

    def create_opener(self) -> SocketChannelOpener:
        return SocketChannelOpener(
            tcp_no_delay=self._tcp_no_delay,
            socket_keep_alive=self._socket_keep_alive,
        )

    def create_provider(self) -> SocketChannelProvider:
        """Build the provider described by this configuration.

        SINGLE mode with a finite ``retries_limit`` yields a
        ``RoundRobinSocketProvider`` over its one address, which always
        targets that node and honors the budget.
        """
        opener = self.create_opener()
        if self._mode == ProviderMode.SINGLE and self._retries_limit == RETRY_NO_LIMIT:
            return SingleSocketChannelProvider(
                self._addresses[0],
                timeout=self._connection_timeout,
                opener=opener,
            )
        return RoundRobinSocketProvider(
            self._addresses,
            timeout=self._connection_timeout,
            retries_limit=self._retries_limit,
            opener=opener,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ChannelProviderConfig":
        """Create ChannelProviderConfig from a dictionary."""
        mode_str = data.get("mode", ProviderMode.ROUND_ROBIN.value)
        try:
            mode = ProviderMode(str(mode_str).upper())
        except ValueError:
            raise ConfigurationException(f"Invalid mode: {mode_str}")

        retry = None
        if "retry" in data:
            retry = RetryConfig.from_dict(data["retry"] or {})

        return cls(
            addresses=data.get("addresses", [cls.DEFAULT_ADDRESS]),
            mode=mode,
            connection_timeout=data.get("connection_timeout", NO_TIMEOUT),
            retries_limit=data.get("retries_limit", RETRY_NO_LIMIT),
            tcp_no_delay=data.get("tcp_no_delay", True),
            socket_keep_alive=data.get("socket_keep_alive", True),
            retry=retry,
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ChannelProviderConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            ChannelProviderConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        import yaml

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}")

        return cls._from_yaml_data(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "ChannelProviderConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        import yaml

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")

        return cls._from_yaml_data(data)

    @classmethod
    def _from_yaml_data(cls, data) -> "ChannelProviderConfig":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        if "tarantool_channels" in data:
            data = data["tarantool_channels"] or {}

        return cls.from_dict(data)
