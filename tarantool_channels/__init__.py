"""Tarantool socket channel providers."""

from tarantool_channels.config import ChannelProviderConfig, ProviderMode, RetryConfig
from tarantool_channels.exceptions import (
    TarantoolException,
    ConfigurationException,
    CommunicationException,
    RetriesExceededException,
)
from tarantool_channels.network import (
    Address,
    AddressHelper,
    ChannelOpener,
    SocketChannelOpener,
)
from tarantool_channels.provider import (
    NO_TIMEOUT,
    RETRY_NO_LIMIT,
    SocketChannelProvider,
    BaseSocketChannelProvider,
    SingleSocketChannelProvider,
    RoundRobinSocketProvider,
)
from tarantool_channels.reconnect import Reconnector

__version__ = "0.1.0"

__all__ = [
    "ChannelProviderConfig",
    "ProviderMode",
    "RetryConfig",
    "TarantoolException",
    "ConfigurationException",
    "CommunicationException",
    "RetriesExceededException",
    "Address",
    "AddressHelper",
    "ChannelOpener",
    "SocketChannelOpener",
    "NO_TIMEOUT",
    "RETRY_NO_LIMIT",
    "SocketChannelProvider",
    "BaseSocketChannelProvider",
    "SingleSocketChannelProvider",
    "RoundRobinSocketProvider",
    "Reconnector",
]
