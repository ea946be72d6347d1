"""Network layer: node addresses and channel opening."""

from tarantool_channels.network.address import Address, AddressHelper
from tarantool_channels.network.opener import ChannelOpener, SocketChannelOpener

__all__ = [
    "Address",
    "AddressHelper",
    "ChannelOpener",
    "SocketChannelOpener",
]
