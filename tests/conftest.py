"""Shared pytest fixtures for channel provider tests."""

import socket
import pytest
from unittest.mock import MagicMock

from tarantool_channels.config import RetryConfig
from tarantool_channels.network.address import Address
from tarantool_channels.network.opener import ChannelOpener


@pytest.fixture
def mock_opener():
    """Create an opener returning a fresh mock socket per call."""
    opener = MagicMock(spec=ChannelOpener)
    opener.open.side_effect = lambda address, timeout: MagicMock(spec=socket.socket)
    return opener


@pytest.fixture
def failing_opener():
    """Create an opener that refuses every connection."""
    opener = MagicMock(spec=ChannelOpener)
    opener.open.side_effect = ConnectionRefusedError("Connection refused")
    return opener


@pytest.fixture
def retry_config():
    """Create a RetryConfig without jitter."""
    return RetryConfig(
        initial_backoff=0.1,
        max_backoff=1.0,
        multiplier=2.0,
        jitter=0.0,
    )


@pytest.fixture
def address():
    """Create an Address."""
    return Address("localhost", 3301)


@pytest.fixture
def opened_addresses():
    """Return a helper listing the addresses passed to ``opener.open``."""

    def _opened(opener):
        return [str(call.args[0]) for call in opener.open.call_args_list]

    return _opened
