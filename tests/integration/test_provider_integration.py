"""Integration tests for providers against real loopback sockets."""

import pytest

from tarantool_channels.config import ChannelProviderConfig, RetryConfig
from tarantool_channels.exceptions import CommunicationException, RetriesExceededException
from tarantool_channels.provider import RoundRobinSocketProvider, SingleSocketChannelProvider
from tarantool_channels.reconnect import Reconnector

from tests.integration.conftest import skip_integration


@skip_integration
class TestRoundRobinOverLoopback:
    def test_rotates_over_live_nodes(self, loopback_nodes):
        provider = RoundRobinSocketProvider([n.address for n in loopback_nodes], timeout=1000)
        ports = [n.port for n in loopback_nodes]

        peers = []
        for _ in range(6):
            channel = provider.get_channel(0, None)
            try:
                peers.append(channel.getpeername()[1])
                assert channel.gettimeout() is None
            finally:
                channel.close()

        assert peers == ports * 2

    def test_fails_over_past_dead_node(self, loopback_nodes, dead_address):
        live = loopback_nodes[0]
        provider = RoundRobinSocketProvider([dead_address, live.address], timeout=1000)
        reconnector = Reconnector(
            provider,
            retry_config=RetryConfig(initial_backoff=0.01, max_backoff=0.01),
        )

        channel = reconnector.acquire()
        try:
            assert channel.getpeername()[1] == live.port
        finally:
            channel.close()

    def test_dead_node_raises_communication_exception(self, dead_address):
        provider = RoundRobinSocketProvider([dead_address], timeout=1000)
        with pytest.raises(CommunicationException) as exc_info:
            provider.get_channel(0, None)
        assert isinstance(exc_info.value.cause, OSError)

    def test_budget_exhausted_against_dead_nodes(self, dead_address):
        provider = RoundRobinSocketProvider([dead_address], timeout=500, retries_limit=2)
        reconnector = Reconnector(
            provider,
            retry_config=RetryConfig(initial_backoff=0.01, max_backoff=0.01),
        )
        with pytest.raises(RetriesExceededException):
            reconnector.acquire()

    def test_refresh_moves_to_new_node(self, loopback_nodes):
        first, second, _ = loopback_nodes
        provider = RoundRobinSocketProvider([first.address], timeout=1000)

        provider.refresh_addresses([second.address])
        channel = provider.get_channel(0, None)
        try:
            assert channel.getpeername()[1] == second.port
        finally:
            channel.close()


@skip_integration
class TestSingleOverLoopback:
    def test_connects_from_config(self, loopback_nodes):
        node = loopback_nodes[0]
        config = ChannelProviderConfig.from_dict(
            {"addresses": [node.address], "mode": "SINGLE", "connection_timeout": 1000}
        )
        provider = config.create_provider()
        assert isinstance(provider, SingleSocketChannelProvider)

        for _ in range(3):
            channel = provider.get_channel(0, None)
            try:
                assert channel.getpeername()[1] == node.port
            finally:
                channel.close()
