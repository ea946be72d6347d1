"""Round-robin failover example.

Demonstrates acquiring channels across several Tarantool nodes, refreshing
the node list at runtime from another thread, and bounding retries.

Prerequisites:
    - One or more Tarantool instances listening on the given addresses

Usage:
    python failover.py localhost:3301 localhost:3302
"""

import logging
import sys
import threading

from tarantool_channels import (
    CommunicationException,
    RetryConfig,
    Reconnector,
    RoundRobinSocketProvider,
)
from tarantool_channels.logging import configure_logging


def acquire_round_robin(addresses):
    print("\n" + "=" * 50)
    print("Round-robin acquisition")
    print("=" * 50)

    provider = RoundRobinSocketProvider(addresses, timeout=1000, retries_limit=len(addresses) * 2)
    reconnector = Reconnector(provider, retry_config=RetryConfig(initial_backoff=0.2, max_backoff=1.0))

    for _ in range(len(addresses) * 2):
        try:
            channel = reconnector.acquire()
        except CommunicationException as e:
            print(f"  gave up: {e} (cause: {e.cause})")
            return
        print(f"  connected via {provider.last_obtained_address}")
        channel.close()


def refresh_from_watcher(addresses):
    print("\n" + "=" * 50)
    print("Refreshing addresses from a topology watcher")
    print("=" * 50)

    provider = RoundRobinSocketProvider(addresses[:1], timeout=1000)
    watcher = threading.Thread(target=provider.refresh_addresses, args=(addresses,))
    watcher.start()
    watcher.join()

    print(f"  provider now rotates over {provider.address_count} node(s):")
    for address in provider.addresses:
        print(f"    - {address}")


def main():
    configure_logging(level=logging.INFO)
    addresses = sys.argv[1:] or ["localhost:3301"]
    acquire_round_robin(addresses)
    refresh_from_watcher(addresses)


if __name__ == "__main__":
    main()
