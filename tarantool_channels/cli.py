"""Command line probe for checking node reachability.

Usage:
    tarantool-channel-probe node1:3301 node2:3301 --timeout 2000 --retries 6
    tarantool-channel-probe --config tarantool.yml

Without --max-attempts and with an unlimited retry budget, the probe gives
up after three attempts per address.

Exit Codes:
    0 - A channel was established
    1 - No node could be reached
    2 - Configuration error
"""

import argparse
import logging
import sys
from typing import List, Optional

from tarantool_channels.config import ChannelProviderConfig, ProviderMode
from tarantool_channels.exceptions import CommunicationException, ConfigurationException
from tarantool_channels.logging import configure_logging
from tarantool_channels.provider import RETRY_NO_LIMIT
from tarantool_channels.reconnect import Reconnector

EXIT_OK = 0
EXIT_COMMUNICATION_FAILURE = 1
EXIT_CONFIGURATION_ERROR = 2

DEFAULT_ATTEMPTS_PER_ADDRESS = 3


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tarantool-channel-probe",
        description="Open one channel to a Tarantool cluster and report the node used.",
    )
    parser.add_argument(
        "addresses",
        nargs="*",
        help="Node addresses in host[:port] form, tried round-robin",
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Connect timeout in milliseconds (0 = no timeout)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Retry budget (-1 = unlimited)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help=(
            "Stop after this many attempts regardless of the retry budget "
            "(default: 3 per address when the budget is unlimited)"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ChannelProviderConfig:
    if args.config:
        config = ChannelProviderConfig.from_yaml(args.config)
    else:
        config = ChannelProviderConfig()

    if args.addresses:
        if config.mode == ProviderMode.SINGLE and len(args.addresses) > 1:
            config.mode = ProviderMode.ROUND_ROBIN
        config.addresses = list(args.addresses)
    if args.timeout is not None:
        config.connection_timeout = args.timeout
    if args.retries is not None:
        config.retries_limit = args.retries
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = build_config(args)
        provider = config.create_provider()
        max_attempts = args.max_attempts
        if max_attempts is None and config.retries_limit == RETRY_NO_LIMIT:
            max_attempts = len(config.addresses) * DEFAULT_ATTEMPTS_PER_ADDRESS
        reconnector = Reconnector(
            provider,
            retry_config=config.retry,
            max_attempts=max_attempts,
        )
        channel = reconnector.acquire()
    except ConfigurationException as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    except CommunicationException as e:
        cause = f" ({e.cause})" if e.cause else ""
        print(f"Connection failed: {e}{cause}", file=sys.stderr)
        return EXIT_COMMUNICATION_FAILURE

    try:
        peer = channel.getpeername()
        print(f"Connected to {peer[0]}:{peer[1]}")
    finally:
        channel.close()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
