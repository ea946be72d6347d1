"""Integration test fixtures using loopback listeners."""

import os
import socket
import threading
import pytest
from typing import List

SKIP_INTEGRATION = os.environ.get("SKIP_INTEGRATION_TESTS", "false").lower() == "true"

skip_integration = pytest.mark.skipif(
    SKIP_INTEGRATION,
    reason="Integration tests disabled",
)


class LoopbackNode:
    """A listening socket on 127.0.0.1 that accepts and records peers."""

    def __init__(self):
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(16)
        self._accepted: List[socket.socket] = []
        self._lock = threading.Lock()
        self._running = True
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    @property
    def port(self) -> int:
        return self._server.getsockname()[1]

    @property
    def address(self) -> str:
        return f"127.0.0.1:{self.port}"

    @property
    def accepted_count(self) -> int:
        with self._lock:
            return len(self._accepted)

    def _accept_loop(self) -> None:
        while self._running:
            try:
                conn, _ = self._server.accept()
            except OSError:
                break
            with self._lock:
                self._accepted.append(conn)

    def close(self) -> None:
        self._running = False
        try:
            self._server.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._server.close()
        self._thread.join(timeout=1.0)
        with self._lock:
            for conn in self._accepted:
                conn.close()


def unused_address() -> str:
    """Return a loopback address nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"127.0.0.1:{port}"


@pytest.fixture
def loopback_nodes():
    """Start three loopback nodes."""
    nodes = [LoopbackNode() for _ in range(3)]
    yield nodes
    for node in nodes:
        node.close()


@pytest.fixture
def dead_address():
    return unused_address()
