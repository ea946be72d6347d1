"""Integration tests for the channel providers.

These tests open real TCP connections to listeners bound on the loopback
interface. Disable them with:

    SKIP_INTEGRATION_TESTS=true pytest tests/
"""
