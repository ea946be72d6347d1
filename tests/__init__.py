"""Tests for the tarantool_channels package."""
