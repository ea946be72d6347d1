"""Unit tests for tarantool_channels.logging module."""

import logging

import pytest

from tarantool_channels.logging import (
    TarantoolLoggerFactory,
    get_logger,
    configure_logging,
    set_level,
    TARANTOOL_ROOT_LOGGER,
)


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger(TARANTOOL_ROOT_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    TarantoolLoggerFactory._handler = None


class TestTarantoolLoggerFactory:
    """Tests for TarantoolLoggerFactory class."""

    def test_get_logger_root(self):
        logger = TarantoolLoggerFactory.get_logger()
        assert logger.name == TARANTOOL_ROOT_LOGGER

    def test_get_logger_component(self):
        logger = TarantoolLoggerFactory.get_logger("provider")
        assert logger.name == f"{TARANTOOL_ROOT_LOGGER}.provider"

    def test_configure(self, restore_root_logger):
        logger = TarantoolLoggerFactory.configure(level=logging.DEBUG, handler=logging.NullHandler())
        assert logger.level == logging.DEBUG

    def test_configure_with_handler(self, restore_root_logger):
        handler = logging.NullHandler()
        logger = TarantoolLoggerFactory.configure(handler=handler)
        assert handler in logger.handlers
        assert handler.level == logging.INFO

    def test_reconfigure_replaces_handler(self, restore_root_logger):
        first = logging.NullHandler()
        second = logging.NullHandler()
        TarantoolLoggerFactory.configure(level=logging.WARNING, handler=first)
        logger = TarantoolLoggerFactory.configure(level=logging.DEBUG, handler=second)

        assert first not in logger.handlers
        assert second in logger.handlers
        assert second.level == logging.DEBUG
        assert logger.level == logging.DEBUG

    def test_set_level(self):
        TarantoolLoggerFactory.set_level(logging.WARNING, "test_component")
        logger = TarantoolLoggerFactory.get_logger("test_component")
        assert logger.level == logging.WARNING


class TestModuleFunctions:
    def test_get_logger(self):
        assert get_logger("reconnect").name == f"{TARANTOOL_ROOT_LOGGER}.reconnect"

    def test_configure_logging(self, restore_root_logger):
        logger = configure_logging(level=logging.INFO, handler=logging.NullHandler())
        assert logger.name == TARANTOOL_ROOT_LOGGER
        assert logger.level == logging.INFO

    def test_set_level(self):
        set_level(logging.ERROR, "opener")
        assert get_logger("opener").level == logging.ERROR
        set_level(logging.NOTSET, "opener")

    def test_provider_logs_under_package_root(self, caplog, failing_opener):
        from tarantool_channels.exceptions import CommunicationException
        from tarantool_channels.provider import RoundRobinSocketProvider

        provider = RoundRobinSocketProvider(["a:1"], opener=failing_opener)
        with caplog.at_level(logging.WARNING, logger=TARANTOOL_ROOT_LOGGER):
            with pytest.raises(CommunicationException):
                provider.get_channel(0, None)

        assert any(r.name == f"{TARANTOOL_ROOT_LOGGER}.provider" for r in caplog.records)
