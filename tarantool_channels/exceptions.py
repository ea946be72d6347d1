"""Tarantool channel provider exceptions.

All exceptions inherit from :class:`TarantoolException`. The two
families raised by providers are disjoint so callers can tell a setup
mistake from a network outage.

Example:
    Handling provider exceptions::

        from tarantool_channels.exceptions import (
            CommunicationException,
            ConfigurationException,
        )

        try:
            channel = provider.get_channel(retry_number, last_error)
        except ConfigurationException:
            raise
        except CommunicationException as e:
            print(f"Node unreachable: {e} (cause: {e.cause})")
"""


class TarantoolException(Exception):
    """Base class for all channel provider exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: BaseException = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationException(TarantoolException):
    """Raised when construction or reconfiguration input is invalid.

    Example:
        - Empty or missing address list
        - Negative connection timeout
        - Malformed ``host:port`` string
    """
    pass


class CommunicationException(TarantoolException):
    """Raised when a channel to the cluster cannot be established.

    The :attr:`cause` holds the most recent I/O error, when one is known.
    """
    pass


class RetriesExceededException(CommunicationException):
    """Raised when the retry budget is spent before a further attempt.

    No connect attempt is made when this is raised; :attr:`cause` carries
    the last error reported by the caller.
    """
    pass
