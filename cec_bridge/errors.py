"""Errors raised by cec_bridge."""


class CecBridgeError(Exception):
    """Base error for cec_bridge."""


class CecEncodeError(CecBridgeError, ValueError):
    """Raised when a parameter cannot be framed as CEC argument bytes."""


class CecRequestError(CecBridgeError):
    """Raised when a query could not be sent to the adapter."""


class CecTimeoutError(CecBridgeError, TimeoutError):
    """Raised when a queried device does not answer in time."""


class CecClientError(CecBridgeError):
    """Raised when the cec-client process cannot be started."""
