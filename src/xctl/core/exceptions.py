"""Custom exceptions for the control client.

This module defines the exceptions raised by the control client. They separate:
- Failures to reach the control API at all
- Failures of an individual remote call
- Envelopes carrying a message type this library does not know

Per-call failures are normally logged and swallowed by the client; they are
only raised to callers who ask for them through ``CallResult.unwrap()``.

Example:
    try:
        client = ServiceClient("127.0.0.1", 10085)
    except ControlConnectionError as e:
        console.print(f"[red]Control API unreachable: {e}")
"""


class XctlError(Exception):
    """Base exception for control client errors."""


class ControlConnectionError(XctlError):
    """Raised when the channel to the control API cannot be established."""

    def __init__(self, target: str, timeout: float | None) -> None:
        self.target = target
        self.timeout = timeout
        super().__init__(f"could not connect to {target} within {timeout}s")


class ControlCallError(XctlError):
    """Raised when a remote call fails.

    Attributes:
        method: Name of the remote method (e.g. ``QueryStats``)
        code: gRPC status code name (e.g. ``UNAVAILABLE``)
        details: Error details reported by the server or channel
    """

    def __init__(self, method: str, code: str, details: str) -> None:
        self.method = method
        self.code = code
        self.details = details
        super().__init__(f"{method} failed: {code}: {details}")


class UnknownMessageTypeError(XctlError):
    """Raised when a TypedMessage names a type missing from the descriptor pool."""
