"""Core control client implementation.

This package contains the components of the Xray control client:
- The ServiceClient facade
- Protobuf messages and gRPC stubs of the control API
- The CallResult return type
- Exception handling
- Logging and terminal output helpers

The core package holds all library functionality, while the command-line
interface lives in ``xctl.cmd``.
"""

from .client import ServiceClient
from .exceptions import ControlCallError, ControlConnectionError, UnknownMessageTypeError, XctlError
from .result import CallResult

__all__ = [
    "CallResult",
    "ControlCallError",
    "ControlConnectionError",
    "ServiceClient",
    "UnknownMessageTypeError",
    "XctlError",
]
