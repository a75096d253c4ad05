"""Protobuf messages and gRPC stubs for the Xray control API."""

from .serial import from_typed_message, to_typed_message
from .services import HandlerServiceStub, LoggerServiceStub, StatsServiceStub

__all__ = [
    "from_typed_message",
    "HandlerServiceStub",
    "LoggerServiceStub",
    "StatsServiceStub",
    "to_typed_message",
]
