"""Control client for the Xray gRPC API.

This module provides ``ServiceClient``, a thin facade over the three control
services an Xray (or V2Ray) server exposes on its API inbound:
- StatsService: traffic counter queries
- HandlerService: runtime mutation of inbound/outbound handlers
- LoggerService: logger restart

Every method issues exactly one blocking unary call. Failures never propagate:
they are logged through the client's logger and the method returns its zero
value. The ``try_*`` variants return a ``CallResult`` instead, so callers can
tell a failed call from an empty answer.

Example:
    with ServiceClient("127.0.0.1", 10085) as client:
        for name, value in client.query_stats("user>>>", reset=False).items():
            print(f"{name} -> {value}")
"""

from collections.abc import Callable
from typing import Any

import grpc
from google.protobuf.message import Message
from loguru import logger as default_logger

from xctl.core.exceptions import ControlCallError, ControlConnectionError
from xctl.core.proto import HandlerServiceStub, LoggerServiceStub, StatsServiceStub, to_typed_message
from xctl.core.proto import messages as pb
from xctl.core.result import CallResult
from xctl.core.utils.utils import DEFAULT_CONNECT_TIMEOUT, format_target


def _call_error(method: str, error: grpc.RpcError) -> ControlCallError:
    """Convert a gRPC failure into a ControlCallError."""
    code = getattr(error, "code", None)
    details = getattr(error, "details", None)
    call_error = ControlCallError(
        method,
        code().name if callable(code) and code() is not None else "UNKNOWN",
        details() if callable(details) and details() else str(error),
    )
    call_error.__cause__ = error
    return call_error


class ServiceClient:
    """Client holding one gRPC channel to an Xray control API.

    Attributes:
        api_address: Host of the control API
        api_port: Port of the control API
        target: ``address:port`` string the channel was opened with
    """

    def __init__(
        self,
        address: str,
        port: int,
        *,
        logger: Any = None,
        connect_timeout: float | None = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        """Open the channel and wait for it to become ready.

        Args:
            address: Host of the control API
            port: Port of the control API
            logger: Loguru-style logger used for call outcomes (default: loguru)
            connect_timeout: Seconds to wait for the channel; None skips the wait

        Raises:
            ControlConnectionError: If the channel is not ready in time
        """
        self._address = address
        self._port = port
        self._logger = logger if logger is not None else default_logger
        self._channel = grpc.insecure_channel(self.target)

        if connect_timeout is not None:
            try:
                grpc.channel_ready_future(self._channel).result(timeout=connect_timeout)
            except grpc.FutureTimeoutError as e:
                self._channel.close()
                self._logger.error(f"Control API at {self.target} is unreachable")
                raise ControlConnectionError(self.target, connect_timeout) from e

        self._stats = StatsServiceStub(self._channel)
        self._handler = HandlerServiceStub(self._channel)
        self._log = LoggerServiceStub(self._channel)
        self._logger.debug(f"Opened channel to control API at {self.target}")

    @property
    def api_address(self) -> str:
        return self._address

    @property
    def api_port(self) -> int:
        return self._port

    @property
    def target(self) -> str:
        return format_target(self._address, self._port)

    def close(self) -> None:
        """Release the channel."""
        self._channel.close()

    def __enter__(self) -> "ServiceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ServiceClient(target={self.target!r})"

    def _invoke(
        self,
        method: str,
        rpc: Callable[[Message], Message],
        request: Message,
        default: Any = None,
        convert: Callable[[Message], Any] | None = None,
    ) -> CallResult:
        """Issue one unary call, capturing a gRPC failure in the result."""
        try:
            response = rpc(request)
        except grpc.RpcError as e:
            return CallResult(default, _call_error(method, e))
        return CallResult(convert(response) if convert else None)

    def _logged(self, result: CallResult, success: str | None = None) -> Any:
        """Log the outcome of ``result`` and return its value."""
        if result.error is not None:
            self._logger.error(str(result.error))
        elif success:
            self._logger.info(success)
        return result.value

    # Stats

    def try_query_stats(self, pattern: str, reset: bool = False) -> CallResult[dict[str, int]]:
        """Query every counter matching ``pattern``.

        Counters that never saw traffic are not reported by the server.
        """
        return self._invoke(
            "QueryStats",
            self._stats.QueryStats,
            pb.QueryStatsRequest(pattern=pattern, reset=reset),
            default={},
            convert=lambda response: {stat.name: stat.value for stat in response.stat},
        )

    def query_stats(self, pattern: str, reset: bool = False) -> dict[str, int]:
        """Query counters matching ``pattern``; returns ``{}`` on failure."""
        return self._logged(self.try_query_stats(pattern, reset))

    def try_get_stats(self, name: str, reset: bool = False) -> CallResult[tuple[str, int]]:
        """Read a single counter, key as returned by QueryStats."""
        return self._invoke(
            "GetStats",
            self._stats.GetStats,
            pb.GetStatsRequest(name=name, reset=reset),
            default=("", 0),
            convert=lambda response: (response.stat.name, response.stat.value),
        )

    def get_stats(self, name: str, reset: bool = False) -> tuple[str, int]:
        """Read a single counter; returns ``("", 0)`` on failure."""
        return self._logged(self.try_get_stats(name, reset))

    # Users

    def try_add_user(
        self, inbound_tag: str, email: str, level: int, user_id: str, alter_id: int
    ) -> CallResult[None]:
        """Add a VMess user to an inbound. The change is lost on server restart.

        ``level`` and ``alter_id`` are uint32 on the wire; values outside that
        range fail with an ``INVALID_ARGUMENT`` error before any call is made.
        """
        try:
            account = pb.VmessAccount(
                id=user_id,
                alter_id=alter_id,
                security_settings=pb.SecurityConfig(type=pb.SecurityType.AUTO),
            )
            operation = pb.AddUserOperation(
                user=pb.User(level=level, email=email, account=to_typed_message(account)),
            )
        except (TypeError, ValueError) as e:
            error = ControlCallError("AlterInbound", "INVALID_ARGUMENT", str(e))
            error.__cause__ = e
            return CallResult(None, error)
        return self._invoke(
            "AlterInbound",
            self._handler.AlterInbound,
            pb.AlterInboundRequest(tag=inbound_tag, operation=to_typed_message(operation)),
        )

    def add_user(self, inbound_tag: str, email: str, level: int, user_id: str, alter_id: int) -> None:
        """Add a VMess user to an inbound, logging the outcome."""
        self._logged(
            self.try_add_user(inbound_tag, email, level, user_id, alter_id),
            f"Added user {email} to inbound {inbound_tag}",
        )

    def try_remove_user(self, inbound_tag: str, email: str) -> CallResult[None]:
        """Remove a user from an inbound. The change is lost on server restart."""
        operation = pb.RemoveUserOperation(email=email)
        return self._invoke(
            "AlterInbound",
            self._handler.AlterInbound,
            pb.AlterInboundRequest(tag=inbound_tag, operation=to_typed_message(operation)),
        )

    def remove_user(self, inbound_tag: str, email: str) -> None:
        """Remove a user from an inbound, logging the outcome."""
        self._logged(
            self.try_remove_user(inbound_tag, email),
            f"Removed user {email} from inbound {inbound_tag}",
        )

    # Logger

    def try_restart_logger(self) -> CallResult[None]:
        return self._invoke("RestartLogger", self._log.RestartLogger, pb.RestartLoggerRequest())

    def restart_logger(self) -> None:
        """Ask the server to restart its logger."""
        self._logged(self.try_restart_logger(), "Logger restarted")

    # Handlers

    def _add_inbound(self, config) -> None:
        self._logged(
            self._invoke("AddInbound", self._handler.AddInbound, pb.AddInboundRequest(inbound=config)),
            f"Added inbound {config.tag}",
        )

    def _add_outbound(self, config) -> None:
        self._logged(
            self._invoke("AddOutbound", self._handler.AddOutbound, pb.AddOutboundRequest(outbound=config)),
            f"Added outbound {config.tag}",
        )

    def _remove_inbound(self, tag: str) -> None:
        self._logged(
            self._invoke("RemoveInbound", self._handler.RemoveInbound, pb.RemoveInboundRequest(tag=tag)),
            f"Removed inbound {tag}",
        )

    def _remove_outbound(self, tag: str) -> None:
        self._logged(
            self._invoke("RemoveOutbound", self._handler.RemoveOutbound, pb.RemoveOutboundRequest(tag=tag)),
            f"Removed outbound {tag}",
        )
