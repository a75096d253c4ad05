from __future__ import annotations

from concurrent import futures

import grpc
import pytest

from xctl.core.client import ServiceClient
from xctl.core.proto import messages as pb
from xctl.core.proto.services import HANDLER_SERVICE, LOGGER_SERVICE, STATS_SERVICE


class FakeXray:
    """In-process stand-in for the three Xray control services."""

    def __init__(self) -> None:
        self.port = 0
        self.stats: list[tuple[str, int]] = []
        self.fail: set[str] = set()
        self.requests: list[tuple[str, object]] = []

    def last(self, method: str):
        return [req for name, req in self.requests if name == method][-1]

    def _query_stats(self, request):
        return pb.QueryStatsResponse(stat=[pb.Stat(name=n, value=v) for n, v in self.stats])

    def _get_stats(self, request):
        for name, value in self.stats:
            if name == request.name:
                return pb.GetStatsResponse(stat=pb.Stat(name=name, value=value))
        return None

    def _method(self, method: str, request_cls, respond):
        def handle(request, context):
            self.requests.append((method, request))
            if method in self.fail:
                context.abort(grpc.StatusCode.UNAVAILABLE, f"{method} unavailable")
            response = respond(request)
            if response is None:
                context.abort(grpc.StatusCode.NOT_FOUND, f"{request.name} not found")
            return response

        return grpc.unary_unary_rpc_method_handler(
            handle,
            request_deserializer=request_cls.FromString,
            response_serializer=lambda message: message.SerializeToString(),
        )

    def generic_handlers(self):
        stats = {
            "QueryStats": self._method("QueryStats", pb.QueryStatsRequest, self._query_stats),
            "GetStats": self._method("GetStats", pb.GetStatsRequest, self._get_stats),
        }
        handler = {
            name: self._method(
                name,
                getattr(pb, f"{name}Request"),
                lambda _req, _cls=getattr(pb, f"{name}Response"): _cls(),
            )
            for name in ("AddInbound", "RemoveInbound", "AlterInbound", "AddOutbound", "RemoveOutbound")
        }
        log = {
            "RestartLogger": self._method(
                "RestartLogger", pb.RestartLoggerRequest, lambda _req: pb.RestartLoggerResponse()
            )
        }
        return (
            grpc.method_handlers_generic_handler(STATS_SERVICE, stats),
            grpc.method_handlers_generic_handler(HANDLER_SERVICE, handler),
            grpc.method_handlers_generic_handler(LOGGER_SERVICE, log),
        )


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str):
        return lambda message: self.records.append((level, message))

    def __getattr__(self, level: str):
        if level in ("debug", "info", "warning", "error"):
            return self._record(level.upper())
        raise AttributeError(level)

    def messages(self, level: str) -> list[str]:
        return [msg for lvl, msg in self.records if lvl == level]


@pytest.fixture
def fake_xray():
    fake = FakeXray()
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=2))
    server.add_generic_rpc_handlers(fake.generic_handlers())
    fake.port = server.add_insecure_port("127.0.0.1:0")
    server.start()
    yield fake
    server.stop(None)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def client(fake_xray, recording_logger):
    c = ServiceClient("127.0.0.1", fake_xray.port, logger=recording_logger)
    yield c
    c.close()
