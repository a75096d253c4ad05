"""Client stubs for the Xray control services.

Hand-written equivalents of the ``*_pb2_grpc`` stubs. Only the client side is
provided; the servers live inside Xray-core.
"""

import grpc

from . import messages as pb

STATS_SERVICE = "xray.app.stats.command.StatsService"
HANDLER_SERVICE = "xray.app.proxyman.command.HandlerService"
LOGGER_SERVICE = "xray.app.log.command.LoggerService"


def _unary(channel: grpc.Channel, service: str, method: str, request_cls, response_cls):
    return channel.unary_unary(
        f"/{service}/{method}",
        request_serializer=request_cls.SerializeToString,
        response_deserializer=response_cls.FromString,
    )


class StatsServiceStub:
    """Traffic counter queries."""

    def __init__(self, channel: grpc.Channel) -> None:
        self.GetStats = _unary(channel, STATS_SERVICE, "GetStats", pb.GetStatsRequest, pb.GetStatsResponse)
        self.QueryStats = _unary(channel, STATS_SERVICE, "QueryStats", pb.QueryStatsRequest, pb.QueryStatsResponse)


class HandlerServiceStub:
    """Runtime mutation of inbound and outbound handlers."""

    def __init__(self, channel: grpc.Channel) -> None:
        self.AddInbound = _unary(
            channel, HANDLER_SERVICE, "AddInbound", pb.AddInboundRequest, pb.AddInboundResponse
        )
        self.RemoveInbound = _unary(
            channel, HANDLER_SERVICE, "RemoveInbound", pb.RemoveInboundRequest, pb.RemoveInboundResponse
        )
        self.AlterInbound = _unary(
            channel, HANDLER_SERVICE, "AlterInbound", pb.AlterInboundRequest, pb.AlterInboundResponse
        )
        self.AddOutbound = _unary(
            channel, HANDLER_SERVICE, "AddOutbound", pb.AddOutboundRequest, pb.AddOutboundResponse
        )
        self.RemoveOutbound = _unary(
            channel, HANDLER_SERVICE, "RemoveOutbound", pb.RemoveOutboundRequest, pb.RemoveOutboundResponse
        )


class LoggerServiceStub:
    """Control of the server's logging subsystem."""

    def __init__(self, channel: grpc.Channel) -> None:
        self.RestartLogger = _unary(
            channel, LOGGER_SERVICE, "RestartLogger", pb.RestartLoggerRequest, pb.RestartLoggerResponse
        )
