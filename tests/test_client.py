from __future__ import annotations

import socket

import pytest

from xctl.core.client import ServiceClient
from xctl.core.exceptions import ControlCallError, ControlConnectionError
from xctl.core.proto import from_typed_message
from xctl.core.proto import messages as pb


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class _FakeHandlerStub:
    def __init__(self) -> None:
        self.requests: list = []

    def AlterInbound(self, request):  # noqa: N802
        self.requests.append(request)
        return pb.AlterInboundResponse()


def test_query_stats_flattens_pairs_in_order(client, fake_xray) -> None:
    fake_xray.stats = [("a", 1), ("b", 2)]
    out = client.query_stats("rand", False)
    assert out == {"a": 1, "b": 2}
    assert list(out) == ["a", "b"]
    req = fake_xray.last("QueryStats")
    assert req.pattern == "rand"
    assert req.reset is False


def test_query_stats_forwards_reset(client, fake_xray) -> None:
    client.query_stats("user>>>", True)
    req = fake_xray.last("QueryStats")
    assert req.pattern == "user>>>"
    assert req.reset is True


def test_query_stats_error_returns_empty_and_logs(client, fake_xray, recording_logger) -> None:
    fake_xray.stats = [("a", 1)]
    fake_xray.fail.add("QueryStats")
    assert client.query_stats("", False) == {}
    errors = recording_logger.messages("ERROR")
    assert len(errors) == 1
    assert "QueryStats" in errors[0]
    assert "unavailable" in errors[0]


def test_get_stats_success(client, fake_xray) -> None:
    fake_xray.stats = [("x", 42)]
    assert client.get_stats("x", True) == ("x", 42)
    req = fake_xray.last("GetStats")
    assert req.name == "x"
    assert req.reset is True


def test_get_stats_error_returns_zero_value(client, fake_xray, recording_logger) -> None:
    assert client.get_stats("missing", False) == ("", 0)
    assert any("NOT_FOUND" in msg for msg in recording_logger.messages("ERROR"))


def test_add_user_builds_vmess_account(client, fake_xray) -> None:
    user_id = "0c3b4a63-5d5b-4d64-9f0c-4f3c0d1c3e21"
    client.add_user("vmess-in", "a@b.com", 0, user_id, 64)

    req = fake_xray.last("AlterInbound")
    assert req.tag == "vmess-in"
    assert req.operation.type == "xray.app.proxyman.command.AddUserOperation"

    op = from_typed_message(req.operation)
    assert op.user.email == "a@b.com"
    assert op.user.level == 0
    assert op.user.account.type == "xray.proxy.vmess.Account"

    account = from_typed_message(op.user.account)
    assert account.id == user_id
    assert account.alter_id == 64
    assert account.security_settings.type == pb.SecurityType.AUTO


def test_add_user_with_fake_stub_skips_network(recording_logger) -> None:
    c = ServiceClient("127.0.0.1", _free_port(), logger=recording_logger, connect_timeout=None)
    stub = _FakeHandlerStub()
    c._handler = stub
    c.add_user("vmess-in", "a@b.com", 2, "id-1", 0)
    c.close()

    (req,) = stub.requests
    op = from_typed_message(req.operation)
    assert op.user.level == 2
    assert from_typed_message(op.user.account).id == "id-1"
    assert recording_logger.messages("INFO") == ["Added user a@b.com to inbound vmess-in"]


def test_remove_user_sets_only_email(client, fake_xray) -> None:
    client.remove_user("vmess-in", "a@b.com")

    req = fake_xray.last("AlterInbound")
    assert req.tag == "vmess-in"
    assert req.operation.type == "xray.app.proxyman.command.RemoveUserOperation"
    op = from_typed_message(req.operation)
    assert op == pb.RemoveUserOperation(email="a@b.com")
    assert [f.name for f, _ in op.ListFields()] == ["email"]


def test_mutation_errors_are_logged_not_raised(client, fake_xray, recording_logger) -> None:
    fake_xray.fail.update({"AlterInbound", "RestartLogger"})
    assert client.remove_user("vmess-in", "a@b.com") is None
    assert client.restart_logger() is None
    errors = recording_logger.messages("ERROR")
    assert len(errors) == 2
    assert errors[1].startswith("RestartLogger failed")


def test_restart_logger(client, fake_xray, recording_logger) -> None:
    client.restart_logger()
    assert fake_xray.last("RestartLogger") == pb.RestartLoggerRequest()
    assert "Logger restarted" in recording_logger.messages("INFO")


def test_handler_config_calls(client, fake_xray) -> None:
    client._add_inbound(pb.InboundHandlerConfig(tag="in-1"))
    client._add_outbound(pb.OutboundHandlerConfig(tag="out-1"))
    client._remove_inbound("in-1")
    client._remove_outbound("out-1")

    assert fake_xray.last("AddInbound").inbound.tag == "in-1"
    assert fake_xray.last("AddOutbound").outbound.tag == "out-1"
    assert fake_xray.last("RemoveInbound").tag == "in-1"
    assert fake_xray.last("RemoveOutbound").tag == "out-1"


def test_try_variants_expose_errors_without_logging(client, fake_xray, recording_logger) -> None:
    fake_xray.fail.add("QueryStats")
    result = client.try_query_stats("", False)
    assert not result.ok
    assert result.value == {}
    assert isinstance(result.error, ControlCallError)
    assert result.error.method == "QueryStats"
    assert result.error.code == "UNAVAILABLE"
    assert recording_logger.messages("ERROR") == []
    with pytest.raises(ControlCallError):
        result.unwrap()


def test_try_variants_success(client, fake_xray) -> None:
    fake_xray.stats = [("x", 7)]
    assert client.try_get_stats("x").unwrap() == ("x", 7)
    assert client.try_add_user("vmess-in", "a@b.com", 0, "id", 0).ok
    assert client.try_remove_user("vmess-in", "a@b.com").ok
    assert client.try_restart_logger().ok


def test_unreachable_address_raises() -> None:
    with pytest.raises(ControlConnectionError) as excinfo:
        ServiceClient("127.0.0.1", _free_port(), connect_timeout=0.5)
    assert excinfo.value.timeout == 0.5


def test_client_properties_and_context_manager(fake_xray, recording_logger) -> None:
    with ServiceClient("127.0.0.1", fake_xray.port, logger=recording_logger) as c:
        assert c.api_address == "127.0.0.1"
        assert c.api_port == fake_xray.port
        assert c.target == f"127.0.0.1:{fake_xray.port}"
        with pytest.raises(AttributeError):
            c.api_port = 1


def test_add_user_out_of_range_is_logged_not_raised(client, fake_xray, recording_logger) -> None:
    assert client.add_user("vmess-in", "a@b.com", -1, "id", 0) is None
    errors = recording_logger.messages("ERROR")
    assert len(errors) == 1
    assert "INVALID_ARGUMENT" in errors[0]
    assert [name for name, _ in fake_xray.requests] == []


def test_try_add_user_out_of_range_returns_error(client, fake_xray) -> None:
    result = client.try_add_user("vmess-in", "a@b.com", 0, "id", -5)
    assert not result.ok
    assert result.error.method == "AlterInbound"
    assert result.error.code == "INVALID_ARGUMENT"
    assert fake_xray.requests == []
