"""Protobuf message types of the Xray control API.

The control plane speaks the protobuf contract published by Xray-core. Only the
messages this client touches are described here, field-for-field compatible
with the upstream ``.proto`` files. The descriptors are assembled in Python and
loaded into a private descriptor pool, so no ``protoc`` build step is needed and
the classes never collide with other Xray stubs imported in the same process.

Example:
    from xctl.core.proto.messages import QueryStatsRequest

    request = QueryStatsRequest(pattern="user>>>", reset=False)
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper

_Field = descriptor_pb2.FieldDescriptorProto

STRING = _Field.TYPE_STRING
BYTES = _Field.TYPE_BYTES
BOOL = _Field.TYPE_BOOL
UINT32 = _Field.TYPE_UINT32
INT64 = _Field.TYPE_INT64
MESSAGE = _Field.TYPE_MESSAGE
ENUM = _Field.TYPE_ENUM

pool = descriptor_pool.DescriptorPool()


def _new_file(name: str, package: str, *dependencies: str) -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    proto.dependency.extend(dependencies)
    return proto


def _add_message(proto: descriptor_pb2.FileDescriptorProto, name: str, *fields: tuple) -> None:
    """Append a message to ``proto``.

    Each field is ``(name, number, type)`` or ``(name, number, type, type_name)``;
    a ``type_name`` prefixed with ``*`` marks a repeated field.
    """
    message = proto.message_type.add(name=name)
    for field in fields:
        field_name, number, field_type = field[:3]
        field_proto = message.field.add(
            name=field_name,
            number=number,
            type=field_type,
            label=_Field.LABEL_OPTIONAL,
        )
        if len(field) > 3:
            type_name = field[3]
            if type_name.startswith("*"):
                field_proto.label = _Field.LABEL_REPEATED
                type_name = type_name[1:]
            field_proto.type_name = type_name


def _add_service(proto: descriptor_pb2.FileDescriptorProto, name: str, methods: dict[str, tuple[str, str]]) -> None:
    service = proto.service.add(name=name)
    for method_name, (input_type, output_type) in methods.items():
        service.method.add(name=method_name, input_type=input_type, output_type=output_type)


# xray.common.serial
_serial = _new_file("common/serial/typed_message.proto", "xray.common.serial")
_add_message(_serial, "TypedMessage", ("type", 1, STRING), ("value", 2, BYTES))

# xray.common.protocol
_protocol = _new_file(
    "common/protocol/user.proto", "xray.common.protocol", "common/serial/typed_message.proto"
)
_security_type = _protocol.enum_type.add(name="SecurityType")
for _label, _number in (
    ("UNKNOWN", 0),
    ("AUTO", 2),
    ("AES128_GCM", 3),
    ("CHACHA20_POLY1305", 4),
    ("NONE", 5),
    ("ZERO", 6),
):
    _security_type.value.add(name=_label, number=_number)
_add_message(_protocol, "SecurityConfig", ("type", 1, ENUM, ".xray.common.protocol.SecurityType"))
_add_message(
    _protocol,
    "User",
    ("level", 1, UINT32),
    ("email", 2, STRING),
    ("account", 3, MESSAGE, ".xray.common.serial.TypedMessage"),
)

# xray.proxy.vmess
_vmess = _new_file("proxy/vmess/account.proto", "xray.proxy.vmess", "common/protocol/user.proto")
_add_message(
    _vmess,
    "Account",
    ("id", 1, STRING),
    ("alter_id", 2, UINT32),
    ("security_settings", 3, MESSAGE, ".xray.common.protocol.SecurityConfig"),
    ("tests_enabled", 4, STRING),
)

# xray.core
_core = _new_file("core/config.proto", "xray.core", "common/serial/typed_message.proto")
_add_message(
    _core,
    "InboundHandlerConfig",
    ("tag", 1, STRING),
    ("receiver_settings", 2, MESSAGE, ".xray.common.serial.TypedMessage"),
    ("proxy_settings", 3, MESSAGE, ".xray.common.serial.TypedMessage"),
)
_add_message(
    _core,
    "OutboundHandlerConfig",
    ("tag", 1, STRING),
    ("sender_settings", 2, MESSAGE, ".xray.common.serial.TypedMessage"),
    ("proxy_settings", 3, MESSAGE, ".xray.common.serial.TypedMessage"),
    ("expire", 4, INT64),
    ("comment", 5, STRING),
)

# xray.app.stats.command
_stats = _new_file("app/stats/command/command.proto", "xray.app.stats.command")
_add_message(_stats, "GetStatsRequest", ("name", 1, STRING), ("reset", 2, BOOL))
_add_message(_stats, "Stat", ("name", 1, STRING), ("value", 2, INT64))
_add_message(_stats, "GetStatsResponse", ("stat", 1, MESSAGE, ".xray.app.stats.command.Stat"))
_add_message(_stats, "QueryStatsRequest", ("pattern", 1, STRING), ("reset", 2, BOOL))
_add_message(_stats, "QueryStatsResponse", ("stat", 1, MESSAGE, "*.xray.app.stats.command.Stat"))
_add_service(
    _stats,
    "StatsService",
    {
        "GetStats": (".xray.app.stats.command.GetStatsRequest", ".xray.app.stats.command.GetStatsResponse"),
        "QueryStats": (".xray.app.stats.command.QueryStatsRequest", ".xray.app.stats.command.QueryStatsResponse"),
    },
)

# xray.app.proxyman.command
_proxyman = _new_file(
    "app/proxyman/command/command.proto",
    "xray.app.proxyman.command",
    "common/protocol/user.proto",
    "common/serial/typed_message.proto",
    "core/config.proto",
)
_add_message(_proxyman, "AddUserOperation", ("user", 1, MESSAGE, ".xray.common.protocol.User"))
_add_message(_proxyman, "RemoveUserOperation", ("email", 1, STRING))
_add_message(_proxyman, "AddInboundRequest", ("inbound", 1, MESSAGE, ".xray.core.InboundHandlerConfig"))
_add_message(_proxyman, "AddInboundResponse")
_add_message(_proxyman, "RemoveInboundRequest", ("tag", 1, STRING))
_add_message(_proxyman, "RemoveInboundResponse")
_add_message(
    _proxyman,
    "AlterInboundRequest",
    ("tag", 1, STRING),
    ("operation", 2, MESSAGE, ".xray.common.serial.TypedMessage"),
)
_add_message(_proxyman, "AlterInboundResponse")
_add_message(_proxyman, "AddOutboundRequest", ("outbound", 1, MESSAGE, ".xray.core.OutboundHandlerConfig"))
_add_message(_proxyman, "AddOutboundResponse")
_add_message(_proxyman, "RemoveOutboundRequest", ("tag", 1, STRING))
_add_message(_proxyman, "RemoveOutboundResponse")
_add_service(
    _proxyman,
    "HandlerService",
    {
        name: (f".xray.app.proxyman.command.{name}Request", f".xray.app.proxyman.command.{name}Response")
        for name in ("AddInbound", "RemoveInbound", "AlterInbound", "AddOutbound", "RemoveOutbound")
    },
)

# xray.app.log.command
_log = _new_file("app/log/command/config.proto", "xray.app.log.command")
_add_message(_log, "RestartLoggerRequest")
_add_message(_log, "RestartLoggerResponse")
_add_service(
    _log,
    "LoggerService",
    {"RestartLogger": (".xray.app.log.command.RestartLoggerRequest", ".xray.app.log.command.RestartLoggerResponse")},
)

# Dependencies first
for _file_proto in (_serial, _protocol, _vmess, _core, _stats, _proxyman, _log):
    pool.AddSerializedFile(_file_proto.SerializeToString())


def message_class(full_name: str):
    """Return the generated class for a fully qualified message name."""
    return message_factory.GetMessageClass(pool.FindMessageTypeByName(full_name))


TypedMessage = message_class("xray.common.serial.TypedMessage")

SecurityType = EnumTypeWrapper(pool.FindEnumTypeByName("xray.common.protocol.SecurityType"))
SecurityConfig = message_class("xray.common.protocol.SecurityConfig")
User = message_class("xray.common.protocol.User")

VmessAccount = message_class("xray.proxy.vmess.Account")

InboundHandlerConfig = message_class("xray.core.InboundHandlerConfig")
OutboundHandlerConfig = message_class("xray.core.OutboundHandlerConfig")

GetStatsRequest = message_class("xray.app.stats.command.GetStatsRequest")
GetStatsResponse = message_class("xray.app.stats.command.GetStatsResponse")
Stat = message_class("xray.app.stats.command.Stat")
QueryStatsRequest = message_class("xray.app.stats.command.QueryStatsRequest")
QueryStatsResponse = message_class("xray.app.stats.command.QueryStatsResponse")

AddUserOperation = message_class("xray.app.proxyman.command.AddUserOperation")
RemoveUserOperation = message_class("xray.app.proxyman.command.RemoveUserOperation")
AddInboundRequest = message_class("xray.app.proxyman.command.AddInboundRequest")
AddInboundResponse = message_class("xray.app.proxyman.command.AddInboundResponse")
RemoveInboundRequest = message_class("xray.app.proxyman.command.RemoveInboundRequest")
RemoveInboundResponse = message_class("xray.app.proxyman.command.RemoveInboundResponse")
AlterInboundRequest = message_class("xray.app.proxyman.command.AlterInboundRequest")
AlterInboundResponse = message_class("xray.app.proxyman.command.AlterInboundResponse")
AddOutboundRequest = message_class("xray.app.proxyman.command.AddOutboundRequest")
AddOutboundResponse = message_class("xray.app.proxyman.command.AddOutboundResponse")
RemoveOutboundRequest = message_class("xray.app.proxyman.command.RemoveOutboundRequest")
RemoveOutboundResponse = message_class("xray.app.proxyman.command.RemoveOutboundResponse")

RestartLoggerRequest = message_class("xray.app.log.command.RestartLoggerRequest")
RestartLoggerResponse = message_class("xray.app.log.command.RestartLoggerResponse")
