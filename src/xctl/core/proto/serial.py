"""TypedMessage packing helpers.

Xray carries polymorphic payloads (inbound operations, user accounts, handler
settings) as a ``TypedMessage``: the full protobuf name of the payload plus its
serialized bytes.
"""

from google.protobuf.message import Message

from xctl.core.exceptions import UnknownMessageTypeError

from .messages import TypedMessage, message_class


def to_typed_message(message: Message):
    """Wrap ``message`` into a TypedMessage envelope."""
    return TypedMessage(type=message.DESCRIPTOR.full_name, value=message.SerializeToString())


def from_typed_message(typed) -> Message:
    """Decode the payload of a TypedMessage envelope.

    Raises:
        UnknownMessageTypeError: If the envelope names an unknown type
    """
    try:
        cls = message_class(typed.type)
    except KeyError as e:
        raise UnknownMessageTypeError(typed.type) from e
    return cls.FromString(typed.value)
