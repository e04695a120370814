"""Module message abstraction"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import ClassVar

from google.protobuf.any_pb2 import Any
from google.protobuf.message import DecodeError as ProtoDecodeError
from google.protobuf.message import Message
from google.protobuf.timestamp_pb2 import Timestamp

from ..errors import DecodeError, InvalidInputError
from ..tx import UnsignedTx


def type_url_of(proto_cls) -> str:
    return "/" + proto_cls.DESCRIPTOR.full_name


def any_from_message(message: Message) -> Any:
    """Wrap a protobuf message in an Any with the Cosmos ``/<full name>`` type URL"""
    return Any(type_url=type_url_of(type(message)), value=message.SerializeToString())


def to_any(value) -> Any:
    """Accept an Any, a ModuleMsg or anything else exposing ``to_any()``"""
    if isinstance(value, Any):
        return value
    if hasattr(value, "to_any"):
        return value.to_any()
    if isinstance(value, Message):
        return any_from_message(value)
    raise InvalidInputError(f"cannot convert {type(value).__name__} to Any")


def unpack_any(value: Any, proto_cls):
    if value.type_url != type_url_of(proto_cls):
        raise DecodeError(f"expected {type_url_of(proto_cls)}, got {value.type_url!r}")
    proto = proto_cls()
    try:
        proto.ParseFromString(value.value)
    except ProtoDecodeError as e:
        raise DecodeError(f"malformed {value.type_url}: {e}") from e
    return proto


def datetime_to_timestamp(value: datetime) -> Timestamp:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    ts = Timestamp()
    ts.FromDatetime(value.astimezone(timezone.utc))
    return ts


def timestamp_to_datetime(ts: Timestamp) -> datetime:
    return ts.ToDatetime(tzinfo=timezone.utc)


class ModuleMsg(ABC):
    """
    A Cosmos module message that can be packed into an Any

    Subclasses set ``proto_cls``; ``type_url`` is derived from it.
    ``to_any()`` validates first, so a bad address or denom surfaces as
    InvalidInputError before anything is signed.
    """

    proto_cls: ClassVar[type]
    type_url: ClassVar[str]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        proto_cls = cls.__dict__.get("proto_cls")
        if proto_cls is not None:
            cls.type_url = type_url_of(proto_cls)

    def validate(self) -> None:
        """Raise InvalidInputError if the message is malformed"""

    @abstractmethod
    def to_proto(self):
        ...

    @classmethod
    @abstractmethod
    def from_proto(cls, proto) -> "ModuleMsg":
        ...

    def to_any(self) -> Any:
        self.validate()
        return Any(type_url=self.type_url, value=self.to_proto().SerializeToString())

    @classmethod
    def from_any(cls, value: Any) -> "ModuleMsg":
        return cls.from_proto(unpack_any(value, cls.proto_cls))

    def to_tx(self) -> UnsignedTx:
        """A fresh unsigned transaction carrying only this message"""
        return UnsignedTx().add_msg(self.to_any())
