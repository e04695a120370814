"""Fee grant module messages"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cosmpy.protos.cosmos.feegrant.v1beta1 import feegrant_pb2
from cosmpy.protos.cosmos.feegrant.v1beta1 import tx_pb2 as feegrant_tx_pb2
from google.protobuf.any_pb2 import Any

from ..address import validate_address
from ..errors import InvalidInputError
from ..types import Coin, coins_from_proto, coins_to_proto
from .base import (
    ModuleMsg,
    any_from_message,
    datetime_to_timestamp,
    timestamp_to_datetime,
    to_any,
    unpack_any,
)


@dataclass
class BasicAllowance:
    """
    Fee allowance with an optional total spend limit and expiry

    An empty ``spend_limit`` means the grantee may spend without limit.
    """

    spend_limit: List[Coin] = field(default_factory=list)
    expiration: Optional[datetime] = None

    def to_proto(self) -> feegrant_pb2.BasicAllowance:
        proto = feegrant_pb2.BasicAllowance(spend_limit=coins_to_proto(self.spend_limit))
        if self.expiration is not None:
            proto.expiration.CopyFrom(datetime_to_timestamp(self.expiration))
        return proto

    def to_any(self) -> Any:
        return any_from_message(self.to_proto())

    @staticmethod
    def from_any(value: Any) -> "BasicAllowance":
        proto = unpack_any(value, feegrant_pb2.BasicAllowance)
        expiration = None
        if proto.HasField("expiration"):
            expiration = timestamp_to_datetime(proto.expiration)
        return BasicAllowance(coins_from_proto(proto.spend_limit), expiration)


@dataclass
class MsgGrantAllowance(ModuleMsg):
    """Let ``grantee`` pay transaction fees from ``granter``'s account"""

    proto_cls = feegrant_tx_pb2.MsgGrantAllowance

    granter: str
    grantee: str
    allowance: Any

    def __post_init__(self):
        self.allowance = to_any(self.allowance)

    def validate(self) -> None:
        validate_address(self.granter)
        validate_address(self.grantee)
        if self.granter == self.grantee:
            raise InvalidInputError("cannot grant a fee allowance to self")

    def to_proto(self) -> feegrant_tx_pb2.MsgGrantAllowance:
        return feegrant_tx_pb2.MsgGrantAllowance(
            granter=self.granter, grantee=self.grantee, allowance=self.allowance
        )

    @classmethod
    def from_proto(cls, proto: feegrant_tx_pb2.MsgGrantAllowance) -> "MsgGrantAllowance":
        return cls(granter=proto.granter, grantee=proto.grantee, allowance=proto.allowance)


@dataclass
class MsgRevokeAllowance(ModuleMsg):
    proto_cls = feegrant_tx_pb2.MsgRevokeAllowance

    granter: str
    grantee: str

    def validate(self) -> None:
        validate_address(self.granter)
        validate_address(self.grantee)

    def to_proto(self) -> feegrant_tx_pb2.MsgRevokeAllowance:
        return feegrant_tx_pb2.MsgRevokeAllowance(granter=self.granter, grantee=self.grantee)

    @classmethod
    def from_proto(cls, proto: feegrant_tx_pb2.MsgRevokeAllowance) -> "MsgRevokeAllowance":
        return cls(granter=proto.granter, grantee=proto.grantee)
