"""Authz module messages"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cosmpy.protos.cosmos.authz.v1beta1 import authz_pb2
from cosmpy.protos.cosmos.authz.v1beta1 import tx_pb2 as authz_tx_pb2
from cosmpy.protos.cosmos.bank.v1beta1 import authz_pb2 as bank_authz_pb2
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
    type_url_of,
    unpack_any,
)

GENERIC_AUTHORIZATION_TYPE_URL = type_url_of(authz_pb2.GenericAuthorization)
SEND_AUTHORIZATION_TYPE_URL = type_url_of(bank_authz_pb2.SendAuthorization)


@dataclass
class GenericAuthorization:
    """Unrestricted permission to execute one message type"""

    msg_type_url: str

    def to_any(self) -> Any:
        if not self.msg_type_url:
            raise InvalidInputError("generic authorization needs a message type URL")
        return any_from_message(authz_pb2.GenericAuthorization(msg=self.msg_type_url))

    @staticmethod
    def from_any(value: Any) -> "GenericAuthorization":
        return GenericAuthorization(unpack_any(value, authz_pb2.GenericAuthorization).msg)


@dataclass
class SendAuthorization:
    """Permission to send up to ``spend_limit`` on the granter's behalf"""

    spend_limit: List[Coin]

    def to_any(self) -> Any:
        if not self.spend_limit:
            raise InvalidInputError("send authorization needs a spend limit")
        return any_from_message(
            bank_authz_pb2.SendAuthorization(spend_limit=coins_to_proto(self.spend_limit))
        )

    @staticmethod
    def from_any(value: Any) -> "SendAuthorization":
        proto = unpack_any(value, bank_authz_pb2.SendAuthorization)
        return SendAuthorization(coins_from_proto(proto.spend_limit))


@dataclass
class MsgGrant(ModuleMsg):
    """Grant ``grantee`` an authorization to act for ``granter``"""

    proto_cls = authz_tx_pb2.MsgGrant

    granter: str
    grantee: str
    authorization: Any
    expiration: Optional[datetime] = None

    def __post_init__(self):
        self.authorization = to_any(self.authorization)

    def validate(self) -> None:
        validate_address(self.granter)
        validate_address(self.grantee)
        if self.granter == self.grantee:
            raise InvalidInputError("granter and grantee must differ")
        if not self.authorization.type_url:
            raise InvalidInputError("authorization type URL must not be empty")

    def to_proto(self) -> authz_tx_pb2.MsgGrant:
        grant = authz_pb2.Grant(authorization=self.authorization)
        if self.expiration is not None:
            grant.expiration.CopyFrom(datetime_to_timestamp(self.expiration))
        return authz_tx_pb2.MsgGrant(granter=self.granter, grantee=self.grantee, grant=grant)

    @classmethod
    def from_proto(cls, proto: authz_tx_pb2.MsgGrant) -> "MsgGrant":
        expiration = None
        if proto.grant.HasField("expiration"):
            expiration = timestamp_to_datetime(proto.grant.expiration)
        return cls(
            granter=proto.granter,
            grantee=proto.grantee,
            authorization=proto.grant.authorization,
            expiration=expiration,
        )


@dataclass
class MsgRevoke(ModuleMsg):
    """Revoke a grant for one message type"""

    proto_cls = authz_tx_pb2.MsgRevoke

    granter: str
    grantee: str
    msg_type_url: str

    def validate(self) -> None:
        validate_address(self.granter)
        validate_address(self.grantee)
        if not self.msg_type_url:
            raise InvalidInputError("revoke needs a message type URL")

    def to_proto(self) -> authz_tx_pb2.MsgRevoke:
        return authz_tx_pb2.MsgRevoke(
            granter=self.granter, grantee=self.grantee, msg_type_url=self.msg_type_url
        )

    @classmethod
    def from_proto(cls, proto: authz_tx_pb2.MsgRevoke) -> "MsgRevoke":
        return cls(granter=proto.granter, grantee=proto.grantee, msg_type_url=proto.msg_type_url)


@dataclass
class MsgExec(ModuleMsg):
    """Execute messages as grantee under existing grants"""

    proto_cls = authz_tx_pb2.MsgExec

    grantee: str
    msgs: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.msgs = [to_any(m) for m in self.msgs]

    def validate(self) -> None:
        validate_address(self.grantee)
        if not self.msgs:
            raise InvalidInputError("exec needs at least one message")

    def to_proto(self) -> authz_tx_pb2.MsgExec:
        return authz_tx_pb2.MsgExec(grantee=self.grantee, msgs=self.msgs)

    @classmethod
    def from_proto(cls, proto: authz_tx_pb2.MsgExec) -> "MsgExec":
        return cls(grantee=proto.grantee, msgs=list(proto.msgs))
