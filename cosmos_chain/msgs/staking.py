"""Staking module messages"""

from dataclasses import dataclass

from cosmpy.protos.cosmos.staking.v1beta1 import tx_pb2 as staking_tx_pb2

from ..address import validate_address
from ..errors import InvalidInputError
from ..types import Coin
from .base import ModuleMsg


def _positive(amount: Coin, what: str) -> None:
    if amount.amount <= 0:
        raise InvalidInputError(f"{what} amount must be positive")


@dataclass
class MsgDelegate(ModuleMsg):
    """Bond tokens to a validator"""

    proto_cls = staking_tx_pb2.MsgDelegate

    delegator_address: str
    validator_address: str
    amount: Coin

    def validate(self) -> None:
        validate_address(self.delegator_address)
        validate_address(self.validator_address)
        _positive(self.amount, "delegation")

    def to_proto(self) -> staking_tx_pb2.MsgDelegate:
        return staking_tx_pb2.MsgDelegate(
            delegator_address=self.delegator_address,
            validator_address=self.validator_address,
            amount=self.amount.to_proto(),
        )

    @classmethod
    def from_proto(cls, proto: staking_tx_pb2.MsgDelegate) -> "MsgDelegate":
        return cls(
            delegator_address=proto.delegator_address,
            validator_address=proto.validator_address,
            amount=Coin.from_proto(proto.amount),
        )


@dataclass
class MsgUndelegate(ModuleMsg):
    """Start unbonding tokens from a validator"""

    proto_cls = staking_tx_pb2.MsgUndelegate

    delegator_address: str
    validator_address: str
    amount: Coin

    def validate(self) -> None:
        validate_address(self.delegator_address)
        validate_address(self.validator_address)
        _positive(self.amount, "undelegation")

    def to_proto(self) -> staking_tx_pb2.MsgUndelegate:
        return staking_tx_pb2.MsgUndelegate(
            delegator_address=self.delegator_address,
            validator_address=self.validator_address,
            amount=self.amount.to_proto(),
        )

    @classmethod
    def from_proto(cls, proto: staking_tx_pb2.MsgUndelegate) -> "MsgUndelegate":
        return cls(
            delegator_address=proto.delegator_address,
            validator_address=proto.validator_address,
            amount=Coin.from_proto(proto.amount),
        )


@dataclass
class MsgBeginRedelegate(ModuleMsg):
    """Move a delegation from one validator to another without unbonding"""

    proto_cls = staking_tx_pb2.MsgBeginRedelegate

    delegator_address: str
    validator_src_address: str
    validator_dst_address: str
    amount: Coin

    def validate(self) -> None:
        validate_address(self.delegator_address)
        validate_address(self.validator_src_address)
        validate_address(self.validator_dst_address)
        if self.validator_src_address == self.validator_dst_address:
            raise InvalidInputError("cannot redelegate to the same validator")
        _positive(self.amount, "redelegation")

    def to_proto(self) -> staking_tx_pb2.MsgBeginRedelegate:
        return staking_tx_pb2.MsgBeginRedelegate(
            delegator_address=self.delegator_address,
            validator_src_address=self.validator_src_address,
            validator_dst_address=self.validator_dst_address,
            amount=self.amount.to_proto(),
        )

    @classmethod
    def from_proto(cls, proto: staking_tx_pb2.MsgBeginRedelegate) -> "MsgBeginRedelegate":
        return cls(
            delegator_address=proto.delegator_address,
            validator_src_address=proto.validator_src_address,
            validator_dst_address=proto.validator_dst_address,
            amount=Coin.from_proto(proto.amount),
        )
