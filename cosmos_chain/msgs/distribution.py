"""Distribution module messages"""

from dataclasses import dataclass, field
from typing import List

from cosmpy.protos.cosmos.distribution.v1beta1 import tx_pb2 as distribution_tx_pb2

from ..address import validate_address
from ..errors import InvalidInputError
from ..types import Coin, coins_from_proto, coins_to_proto
from .base import ModuleMsg


@dataclass
class MsgWithdrawDelegatorReward(ModuleMsg):
    proto_cls = distribution_tx_pb2.MsgWithdrawDelegatorReward

    delegator_address: str
    validator_address: str

    def validate(self) -> None:
        validate_address(self.delegator_address)
        validate_address(self.validator_address)

    def to_proto(self) -> distribution_tx_pb2.MsgWithdrawDelegatorReward:
        return distribution_tx_pb2.MsgWithdrawDelegatorReward(
            delegator_address=self.delegator_address,
            validator_address=self.validator_address,
        )

    @classmethod
    def from_proto(cls, proto) -> "MsgWithdrawDelegatorReward":
        return cls(
            delegator_address=proto.delegator_address,
            validator_address=proto.validator_address,
        )


@dataclass
class MsgSetWithdrawAddress(ModuleMsg):
    """Redirect future staking rewards to another address"""

    proto_cls = distribution_tx_pb2.MsgSetWithdrawAddress

    delegator_address: str
    withdraw_address: str

    def validate(self) -> None:
        validate_address(self.delegator_address)
        validate_address(self.withdraw_address)

    def to_proto(self) -> distribution_tx_pb2.MsgSetWithdrawAddress:
        return distribution_tx_pb2.MsgSetWithdrawAddress(
            delegator_address=self.delegator_address,
            withdraw_address=self.withdraw_address,
        )

    @classmethod
    def from_proto(cls, proto) -> "MsgSetWithdrawAddress":
        return cls(
            delegator_address=proto.delegator_address,
            withdraw_address=proto.withdraw_address,
        )


@dataclass
class MsgWithdrawValidatorCommission(ModuleMsg):
    proto_cls = distribution_tx_pb2.MsgWithdrawValidatorCommission

    validator_address: str

    def validate(self) -> None:
        validate_address(self.validator_address)

    def to_proto(self) -> distribution_tx_pb2.MsgWithdrawValidatorCommission:
        return distribution_tx_pb2.MsgWithdrawValidatorCommission(
            validator_address=self.validator_address
        )

    @classmethod
    def from_proto(cls, proto) -> "MsgWithdrawValidatorCommission":
        return cls(validator_address=proto.validator_address)


@dataclass
class MsgFundCommunityPool(ModuleMsg):
    """Donate coins to the community pool"""

    proto_cls = distribution_tx_pb2.MsgFundCommunityPool

    depositor: str
    amount: List[Coin] = field(default_factory=list)

    def validate(self) -> None:
        validate_address(self.depositor)
        if not self.amount:
            raise InvalidInputError("community pool funding needs an amount")

    def to_proto(self) -> distribution_tx_pb2.MsgFundCommunityPool:
        return distribution_tx_pb2.MsgFundCommunityPool(
            depositor=self.depositor, amount=coins_to_proto(self.amount)
        )

    @classmethod
    def from_proto(cls, proto) -> "MsgFundCommunityPool":
        return cls(depositor=proto.depositor, amount=coins_from_proto(proto.amount))
