"""Bank module messages"""

from dataclasses import dataclass, field
from typing import List

from cosmpy.protos.cosmos.bank.v1beta1 import bank_pb2
from cosmpy.protos.cosmos.bank.v1beta1 import tx_pb2 as bank_tx_pb2

from ..address import validate_address
from ..errors import InvalidInputError
from ..types import Coin, coins_from_proto, coins_to_proto, sum_by_denom
from .base import ModuleMsg


@dataclass
class MsgSend(ModuleMsg):
    """Send coins from one account to another"""

    proto_cls = bank_tx_pb2.MsgSend

    from_address: str
    to_address: str
    amount: List[Coin] = field(default_factory=list)

    def validate(self) -> None:
        validate_address(self.from_address)
        validate_address(self.to_address)
        if not self.amount:
            raise InvalidInputError("send amount must not be empty")

    def to_proto(self) -> bank_tx_pb2.MsgSend:
        return bank_tx_pb2.MsgSend(
            from_address=self.from_address,
            to_address=self.to_address,
            amount=coins_to_proto(self.amount),
        )

    @classmethod
    def from_proto(cls, proto: bank_tx_pb2.MsgSend) -> "MsgSend":
        return cls(
            from_address=proto.from_address,
            to_address=proto.to_address,
            amount=coins_from_proto(proto.amount),
        )


@dataclass
class Input:
    address: str
    coins: List[Coin]

    def to_proto(self) -> bank_pb2.Input:
        return bank_pb2.Input(address=self.address, coins=coins_to_proto(self.coins))


@dataclass
class Output:
    address: str
    coins: List[Coin]

    def to_proto(self) -> bank_pb2.Output:
        return bank_pb2.Output(address=self.address, coins=coins_to_proto(self.coins))


@dataclass
class MsgMultiSend(ModuleMsg):
    """
    Send coins from one or more inputs to many outputs in one message

    Per denomination, the input total must equal the output total.
    """

    proto_cls = bank_tx_pb2.MsgMultiSend

    inputs: List[Input] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)

    def validate(self) -> None:
        if not self.inputs:
            raise InvalidInputError("multi-send has no inputs")
        if not self.outputs:
            raise InvalidInputError("multi-send has no outputs")
        for io in list(self.inputs) + list(self.outputs):
            validate_address(io.address)
            if not io.coins:
                raise InvalidInputError(f"multi-send entry for {io.address} has no coins")

        totals_in = sum_by_denom([c for i in self.inputs for c in i.coins])
        totals_out = sum_by_denom([c for o in self.outputs for c in o.coins])
        if totals_in != totals_out:
            raise InvalidInputError(
                f"multi-send inputs {totals_in} do not match outputs {totals_out}"
            )

    def to_proto(self) -> bank_tx_pb2.MsgMultiSend:
        return bank_tx_pb2.MsgMultiSend(
            inputs=[i.to_proto() for i in self.inputs],
            outputs=[o.to_proto() for o in self.outputs],
        )

    @classmethod
    def from_proto(cls, proto: bank_tx_pb2.MsgMultiSend) -> "MsgMultiSend":
        return cls(
            inputs=[Input(i.address, coins_from_proto(i.coins)) for i in proto.inputs],
            outputs=[Output(o.address, coins_from_proto(o.coins)) for o in proto.outputs],
        )
