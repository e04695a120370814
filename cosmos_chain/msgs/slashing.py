"""Slashing module messages"""

from dataclasses import dataclass

from cosmpy.protos.cosmos.slashing.v1beta1 import tx_pb2 as slashing_tx_pb2

from ..address import validate_address
from .base import ModuleMsg


@dataclass
class MsgUnjail(ModuleMsg):
    """Bring a jailed validator back into the active set"""

    proto_cls = slashing_tx_pb2.MsgUnjail

    validator_addr: str

    def validate(self) -> None:
        validate_address(self.validator_addr)

    def to_proto(self) -> slashing_tx_pb2.MsgUnjail:
        return slashing_tx_pb2.MsgUnjail(validator_addr=self.validator_addr)

    @classmethod
    def from_proto(cls, proto: slashing_tx_pb2.MsgUnjail) -> "MsgUnjail":
        return cls(validator_addr=proto.validator_addr)
