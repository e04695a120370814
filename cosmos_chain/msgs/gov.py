"""Governance module messages"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from cosmpy.protos.cosmos.gov.v1beta1 import gov_pb2
from cosmpy.protos.cosmos.gov.v1beta1 import tx_pb2 as gov_tx_pb2
from google.protobuf.any_pb2 import Any

from ..address import validate_address
from ..errors import InvalidInputError
from ..types import Coin, coins_from_proto, coins_to_proto
from .base import ModuleMsg, any_from_message, to_any, unpack_any


class VoteOption(IntEnum):
    UNSPECIFIED = gov_pb2.VOTE_OPTION_UNSPECIFIED
    YES = gov_pb2.VOTE_OPTION_YES
    ABSTAIN = gov_pb2.VOTE_OPTION_ABSTAIN
    NO = gov_pb2.VOTE_OPTION_NO
    NO_WITH_VETO = gov_pb2.VOTE_OPTION_NO_WITH_VETO


@dataclass
class TextProposal:
    """Signalling proposal with no on-chain effect"""

    title: str
    description: str

    def to_any(self) -> Any:
        if not self.title.strip():
            raise InvalidInputError("proposal title must not be blank")
        if not self.description.strip():
            raise InvalidInputError("proposal description must not be blank")
        return any_from_message(
            gov_pb2.TextProposal(title=self.title, description=self.description)
        )

    @staticmethod
    def from_any(value: Any) -> "TextProposal":
        proto = unpack_any(value, gov_pb2.TextProposal)
        return TextProposal(title=proto.title, description=proto.description)


def _proposal_id(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError(f"proposal id must be a positive integer, got {value!r}")


@dataclass
class MsgSubmitProposal(ModuleMsg):
    proto_cls = gov_tx_pb2.MsgSubmitProposal

    content: Any
    proposer: str
    initial_deposit: List[Coin] = field(default_factory=list)

    def __post_init__(self):
        self.content = to_any(self.content)

    def validate(self) -> None:
        validate_address(self.proposer)
        if not self.content.type_url:
            raise InvalidInputError("proposal content type URL must not be empty")

    def to_proto(self) -> gov_tx_pb2.MsgSubmitProposal:
        return gov_tx_pb2.MsgSubmitProposal(
            content=self.content,
            initial_deposit=coins_to_proto(self.initial_deposit),
            proposer=self.proposer,
        )

    @classmethod
    def from_proto(cls, proto: gov_tx_pb2.MsgSubmitProposal) -> "MsgSubmitProposal":
        return cls(
            content=proto.content,
            proposer=proto.proposer,
            initial_deposit=coins_from_proto(proto.initial_deposit),
        )


@dataclass
class MsgVote(ModuleMsg):
    proto_cls = gov_tx_pb2.MsgVote

    proposal_id: int
    voter: str
    option: VoteOption

    def validate(self) -> None:
        _proposal_id(self.proposal_id)
        validate_address(self.voter)
        if VoteOption(self.option) == VoteOption.UNSPECIFIED:
            raise InvalidInputError("vote option must be specified")

    def to_proto(self) -> gov_tx_pb2.MsgVote:
        return gov_tx_pb2.MsgVote(
            proposal_id=self.proposal_id, voter=self.voter, option=int(self.option)
        )

    @classmethod
    def from_proto(cls, proto: gov_tx_pb2.MsgVote) -> "MsgVote":
        return cls(proposal_id=proto.proposal_id, voter=proto.voter, option=VoteOption(proto.option))


@dataclass
class MsgDeposit(ModuleMsg):
    proto_cls = gov_tx_pb2.MsgDeposit

    proposal_id: int
    depositor: str
    amount: List[Coin] = field(default_factory=list)

    def validate(self) -> None:
        _proposal_id(self.proposal_id)
        validate_address(self.depositor)
        if not self.amount:
            raise InvalidInputError("deposit amount must not be empty")

    def to_proto(self) -> gov_tx_pb2.MsgDeposit:
        return gov_tx_pb2.MsgDeposit(
            proposal_id=self.proposal_id,
            depositor=self.depositor,
            amount=coins_to_proto(self.amount),
        )

    @classmethod
    def from_proto(cls, proto: gov_tx_pb2.MsgDeposit) -> "MsgDeposit":
        return cls(
            proposal_id=proto.proposal_id,
            depositor=proto.depositor,
            amount=coins_from_proto(proto.amount),
        )
