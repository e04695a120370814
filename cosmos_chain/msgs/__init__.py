"""Cosmos module messages"""

from .authz import (
    GENERIC_AUTHORIZATION_TYPE_URL,
    SEND_AUTHORIZATION_TYPE_URL,
    GenericAuthorization,
    MsgExec,
    MsgGrant,
    MsgRevoke,
    SendAuthorization,
)
from .bank import Input, MsgMultiSend, MsgSend, Output
from .base import ModuleMsg, any_from_message, to_any, type_url_of, unpack_any
from .distribution import (
    MsgFundCommunityPool,
    MsgSetWithdrawAddress,
    MsgWithdrawDelegatorReward,
    MsgWithdrawValidatorCommission,
)
from .feegrant import BasicAllowance, MsgGrantAllowance, MsgRevokeAllowance
from .gov import MsgDeposit, MsgSubmitProposal, MsgVote, TextProposal, VoteOption
from .slashing import MsgUnjail
from .staking import MsgBeginRedelegate, MsgDelegate, MsgUndelegate

__all__ = [
    "ModuleMsg",
    "any_from_message",
    "to_any",
    "type_url_of",
    "unpack_any",
    "MsgSend",
    "MsgMultiSend",
    "Input",
    "Output",
    "MsgGrant",
    "MsgRevoke",
    "MsgExec",
    "GenericAuthorization",
    "SendAuthorization",
    "GENERIC_AUTHORIZATION_TYPE_URL",
    "SEND_AUTHORIZATION_TYPE_URL",
    "MsgDelegate",
    "MsgUndelegate",
    "MsgBeginRedelegate",
    "MsgWithdrawDelegatorReward",
    "MsgSetWithdrawAddress",
    "MsgWithdrawValidatorCommission",
    "MsgFundCommunityPool",
    "MsgSubmitProposal",
    "MsgVote",
    "MsgDeposit",
    "TextProposal",
    "VoteOption",
    "MsgGrantAllowance",
    "MsgRevokeAllowance",
    "BasicAllowance",
    "MsgUnjail",
]
