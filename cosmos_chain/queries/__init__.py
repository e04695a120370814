"""Per-module query mixins for ChainClient"""

from .auth import AuthQueries, decode_account
from .authz import AuthzQueries
from .bank import BankQueries
from .base import QueryMixin, paged
from .distribution import DistributionQueries
from .evidence import EvidenceQueries
from .feegrant import FeegrantQueries
from .gov import GovQueries
from .mint import MintQueries
from .params import ParamsQueries
from .slashing import SlashingQueries
from .staking import StakingQueries
from .tendermint import TendermintQueries
from .tx import TxQueries

__all__ = [
    "QueryMixin",
    "paged",
    "decode_account",
    "AuthQueries",
    "AuthzQueries",
    "BankQueries",
    "DistributionQueries",
    "EvidenceQueries",
    "FeegrantQueries",
    "GovQueries",
    "MintQueries",
    "ParamsQueries",
    "SlashingQueries",
    "StakingQueries",
    "TendermintQueries",
    "TxQueries",
]
