"""Type definitions for the Cosmos chain SDK"""

import base64
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from cosmpy.protos.cosmos.base.query.v1beta1 import pagination_pb2
from cosmpy.protos.cosmos.base.v1beta1 import coin_pb2
from cosmpy.protos.cosmos.tx.v1beta1 import service_pb2

from .errors import DecodeError, DeliverTxRejectedError, InvalidInputError

MAX_COIN_AMOUNT = 2**128 - 1

DENOM_REGEX = re.compile(r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$")
_AMOUNT_REGEX = re.compile(r"^(0|[1-9][0-9]*)$")
_COIN_STRING_REGEX = re.compile(r"^([0-9]+)\s*([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


def validate_denom(denom: str) -> str:
    """Check a denomination against the Cosmos SDK denom rules"""
    if not isinstance(denom, str) or not DENOM_REGEX.match(denom):
        raise InvalidInputError(f"invalid denom {denom!r}")
    return denom


def parse_amount(amount: str) -> int:
    """Parse an on-wire decimal amount into an unsigned 128-bit integer"""
    if not isinstance(amount, str) or not _AMOUNT_REGEX.match(amount):
        raise DecodeError(f"amount {amount!r} is not a decimal integer")
    value = int(amount)
    if value > MAX_COIN_AMOUNT:
        raise DecodeError(f"amount {amount} does not fit in 128 bits")
    return value


@dataclass(frozen=True)
class Coin:
    """Amount and denomination"""

    amount: int
    denom: str

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidInputError(f"coin amount must be an integer, got {self.amount!r}")
        if self.amount < 0 or self.amount > MAX_COIN_AMOUNT:
            raise InvalidInputError(f"coin amount {self.amount} out of range")
        validate_denom(self.denom)

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    @staticmethod
    def from_string(value: str) -> "Coin":
        """Parse the canonical string form, e.g. ``100samoleans``"""
        match = _COIN_STRING_REGEX.match(value.strip())
        if not match:
            raise InvalidInputError(f"cannot parse coin {value!r}")
        return Coin(amount=int(match.group(1)), denom=match.group(2))

    @staticmethod
    def from_proto(proto: coin_pb2.Coin) -> "Coin":
        """Decode a wire coin; malformed amounts raise DecodeError"""
        amount = parse_amount(proto.amount)
        try:
            return Coin(amount=amount, denom=proto.denom)
        except InvalidInputError as e:
            raise DecodeError(str(e)) from e

    def to_proto(self) -> coin_pb2.Coin:
        return coin_pb2.Coin(denom=self.denom, amount=str(self.amount))


def coins_from_proto(protos) -> List[Coin]:
    return [Coin.from_proto(c) for c in protos]


def coins_to_proto(coins: List[Coin]) -> List[coin_pb2.Coin]:
    return [c.to_proto() for c in coins]


def sum_by_denom(coins: List[Coin]) -> Dict[str, int]:
    """Total amount per denomination"""
    totals: Dict[str, int] = {}
    for coin in coins:
        totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
    return totals


@dataclass
class PageRequest:
    """Paging configuration for queries with potentially large result sets"""

    key: bytes = b""
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False

    def to_proto(self) -> pagination_pb2.PageRequest:
        return pagination_pb2.PageRequest(
            key=self.key,
            offset=self.offset,
            limit=self.limit,
            count_total=self.count_total,
            reverse=self.reverse,
        )


def page_request_proto(pagination: Optional[PageRequest]) -> Optional[pagination_pb2.PageRequest]:
    return pagination.to_proto() if pagination is not None else None


class BroadcastMode(str, Enum):
    """How a signed transaction is submitted"""

    ASYNC = "async"
    SYNC = "sync"
    COMMIT = "commit"

    def to_proto(self) -> int:
        return {
            BroadcastMode.ASYNC: service_pb2.BROADCAST_MODE_ASYNC,
            BroadcastMode.SYNC: service_pb2.BROADCAST_MODE_SYNC,
            BroadcastMode.COMMIT: service_pb2.BROADCAST_MODE_BLOCK,
        }[self]


@dataclass
class BaseAccount:
    """Decoded on-chain account"""

    address: str
    pub_key: Optional[Any]
    account_number: int
    sequence: int


@dataclass
class AccountsPage:
    accounts: List[BaseAccount]
    pagination: Optional[pagination_pb2.PageResponse] = None


@dataclass
class CoinsPage:
    """Coin balances or supplies with paging info"""

    coins: List[Coin]
    pagination: Optional[pagination_pb2.PageResponse] = None

    def amount_of(self, denom: str) -> int:
        return sum(c.amount for c in self.coins if c.denom == denom)


@dataclass
class BroadcastResult:
    """Outcome of a broadcast"""

    tx_hash: str
    mode: BroadcastMode
    height: int = 0
    code: int = 0
    codespace: str = ""
    raw_log: str = ""
    gas_wanted: int = 0
    gas_used: int = 0

    @property
    def is_success(self) -> bool:
        return self.code == 0

    @property
    def is_committed(self) -> bool:
        return self.height > 0

    @staticmethod
    def from_tx_response(response, mode: BroadcastMode, tx_hash: str) -> "BroadcastResult":
        """Create from a cosmos.base.abci TxResponse"""
        return BroadcastResult(
            tx_hash=(response.txhash or tx_hash).upper(),
            mode=mode,
            height=response.height,
            code=response.code,
            codespace=response.codespace,
            raw_log=response.raw_log,
            gas_wanted=response.gas_wanted,
            gas_used=response.gas_used,
        )


@dataclass
class TxInfo:
    """A transaction found by hash on the consensus RPC"""

    hash: str
    height: int
    code: int
    log: str = ""
    codespace: str = ""
    gas_wanted: int = 0
    gas_used: int = 0
    tx: bytes = b""
    events: List[Dict[str, Any]] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TxInfo":
        """Create from the ``result`` object of an RPC ``tx`` call"""
        try:
            tx_result = data.get("tx_result") or {}
            return TxInfo(
                hash=str(data["hash"]).upper(),
                height=int(data["height"]),
                code=int(tx_result.get("code", 0)),
                log=tx_result.get("log", ""),
                codespace=tx_result.get("codespace", ""),
                gas_wanted=int(tx_result.get("gas_wanted") or 0),
                gas_used=int(tx_result.get("gas_used") or 0),
                tx=base64.b64decode(data.get("tx") or ""),
                events=tx_result.get("events") or [],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"malformed tx result: {e}") from e

    def ensure_successful(self) -> "TxInfo":
        if self.code != 0:
            raise DeliverTxRejectedError(self.code, self.log, self.hash, self)
        return self
