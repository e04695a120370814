"""Transaction building and signing"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from cosmpy.protos.cosmos.tx.signing.v1beta1 import signing_pb2
from cosmpy.protos.cosmos.tx.v1beta1 import tx_pb2
from google.protobuf.any_pb2 import Any
from google.protobuf.message import DecodeError as ProtoDecodeError

from .address import validate_address
from .errors import DecodeError, InvalidInputError, SigningFailedError
from .keys import PublicKey, SignerContext
from .types import Coin

log = logging.getLogger(__name__)


def _as_any(value) -> Any:
    if isinstance(value, Any):
        return value
    if hasattr(value, "to_any"):
        return value.to_any()
    raise InvalidInputError(f"cannot add {type(value).__name__} to a transaction")


class UnsignedTx:
    """
    Accumulates messages and body metadata for a pending transaction

    Messages keep the order they were added in; that is the order they
    execute on-chain.

    Example:
        >>> tx = UnsignedTx().add_msg(msg).with_memo("payroll").with_timeout_height(1200)
    """

    def __init__(self):
        self.messages: List[Any] = []
        self.memo = ""
        self.timeout_height = 0
        self.extension_options: List[Any] = []
        self.non_critical_extension_options: List[Any] = []

    def __len__(self) -> int:
        return len(self.messages)

    def add_msg(self, msg) -> "UnsignedTx":
        """Add one message (an Any or a ModuleMsg)"""
        self.messages.append(_as_any(msg))
        return self

    def add_msgs(self, msgs: Iterable) -> "UnsignedTx":
        """Add several messages, in order"""
        for msg in msgs:
            self.add_msg(msg)
        return self

    def with_memo(self, memo: str) -> "UnsignedTx":
        """Set transaction memo"""
        if not isinstance(memo, str):
            raise InvalidInputError("memo must be a string")
        self.memo = memo
        return self

    def with_timeout_height(self, height: int) -> "UnsignedTx":
        """Set the block height after which the tx is no longer valid (0 = none)"""
        if isinstance(height, bool) or not isinstance(height, int) or height < 0:
            raise InvalidInputError(f"timeout height must be a non-negative integer, got {height!r}")
        self.timeout_height = height
        return self

    def add_extension_option(self, option) -> "UnsignedTx":
        self.extension_options.append(_as_any(option))
        return self

    def add_non_critical_extension_option(self, option) -> "UnsignedTx":
        self.non_critical_extension_options.append(_as_any(option))
        return self

    def body(self) -> tx_pb2.TxBody:
        return tx_pb2.TxBody(
            messages=self.messages,
            memo=self.memo,
            timeout_height=self.timeout_height,
            extension_options=self.extension_options,
            non_critical_extension_options=self.non_critical_extension_options,
        )

    def body_bytes(self) -> bytes:
        return self.body().SerializeToString()


@dataclass
class FeeInfo:
    """Fee, gas limit and optional fee payer / granter for a transaction"""

    fee: Optional[Coin]
    gas_limit: int
    payer: Optional[str] = None
    granter: Optional[str] = None

    def validate(self) -> None:
        if isinstance(self.gas_limit, bool) or not isinstance(self.gas_limit, int):
            raise InvalidInputError("gas limit must be an integer")
        if self.gas_limit <= 0 or self.gas_limit >= 2**64:
            raise InvalidInputError(f"gas limit {self.gas_limit} out of range")
        if self.payer:
            validate_address(self.payer)
        if self.granter:
            validate_address(self.granter)

    def to_proto(self) -> tx_pb2.Fee:
        self.validate()
        # zero-amount coins are invalid in a fee; an empty list means no fee
        amount = [self.fee.to_proto()] if self.fee is not None and self.fee.amount > 0 else []
        return tx_pb2.Fee(
            amount=amount,
            gas_limit=self.gas_limit,
            payer=self.payer or "",
            granter=self.granter or "",
        )


@dataclass
class SignedTx:
    """The raw bytes of a signed transaction"""

    body_bytes: bytes
    auth_info_bytes: bytes
    signatures: List[bytes] = field(default_factory=list)

    def to_proto(self) -> tx_pb2.TxRaw:
        return tx_pb2.TxRaw(
            body_bytes=self.body_bytes,
            auth_info_bytes=self.auth_info_bytes,
            signatures=self.signatures,
        )

    def to_bytes(self) -> bytes:
        return self.to_proto().SerializeToString()

    @property
    def hash(self) -> str:
        """Upper-case hex SHA-256 of the raw bytes, as the chain reports it"""
        return hashlib.sha256(self.to_bytes()).hexdigest().upper()

    @staticmethod
    def from_bytes(raw: bytes) -> "SignedTx":
        proto = tx_pb2.TxRaw()
        try:
            proto.ParseFromString(raw)
        except ProtoDecodeError as e:
            raise DecodeError(f"malformed TxRaw: {e}") from e
        return SignedTx(
            body_bytes=proto.body_bytes,
            auth_info_bytes=proto.auth_info_bytes,
            signatures=list(proto.signatures),
        )

    def body(self) -> tx_pb2.TxBody:
        body = tx_pb2.TxBody()
        body.ParseFromString(self.body_bytes)
        return body

    def auth_info(self) -> tx_pb2.AuthInfo:
        auth_info = tx_pb2.AuthInfo()
        auth_info.ParseFromString(self.auth_info_bytes)
        return auth_info


def build_auth_info(public_key: PublicKey, sequence: int, fee: FeeInfo) -> tx_pb2.AuthInfo:
    """Single direct-mode signer plus the fee"""
    signer_info = tx_pb2.SignerInfo(
        public_key=public_key.to_any(),
        mode_info=tx_pb2.ModeInfo(
            single=tx_pb2.ModeInfo.Single(mode=signing_pb2.SIGN_MODE_DIRECT)
        ),
        sequence=sequence,
    )
    return tx_pb2.AuthInfo(signer_infos=[signer_info], fee=fee.to_proto())


def sign_doc_bytes(
    body_bytes: bytes, auth_info_bytes: bytes, chain_id: str, account_number: int
) -> bytes:
    """Canonical SignDoc bytes, the exact payload that gets signed"""
    return tx_pb2.SignDoc(
        body_bytes=body_bytes,
        auth_info_bytes=auth_info_bytes,
        chain_id=chain_id,
        account_number=account_number,
    ).SerializeToString()


def sign_tx(unsigned: UnsignedTx, context: SignerContext, fee: FeeInfo, chain_id: str) -> SignedTx:
    """
    Sign an unsigned transaction in SIGN_MODE_DIRECT

    Args:
        unsigned: Transaction body accumulator
        context: Signer with its account number and sequence
        fee: Fee settings
        chain_id: Chain ID the signature is bound to

    Returns:
        SignedTx ready to broadcast
    """
    if not chain_id:
        raise InvalidInputError("chain id must not be empty")
    if not unsigned.messages:
        raise InvalidInputError("transaction has no messages")
    for name in ("account_number", "sequence"):
        value = getattr(context, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidInputError(f"{name} must be a non-negative integer, got {value!r}")

    body_bytes = unsigned.body_bytes()
    auth_info_bytes = build_auth_info(context.public_key, context.sequence, fee).SerializeToString()
    sign_bytes = sign_doc_bytes(body_bytes, auth_info_bytes, chain_id, context.account_number)

    try:
        signature = context.signer.sign(sign_bytes)
    except Exception as e:
        raise SigningFailedError(f"chain {chain_id}: {e}") from e
    if not signature:
        raise SigningFailedError(f"chain {chain_id}: signer returned an empty signature")

    signed = SignedTx(body_bytes=body_bytes, auth_info_bytes=auth_info_bytes, signatures=[signature])
    log.debug(
        "signed tx %s on %s (account %d, sequence %d, %d msgs)",
        signed.hash,
        chain_id,
        context.account_number,
        context.sequence,
        len(unsigned),
    )
    return signed


def verify_signed_tx(
    signed: SignedTx, public_key: PublicKey, chain_id: str, account_number: int
) -> bool:
    """Check the first signature of ``signed`` against ``public_key``"""
    if not signed.signatures:
        return False
    message = sign_doc_bytes(signed.body_bytes, signed.auth_info_bytes, chain_id, account_number)
    return public_key.verify(message, signed.signatures[0])
