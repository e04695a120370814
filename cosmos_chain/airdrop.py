"""Token airdrops as a single multi-send, optionally executed through authz"""

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

import tomli
import tomli_w

from .errors import InvalidInputError, UnauthorizedError
from .keys import Signer
from .msgs.authz import GENERIC_AUTHORIZATION_TYPE_URL, MsgExec
from .msgs.bank import Input, MsgMultiSend, Output
from .tx import FeeInfo
from .types import BroadcastMode, BroadcastResult, Coin

log = logging.getLogger(__name__)

MULTI_SEND_BASE_GAS = 60000
GAS_PER_PAYMENT = 25000
# grants closer than this to expiring are treated as already expired
GRANT_EXPIRY_MARGIN = 60


@dataclass
class Payment:
    """One airdrop recipient"""

    recipient: str
    amount: int
    denom: str

    def to_coin(self) -> Coin:
        return Coin(amount=self.amount, denom=self.denom)


def airdrop_gas(payment_count: int) -> int:
    """Approximate gas for a multi-send paying ``payment_count`` recipients"""
    return MULTI_SEND_BASE_GAS + GAS_PER_PAYMENT * payment_count


def multi_send_from_payments(sender: str, payments: Sequence[Payment]) -> MsgMultiSend:
    """
    Build a multi-send with one input and one output per payment

    A single input keeps the message valid inside MsgExec, which allows only
    one signer.
    """
    if not payments:
        raise InvalidInputError("airdrop needs at least one payment")

    totals: Dict[str, int] = {}
    outputs: List[Output] = []
    for payment in payments:
        coin = payment.to_coin()
        if coin.amount == 0:
            raise InvalidInputError(f"payment to {payment.recipient} has a zero amount")
        totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        outputs.append(Output(address=payment.recipient, coins=[coin]))

    input_coins = [Coin(amount=totals[denom], denom=denom) for denom in sorted(totals)]
    return MsgMultiSend(inputs=[Input(address=sender, coins=input_coins)], outputs=outputs)


@dataclass
class PaymentsFile:
    """Contents of an airdrop payments TOML file"""

    sender_key_name: str
    payments: List[Payment] = field(default_factory=list)
    grantee_key_name: Optional[str] = None
    fee_granter: Optional[str] = None
    fee_payer: Optional[str] = None


def read_payments_toml(path: Union[str, os.PathLike]) -> PaymentsFile:
    """
    Load a payments file

    The file holds ``sender_key_name``, optional ``grantee_key_name``,
    ``fee_granter`` and ``fee_payer``, and one ``[[payments]]`` table per
    recipient with ``recipient``, ``amount`` and ``denom``.

    Raises:
        InvalidInputError: the file is missing, not TOML, or lacks a field
    """
    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except OSError as e:
        raise InvalidInputError(f"cannot read payments file {path}: {e}") from e
    except tomli.TOMLDecodeError as e:
        raise InvalidInputError(f"payments file {path} is not valid TOML: {e}") from e

    try:
        payments = [
            Payment(recipient=str(p["recipient"]), amount=int(p["amount"]), denom=str(p["denom"]))
            for p in data.get("payments", [])
        ]
        return PaymentsFile(
            sender_key_name=str(data["sender_key_name"]),
            payments=payments,
            grantee_key_name=data.get("grantee_key_name"),
            fee_granter=data.get("fee_granter"),
            fee_payer=data.get("fee_payer"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidInputError(f"payments file {path} is malformed: {e!r}") from e


def write_payments_toml(
    path: Union[str, os.PathLike],
    sender_key_name: str,
    payments: Sequence[Payment],
    grantee_key_name: Optional[str] = None,
) -> None:
    """Write ``payments`` in the format read_payments_toml expects"""
    data: Dict[str, object] = {"sender_key_name": sender_key_name}
    # TOML has no null; absent keys read back as None
    if grantee_key_name is not None:
        data["grantee_key_name"] = grantee_key_name
    data["payments"] = [
        {"recipient": p.recipient, "amount": p.amount, "denom": p.denom} for p in payments
    ]
    with open(path, "wb") as f:
        tomli_w.dump(data, f)
    log.debug("wrote %d payments to %s", len(payments), path)


class AirdropMixin:
    """Airdrop operations for ChainClient"""

    async def execute_airdrop(
        self,
        signer: Signer,
        payments: Sequence[Payment],
        fee: Optional[FeeInfo] = None,
        mode: BroadcastMode = BroadcastMode.COMMIT,
        memo: str = "",
    ) -> BroadcastResult:
        """Pay every recipient from ``signer``'s account in one transaction"""
        msg = multi_send_from_payments(self.address_of(signer), payments)
        if fee is None:
            fee = self.make_fee(gas_limit=airdrop_gas(len(payments)))
        log.info("airdropping to %d recipients", len(payments))
        return await self.sign_and_broadcast(msg.to_tx().with_memo(memo), signer, fee, mode)

    async def verify_multi_send_grant(
        self, granter: str, grantee: str, now: Optional[float] = None
    ) -> None:
        """
        Check that ``grantee`` may send multi-sends on ``granter``'s behalf

        Raises:
            UnauthorizedError: no generic authorization for MsgMultiSend that
                stays valid for at least another minute
        """
        response = await self.grants(granter, grantee, MsgMultiSend.type_url)
        cutoff = (time.time() if now is None else now) + GRANT_EXPIRY_MARGIN
        for grant in response.grants:
            if grant.authorization.type_url != GENERIC_AUTHORIZATION_TYPE_URL:
                continue
            if grant.HasField("expiration") and grant.expiration.seconds <= cutoff:
                continue
            return
        raise UnauthorizedError(
            f"no relevant grant exists for {grantee} on behalf of {granter}"
        )

    async def execute_delegated_airdrop(
        self,
        granter: str,
        grantee_signer: Signer,
        payments: Sequence[Payment],
        fee: Optional[FeeInfo] = None,
        mode: BroadcastMode = BroadcastMode.COMMIT,
        memo: str = "",
    ) -> BroadcastResult:
        """Airdrop from ``granter``'s funds, signed by an authz grantee"""
        grantee = self.address_of(grantee_signer)
        await self.verify_multi_send_grant(granter, grantee)

        msg = MsgExec(grantee=grantee, msgs=[multi_send_from_payments(granter, payments)])
        if fee is None:
            fee = self.make_fee(gas_limit=airdrop_gas(len(payments)))
        log.info("delegated airdrop from %s to %d recipients", granter, len(payments))
        return await self.sign_and_broadcast(msg.to_tx().with_memo(memo), grantee_signer, fee, mode)

    def _payments_fee(self, payments_file: PaymentsFile, fee: Optional[FeeInfo]) -> FeeInfo:
        if fee is not None:
            return fee
        return self.make_fee(
            gas_limit=airdrop_gas(len(payments_file.payments)),
            payer=payments_file.fee_payer,
            granter=payments_file.fee_granter,
        )

    async def execute_airdrop_from_toml(
        self,
        path: Union[str, os.PathLike],
        signers: Mapping[str, Signer],
        fee: Optional[FeeInfo] = None,
        mode: BroadcastMode = BroadcastMode.COMMIT,
        memo: str = "",
    ) -> BroadcastResult:
        """
        Run the airdrop described by a payments file

        ``signers`` maps key names used in the file to signers.
        """
        payments_file = read_payments_toml(path)
        sender = _signer_named(signers, payments_file.sender_key_name)
        fee = self._payments_fee(payments_file, fee)
        return await self.execute_airdrop(sender, payments_file.payments, fee, mode, memo)

    async def execute_delegated_airdrop_from_toml(
        self,
        path: Union[str, os.PathLike],
        signers: Mapping[str, Signer],
        fee: Optional[FeeInfo] = None,
        mode: BroadcastMode = BroadcastMode.COMMIT,
        memo: str = "",
    ) -> BroadcastResult:
        """
        Run a payments file as a delegated airdrop

        The file's sender is the granter and its ``grantee_key_name`` signs.
        """
        payments_file = read_payments_toml(path)
        if not payments_file.grantee_key_name:
            raise InvalidInputError("no grantee key name was provided for the delegated airdrop")
        granter = self.address_of(_signer_named(signers, payments_file.sender_key_name))
        grantee = _signer_named(signers, payments_file.grantee_key_name)
        fee = self._payments_fee(payments_file, fee)
        return await self.execute_delegated_airdrop(
            granter, grantee, payments_file.payments, fee, mode, memo
        )


def _signer_named(signers: Mapping[str, Signer], name: str) -> Signer:
    try:
        return signers[name]
    except KeyError:
        raise InvalidInputError(f"no signer named {name!r}") from None
