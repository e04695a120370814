"""Async client bound to one Cosmos SDK chain"""

import asyncio
import logging
from typing import Dict, Optional, Type, TypeVar, Union

import grpc
from cosmpy.protos.cosmos.tx.v1beta1 import service_pb2
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2_grpc import ServiceStub as TxServiceStub

from .airdrop import AirdropMixin
from .config import DEFAULT_CONNECT_TIMEOUT, ChainConfig
from .errors import (
    CheckTxRejectedError,
    DeliverTxRejectedError,
    EmptyResultError,
    InvalidConfigError,
    InvalidInputError,
    TxTimeoutError,
)
from .grpc_errors import map_rpc_error
from .keys import Signer, SignerContext
from .msgs.bank import MsgSend
from .msgs.base import ModuleMsg
from .msgs.staking import MsgDelegate, MsgUndelegate
from .pool import SubClientPool
from .queries import (
    AuthQueries,
    AuthzQueries,
    BankQueries,
    DistributionQueries,
    EvidenceQueries,
    FeegrantQueries,
    GovQueries,
    MintQueries,
    ParamsQueries,
    SlashingQueries,
    StakingQueries,
    TendermintQueries,
    TxQueries,
)
from .transport import TendermintRpc, open_channel, parse_grpc_endpoint, parse_rpc_endpoint, redact_url
from .tx import FeeInfo, SignedTx, UnsignedTx, sign_tx
from .types import BroadcastMode, BroadcastResult, Coin, TxInfo

log = logging.getLogger(__name__)

T = TypeVar("T")

COMMIT_TIMEOUT_LOG = "timed out waiting for tx to be included in a block"
# sdkerrors.ErrWrongSequence
SEQUENCE_MISMATCH_CODE = 32


class ChainClient(
    AuthQueries,
    AuthzQueries,
    BankQueries,
    DistributionQueries,
    EvidenceQueries,
    FeegrantQueries,
    GovQueries,
    MintQueries,
    ParamsQueries,
    SlashingQueries,
    StakingQueries,
    TendermintQueries,
    TxQueries,
    AirdropMixin,
):
    """
    Main client for interacting with a Cosmos SDK chain

    Owns one consensus RPC client and one gRPC channel. Module stubs are
    built on first use and kept for the client's lifetime.

    Example:
        >>> async with await ChainClient.connect(config) as client:
        ...     height = await client.latest_height()
        ...     balance = await client.balance(address, "uatom")
    """

    def __init__(self, config: ChainConfig, rpc: TendermintRpc, channel):
        self.config = config
        self._rpc = rpc
        self._channel = channel
        self._grpc_endpoint = redact_url(config.grpc_endpoint)
        self._request_timeout = config.request_timeout
        self._pool = SubClientPool(channel, self._grpc_endpoint)
        self._lock = asyncio.Lock()
        # next sequence per address, for txs accepted but not yet committed
        self._next_sequence: Dict[str, int] = {}
        self._closed = False

    @classmethod
    async def connect(cls, config: ChainConfig) -> "ChainClient":
        """
        Validate ``config`` and open the gRPC channel

        Raises:
            EndpointInvalidError: an endpoint URL is malformed
            InvalidConfigError: another config value is invalid
            ConnectFailedError: the gRPC channel could not be opened
        """
        parse_rpc_endpoint(config.rpc_endpoint)
        parse_grpc_endpoint(config.grpc_endpoint)
        config.validate()

        rpc = TendermintRpc(config.rpc_endpoint, timeout=config.request_timeout)
        try:
            channel = await open_channel(config.grpc_endpoint, config.connect_timeout)
        except BaseException:
            await rpc.aclose()
            raise
        log.info("connected to %s at %s", config.chain_id, redact_url(config.grpc_endpoint))
        return cls(config, rpc, channel)

    @classmethod
    async def create(
        cls,
        rpc_endpoint: str,
        grpc_endpoint: str,
        chain_id: str,
        account_prefix: str,
        fee_denom: Optional[str] = None,
        connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT,
        request_timeout: Optional[float] = None,
    ) -> "ChainClient":
        """Build a ChainConfig from arguments and connect"""
        config = ChainConfig(
            chain_id=chain_id,
            account_prefix=account_prefix,
            rpc_endpoint=rpc_endpoint,
            grpc_endpoint=grpc_endpoint,
            fee_denom=fee_denom,
            connect_timeout=connect_timeout,
            request_timeout=request_timeout,
        )
        return await cls.connect(config)

    async def __aenter__(self) -> "ChainClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release pooled stubs, the gRPC channel and the RPC client"""
        if self._closed:
            return
        self._closed = True
        self._pool.clear()
        try:
            await self._channel.close()
        finally:
            await self._rpc.aclose()
        log.info("closed connection to %s", self.config.chain_id)

    @property
    def chain_id(self) -> str:
        return self.config.chain_id

    @property
    def rpc(self) -> TendermintRpc:
        return self._rpc

    async def get_client(self, stub_cls: Type[T]) -> T:
        """Pooled stub of ``stub_cls``, for RPCs without a wrapper here"""
        return await self._pool.get(stub_cls)

    def has_client(self, stub_cls: type) -> bool:
        return self._pool.contains(stub_cls)

    async def latest_height(self) -> int:
        """Latest block height, from the consensus RPC"""
        return await self._rpc.latest_height()

    def address_of(self, signer: Signer) -> str:
        return signer.public_key.address(self.config.account_prefix)

    async def signer_context(self, signer: Signer) -> SignerContext:
        """Bind ``signer`` to its current on-chain account number and sequence"""
        account = await self.account(self.address_of(signer))
        return SignerContext(signer, account.account_number, account.sequence)

    def make_fee(
        self,
        amount: int = 0,
        gas_limit: int = 200000,
        payer: Optional[str] = None,
        granter: Optional[str] = None,
    ) -> FeeInfo:
        """FeeInfo in the configured fee denom"""
        fee = None
        if amount:
            if not self.config.fee_denom:
                raise InvalidConfigError("fee_denom is not configured")
            fee = Coin(amount=amount, denom=self.config.fee_denom)
        return FeeInfo(fee=fee, gas_limit=gas_limit, payer=payer, granter=granter)

    def sign(self, unsigned: UnsignedTx, context: SignerContext, fee: FeeInfo) -> SignedTx:
        """Sign for this client's chain id"""
        return sign_tx(unsigned, context, fee, self.config.chain_id)

    async def broadcast(
        self,
        signed: SignedTx,
        mode: BroadcastMode = BroadcastMode.SYNC,
        timeout: Optional[float] = None,
    ) -> BroadcastResult:
        """
        Submit a signed transaction

        Raises:
            CheckTxRejectedError: the node refused the tx at admission
            DeliverTxRejectedError: COMMIT mode, the tx failed in a block
            TxTimeoutError: COMMIT mode, no block result before the server
                gave up; the tx may still be included
            TransportError: the request never completed
        """
        async with self._lock:
            return await self._broadcast(signed, mode, timeout)

    async def _broadcast(
        self, signed: SignedTx, mode: BroadcastMode, timeout: Optional[float]
    ) -> BroadcastResult:
        # caller holds self._lock
        mode = BroadcastMode(mode)
        tx_hash = signed.hash
        request = service_pb2.BroadcastTxRequest(tx_bytes=signed.to_bytes(), mode=mode.to_proto())
        if timeout is None:
            timeout = self._request_timeout

        log.debug("broadcasting %s (%s)", tx_hash, mode.value)
        stub = await self._pool.get(TxServiceStub)
        try:
            response = await stub.BroadcastTx(request, timeout=timeout)
        except grpc.RpcError as e:
            if mode is BroadcastMode.COMMIT and e.code() == grpc.StatusCode.DEADLINE_EXCEEDED:
                log.warning("commit of %s timed out; it may still be included", tx_hash)
                raise TxTimeoutError(tx_hash, "timed out waiting for commit") from e
            raise map_rpc_error(e, self._grpc_endpoint, "BroadcastTx") from e

        if not response.HasField("tx_response"):
            raise EmptyResultError(f"broadcast of {tx_hash} returned no tx response")
        result = BroadcastResult.from_tx_response(response.tx_response, mode, tx_hash)

        if mode is BroadcastMode.COMMIT and COMMIT_TIMEOUT_LOG in result.raw_log:
            log.warning("commit of %s timed out; it may still be included", result.tx_hash)
            raise TxTimeoutError(result.tx_hash, COMMIT_TIMEOUT_LOG)
        if result.code != 0:
            if mode is BroadcastMode.COMMIT and result.height > 0:
                raise DeliverTxRejectedError(result.code, result.raw_log, result.tx_hash, result)
            raise CheckTxRejectedError(result.code, result.raw_log, result.tx_hash, result)
        return result

    async def sign_and_broadcast(
        self,
        tx: Union[UnsignedTx, ModuleMsg],
        signer: Signer,
        fee: FeeInfo,
        mode: BroadcastMode = BroadcastMode.SYNC,
        timeout: Optional[float] = None,
    ) -> BroadcastResult:
        """
        Look up the signer's account, sign ``tx`` and broadcast it

        The lookup, signing and submission run under the broadcast lock, so
        concurrent calls for one signer use consecutive sequences. Sequences
        of txs this client got accepted are remembered until the chain's
        account sequence catches up.
        """
        if isinstance(tx, ModuleMsg):
            tx = tx.to_tx()
        address = self.address_of(signer)
        async with self._lock:
            context = await self.signer_context(signer)
            pending = self._next_sequence.get(address, 0)
            if pending > context.sequence:
                context = SignerContext(signer, context.account_number, pending)
            signed = self.sign(tx, context, fee)
            try:
                result = await self._broadcast(signed, mode, timeout)
            except DeliverTxRejectedError:
                # a failed tx in a block still consumes its sequence
                self._next_sequence[address] = context.sequence + 1
                raise
            except CheckTxRejectedError as e:
                if e.code == SEQUENCE_MISMATCH_CODE:
                    # remembered sequence went stale; trust the chain next time
                    self._next_sequence.pop(address, None)
                raise
            self._next_sequence[address] = context.sequence + 1
            return result

    async def send(
        self,
        signer: Signer,
        recipient: str,
        amount: Coin,
        fee: FeeInfo,
        mode: BroadcastMode = BroadcastMode.SYNC,
        memo: str = "",
    ) -> BroadcastResult:
        """Send ``amount`` from ``signer``'s account to ``recipient``"""
        msg = MsgSend(self.address_of(signer), recipient, [amount])
        return await self.sign_and_broadcast(msg.to_tx().with_memo(memo), signer, fee, mode)

    async def delegate(
        self,
        signer: Signer,
        validator_address: str,
        amount: Coin,
        fee: FeeInfo,
        mode: BroadcastMode = BroadcastMode.SYNC,
        memo: str = "",
    ) -> BroadcastResult:
        msg = MsgDelegate(self.address_of(signer), validator_address, amount)
        return await self.sign_and_broadcast(msg.to_tx().with_memo(memo), signer, fee, mode)

    async def undelegate(
        self,
        signer: Signer,
        validator_address: str,
        amount: Coin,
        fee: FeeInfo,
        mode: BroadcastMode = BroadcastMode.SYNC,
        memo: str = "",
    ) -> BroadcastResult:
        msg = MsgUndelegate(self.address_of(signer), validator_address, amount)
        return await self.sign_and_broadcast(msg.to_tx().with_memo(memo), signer, fee, mode)

    async def wait_for_tx(self, tx_hash: str, retries: int = 10, interval: float = 6.0) -> TxInfo:
        """
        Poll the consensus RPC until the transaction shows up in a block

        Args:
            tx_hash: Hex hash of the transaction
            retries: Number of lookups before giving up
            interval: Seconds to sleep between lookups

        Raises:
            TxTimeoutError: not found after ``retries`` lookups; keep the hash
                and poll again later if needed
        """
        if retries < 1:
            raise InvalidInputError("retries must be at least 1")
        if interval < 0:
            raise InvalidInputError("interval must not be negative")

        for attempt in range(1, retries + 1):
            info = await self._rpc.tx(tx_hash)
            if info is not None:
                log.debug("tx %s found at height %d", info.hash, info.height)
                return info
            log.debug("tx %s not found yet (attempt %d/%d)", tx_hash, attempt, retries)
            if attempt < retries:
                await asyncio.sleep(interval)
        raise TxTimeoutError(tx_hash.upper(), f"not found after {retries} attempts")
