"""
Tests for ChainClient: construction, broadcast and wait-for-inclusion.
"""

import asyncio

import grpc
import httpx
import pytest
from cosmpy.protos.cosmos.auth.v1beta1 import auth_pb2
from cosmpy.protos.cosmos.auth.v1beta1 import query_pb2 as auth_query_pb2
from cosmpy.protos.cosmos.auth.v1beta1.query_pb2_grpc import QueryStub as AuthQueryStub
from cosmpy.protos.cosmos.base.abci.v1beta1 import abci_pb2
from cosmpy.protos.cosmos.tx.v1beta1 import service_pb2

from cosmos_chain import (
    BroadcastMode,
    ChainClient,
    CheckTxRejectedError,
    Coin,
    DeliverTxRejectedError,
    EndpointInvalidError,
    FeeInfo,
    InvalidConfigError,
    InvalidInputError,
    Secp256k1Signer,
    SignedTx,
    SignerContext,
    TransportError,
    TxTimeoutError,
    encode_address,
    verify_signed_tx,
)
from cosmos_chain.msgs import MsgDelegate, MsgSend, MsgUndelegate, any_from_message

from fakes import (
    CHAIN_ID,
    DENOM,
    PREFIX,
    RECIPIENT_KEY,
    SENDER_KEY,
    FakeRpcError,
    jsonrpc_error,
    jsonrpc_result,
    make_client,
    make_config,
    status_result,
)

ACCOUNT = "/cosmos.auth.v1beta1.Query/Account"
BROADCAST = "/cosmos.tx.v1beta1.Service/BroadcastTx"
SIMULATE = "/cosmos.tx.v1beta1.Service/Simulate"

SIGNER = Secp256k1Signer.from_hex(SENDER_KEY)
SENDER = SIGNER.address(PREFIX)
RECIPIENT = Secp256k1Signer.from_hex(RECIPIENT_KEY).address(PREFIX)
FEE = FeeInfo(fee=Coin(5000, DENOM), gas_limit=200000)
VALOPER = encode_address("cosmosvaloper", bytes(range(20)))


def _account_response(number=7, sequence=3):
    account = auth_pb2.BaseAccount(
        address=SENDER, pub_key=SIGNER.public_key.to_any(), account_number=number, sequence=sequence
    )
    return auth_query_pb2.QueryAccountResponse(account=any_from_message(account))


def _broadcast_response(code=0, height=0, raw_log="", txhash=""):
    return service_pb2.BroadcastTxResponse(
        tx_response=abci_pb2.TxResponse(code=code, height=height, raw_log=raw_log, txhash=txhash)
    )


def _signed(client):
    send = MsgSend(SENDER, RECIPIENT, [Coin(250000, DENOM)])
    return client.sign(send.to_tx(), SignerContext(SIGNER, 7, 3), FEE)


class TestConstruction:
    """Tests for endpoint validation and lifecycle."""

    @pytest.mark.asyncio
    async def test_malformed_grpc_endpoint(self):
        with pytest.raises(EndpointInvalidError):
            await ChainClient.connect(make_config(grpc_endpoint="http://localhost"))

    @pytest.mark.asyncio
    async def test_malformed_rpc_endpoint(self):
        with pytest.raises(EndpointInvalidError):
            await ChainClient.create("localhost:26657", "http://localhost:9090", CHAIN_ID, PREFIX)

    @pytest.mark.asyncio
    async def test_invalid_config(self):
        with pytest.raises(InvalidConfigError):
            await ChainClient.connect(make_config(chain_id=""))

    @pytest.mark.asyncio
    async def test_close_releases_everything(self):
        client = make_client()
        channel = client._channel
        async with client:
            assert client.chain_id == CHAIN_ID
        assert channel.closed
        assert client.rpc._client.is_closed
        await client.close()

    @pytest.mark.asyncio
    async def test_latest_height_uses_rpc(self):
        client = make_client(rpc_handler=lambda request: jsonrpc_result(status_result(4321)))
        assert await client.latest_height() == 4321

    @pytest.mark.asyncio
    async def test_make_fee(self):
        client = make_client()
        fee = client.make_fee(amount=5000, gas_limit=100000)
        assert fee.fee == Coin(5000, DENOM)
        assert client.make_fee(gas_limit=1).fee is None

    @pytest.mark.asyncio
    async def test_make_fee_needs_fee_denom(self):
        client = make_client(fee_denom=None)
        with pytest.raises(InvalidConfigError):
            client.make_fee(amount=1)


class TestBroadcast:
    """Tests for mapping broadcast responses to results and errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", list(BroadcastMode))
    async def test_success(self, mode):
        height = 10 if mode is BroadcastMode.COMMIT else 0
        client = make_client({BROADCAST: _broadcast_response(height=height)})
        signed = _signed(client)
        result = await client.broadcast(signed, mode)
        assert result.tx_hash == signed.hash
        assert result.mode is mode
        assert result.is_success
        request = client._channel.requests_for(BROADCAST)[0]
        assert request.tx_bytes == signed.to_bytes()
        assert request.mode == mode.to_proto()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [BroadcastMode.ASYNC, BroadcastMode.SYNC])
    async def test_check_tx_rejection(self, mode):
        client = make_client({BROADCAST: _broadcast_response(code=5, raw_log="insufficient funds")})
        signed = _signed(client)
        with pytest.raises(CheckTxRejectedError) as excinfo:
            await client.broadcast(signed, mode)
        assert excinfo.value.code == 5
        assert excinfo.value.tx_hash == signed.hash

    @pytest.mark.asyncio
    async def test_commit_rejected_before_inclusion(self):
        client = make_client({BROADCAST: _broadcast_response(code=32, raw_log="account sequence mismatch")})
        with pytest.raises(CheckTxRejectedError):
            await client.broadcast(_signed(client), BroadcastMode.COMMIT)

    @pytest.mark.asyncio
    async def test_commit_rejected_in_block(self):
        response = _broadcast_response(code=11, height=40, raw_log="out of gas")
        client = make_client({BROADCAST: response})
        with pytest.raises(DeliverTxRejectedError) as excinfo:
            await client.broadcast(_signed(client), BroadcastMode.COMMIT)
        assert excinfo.value.log == "out of gas"
        assert excinfo.value.result.height == 40

    @pytest.mark.asyncio
    async def test_commit_timeout_log_is_not_a_failure(self):
        response = _broadcast_response(code=30, raw_log="timed out waiting for tx to be included in a block")
        client = make_client({BROADCAST: response})
        signed = _signed(client)
        with pytest.raises(TxTimeoutError) as excinfo:
            await client.broadcast(signed, BroadcastMode.COMMIT)
        assert excinfo.value.tx_hash == signed.hash

    @pytest.mark.asyncio
    async def test_commit_deadline_is_not_a_failure(self):
        client = make_client({BROADCAST: FakeRpcError(grpc.StatusCode.DEADLINE_EXCEEDED, "deadline")})
        signed = _signed(client)
        with pytest.raises(TxTimeoutError) as excinfo:
            await client.broadcast(signed, BroadcastMode.COMMIT)
        assert excinfo.value.tx_hash == signed.hash

    @pytest.mark.asyncio
    async def test_sync_deadline_is_transport_error(self):
        client = make_client({BROADCAST: FakeRpcError(grpc.StatusCode.DEADLINE_EXCEEDED, "deadline")})
        with pytest.raises(TransportError):
            await client.broadcast(_signed(client), BroadcastMode.SYNC)

    @pytest.mark.asyncio
    async def test_sign_and_broadcast_uses_on_chain_sequence(self):
        client = make_client({ACCOUNT: _account_response(number=7, sequence=3), BROADCAST: _broadcast_response()})
        send = MsgSend(SENDER, RECIPIENT, [Coin(250000, DENOM)])
        await client.sign_and_broadcast(send, SIGNER, FEE)

        assert client._channel.requests_for(ACCOUNT)[0].address == SENDER
        signed = SignedTx.from_bytes(client._channel.requests_for(BROADCAST)[0].tx_bytes)
        assert signed.auth_info().signer_infos[0].sequence == 3
        assert verify_signed_tx(signed, SIGNER.public_key, CHAIN_ID, 7)

    @pytest.mark.asyncio
    async def test_simulate(self):
        response = service_pb2.SimulateResponse(gas_info=abci_pb2.GasInfo(gas_used=81234))
        client = make_client({SIMULATE: response})
        signed = _signed(client)
        assert (await client.simulate(signed)).gas_info.gas_used == 81234
        assert client._channel.requests_for(SIMULATE)[0].tx_bytes == signed.to_bytes()


class TestWaitForTx:
    """Tests for polling the consensus RPC until inclusion."""

    TX_HASH = "CD" * 32

    @pytest.mark.asyncio
    async def test_found_after_a_few_polls(self):
        polls = []

        def handler(request: httpx.Request) -> httpx.Response:
            polls.append(request)
            if len(polls) < 3:
                return jsonrpc_error(-32603, "Internal error", "tx not found")
            return jsonrpc_result({"hash": self.TX_HASH, "height": "15", "tx_result": {"code": 0}})

        client = make_client(rpc_handler=handler)
        info = await client.wait_for_tx(self.TX_HASH, retries=5, interval=0)
        assert info.hash == self.TX_HASH
        assert info.height == 15
        assert len(polls) == 3

    @pytest.mark.asyncio
    async def test_times_out_with_hash(self):
        polls = []

        def handler(request: httpx.Request) -> httpx.Response:
            polls.append(request)
            return jsonrpc_error(-32603, "Internal error", "tx not found")

        client = make_client(rpc_handler=handler)
        with pytest.raises(TxTimeoutError) as excinfo:
            await client.wait_for_tx(self.TX_HASH, retries=4, interval=0)
        assert excinfo.value.tx_hash == self.TX_HASH
        assert len(polls) == 4

    @pytest.mark.asyncio
    async def test_failed_tx_is_returned_for_the_caller_to_check(self):
        def handler(request):
            return jsonrpc_result({"hash": self.TX_HASH, "height": "15", "tx_result": {"code": 5, "log": "boom"}})

        client = make_client(rpc_handler=handler)
        info = await client.wait_for_tx(self.TX_HASH, retries=1, interval=0)
        with pytest.raises(DeliverTxRejectedError):
            info.ensure_successful()

    @pytest.mark.asyncio
    async def test_retries_must_be_positive(self):
        client = make_client()
        with pytest.raises(InvalidInputError):
            await client.wait_for_tx(self.TX_HASH, retries=0)


class TestSignAndBroadcast:
    """Tests for account lookup, sequence handling and the convenience senders."""

    @staticmethod
    async def _slow_account(client, sequence=3):
        async def account(request, timeout=None):
            await asyncio.sleep(0)
            return _account_response(sequence=sequence)

        stub = await client.get_client(AuthQueryStub)
        stub.Account = account

    @staticmethod
    def _sequences(client):
        return [
            SignedTx.from_bytes(request.tx_bytes).auth_info().signer_infos[0].sequence
            for request in client._channel.requests_for(BROADCAST)
        ]

    @pytest.mark.asyncio
    async def test_concurrent_calls_use_consecutive_sequences(self):
        client = make_client({BROADCAST: _broadcast_response()})
        await self._slow_account(client)
        send = MsgSend(SENDER, RECIPIENT, [Coin(1, DENOM)])

        await asyncio.gather(
            client.sign_and_broadcast(send, SIGNER, FEE),
            client.sign_and_broadcast(send, SIGNER, FEE),
        )
        assert sorted(self._sequences(client)) == [3, 4]

    @pytest.mark.asyncio
    async def test_chain_sequence_wins_once_it_catches_up(self):
        client = make_client({BROADCAST: _broadcast_response()})
        await self._slow_account(client, sequence=3)
        send = MsgSend(SENDER, RECIPIENT, [Coin(1, DENOM)])
        await client.sign_and_broadcast(send, SIGNER, FEE)

        await self._slow_account(client, sequence=9)
        await client.sign_and_broadcast(send, SIGNER, FEE)
        assert self._sequences(client) == [3, 9]

    @pytest.mark.asyncio
    async def test_sequence_mismatch_forgets_local_sequence(self):
        responses = iter(
            [
                _broadcast_response(),
                _broadcast_response(code=32, raw_log="account sequence mismatch"),
                _broadcast_response(),
            ]
        )
        client = make_client({BROADCAST: lambda request: next(responses)})
        await self._slow_account(client)
        send = MsgSend(SENDER, RECIPIENT, [Coin(1, DENOM)])

        await client.sign_and_broadcast(send, SIGNER, FEE)
        with pytest.raises(CheckTxRejectedError):
            await client.sign_and_broadcast(send, SIGNER, FEE)
        await client.sign_and_broadcast(send, SIGNER, FEE)
        assert self._sequences(client) == [3, 4, 3]

    @pytest.mark.asyncio
    async def test_send(self):
        client = make_client({ACCOUNT: _account_response(), BROADCAST: _broadcast_response()})
        await client.send(SIGNER, RECIPIENT, Coin(42, DENOM), FEE, memo="rent")

        signed = SignedTx.from_bytes(client._channel.requests_for(BROADCAST)[0].tx_bytes)
        assert signed.body().memo == "rent"
        msg = MsgSend.from_any(signed.body().messages[0])
        assert msg.from_address == SENDER
        assert msg.to_address == RECIPIENT
        assert msg.amount == [Coin(42, DENOM)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method,msg_cls", [("delegate", MsgDelegate), ("undelegate", MsgUndelegate)])
    async def test_staking_helpers(self, method, msg_cls):
        client = make_client({ACCOUNT: _account_response(), BROADCAST: _broadcast_response()})
        await getattr(client, method)(SIGNER, VALOPER, Coin(500, DENOM), FEE)

        signed = SignedTx.from_bytes(client._channel.requests_for(BROADCAST)[0].tx_bytes)
        msg = msg_cls.from_any(signed.body().messages[0])
        assert msg.delegator_address == SENDER
        assert msg.validator_address == VALOPER
        assert msg.amount == Coin(500, DENOM)
