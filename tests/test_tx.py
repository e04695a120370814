"""
Tests for transaction building, signing and verification.
"""

import pytest
from cosmpy.protos.cosmos.tx.signing.v1beta1 import signing_pb2
from cosmpy.protos.cosmos.tx.v1beta1 import tx_pb2

from cosmos_chain import (
    Coin,
    DecodeError,
    FeeInfo,
    InvalidInputError,
    Secp256k1Signer,
    SignedTx,
    SignerContext,
    SigningFailedError,
    UnsignedTx,
    sign_tx,
    verify_signed_tx,
)
from cosmos_chain.msgs import MsgSend
from cosmos_chain.tx import sign_doc_bytes

from fakes import CHAIN_ID, DENOM, PREFIX, RECIPIENT_KEY, SENDER_KEY


def _send(amount=250000):
    sender = Secp256k1Signer.from_hex(SENDER_KEY).address(PREFIX)
    recipient = Secp256k1Signer.from_hex(RECIPIENT_KEY).address(PREFIX)
    return MsgSend(sender, recipient, [Coin(amount, DENOM)])


def _fee():
    return FeeInfo(fee=Coin(5000, DENOM), gas_limit=200000)


def _context(sequence=3):
    return SignerContext(Secp256k1Signer.from_hex(SENDER_KEY), account_number=7, sequence=sequence)


class RefusingSigner:
    def __init__(self):
        self.public_key = Secp256k1Signer.from_hex(SENDER_KEY).public_key

    def sign(self, message: bytes) -> bytes:
        raise RuntimeError("hardware wallet locked")


class TestUnsignedTx:
    """Tests for the body accumulator."""

    def test_message_order_is_preserved(self):
        msgs = [_send(1), _send(2), _send(3)]
        tx = UnsignedTx().add_msg(msgs[0]).add_msgs(msgs[1:])
        assert len(tx) == 3
        body = tx.body()
        assert [MsgSend.from_any(m).amount[0].amount for m in body.messages] == [1, 2, 3]

    def test_body_carries_memo_timeout_and_extensions(self):
        option = _send(9).to_any()
        tx = (
            UnsignedTx()
            .add_msg(_send())
            .with_memo("payroll")
            .with_timeout_height(1200)
            .add_extension_option(option)
            .add_non_critical_extension_option(option)
        )
        body = tx_pb2.TxBody()
        body.ParseFromString(tx.body_bytes())
        assert body.memo == "payroll"
        assert body.timeout_height == 1200
        assert list(body.extension_options) == [option]
        assert list(body.non_critical_extension_options) == [option]

    def test_negative_timeout_height_rejected(self):
        with pytest.raises(InvalidInputError):
            UnsignedTx().with_timeout_height(-1)

    def test_non_message_rejected(self):
        with pytest.raises(InvalidInputError):
            UnsignedTx().add_msg("not a message")

    def test_to_tx_wraps_a_single_message(self):
        tx = _send().to_tx()
        assert len(tx) == 1
        assert tx.messages[0].type_url == "/cosmos.bank.v1beta1.MsgSend"


class TestFeeInfo:
    def test_zero_fee_is_omitted(self):
        proto = FeeInfo(fee=Coin(0, DENOM), gas_limit=100000).to_proto()
        assert list(proto.amount) == []
        assert proto.gas_limit == 100000

    def test_payer_and_granter(self):
        payer = Secp256k1Signer.from_hex(RECIPIENT_KEY).address(PREFIX)
        proto = FeeInfo(fee=Coin(10, DENOM), gas_limit=1, payer=payer, granter=payer).to_proto()
        assert proto.payer == payer
        assert proto.granter == payer

    @pytest.mark.parametrize("gas_limit", [0, -5, 2**64])
    def test_gas_limit_range(self, gas_limit):
        with pytest.raises(InvalidInputError):
            FeeInfo(fee=None, gas_limit=gas_limit).validate()

    def test_bad_granter_rejected(self):
        with pytest.raises(InvalidInputError):
            FeeInfo(fee=None, gas_limit=1, granter="nope").validate()


class TestSigning:
    """Tests for direct-mode signing."""

    def test_auth_info_has_single_direct_signer(self):
        signed = sign_tx(_send().to_tx(), _context(sequence=4), _fee(), CHAIN_ID)
        auth_info = signed.auth_info()
        assert len(auth_info.signer_infos) == 1
        info = auth_info.signer_infos[0]
        assert info.sequence == 4
        assert info.mode_info.single.mode == signing_pb2.SIGN_MODE_DIRECT
        assert info.public_key.type_url == "/cosmos.crypto.secp256k1.PubKey"
        assert auth_info.fee.amount[0].amount == "5000"
        assert auth_info.fee.gas_limit == 200000

    def test_signing_is_deterministic(self):
        first = sign_tx(_send().to_tx(), _context(), _fee(), CHAIN_ID)
        second = sign_tx(_send().to_tx(), _context(), _fee(), CHAIN_ID)
        assert first.to_bytes() == second.to_bytes()
        assert first.hash == second.hash

    def test_sign_doc_bytes_are_deterministic(self):
        assert sign_doc_bytes(b"body", b"auth", CHAIN_ID, 7) == sign_doc_bytes(
            b"body", b"auth", CHAIN_ID, 7
        )

    def test_signature_verifies(self):
        context = _context()
        signed = sign_tx(_send().to_tx(), context, _fee(), CHAIN_ID)
        assert verify_signed_tx(signed, context.public_key, CHAIN_ID, 7)

    def test_changing_any_sign_doc_input_breaks_the_signature(self):
        context = _context()
        signed = sign_tx(_send().to_tx(), context, _fee(), CHAIN_ID)
        key = context.public_key
        assert not verify_signed_tx(signed, key, "other-chain", 7)
        assert not verify_signed_tx(signed, key, CHAIN_ID, 8)

        tampered_body = SignedTx(_send(1).to_tx().body_bytes(), signed.auth_info_bytes, signed.signatures)
        assert not verify_signed_tx(tampered_body, key, CHAIN_ID, 7)

        other_auth = sign_tx(_send().to_tx(), _context(sequence=9), _fee(), CHAIN_ID)
        tampered_auth = SignedTx(signed.body_bytes, other_auth.auth_info_bytes, signed.signatures)
        assert not verify_signed_tx(tampered_auth, key, CHAIN_ID, 7)

    def test_empty_chain_id_rejected(self):
        with pytest.raises(InvalidInputError):
            sign_tx(_send().to_tx(), _context(), _fee(), "")

    def test_empty_tx_rejected(self):
        with pytest.raises(InvalidInputError):
            sign_tx(UnsignedTx(), _context(), _fee(), CHAIN_ID)

    def test_negative_sequence_rejected(self):
        with pytest.raises(InvalidInputError):
            sign_tx(_send().to_tx(), _context(sequence=-1), _fee(), CHAIN_ID)

    def test_signer_failure_becomes_signing_failed(self):
        context = SignerContext(RefusingSigner(), account_number=7, sequence=0)
        with pytest.raises(SigningFailedError) as excinfo:
            sign_tx(_send().to_tx(), context, _fee(), CHAIN_ID)
        assert "hardware wallet locked" in str(excinfo.value)


class TestSignedTx:
    def test_bytes_round_trip(self):
        signed = sign_tx(_send().to_tx(), _context(), _fee(), CHAIN_ID)
        parsed = SignedTx.from_bytes(signed.to_bytes())
        assert parsed == signed
        assert parsed.hash == signed.hash

    def test_hash_is_upper_hex_sha256(self):
        signed = sign_tx(_send().to_tx(), _context(), _fee(), CHAIN_ID)
        assert len(signed.hash) == 64
        assert signed.hash == signed.hash.upper()

    def test_malformed_bytes(self):
        with pytest.raises(DecodeError):
            SignedTx.from_bytes(b"\xff\xff\xff")
