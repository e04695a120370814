"""Public keys and signers"""

import hashlib
from dataclasses import dataclass

import ecdsa
import nacl.exceptions
import nacl.signing
from cosmpy.protos.cosmos.crypto.ed25519 import keys_pb2 as ed25519_keys_pb2
from cosmpy.protos.cosmos.crypto.secp256k1 import keys_pb2 as secp256k1_keys_pb2
from google.protobuf.any_pb2 import Any
from google.protobuf.message import DecodeError as ProtoDecodeError
from typing_extensions import Protocol, runtime_checkable

from .address import ed25519_address_bytes, encode_address, secp256k1_address_bytes
from .errors import DecodeError, InvalidInputError

SECP256K1_PUBKEY_TYPE_URL = "/cosmos.crypto.secp256k1.PubKey"
ED25519_PUBKEY_TYPE_URL = "/cosmos.crypto.ed25519.PubKey"

SECP256K1 = "secp256k1"
ED25519 = "ed25519"


@dataclass(frozen=True)
class PublicKey:
    """A secp256k1 (compressed, 33 bytes) or ed25519 (32 bytes) public key"""

    algorithm: str
    key: bytes

    def __post_init__(self):
        expected = {SECP256K1: 33, ED25519: 32}.get(self.algorithm)
        if expected is None:
            raise InvalidInputError(f"unsupported key algorithm {self.algorithm!r}")
        if len(self.key) != expected:
            raise InvalidInputError(
                f"{self.algorithm} public key must be {expected} bytes, got {len(self.key)}"
            )

    @property
    def type_url(self) -> str:
        if self.algorithm == SECP256K1:
            return SECP256K1_PUBKEY_TYPE_URL
        return ED25519_PUBKEY_TYPE_URL

    def to_any(self) -> Any:
        if self.algorithm == SECP256K1:
            proto = secp256k1_keys_pb2.PubKey(key=self.key)
        else:
            proto = ed25519_keys_pb2.PubKey(key=self.key)
        return Any(type_url=self.type_url, value=proto.SerializeToString())

    @staticmethod
    def from_any(value: Any) -> "PublicKey":
        """Decode a public key Any. Unsupported type URLs raise DecodeError."""
        if value.type_url == SECP256K1_PUBKEY_TYPE_URL:
            proto, algorithm = secp256k1_keys_pb2.PubKey(), SECP256K1
        elif value.type_url == ED25519_PUBKEY_TYPE_URL:
            proto, algorithm = ed25519_keys_pb2.PubKey(), ED25519
        else:
            raise DecodeError(f"unsupported public key type {value.type_url!r}")
        try:
            proto.ParseFromString(value.value)
            return PublicKey(algorithm, bytes(proto.key))
        except (ProtoDecodeError, InvalidInputError) as e:
            raise DecodeError(f"malformed {algorithm} public key: {e}") from e

    def address_bytes(self) -> bytes:
        if self.algorithm == SECP256K1:
            return secp256k1_address_bytes(self.key)
        return ed25519_address_bytes(self.key)

    def address(self, prefix: str) -> str:
        """Bech32 account address for the given prefix"""
        return encode_address(prefix, self.address_bytes())

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check a signature made over ``message`` by the matching private key"""
        if self.algorithm == SECP256K1:
            vk = ecdsa.VerifyingKey.from_string(self.key, curve=ecdsa.SECP256k1)
            try:
                return vk.verify(signature, message, hashfunc=hashlib.sha256)
            except (ecdsa.BadSignatureError, ecdsa.util.MalformedSignature):
                return False
        try:
            nacl.signing.VerifyKey(self.key).verify(message, signature)
            return True
        except (nacl.exceptions.BadSignatureError, ValueError):
            return False


@runtime_checkable
class Signer(Protocol):
    """Anything that holds a public key and can sign arbitrary bytes"""

    @property
    def public_key(self) -> PublicKey:
        ...

    def sign(self, message: bytes) -> bytes:
        ...


class Secp256k1Signer:
    """Local secp256k1 signer producing 64-byte low-S signatures over SHA-256"""

    def __init__(self, private_key: bytes):
        if len(private_key) != 32:
            raise InvalidInputError(f"Private key must be 32 bytes, got {len(private_key)}")
        try:
            self._key = ecdsa.SigningKey.from_string(private_key, curve=ecdsa.SECP256k1)
        except ecdsa.MalformedPointError as e:
            raise InvalidInputError(f"invalid secp256k1 private key: {e}") from e
        compressed = self._key.get_verifying_key().to_string("compressed")
        self._public_key = PublicKey(SECP256K1, compressed)

    @classmethod
    def generate(cls) -> "Secp256k1Signer":
        return cls(ecdsa.SigningKey.generate(curve=ecdsa.SECP256k1).to_string())

    @classmethod
    def from_hex(cls, private_key_hex: str) -> "Secp256k1Signer":
        try:
            return cls(bytes.fromhex(private_key_hex.strip()))
        except ValueError:
            raise InvalidInputError("Private key must be a valid hex string")

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def address(self, prefix: str) -> str:
        return self._public_key.address(prefix)

    def to_hex(self) -> str:
        return self._key.to_string().hex()

    def sign(self, message: bytes) -> bytes:
        return self._key.sign_deterministic(
            message,
            hashfunc=hashlib.sha256,
            sigencode=ecdsa.util.sigencode_string_canonize,
        )


class Ed25519Signer:
    """Local ed25519 signer, for chains that accept ed25519 account keys"""

    def __init__(self, seed: bytes):
        if len(seed) != 32:
            raise InvalidInputError(f"Private key must be 32 bytes, got {len(seed)}")
        self._key = nacl.signing.SigningKey(seed)
        self._public_key = PublicKey(ED25519, bytes(self._key.verify_key))

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        return cls(bytes(nacl.signing.SigningKey.generate()))

    @classmethod
    def from_hex(cls, private_key_hex: str) -> "Ed25519Signer":
        try:
            return cls(bytes.fromhex(private_key_hex.strip()))
        except ValueError:
            raise InvalidInputError("Private key must be a valid hex string")

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def address(self, prefix: str) -> str:
        return self._public_key.address(prefix)

    def to_hex(self) -> str:
        return bytes(self._key).hex()

    def sign(self, message: bytes) -> bytes:
        return self._key.sign(message).signature


@dataclass
class SignerContext:
    """A signer bound to the account number and sequence it signs with"""

    signer: Signer
    account_number: int
    sequence: int

    @property
    def public_key(self) -> PublicKey:
        return self.signer.public_key
