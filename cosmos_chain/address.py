"""Bech32 address helpers"""

import hashlib
from typing import Optional

import bech32
from cosmpy.crypto.hashfuncs import ripemd160

from .errors import InvalidInputError


def decode_address(address: str, prefix: Optional[str] = None) -> bytes:
    """
    Decode a bech32 address into its raw bytes

    Args:
        address: Bech32 address string
        prefix: Expected human-readable part. Any prefix is accepted when omitted.

    Returns:
        The address bytes
    """
    if not isinstance(address, str) or not address:
        raise InvalidInputError("address must be a non-empty string")
    hrp, data = bech32.bech32_decode(address)
    if hrp is None or data is None:
        raise InvalidInputError(f"{address!r} is not a valid bech32 address")
    if prefix is not None and hrp != prefix:
        raise InvalidInputError(f"address {address} has prefix {hrp!r}, expected {prefix!r}")
    raw = bech32.convertbits(data, 5, 8, False)
    if raw is None:
        raise InvalidInputError(f"{address!r} has an invalid bech32 payload")
    return bytes(raw)


def validate_address(address: str, prefix: Optional[str] = None) -> str:
    decode_address(address, prefix)
    return address


def encode_address(prefix: str, raw: bytes) -> str:
    if not prefix:
        raise InvalidInputError("address prefix must not be empty")
    words = bech32.convertbits(list(raw), 8, 5, True)
    return bech32.bech32_encode(prefix, words)


def address_prefix(address: str) -> str:
    hrp, _ = bech32.bech32_decode(address)
    if hrp is None:
        raise InvalidInputError(f"{address!r} is not a valid bech32 address")
    return hrp


def secp256k1_address_bytes(compressed_public_key: bytes) -> bytes:
    # RIPEMD160(SHA256(pubkey))
    return ripemd160(hashlib.sha256(compressed_public_key).digest())


def ed25519_address_bytes(public_key: bytes) -> bytes:
    # first 20 bytes of SHA256(pubkey)
    return hashlib.sha256(public_key).digest()[:20]
