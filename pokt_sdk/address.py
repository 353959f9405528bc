"""
pokt_sdk.address
================

Key and address derivation for Pocket accounts.

Format
------
Pocket keys are ed25519. Private keys travel in the *expanded* form:

    private_key = seed(32) || public_key(32)            # 64 bytes

and an address is the first 20 bytes of a hash of the raw public key:

    address = sha256(public_key)[:20]                   # 20 bytes, hex at the boundary

This module provides:
- public_key_from_private(private_key) -> bytes
- public_key_from_private_hex(private_key) -> str
- address_from_public_key(public_key, hasher=None) -> bytes
- get_address_from_public_key(public_key, hasher=None) -> str
- validate_address(address) -> str       (normalized, raises on bad input)
- is_valid_address(address) -> bool

No elliptic-curve math happens here: the public key is *sliced* out of the
expanded private key. Deriving a public key from a bare 32-byte seed is the
signer's job (see `pokt_sdk.wallet.signer.KeyManager`).
"""

from __future__ import annotations

from typing import Optional, Union

from .errors import InvalidFieldError, InvalidKeyLengthError
from .utils.bytes import BytesLike, ensure_bytes, is_hex, to_hex
from .utils.hash import DEFAULT_ADDRESS_HASHER, AddressHasher

PRIVATE_KEY_LENGTH = 64
PUBLIC_KEY_LENGTH = 32
ADDRESS_LENGTH = 20

KeyInput = Union[BytesLike, str]

__all__ = [
    "PRIVATE_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "public_key_from_private",
    "public_key_from_private_hex",
    "address_from_public_key",
    "get_address_from_public_key",
    "validate_address",
    "is_valid_address",
]


def _as_bytes(value: KeyInput, what: str, expected: int) -> bytes:
    try:
        raw = ensure_bytes(value)
    except (TypeError, ValueError) as e:
        raise InvalidFieldError(what, f"not valid hex/bytes ({e})") from e
    if len(raw) != expected:
        raise InvalidKeyLengthError(what, expected, len(raw))
    return raw


# ---- Public key ---------------------------------------------------------------


def public_key_from_private(private_key: KeyInput) -> bytes:
    """Return bytes [32, 64) of a 64-byte expanded private key, unchanged."""
    raw = _as_bytes(private_key, "private key", PRIVATE_KEY_LENGTH)
    return raw[PRIVATE_KEY_LENGTH - PUBLIC_KEY_LENGTH:]


def public_key_from_private_hex(private_key: KeyInput) -> str:
    return to_hex(public_key_from_private(private_key))


# ---- Address ------------------------------------------------------------------


def address_from_public_key(
    public_key: KeyInput, *, hasher: Optional[AddressHasher] = None
) -> bytes:
    """
    Derive the 20-byte account address of a 32-byte public key.

    `hasher` defaults to SHA-256; any replacement must match the chain's
    reference implementation, a wrong digest yields a valid-looking wrong address.
    """
    raw = _as_bytes(public_key, "public key", PUBLIC_KEY_LENGTH)
    digest = (hasher or DEFAULT_ADDRESS_HASHER).digest(raw)
    if len(digest) < ADDRESS_LENGTH:
        raise InvalidKeyLengthError("address digest", ADDRESS_LENGTH, len(digest))
    return digest[:ADDRESS_LENGTH]


def get_address_from_public_key(
    public_key: KeyInput, *, hasher: Optional[AddressHasher] = None
) -> str:
    """Lowercase hex address (40 chars) for `public_key`."""
    return to_hex(address_from_public_key(public_key, hasher=hasher))


# ---- Validation ---------------------------------------------------------------


def validate_address(address: str, *, field: str = "address") -> str:
    """Return the lowercase form of a 40-char hex address, or raise InvalidFieldError."""
    if not isinstance(address, str) or not is_hex(address, length=ADDRESS_LENGTH * 2):
        raise InvalidFieldError(field, f"expected {ADDRESS_LENGTH * 2} hex characters, got {address!r}")
    return address.lower()


def is_valid_address(address: str) -> bool:
    return isinstance(address, str) and is_hex(address, length=ADDRESS_LENGTH * 2)
