"""
pokt_sdk.wallet.signer
======================

Signer capability and an in-memory Ed25519 implementation.

The transaction builder only needs three things from a signer: sign a
hex-encoded payload, report the signing public key and report the account
address. Anything satisfying `AbstractSigner` (hardware wallet bridge, remote
KMS, ...) can stand in for `KeyManager`.

Key features
------------
- Ed25519 via `cryptography` (deterministic signatures, RFC 8032)
- Import of the 64-byte expanded private key Pocket tooling exports
- Consistency check between the seed half and the embedded public key

Notes
-----
- `KeyManager` holds the private key in process memory and nothing else; it
  never writes key material anywhere and never logs it.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from ..address import (
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    get_address_from_public_key,
    public_key_from_private,
)
from ..errors import InvalidKeyError
from ..utils.bytes import BytesLike, from_hex, to_hex
from ..utils.hash import AddressHasher

__all__ = ["AbstractSigner", "KeyManager"]


@runtime_checkable
class AbstractSigner(Protocol):
    async def sign(self, payload_hex: str) -> str:
        """Return the hex signature over the bytes encoded by `payload_hex`."""
        ...

    def get_public_key(self) -> str: ...

    def get_address(self) -> str: ...


def _raw_public(key: Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class KeyManager:
    """
    Ed25519 signer over a Pocket private key.

    Parameters
    ----------
    private_key : bytes | str
        64-byte expanded key `seed || public_key` (hex or raw).
    hasher : AddressHasher, optional
        Address digest override; defaults to SHA-256.
    """

    __slots__ = ("_key", "_private", "_public", "_address")

    def __init__(self, private_key: BytesLike | str, *, hasher: Optional[AddressHasher] = None) -> None:
        public = public_key_from_private(private_key)
        raw = from_hex(private_key) if isinstance(private_key, str) else bytes(private_key)
        seed = raw[: PRIVATE_KEY_LENGTH - PUBLIC_KEY_LENGTH]
        key = Ed25519PrivateKey.from_private_bytes(seed)
        if _raw_public(key) != public:
            raise InvalidKeyError("private key seed does not produce the embedded public key")
        self._key = key
        self._private = raw
        self._public = public
        self._address = get_address_from_public_key(public, hasher=hasher)

    # ---- constructors ----

    @classmethod
    def from_private_key(cls, private_key: BytesLike | str, *, hasher: Optional[AddressHasher] = None) -> "KeyManager":
        return cls(private_key, hasher=hasher)

    @classmethod
    def create_random(cls, *, hasher: Optional[AddressHasher] = None) -> "KeyManager":
        key = Ed25519PrivateKey.generate()
        seed = key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(seed + _raw_public(key), hasher=hasher)

    # ---- AbstractSigner ----

    async def sign(self, payload_hex: str) -> str:
        return to_hex(self.sign_bytes(from_hex(payload_hex)))

    def sign_bytes(self, payload: bytes) -> bytes:
        return self._key.sign(bytes(payload))

    def get_public_key(self) -> str:
        return to_hex(self._public)

    def get_address(self) -> str:
        return self._address

    def get_private_key(self) -> str:
        return to_hex(self._private)

    def __repr__(self) -> str:
        return f"KeyManager(address={self._address})"
