from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

from .bytes import BytesLike, ensure_bytes, to_hex


@runtime_checkable
class AddressHasher(Protocol):
    """
    Digest used to turn a public key into an account address.

    The algorithm is fixed by the chain; swapping it produces well-formed but
    wrong addresses, so implementations must match the node exactly.
    """

    name: str

    def digest(self, data: bytes) -> bytes: ...


# --- SHA-256 (Tendermint ed25519 address hash) ---------------------------------


def sha256(data: BytesLike) -> bytes:
    """Return SHA-256 digest of *data* (bytes)."""
    h = hashlib.sha256()
    h.update(ensure_bytes(data))
    return h.digest()


def sha256_hex(data: BytesLike, *, prefix: bool = False) -> str:
    return to_hex(sha256(data), prefix=prefix)


class Sha256Hasher:
    """SHA-256, the digest Pocket (Tendermint) uses for ed25519 addresses."""

    __slots__ = ()

    name = "sha256"

    def digest(self, data: bytes) -> bytes:
        return sha256(data)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "Sha256Hasher()"


DEFAULT_ADDRESS_HASHER: AddressHasher = Sha256Hasher()


__all__ = [
    "AddressHasher",
    "Sha256Hasher",
    "DEFAULT_ADDRESS_HASHER",
    "sha256",
    "sha256_hex",
]
