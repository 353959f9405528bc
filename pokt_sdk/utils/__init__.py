"""
pokt_sdk.utils
==============

Small, dependency-free helpers shared by the SDK:

- bytes     : hex <-> bytes, unsigned varints
- hash      : address hash abstraction (SHA-256)
- canonical : canonical (sorted-key) JSON stringifier
- proto     : deterministic protobuf wire writer
"""

from __future__ import annotations

from .bytes import ensure_bytes, from_hex, is_hex, to_hex, uvarint_decode, uvarint_encode  # noqa: F401
from .canonical import canonicalize, stringify_object_with_sort  # noqa: F401
from .hash import DEFAULT_ADDRESS_HASHER, AddressHasher, Sha256Hasher, sha256  # noqa: F401

__all__ = [
    "ensure_bytes",
    "from_hex",
    "is_hex",
    "to_hex",
    "uvarint_encode",
    "uvarint_decode",
    "canonicalize",
    "stringify_object_with_sort",
    "AddressHasher",
    "Sha256Hasher",
    "DEFAULT_ADDRESS_HASHER",
    "sha256",
]
