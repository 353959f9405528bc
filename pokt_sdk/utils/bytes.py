from __future__ import annotations

import re
from typing import Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      ValueError on invalid hex strings.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def to_hex(b: BytesLike, prefix: bool = False) -> str:
    """
    Bytes -> hex string (lowercase). Pocket renders hex without a '0x' prefix,
    so the prefix is opt-in.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even-length (nibbles must pair to bytes) and lowercase/uppercase agnostic.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 != 0:
        raise ValueError("hex string must have even length")
    if _HEX_RE.fullmatch(s) is None:
        raise ValueError(f"invalid hex string: {s!r}")
    return bytes.fromhex(s)


def is_hex(s: str, *, length: int | None = None) -> bool:
    """True if `s` is an unprefixed hex string (of exactly `length` chars, if given)."""
    if not isinstance(s, str) or len(s) % 2 != 0:
        return False
    if length is not None and len(s) != length:
        return False
    return _HEX_RE.fullmatch(s) is not None


# --- Unsigned varint (LEB128) -------------------------------------------------


def uvarint_encode(n: int) -> bytes:
    """
    Encode an unsigned integer using LEB128 (base-128 varint).

    This is the protobuf varint and the length prefix Pocket puts in front of
    an encoded transaction.

    Example:
        0x00 -> b'\\x00'
        0x7f -> b'\\x7f'
        0x80 -> b'\\x80\\x01'
    """
    if n < 0:
        raise ValueError("uvarint_encode expects a non-negative integer")
    out = bytearray()
    while True:
        to_write = n & 0x7F
        n >>= 7
        if n:
            out.append(to_write | 0x80)  # set continuation bit
        else:
            out.append(to_write)
            break
    return bytes(out)


def uvarint_decode(b: BytesLike, *, offset: int = 0) -> Tuple[int, int]:
    """
    Decode an unsigned LEB128 varint from bytes starting at `offset`.

    Returns:
        (value, length_consumed)

    Raises:
        ValueError if the varint is malformed or overflows 64-bit.
    """
    result = 0
    shift = 0
    b = memoryview(b)[offset:].tobytes()

    for consumed, byte in enumerate(b, start=1):
        result |= (byte & 0x7F) << shift
        if (byte & 0x80) == 0:
            return result, consumed
        shift += 7
        if shift >= 64:
            raise ValueError("uvarint too large (exceeds 64 bits)")
    raise ValueError("truncated uvarint (input ended before termination byte)")


__all__ = [
    "BytesLike",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "is_hex",
    "uvarint_encode",
    "uvarint_decode",
]
