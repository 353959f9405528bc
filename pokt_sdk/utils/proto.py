"""
Deterministic protobuf (proto3) wire writer.

Goals
-----
- Produce byte-for-byte the encoding Pocket nodes decode, so the node sees
  exactly what was signed.
- Cover only what Pocket messages need: varint ints, bytes, strings, embedded
  messages, repeated strings and `map<string, uint32>`.

Rules
-----
- Fields are written in ascending field-number order (callers add them in
  that order).
- proto3 scalar defaults (0, "", b"") are omitted; embedded messages are
  always written when present, even when empty.
- Map entries are sorted by key so identical maps encode identically.

API
---
- ProtoWriter: chained field writers, `finish() -> bytes`
- encode_any(type_url, value) -> bytes
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Union

from .bytes import BytesLike, ensure_bytes, uvarint_encode

__all__ = [
    "WIRE_VARINT",
    "WIRE_LEN",
    "ProtoWriter",
    "encode_any",
]

WIRE_VARINT = 0
WIRE_LEN = 2

_UINT64_MAX = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT32_MAX = (1 << 32) - 1


def _key(field: int, wire: int) -> bytes:
    if field <= 0:
        raise ValueError("protobuf field numbers start at 1")
    return uvarint_encode((field << 3) | wire)


class ProtoWriter:
    """Append-only writer for a single protobuf message."""

    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    # ---- scalars ----

    def uint64(self, field: int, value: int) -> "ProtoWriter":
        value = int(value)
        if not 0 <= value <= _UINT64_MAX:
            raise ValueError(f"uint64 out of range: {value}")
        if value:
            self._buf += _key(field, WIRE_VARINT) + uvarint_encode(value)
        return self

    def uint32(self, field: int, value: int) -> "ProtoWriter":
        value = int(value)
        if not 0 <= value <= _UINT32_MAX:
            raise ValueError(f"uint32 out of range: {value}")
        return self.uint64(field, value)

    def int64(self, field: int, value: int) -> "ProtoWriter":
        value = int(value)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"int64 out of range: {value}")
        if value:
            # negative int64 is sent as its 64-bit two's complement (10 bytes)
            self._buf += _key(field, WIRE_VARINT) + uvarint_encode(value & _UINT64_MAX)
        return self

    def bytes(self, field: int, value: Optional[Union[BytesLike, str]]) -> "ProtoWriter":
        raw = ensure_bytes(value) if value is not None else b""
        if raw:
            self._buf += _key(field, WIRE_LEN) + uvarint_encode(len(raw)) + raw
        return self

    def string(self, field: int, value: Optional[str]) -> "ProtoWriter":
        if value:
            raw = value.encode("utf-8")
            self._buf += _key(field, WIRE_LEN) + uvarint_encode(len(raw)) + raw
        return self

    # ---- composites ----

    def message(self, field: int, encoded: BytesLike) -> "ProtoWriter":
        """Write an already-encoded embedded message (always emitted)."""
        raw = bytes(encoded)
        self._buf += _key(field, WIRE_LEN) + uvarint_encode(len(raw)) + raw
        return self

    def repeated_string(self, field: int, values: Iterable[str]) -> "ProtoWriter":
        for v in values:
            raw = v.encode("utf-8")
            self._buf += _key(field, WIRE_LEN) + uvarint_encode(len(raw)) + raw
        return self

    def map_string_uint32(self, field: int, values: Optional[Mapping[str, int]]) -> "ProtoWriter":
        for k in sorted(values or {}):
            entry = ProtoWriter().string(1, k).uint32(2, values[k]).finish()  # type: ignore[index]
            self.message(field, entry)
        return self

    def finish(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


def encode_any(type_url: str, value: BytesLike) -> bytes:
    """google.protobuf.Any{type_url=1, value=2}."""
    return ProtoWriter().string(1, type_url).bytes(2, value).finish()
