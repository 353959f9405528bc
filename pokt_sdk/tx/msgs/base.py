"""
Base class and field checks shared by every transaction message.

A message is a frozen dataclass that validates itself on construction and
knows three renderings of itself:

- `to_sign_doc_obj()` : amino JSON `{"type": ..., "value": {...}}` placed in the sign document
- `encode()`          : its own protobuf payload
- `to_proto_any()`    : that payload wrapped in `Any{type_url, value}` for the StdTx
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Tuple

from ...address import PUBLIC_KEY_LENGTH, validate_address
from ...errors import InvalidAmountError, InvalidFieldError, MissingFieldError
from ...utils.bytes import is_hex
from ...utils.proto import encode_any
from ..models import ED25519_PUBKEY_AMINO_TYPE, MsgKind

# positive decimal integer without leading zeros, as the node re-renders it
_AMOUNT_RE = re.compile(r"[1-9][0-9]*")


class TxMsg(ABC):
    """One on-chain message; subclasses are the closed set in `pokt_sdk.tx.msgs`."""

    KIND: ClassVar[MsgKind]
    AMINO_KEY: ClassVar[str]
    KEY: ClassVar[str]

    def __post_init__(self) -> None:
        self.validate()

    @property
    def kind(self) -> MsgKind:
        return self.KIND

    @property
    def type_name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def validate(self) -> None:
        """Raise a TxValidationError subclass when a field is absent or malformed."""

    @abstractmethod
    def sign_doc_value(self) -> Dict[str, Any]: ...

    @abstractmethod
    def encode(self) -> bytes: ...

    def to_sign_doc_obj(self) -> Dict[str, Any]:
        return {"type": self.AMINO_KEY, "value": self.sign_doc_value()}

    def to_proto_any(self) -> bytes:
        return encode_any(self.KEY, self.encode())

    def required_features(self) -> FrozenSet[str]:
        """Feature keys that must be active on the chain for this message to be valid."""
        return frozenset()

    # ---- field checks ----

    def _require(self, field: str, value: Any) -> None:
        if value is None or (isinstance(value, (str, bytes, list, tuple, dict)) and len(value) == 0):
            raise MissingFieldError(field, self.type_name)

    def _require_address(self, field: str, value: Any) -> None:
        self._require(field, value)
        validate_address(value, field=field)

    def _require_public_key(self, field: str, value: Any) -> None:
        self._require(field, value)
        if not isinstance(value, str) or not is_hex(value, length=PUBLIC_KEY_LENGTH * 2):
            raise InvalidFieldError(
                field, f"expected {PUBLIC_KEY_LENGTH * 2} hex characters", self.type_name
            )

    def _require_amount(self, field: str, value: Any) -> None:
        if value is None or value == "":
            raise MissingFieldError(field, self.type_name)
        if not isinstance(value, str) or _AMOUNT_RE.fullmatch(value) is None:
            raise InvalidAmountError(field, value, self.type_name)

    def _require_chains(self, field: str, chains: Iterable[str]) -> None:
        self._require(field, chains)
        for chain in chains:
            if not isinstance(chain, str) or not chain:
                raise InvalidFieldError(field, f"invalid chain identifier {chain!r}", self.type_name)


def freeze_strings(values: Any) -> Tuple[str, ...]:
    """Tuple view of a chain/feature list; a bare string counts as one item."""
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def amino_pubkey(public_key_hex: str) -> Dict[str, str]:
    return {"type": ED25519_PUBKEY_AMINO_TYPE, "value": public_key_hex.lower()}


__all__ = ["TxMsg", "amino_pubkey", "freeze_strings"]
