from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ...errors import InvalidFieldError
from ...utils.bytes import from_hex
from ...utils.proto import ProtoWriter
from ..models import MsgKind
from .base import TxMsg


@dataclass(frozen=True)
class MsgProtoSend(TxMsg):
    """Transfer `amount` uPOKT from `from_address` to `to_address`."""

    KIND = MsgKind.SEND
    AMINO_KEY = "pos/Send"
    KEY = "/x.nodes.MsgSend"

    from_address: str
    to_address: str
    amount: str

    def validate(self) -> None:
        self._require_address("from_address", self.from_address)
        self._require_address("to_address", self.to_address)
        if self.from_address.lower() == self.to_address.lower():
            raise InvalidFieldError("to_address", "cannot be equal to from_address", self.type_name)
        self._require_amount("amount", self.amount)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "from_address": self.from_address.lower(),
            "to_address": self.to_address.lower(),
        }

    def encode(self) -> bytes:
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.from_address))
            .bytes(2, from_hex(self.to_address))
            .string(3, self.amount)
            .finish()
        )


__all__ = ["MsgProtoSend"]
