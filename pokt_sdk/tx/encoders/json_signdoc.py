from __future__ import annotations

from typing import Any, Dict

from ...utils.canonical import canonicalize
from .base import BaseTxEncoder


class JsonSignDocTxEncoder(BaseTxEncoder):
    """
    Amino-JSON sign document, the format every Pocket chain verifies by default.

    The node rebuilds this document from the decoded StdTx and compares bytes,
    so entropy is a *string* here even though it is an int64 on the wire.
    """

    SCHEME = "json-signdoc"

    def sign_doc(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "entropy": str(self.entropy),
            "fee": self.fee_obj(),
            "memo": self.memo,
            "msg": self.msg.to_sign_doc_obj(),
        }

    def marshal_std_sign_doc(self) -> bytes:
        return canonicalize(self.sign_doc()).encode("utf-8")


__all__ = ["JsonSignDocTxEncoder"]
