from __future__ import annotations

from ...utils.proto import ProtoWriter
from .base import BaseTxEncoder


class ProtoSignDocTxEncoder(BaseTxEncoder):
    """
    Protobuf sign document:

        StdSignDoc{chain_id=1, fee=2 repeated Coin, memo=3, msg=4 Any, entropy=5 int64}

    Only selected when the chain has activated the `ProtoSignDoc` feature.
    """

    SCHEME = "proto-signdoc"

    def marshal_std_sign_doc(self) -> bytes:
        return (
            ProtoWriter()
            .string(1, self.chain_id)
            .message(2, self.fee_proto())
            .string(3, self.memo)
            .message(4, self.msg_any)
            .int64(5, self.entropy)
            .finish()
        )


__all__ = ["ProtoSignDocTxEncoder"]
