"""
pokt_sdk.tx.encoders.base
=========================

Shared half of every encoding scheme.

A scheme decides how the *sign document* is serialized (`marshal_std_sign_doc`);
the signed wire transaction is the same for every scheme:

    final = uvarint(len(tx)) || tx
    tx    = StdTx{ msg=1 Any, fee=2 repeated Coin{denom=1, amount=2},
                   signature=3 {publicKey=1, Signature=2}, memo=4, entropy=5 int64 }

Encoders are single-use: one is created per build and holds only the inputs of
that build.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Type

from ...errors import (
    EncodingError,
    InvalidAmountError,
    InvalidFieldError,
    MalformedValueError,
    MissingFieldError,
    UnsupportedMessageError,
)
from ...utils.bytes import uvarint_encode
from ...utils.proto import ProtoWriter
from ..models import CoinDenom, FeatureActivation, MsgKind, TxSignature, coins
from ..msgs import ALL_MSG_TYPES, TxMsg

_FEE_RE = re.compile(r"[1-9][0-9]*")

# Every scheme currently understands the full message set.
DEFAULT_DISPATCH: Mapping[Type[TxMsg], MsgKind] = {cls: cls.KIND for cls in ALL_MSG_TYPES}


def encode_coin(amount: str, denom: str) -> bytes:
    return ProtoWriter().string(1, denom).string(2, amount).finish()


class BaseTxEncoder(ABC):
    """One build's worth of encoding state."""

    SCHEME: ClassVar[str] = ""
    DISPATCH: ClassVar[Mapping[Type[TxMsg], MsgKind]] = DEFAULT_DISPATCH

    def __init__(
        self,
        entropy: int | str,
        chain_id: str,
        msg: TxMsg,
        fee: str,
        fee_denom: str | CoinDenom = CoinDenom.UPOKT,
        memo: str = "",
        *,
        activation: FeatureActivation | None = None,
    ) -> None:
        self.entropy = self._check_entropy(entropy)
        self.chain_id = chain_id
        self.msg = msg
        self.fee = self._check_fee(fee)
        self.fee_denom = fee_denom.value if isinstance(fee_denom, CoinDenom) else str(fee_denom)
        self.memo = memo or ""
        self.activation = activation or FeatureActivation()
        self._check_supported(msg)
        # rendered once so encoding failures surface before anything is signed
        self.msg_any = self._render_msg(msg)

    # ---- input checks ----

    @staticmethod
    def _check_entropy(entropy: int | str) -> int:
        try:
            value = int(entropy)
        except (TypeError, ValueError) as e:
            raise InvalidFieldError("entropy", f"not an integer: {entropy!r}") from e
        if not -(1 << 63) <= value < (1 << 63):
            raise InvalidFieldError("entropy", "must fit in a signed 64-bit integer")
        return value

    @staticmethod
    def _check_fee(fee: Any) -> str:
        if fee is None or fee == "":
            raise MissingFieldError("fee")
        if isinstance(fee, int) and not isinstance(fee, bool):
            fee = str(fee)
        if not isinstance(fee, str) or _FEE_RE.fullmatch(fee) is None:
            raise InvalidAmountError("fee", fee)
        return fee

    def _check_supported(self, msg: TxMsg) -> None:
        kind = self.DISPATCH.get(type(msg))
        if kind is None:
            raise UnsupportedMessageError(type(msg).__name__, self.SCHEME)
        if kind is not msg.kind:
            raise UnsupportedMessageError(
                type(msg).__name__, self.SCHEME, reason=f"kind {msg.kind.value!r} does not match {kind.value!r}"
            )
        missing = self.missing_features(msg.required_features())
        if missing:
            raise UnsupportedMessageError(
                type(msg).__name__,
                self.SCHEME,
                reason=f"requires inactive feature(s): {', '.join(sorted(missing))}",
            )

    def _render_msg(self, msg: TxMsg) -> bytes:
        try:
            return msg.to_proto_any()
        except EncodingError:
            raise
        except (ValueError, TypeError, AttributeError) as e:
            raise MalformedValueError(f"{type(msg).__name__} cannot be encoded: {e}") from e

    def missing_features(self, required: FrozenSet[str]) -> FrozenSet[str]:
        return frozenset(k for k in required if not self.activation.is_active(k))

    # ---- shared renderings ----

    def fee_obj(self) -> List[Dict[str, str]]:
        return coins(self.fee, self.fee_denom)

    def fee_proto(self) -> bytes:
        return encode_coin(self.fee, self.fee_denom)

    # ---- scheme API ----

    @abstractmethod
    def marshal_std_sign_doc(self) -> bytes:
        """Bytes the signer must sign."""

    def marshal_std_tx(self, signature: TxSignature) -> bytes:
        """Length-prefixed StdTx carrying `signature`."""
        sig = (
            ProtoWriter()
            .bytes(1, signature.pub_key)
            .bytes(2, signature.signature)
            .finish()
        )
        tx = (
            ProtoWriter()
            .message(1, self.msg_any)
            .message(2, self.fee_proto())
            .message(3, sig)
            .string(4, self.memo)
            .int64(5, self.entropy)
            .finish()
        )
        return uvarint_encode(len(tx)) + tx

    # Names used by the node docs.
    def sign_bytes(self) -> bytes:
        return self.marshal_std_sign_doc()

    def final_bytes(self, signature: TxSignature) -> bytes:
        return self.marshal_std_tx(signature)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(chain_id={self.chain_id!r}, msg={self.msg.type_name}, "
            f"fee={self.fee}{self.fee_denom}, memo_len={len(self.memo)})"
        )


__all__ = ["BaseTxEncoder", "DEFAULT_DISPATCH", "encode_coin"]
