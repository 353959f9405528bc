from __future__ import annotations

from .base import DEFAULT_DISPATCH, BaseTxEncoder, encode_coin
from .factory import CHAIN_SCHEMES, SchemeRule, TxEncoderFactory, select_scheme
from .json_signdoc import JsonSignDocTxEncoder
from .proto_signdoc import ProtoSignDocTxEncoder

__all__ = [
    "BaseTxEncoder",
    "DEFAULT_DISPATCH",
    "encode_coin",
    "JsonSignDocTxEncoder",
    "ProtoSignDocTxEncoder",
    "SchemeRule",
    "CHAIN_SCHEMES",
    "select_scheme",
    "TxEncoderFactory",
]
