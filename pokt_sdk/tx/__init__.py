"""
pokt_sdk.tx
===========

- models   : value types and protocol constants
- msgs     : the transaction message variants
- encoders : sign-document / wire encoding schemes and their selection
- entropy  : per-transaction nonce source
- builder  : TransactionBuilder (validate -> encode -> sign -> assemble)
"""

from __future__ import annotations

from .builder import TransactionBuilder
from .encoders import TxEncoderFactory
from .entropy import EntropySource, RandomEntropy
from .models import (
    DEFAULT_BASE_FEE,
    CoinDenom,
    DAOAction,
    FeatureActivation,
    GovParameter,
    MsgKind,
    RawTxRequest,
    TransactionResponse,
    TxSignature,
)
from .msgs import *  # noqa: F401,F403
from .msgs import __all__ as _msgs_all

__all__ = [
    "TransactionBuilder",
    "TxEncoderFactory",
    "EntropySource",
    "RandomEntropy",
    "DEFAULT_BASE_FEE",
    "CoinDenom",
    "DAOAction",
    "FeatureActivation",
    "GovParameter",
    "MsgKind",
    "RawTxRequest",
    "TransactionResponse",
    "TxSignature",
    *_msgs_all,
]
