"""
Transaction messages.

The set is closed: encoders dispatch on the concrete class and refuse anything
not listed in `ALL_MSG_TYPES`.
"""

from __future__ import annotations

from .app import MsgProtoAppStake, MsgProtoAppTransfer, MsgProtoAppUnstake
from .base import TxMsg, amino_pubkey, freeze_strings
from .gov import MsgProtoGovChangeParam, MsgProtoGovDAOTransfer, MsgProtoGovUpgrade
from .node import MsgProtoNodeStakeTx, MsgProtoNodeUnjail, MsgProtoNodeUnstake, normalize_service_url
from .send import MsgProtoSend

ALL_MSG_TYPES = (
    MsgProtoSend,
    MsgProtoAppStake,
    MsgProtoAppTransfer,
    MsgProtoAppUnstake,
    MsgProtoNodeStakeTx,
    MsgProtoNodeUnstake,
    MsgProtoNodeUnjail,
    MsgProtoGovDAOTransfer,
    MsgProtoGovChangeParam,
    MsgProtoGovUpgrade,
)

__all__ = [
    "TxMsg",
    "amino_pubkey",
    "freeze_strings",
    "normalize_service_url",
    "ALL_MSG_TYPES",
    "MsgProtoSend",
    "MsgProtoAppStake",
    "MsgProtoAppTransfer",
    "MsgProtoAppUnstake",
    "MsgProtoNodeStakeTx",
    "MsgProtoNodeUnstake",
    "MsgProtoNodeUnjail",
    "MsgProtoGovDAOTransfer",
    "MsgProtoGovChangeParam",
    "MsgProtoGovUpgrade",
]
