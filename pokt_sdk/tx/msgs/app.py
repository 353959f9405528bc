"""
Application messages: stake, slot transfer, begin-unstake.

An app transfer reuses the app-stake message: staking a *new* public key with
no chains and a zero value, signed by the currently staked app, moves the slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Tuple

from ...utils.bytes import from_hex
from ...utils.proto import ProtoWriter
from ..models import APP_TRANSFER_KEY, MsgKind
from .base import TxMsg, amino_pubkey, freeze_strings

_APP_STAKE_AMINO_KEY = "apps/MsgAppStake"
_APP_STAKE_KEY = "/x.apps.MsgProtoStake"


def _encode_app_stake(public_key: str, chains: Tuple[str, ...], value: str) -> bytes:
    return (
        ProtoWriter()
        .bytes(1, from_hex(public_key))
        .repeated_string(2, chains)
        .string(3, value)
        .finish()
    )


@dataclass(frozen=True)
class MsgProtoAppStake(TxMsg):
    KIND = MsgKind.APP_STAKE
    AMINO_KEY = _APP_STAKE_AMINO_KEY
    KEY = _APP_STAKE_KEY

    app_pub_key: str
    chains: Tuple[str, ...]
    amount: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "chains", freeze_strings(self.chains))
        super().__post_init__()

    def validate(self) -> None:
        self._require_public_key("app_pub_key", self.app_pub_key)
        self._require_chains("chains", self.chains)
        self._require_amount("amount", self.amount)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "chains": list(self.chains),
            "pubkey": amino_pubkey(self.app_pub_key),
            "value": self.amount,
        }

    def encode(self) -> bytes:
        return _encode_app_stake(self.app_pub_key, self.chains, self.amount)


@dataclass(frozen=True)
class MsgProtoAppTransfer(TxMsg):
    """Transfer the signer's staked app slot to `app_pub_key`."""

    KIND = MsgKind.APP_TRANSFER
    AMINO_KEY = _APP_STAKE_AMINO_KEY
    KEY = _APP_STAKE_KEY

    app_pub_key: str

    def validate(self) -> None:
        self._require_public_key("app_pub_key", self.app_pub_key)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "chains": None,
            "pubkey": amino_pubkey(self.app_pub_key),
            "value": "0",
        }

    def encode(self) -> bytes:
        return _encode_app_stake(self.app_pub_key, (), "0")

    def required_features(self) -> FrozenSet[str]:
        return frozenset({APP_TRANSFER_KEY})


@dataclass(frozen=True)
class MsgProtoAppUnstake(TxMsg):
    KIND = MsgKind.APP_UNSTAKE
    AMINO_KEY = "apps/MsgAppBeginUnstake"
    KEY = "/x.apps.MsgBeginUnstake"

    app_address: str

    def validate(self) -> None:
        self._require_address("app_address", self.app_address)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {"application_address": self.app_address.lower()}

    def encode(self) -> bytes:
        return ProtoWriter().bytes(1, from_hex(self.app_address)).finish()


__all__ = ["MsgProtoAppStake", "MsgProtoAppTransfer", "MsgProtoAppUnstake"]
