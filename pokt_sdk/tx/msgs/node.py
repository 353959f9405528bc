"""
Servicer (node) messages, in their post-8.0 form carrying an explicit signer
/ output address so non-custodial staking works.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from ...address import validate_address
from ...errors import InvalidFieldError
from ...utils.bytes import from_hex
from ...utils.proto import ProtoWriter
from ..models import REWARD_DELEGATOR_KEY, MsgKind
from .base import TxMsg, amino_pubkey, freeze_strings

_DEFAULT_PORTS = {"https": 443, "http": 80}


def normalize_service_url(url: str) -> str:
    """Render `scheme://host:port` the way the node stores service URLs."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise InvalidFieldError("service_url", str(e)) from e
    scheme = (parts.scheme or "").lower()
    if scheme not in _DEFAULT_PORTS:
        raise InvalidFieldError("service_url", f"unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidFieldError("service_url", "missing host")
    return f"{scheme}://{parts.hostname}:{port or _DEFAULT_PORTS[scheme]}"


@dataclass(frozen=True)
class MsgProtoNodeStakeTx(TxMsg):
    """
    Stake (or edit the stake of) a servicer.

    `reward_delegators` maps delegator addresses to their share of rewards in
    percent; it requires the RewardDelegator feature on chain.
    """

    KIND = MsgKind.NODE_STAKE
    AMINO_KEY = "pos/8.0MsgStake"
    KEY = "/x.nodes.MsgProtoStake8"

    node_pub_key: str
    output_address: str
    chains: Tuple[str, ...]
    amount: str
    service_url: str
    reward_delegators: Optional[Mapping[str, int]] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chains", freeze_strings(self.chains))
        if self.reward_delegators is not None:
            object.__setattr__(self, "reward_delegators", dict(self.reward_delegators))
        super().__post_init__()

    def validate(self) -> None:
        self._require_public_key("node_pub_key", self.node_pub_key)
        self._require_address("output_address", self.output_address)
        self._require_chains("chains", self.chains)
        self._require_amount("amount", self.amount)
        self._require("service_url", self.service_url)
        normalize_service_url(self.service_url)
        if self.reward_delegators:
            total = 0
            for addr, share in self.reward_delegators.items():
                validate_address(addr, field="reward_delegators")
                if isinstance(share, bool) or not isinstance(share, int) or not 1 <= share <= 100:
                    raise InvalidFieldError(
                        "reward_delegators", f"share for {addr} must be an int in [1, 100]", self.type_name
                    )
                total += share
            if total > 100:
                raise InvalidFieldError("reward_delegators", "shares add up to more than 100", self.type_name)

    def sign_doc_value(self) -> Dict[str, Any]:
        value: Dict[str, Any] = {
            "chains": list(self.chains),
            "output_address": self.output_address.lower(),
            "public_key": amino_pubkey(self.node_pub_key),
            "service_url": normalize_service_url(self.service_url),
            "value": self.amount,
        }
        if self.reward_delegators:
            value["reward_delegators"] = {k.lower(): v for k, v in self.reward_delegators.items()}
        return value

    def encode(self) -> bytes:
        delegators = {k.lower(): v for k, v in (self.reward_delegators or {}).items()}
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.node_pub_key))
            .repeated_string(2, self.chains)
            .string(3, self.amount)
            .string(4, normalize_service_url(self.service_url))
            .bytes(5, from_hex(self.output_address))
            .map_string_uint32(6, delegators)
            .finish()
        )

    def required_features(self) -> FrozenSet[str]:
        return frozenset({REWARD_DELEGATOR_KEY}) if self.reward_delegators else frozenset()


@dataclass(frozen=True)
class MsgProtoNodeUnstake(TxMsg):
    KIND = MsgKind.NODE_UNSTAKE
    AMINO_KEY = "pos/8.0MsgBeginUnstake"
    KEY = "/x.nodes.MsgBeginUnstake8"

    node_address: str
    signer_address: str

    def validate(self) -> None:
        self._require_address("node_address", self.node_address)
        self._require_address("signer_address", self.signer_address)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "signer_address": self.signer_address.lower(),
            "validator_address": self.node_address.lower(),
        }

    def encode(self) -> bytes:
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.node_address))
            .bytes(2, from_hex(self.signer_address))
            .finish()
        )


@dataclass(frozen=True)
class MsgProtoNodeUnjail(TxMsg):
    KIND = MsgKind.NODE_UNJAIL
    AMINO_KEY = "pos/8.0MsgUnjail"
    KEY = "/x.nodes.MsgUnjail8"

    node_address: str
    signer_address: str

    def validate(self) -> None:
        self._require_address("node_address", self.node_address)
        self._require_address("signer_address", self.signer_address)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "address": self.node_address.lower(),
            "signer_address": self.signer_address.lower(),
        }

    def encode(self) -> bytes:
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.node_address))
            .bytes(2, from_hex(self.signer_address))
            .finish()
        )


__all__ = [
    "normalize_service_url",
    "MsgProtoNodeStakeTx",
    "MsgProtoNodeUnstake",
    "MsgProtoNodeUnjail",
]
