"""
pokt_sdk.tx.models
==================

Value types shared by the message model, the encoders and the builder.

- ChainID / SUPPORTED_CHAIN_IDS
- CoinDenom, DAOAction, GovParameter, MsgKind
- FeatureActivation       : chain height + active feature keys (scheme selection)
- TxSignature             : public key + signature bytes for one build
- RawTxRequest            : terminal artifact handed to the provider
- TransactionResponse     : provider's answer to a broadcast
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Literal, Optional


ChainID = Literal["mainnet", "testnet", "localnet"]
SUPPORTED_CHAIN_IDS: tuple = ("mainnet", "testnet", "localnet")

# Default Pocket base fee, in uPOKT.
# Anything above 10k uPOKT overpays: blocks are not ordered by fee.
DEFAULT_BASE_FEE = "10000"

# Governance upgrades that only toggle features use these sentinels.
FEATURE_UPGRADE_KEY = "FEATURE"
FEATURE_UPGRADE_ONLY_HEIGHT = 1
OLD_UPGRADE_HEIGHT_EMPTY_VALUE = 0

# Feature keys gating message variants and encoding schemes.
REWARD_DELEGATOR_KEY = "RewardDelegator"
APP_TRANSFER_KEY = "AppTransfer"
PROTO_SIGN_DOC_KEY = "ProtoSignDoc"

# Features every supported chain has activated. PROTO_SIGN_DOC_KEY is opt-in.
DEFAULT_FEATURES: FrozenSet[str] = frozenset({REWARD_DELEGATOR_KEY, APP_TRANSFER_KEY})

ED25519_PUBKEY_AMINO_TYPE = "crypto/ed25519_public_key"


class CoinDenom(str, Enum):
    UPOKT = "upokt"
    POKT = "pokt"


class DAOAction(str, Enum):
    TRANSFER = "dao_transfer"
    BURN = "dao_burn"


class MsgKind(str, Enum):
    """Discriminant of the closed set of transaction messages."""

    SEND = "send"
    APP_STAKE = "app_stake"
    APP_TRANSFER = "app_transfer"
    APP_UNSTAKE = "app_unstake"
    NODE_STAKE = "node_stake"
    NODE_UNSTAKE = "node_unstake"
    NODE_UNJAIL = "node_unjail"
    GOV_DAO_TRANSFER = "gov_dao_transfer"
    GOV_CHANGE_PARAM = "gov_change_param"
    GOV_UPGRADE = "gov_upgrade"


class GovParameter(str, Enum):
    """On-chain parameters a MsgChangeParam may target without overriding validation."""

    APPLICATION_STAKE_MINIMUM = "application/ApplicationStakeMinimum"
    APP_UNSTAKING_TIME = "application/AppUnstakingTime"
    BASE_RELAYS_PER_POKT = "application/BaseRelaysPerPOKT"
    MAX_APPLICATIONS = "application/MaxApplications"
    APP_MAXIMUM_CHAINS = "application/MaximumChains"
    PARTICIPATION_RATE_ON = "application/ParticipationRateOn"
    STABILITY_ADJUSTMENT = "application/StabilityAdjustment"
    FEE_MULTIPLIERS = "auth/FeeMultipliers"
    MAX_MEMO_CHARACTERS = "auth/MaxMemoCharacters"
    TX_SIG_LIMIT = "auth/TxSigLimit"
    ACL = "gov/acl"
    DAO_OWNER = "gov/daoOwner"
    UPGRADE = "gov/upgrade"
    BLOCK_BYTE_SIZE = "pocketcore/BlockByteSize"
    CLAIM_EXPIRATION = "pocketcore/ClaimExpiration"
    CLAIM_SUBMISSION_WINDOW = "pocketcore/ClaimSubmissionWindow"
    MINIMUM_NUMBER_OF_PROOFS = "pocketcore/MinimumNumberOfProofs"
    REPLAY_ATTACK_BURN_MULTIPLIER = "pocketcore/ReplayAttackBurnMultiplier"
    SESSION_NODE_COUNT = "pocketcore/SessionNodeCount"
    SUPPORTED_BLOCKCHAINS = "pocketcore/SupportedBlockchains"
    BLOCKS_PER_SESSION = "pos/BlocksPerSession"
    DAO_ALLOCATION = "pos/DAOAllocation"
    DOWNTIME_JAIL_DURATION = "pos/DowntimeJailDuration"
    MAX_EVIDENCE_AGE = "pos/MaxEvidenceAge"
    MAX_JAILED_BLOCKS = "pos/MaxJailedBlocks"
    MAX_VALIDATORS = "pos/MaxValidators"
    NODE_MAXIMUM_CHAINS = "pos/MaximumChains"
    MIN_SIGNED_PER_WINDOW = "pos/MinSignedPerWindow"
    PROPOSER_PERCENTAGE = "pos/ProposerPercentage"
    RELAYS_TO_TOKENS_MULTIPLIER = "pos/RelaysToTokensMultiplier"
    SERVICER_STAKE_FLOOR_MULTIPLIER = "pos/ServicerStakeFloorMultiplier"
    SERVICER_STAKE_FLOOR_MULTIPLIER_EXPONENT = "pos/ServicerStakeFloorMultiplierExponent"
    SERVICER_STAKE_WEIGHT_CEILING = "pos/ServicerStakeWeightCeiling"
    SERVICER_STAKE_WEIGHT_MULTIPLIER = "pos/ServicerStakeWeightMultiplier"
    SIGNED_BLOCKS_WINDOW = "pos/SignedBlocksWindow"
    SLASH_FRACTION_DOUBLE_SIGN = "pos/SlashFractionDoubleSign"
    SLASH_FRACTION_DOWNTIME = "pos/SlashFractionDowntime"
    STAKE_DENOM = "pos/StakeDenom"
    STAKE_MINIMUM = "pos/StakeMinimum"
    UNSTAKING_TIME = "pos/UnstakingTime"

    @classmethod
    def values(cls) -> FrozenSet[str]:
        return frozenset(m.value for m in cls)


@dataclass(frozen=True)
class FeatureActivation:
    """
    Protocol activation state used to pick an encoding scheme.

    `height=None` means "chain tip"; `features=None` means the default feature
    set every supported chain has activated (`DEFAULT_FEATURES`).
    """

    height: Optional[int] = None
    features: Optional[FrozenSet[str]] = None

    def __post_init__(self) -> None:
        if self.height is not None and int(self.height) < 0:
            raise ValueError("activation height must be non-negative")
        if self.features is not None and not isinstance(self.features, frozenset):
            object.__setattr__(self, "features", frozenset(self.features))

    @classmethod
    def with_features(cls, *keys: str, height: Optional[int] = None) -> "FeatureActivation":
        """Default feature set plus `keys`."""
        return cls(height=height, features=DEFAULT_FEATURES | frozenset(keys))

    def active_features(self) -> FrozenSet[str]:
        return DEFAULT_FEATURES if self.features is None else self.features

    def is_active(self, key: str) -> bool:
        return key in self.active_features()

    def reached(self, height: int) -> bool:
        return self.height is None or self.height >= height


@dataclass(frozen=True)
class TxSignature:
    """Signature produced for one build: raw public key and raw signature bytes."""

    pub_key: bytes
    signature: bytes


@dataclass(frozen=True)
class RawTxRequest:
    """Signed transaction ready for broadcast."""

    address: str
    tx_hex: str

    def to_json(self) -> Dict[str, str]:
        return {"address": self.address, "raw_hex_bytes": self.tx_hex}


@dataclass(frozen=True)
class TransactionResponse:
    tx_hash: str
    logs: Optional[List[Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "TransactionResponse":
        return cls(tx_hash=str(obj["txhash"]), logs=obj.get("logs"), raw=dict(obj))


def coins(amount: str, denom: str | CoinDenom) -> List[Dict[str, str]]:
    """Amino JSON rendering of a single-coin fee."""
    d = denom.value if isinstance(denom, CoinDenom) else str(denom)
    return [{"amount": str(amount), "denom": d}]


def normalize_features(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(v.strip() for v in values if v and v.strip())


__all__ = [
    "ChainID",
    "SUPPORTED_CHAIN_IDS",
    "DEFAULT_BASE_FEE",
    "FEATURE_UPGRADE_KEY",
    "FEATURE_UPGRADE_ONLY_HEIGHT",
    "OLD_UPGRADE_HEIGHT_EMPTY_VALUE",
    "REWARD_DELEGATOR_KEY",
    "APP_TRANSFER_KEY",
    "PROTO_SIGN_DOC_KEY",
    "DEFAULT_FEATURES",
    "ED25519_PUBKEY_AMINO_TYPE",
    "CoinDenom",
    "DAOAction",
    "MsgKind",
    "GovParameter",
    "FeatureActivation",
    "TxSignature",
    "RawTxRequest",
    "TransactionResponse",
    "coins",
    "normalize_features",
]
