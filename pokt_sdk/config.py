"""
SDK configuration: RPC endpoint, dispatchers, chain id, fee and feature set.

- Loads sane defaults and supports overrides via environment variables (POKT_*).
- `activation()` turns the configured feature list into the FeatureActivation
  the transaction builder uses to pick an encoding scheme.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .errors import ConfigurationError, InvalidChainIDError
from .tx.models import (
    DEFAULT_BASE_FEE,
    DEFAULT_FEATURES,
    SUPPORTED_CHAIN_IDS,
    FeatureActivation,
    normalize_features,
)

_DEFAULT_RPC = "http://127.0.0.1:8081"
_DEFAULT_CHAIN = "mainnet"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _split_list(val: Optional[str]) -> Tuple[str, ...]:
    if not val:
        return ()
    return tuple(p.strip() for p in val.split(",") if p.strip())


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...] = ("http", "https")) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ConfigurationError(f"URL must start with {allowed}, got: {url!r}")
    return url


def _parse_chain_id(val: Optional[str]) -> str:
    chain = (val or _DEFAULT_CHAIN).strip().lower()
    if chain not in SUPPORTED_CHAIN_IDS:
        raise InvalidChainIDError(chain, SUPPORTED_CHAIN_IDS)
    return chain


@dataclass(slots=True)
class SDKConfig:
    # Network
    rpc_url: str = field(default_factory=lambda: _DEFAULT_RPC)
    dispatchers: Tuple[str, ...] = ()
    chain_id: str = _DEFAULT_CHAIN
    # HTTP behavior
    request_timeout: float = 10.0
    retry_attempts: int = 0
    # Transactions
    default_fee: str = DEFAULT_BASE_FEE
    features: FrozenSet[str] = field(default_factory=lambda: DEFAULT_FEATURES)

    @classmethod
    def from_env(cls, prefix: str = "POKT_") -> "SDKConfig":
        """
        Create config from environment variables:

        POKT_RPC_URL            (http/https)
        POKT_DISPATCHERS        (comma separated http/https URLs)
        POKT_CHAIN_ID           (mainnet | testnet | localnet)
        POKT_TIMEOUT            (float seconds, HTTP)
        POKT_RETRY_ATTEMPTS     (int)
        POKT_DEFAULT_FEE        (uPOKT, positive integer)
        POKT_FEATURES           (comma separated feature keys; replaces the defaults)
        """
        rpc = _env(f"{prefix}RPC_URL", _DEFAULT_RPC)
        dispatchers = _split_list(_env(f"{prefix}DISPATCHERS"))
        features_raw = _env(f"{prefix}FEATURES")
        try:
            timeout = float(_env(f"{prefix}TIMEOUT", "10.0"))  # type: ignore[arg-type]
            retries = int(_env(f"{prefix}RETRY_ATTEMPTS", "0"))  # type: ignore[arg-type]
        except ValueError as e:
            raise ConfigurationError(f"invalid numeric setting: {e}") from e

        _ensure_scheme(rpc)
        for d in dispatchers:
            _ensure_scheme(d)

        cfg = cls(
            rpc_url=rpc or _DEFAULT_RPC,
            dispatchers=dispatchers,
            chain_id=_parse_chain_id(_env(f"{prefix}CHAIN_ID")),
            request_timeout=timeout,
            retry_attempts=retries,
            default_fee=(_env(f"{prefix}DEFAULT_FEE") or DEFAULT_BASE_FEE).strip(),
            features=(
                normalize_features(_split_list(features_raw)) if features_raw is not None else DEFAULT_FEATURES
            ),
        )
        cfg.validate()
        return cfg

    @classmethod
    def with_overrides(cls, base: Optional["SDKConfig"] = None, **overrides: Any) -> "SDKConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        if "rpc_url" in overrides:
            _ensure_scheme(data["rpc_url"])
        if "chain_id" in overrides:
            data["chain_id"] = _parse_chain_id(data["chain_id"])
        data["dispatchers"] = tuple(data["dispatchers"])
        data["features"] = normalize_features(data["features"])
        cfg = cls(**data)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be > 0")
        if self.retry_attempts < 0:
            raise ConfigurationError("retry_attempts must be >= 0")
        if re.fullmatch(r"[1-9][0-9]*", self.default_fee) is None:
            raise ConfigurationError(f"default_fee must be a positive integer, got {self.default_fee!r}")

    def activation(self, height: Optional[int] = None) -> FeatureActivation:
        return FeatureActivation(height=height, features=frozenset(self.features))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "dispatchers": list(self.dispatchers),
            "chain_id": self.chain_id,
            "request_timeout": float(self.request_timeout),
            "retry_attempts": int(self.retry_attempts),
            "default_fee": self.default_fee,
            "features": sorted(self.features),
        }


__all__ = ["SDKConfig"]
