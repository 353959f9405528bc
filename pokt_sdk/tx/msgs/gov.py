"""
Governance messages: DAO treasury moves, parameter changes, protocol upgrades.

Upgrades come in two shapes:

- version upgrade : `version="RC-0.9.0", height>=1, features=()`
- feature toggle  : `version="FEATURE", height=1, features=("KEY:HEIGHT", ...)`
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from ...errors import InvalidFieldError, MalformedValueError
from ...utils.bytes import from_hex
from ...utils.canonical import canonicalize
from ...utils.proto import ProtoWriter
from ..models import (
    FEATURE_UPGRADE_KEY,
    FEATURE_UPGRADE_ONLY_HEIGHT,
    OLD_UPGRADE_HEIGHT_EMPTY_VALUE,
    DAOAction,
    GovParameter,
    MsgKind,
)
from .base import TxMsg, freeze_strings

_INT64_MAX = (1 << 63) - 1
_FEATURE_RE = re.compile(r"([^:\s]+):([1-9][0-9]*)")


@dataclass(frozen=True)
class MsgProtoGovDAOTransfer(TxMsg):
    """Move (`dao_transfer`) or burn (`dao_burn`) DAO funds; a burn needs no recipient."""

    KIND = MsgKind.GOV_DAO_TRANSFER
    AMINO_KEY = "gov/msg_dao_transfer"
    KEY = "/x.gov.MsgDAOTransfer"

    from_address: str
    to_address: str
    amount: str
    action: Union[DAOAction, str]

    def __post_init__(self) -> None:
        try:
            action = DAOAction(self.action)
        except ValueError as e:
            allowed = ", ".join(a.value for a in DAOAction)
            raise InvalidFieldError("action", f"must be one of: {allowed}", self.type_name) from e
        object.__setattr__(self, "action", action)
        super().__post_init__()

    def validate(self) -> None:
        self._require_address("from_address", self.from_address)
        if self.action is DAOAction.TRANSFER or self.to_address:
            self._require_address("to_address", self.to_address)
        self._require_amount("amount", self.amount)

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "amount": self.amount,
            "from_address": self.from_address.lower(),
            "to_address": (self.to_address or "").lower(),
        }

    def encode(self) -> bytes:
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.from_address))
            .bytes(2, from_hex(self.to_address) if self.to_address else b"")
            .string(3, self.amount)
            .string(4, self.action.value)
            .finish()
        )


@dataclass(frozen=True)
class MsgProtoGovChangeParam(TxMsg):
    """
    Set an on-chain parameter.

    `param_value` is any JSON-representable value; the node receives its
    canonical JSON as raw bytes (base64 in the sign doc). Keys outside
    `GovParameter` are refused unless `override_gov_params_whitelist_validation`
    is set, which is what parameter keys added by a newer node version need.
    """

    KIND = MsgKind.GOV_CHANGE_PARAM
    AMINO_KEY = "gov/msg_change_param"
    KEY = "/x.gov.MsgChangeParam"

    from_address: str
    param_key: Union[GovParameter, str]
    param_value: Any
    override_gov_params_whitelist_validation: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.param_key, GovParameter):
            object.__setattr__(self, "param_key", self.param_key.value)
        super().__post_init__()

    def validate(self) -> None:
        self._require_address("from_address", self.from_address)
        self._require("param_key", self.param_key)
        if not isinstance(self.param_key, str):
            raise InvalidFieldError("param_key", "must be a string", self.type_name)
        if (
            not self.override_gov_params_whitelist_validation
            and self.param_key not in GovParameter.values()
        ):
            raise InvalidFieldError("param_key", f"{self.param_key!r} is not a known parameter", self.type_name)
        if self.param_value is None:
            self._require("param_value", self.param_value)
        try:
            self.value_bytes()
        except MalformedValueError as e:
            raise InvalidFieldError("param_value", str(e), self.type_name) from e

    def value_bytes(self) -> bytes:
        return canonicalize(self.param_value).encode("utf-8")

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "address": self.from_address.lower(),
            "param_key": self.param_key,
            "param_value": base64.b64encode(self.value_bytes()).decode("ascii"),
        }

    def encode(self) -> bytes:
        return (
            ProtoWriter()
            .bytes(1, from_hex(self.from_address))
            .string(2, self.param_key)
            .bytes(3, self.value_bytes())
            .finish()
        )


@dataclass(frozen=True)
class MsgProtoGovUpgrade(TxMsg):
    KIND = MsgKind.GOV_UPGRADE
    AMINO_KEY = "gov/msg_upgrade"
    KEY = "/x.gov.MsgUpgrade"

    from_address: str
    height: int
    version: str
    features: Tuple[str, ...] = ()
    old_upgrade_height: int = OLD_UPGRADE_HEIGHT_EMPTY_VALUE

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", freeze_strings(self.features))
        super().__post_init__()

    @property
    def is_feature_upgrade(self) -> bool:
        return self.version == FEATURE_UPGRADE_KEY

    def validate(self) -> None:
        self._require_address("from_address", self.from_address)
        self._require("version", self.version)
        if not isinstance(self.version, str):
            raise InvalidFieldError("version", "must be a string", self.type_name)
        for name in ("height", "old_upgrade_height"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= _INT64_MAX:
                raise InvalidFieldError(name, "must be a non-negative int64", self.type_name)

        if self.is_feature_upgrade:
            if self.height != FEATURE_UPGRADE_ONLY_HEIGHT:
                raise InvalidFieldError(
                    "height", f"feature upgrades must use height {FEATURE_UPGRADE_ONLY_HEIGHT}", self.type_name
                )
            self._require("features", self.features)
            for feat in self.features:
                m = _FEATURE_RE.fullmatch(feat) if isinstance(feat, str) else None
                if m is None:
                    raise InvalidFieldError(
                        "features", f"{feat!r} is not KEY:HEIGHT with a positive height", self.type_name
                    )
        else:
            if self.height < 1:
                raise InvalidFieldError("height", "must be >= 1", self.type_name)
            if self.features:
                raise InvalidFieldError(
                    "features", f"only allowed when version is {FEATURE_UPGRADE_KEY!r}", self.type_name
                )

    def sign_doc_value(self) -> Dict[str, Any]:
        return {
            "address": self.from_address.lower(),
            "upgrade": {
                "Features": list(self.features) or None,
                "Height": str(self.height),
                "OldUpgradeHeight": str(self.old_upgrade_height),
                "Version": self.version,
            },
        }

    def encode(self) -> bytes:
        upgrade = (
            ProtoWriter()
            .int64(1, self.height)
            .string(2, self.version)
            .int64(3, self.old_upgrade_height)
            .repeated_string(4, self.features)
            .finish()
        )
        return ProtoWriter().bytes(1, from_hex(self.from_address)).message(2, upgrade).finish()


__all__ = ["MsgProtoGovDAOTransfer", "MsgProtoGovChangeParam", "MsgProtoGovUpgrade"]
