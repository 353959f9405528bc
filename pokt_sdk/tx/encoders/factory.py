"""
Encoding-scheme selection.

Each supported chain lists its schemes in activation order. A rule is active
when the activation height has reached `min_height` and, if it names a
`feature_key`, that feature is on. The *last* active rule wins, so adding a
scheme for a future upgrade is one appended `SchemeRule`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from ...errors import InvalidChainIDError
from ..models import PROTO_SIGN_DOC_KEY, SUPPORTED_CHAIN_IDS, CoinDenom, FeatureActivation
from ..msgs import TxMsg
from .base import BaseTxEncoder
from .json_signdoc import JsonSignDocTxEncoder
from .proto_signdoc import ProtoSignDocTxEncoder

log = logging.getLogger("pokt_sdk.tx.encoders")


@dataclass(frozen=True)
class SchemeRule:
    name: str
    encoder: Type[BaseTxEncoder]
    min_height: int = 0
    feature_key: Optional[str] = None

    def applies(self, activation: FeatureActivation) -> bool:
        if not activation.reached(self.min_height):
            return False
        return self.feature_key is None or activation.is_active(self.feature_key)


_DEFAULT_RULES: Tuple[SchemeRule, ...] = (
    SchemeRule(JsonSignDocTxEncoder.SCHEME, JsonSignDocTxEncoder),
    SchemeRule(ProtoSignDocTxEncoder.SCHEME, ProtoSignDocTxEncoder, feature_key=PROTO_SIGN_DOC_KEY),
)

CHAIN_SCHEMES: Dict[str, Tuple[SchemeRule, ...]] = {chain: _DEFAULT_RULES for chain in SUPPORTED_CHAIN_IDS}


def select_scheme(chain_id: str, activation: Optional[FeatureActivation] = None) -> SchemeRule:
    rules = CHAIN_SCHEMES.get(chain_id)
    if not rules:
        raise InvalidChainIDError(chain_id, tuple(CHAIN_SCHEMES))
    activation = activation or FeatureActivation()
    chosen: Optional[SchemeRule] = None
    for rule in rules:
        if rule.applies(activation):
            chosen = rule
    if chosen is None:
        # the base rule of every chain has min_height 0 and no feature key
        raise InvalidChainIDError(chain_id, tuple(CHAIN_SCHEMES))
    return chosen


class TxEncoderFactory:
    @staticmethod
    def create_encoder(
        entropy: int | str,
        chain_id: str,
        msg: TxMsg,
        fee: str,
        fee_denom: str | CoinDenom = CoinDenom.UPOKT,
        memo: str = "",
        *,
        activation: Optional[FeatureActivation] = None,
    ) -> BaseTxEncoder:
        """
        Pick the scheme active for (`chain_id`, `activation`) and bind the build inputs.

        Raises InvalidChainIDError for unknown chains and UnsupportedMessageError
        when the message is not encodable under the chosen scheme.
        """
        rule = select_scheme(chain_id, activation)
        log.debug("encoder scheme=%s chain=%s msg=%s", rule.name, chain_id, type(msg).__name__)
        return rule.encoder(entropy, chain_id, msg, fee, fee_denom, memo, activation=activation)


__all__ = ["SchemeRule", "CHAIN_SCHEMES", "select_scheme", "TxEncoderFactory"]
