"""
pokt_sdk.tx.builder
===================

`TransactionBuilder`: turn a message into a signed, broadcastable transaction.

    builder = TransactionBuilder(provider, KeyManager.from_private_key(pk), "testnet")
    msg = builder.send(to_address="...", amount="1000000")
    raw = await builder.create_transaction(msg, memo="hello")
    resp = await builder.submit_raw_transaction(raw)

Each `create_transaction` call owns its entropy, sign document and signature;
the builder itself only holds configuration, so concurrent builds on one
builder are independent. The only awaits are the signer and the provider.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from ..errors import InvalidChainIDError, MissingMessageError, NoProviderError, NoSignerError
from ..provider.base import AbstractProvider
from ..utils.bytes import from_hex, to_hex
from ..wallet.signer import AbstractSigner
from .encoders import TxEncoderFactory
from .entropy import EntropySource, RandomEntropy
from .models import (
    DEFAULT_BASE_FEE,
    FEATURE_UPGRADE_KEY,
    FEATURE_UPGRADE_ONLY_HEIGHT,
    OLD_UPGRADE_HEIGHT_EMPTY_VALUE,
    SUPPORTED_CHAIN_IDS,
    CoinDenom,
    DAOAction,
    FeatureActivation,
    GovParameter,
    RawTxRequest,
    TransactionResponse,
    TxSignature,
)
from .msgs import (
    MsgProtoAppStake,
    MsgProtoAppTransfer,
    MsgProtoAppUnstake,
    MsgProtoGovChangeParam,
    MsgProtoGovDAOTransfer,
    MsgProtoGovUpgrade,
    MsgProtoNodeStakeTx,
    MsgProtoNodeUnjail,
    MsgProtoNodeUnstake,
    MsgProtoSend,
    TxMsg,
)


def _check_chain_id(chain_id: Any) -> str:
    if chain_id not in SUPPORTED_CHAIN_IDS:
        raise InvalidChainIDError(chain_id, SUPPORTED_CHAIN_IDS)
    return chain_id


class TransactionBuilder:
    """
    Create, sign and submit Pocket transactions.

    Parameters
    ----------
    provider : AbstractProvider
        Used by `submit` / `submit_raw_transaction` only.
    signer : AbstractSigner
        Signs the sign-document bytes and reports the signing key/address.
    chain_id : str
        "mainnet", "testnet" or "localnet".
    activation : FeatureActivation, optional
        Height/feature state used to pick the encoding scheme; defaults to
        the latest state of every supported chain.
    entropy_source : EntropySource, optional
        Defaults to `RandomEntropy()`.
    """

    def __init__(
        self,
        provider: AbstractProvider,
        signer: AbstractSigner,
        chain_id: str = "mainnet",
        *,
        activation: Optional[FeatureActivation] = None,
        entropy_source: Optional[EntropySource] = None,
        fee_denom: Union[CoinDenom, str] = CoinDenom.UPOKT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if provider is None:
            raise NoProviderError("Please add a provider.")
        if signer is None:
            raise NoSignerError("Please add a signer.")
        self.provider = provider
        self.signer = signer
        self._chain_id = _check_chain_id(chain_id)
        self.activation = activation or FeatureActivation()
        self.entropy_source: EntropySource = entropy_source or RandomEntropy()
        self.fee_denom = fee_denom
        self.log = logger or logging.getLogger("pokt_sdk.tx.builder")

    # ---- chain id ----

    def get_chain_id(self) -> str:
        return self._chain_id

    def set_chain_id(self, chain_id: str) -> None:
        self._chain_id = _check_chain_id(chain_id)

    # ---- build / submit ----

    async def create_transaction(
        self,
        txmsg: Optional[TxMsg],
        fee: Union[str, int] = DEFAULT_BASE_FEE,
        memo: str = "",
    ) -> RawTxRequest:
        """
        Sign `txmsg` and return the broadcastable request.

        Every validation (message, fee, scheme support) happens before the
        signer is called; signer errors propagate unchanged.
        """
        if txmsg is None:
            raise MissingMessageError("txmsg should be defined.")
        if fee is None or fee == "":
            fee = DEFAULT_BASE_FEE

        entropy = self.entropy_source.next_entropy()
        encoder = TxEncoderFactory.create_encoder(
            entropy,
            self._chain_id,
            txmsg,
            str(fee) if isinstance(fee, int) and not isinstance(fee, bool) else fee,
            self.fee_denom,
            memo or "",
            activation=self.activation,
        )
        sign_bytes = encoder.marshal_std_sign_doc()
        self.log.debug(
            "signing %s chain=%s scheme=%s entropy=%d sign_bytes=%d",
            txmsg.type_name,
            self._chain_id,
            encoder.SCHEME,
            entropy,
            len(sign_bytes),
        )

        signature_hex = await self.signer.sign(to_hex(sign_bytes))
        signature = TxSignature(
            pub_key=from_hex(self.signer.get_public_key()),
            signature=from_hex(signature_hex),
        )
        tx_bytes = encoder.marshal_std_tx(signature)
        self.log.debug("built %s tx_bytes=%d", txmsg.type_name, len(tx_bytes))
        return RawTxRequest(self.signer.get_address(), to_hex(tx_bytes))

    async def submit(
        self,
        txmsg: Optional[TxMsg],
        fee: Union[str, int] = DEFAULT_BASE_FEE,
        memo: str = "",
    ) -> TransactionResponse:
        tx = await self.create_transaction(txmsg, fee=fee, memo=memo)
        return await self.provider.send_transaction(tx)

    async def submit_raw_transaction(self, tx: RawTxRequest) -> TransactionResponse:
        return await self.provider.send_transaction(tx)

    # ---- message helpers ----
    # Defaults come from the signer at call time so a swapped signer is honoured.

    def send(self, *, to_address: str, amount: str, from_address: Optional[str] = None) -> MsgProtoSend:
        return MsgProtoSend(from_address or self.signer.get_address(), to_address, amount)

    def app_stake(self, *, app_pub_key: str, chains: Iterable[str], amount: str) -> MsgProtoAppStake:
        return MsgProtoAppStake(app_pub_key, chains, amount)

    def app_transfer(self, *, app_pub_key: str) -> MsgProtoAppTransfer:
        return MsgProtoAppTransfer(app_pub_key)

    def app_unstake(self, address: str) -> MsgProtoAppUnstake:
        return MsgProtoAppUnstake(address)

    def node_stake(
        self,
        *,
        chains: Iterable[str],
        amount: str,
        service_url: str,
        node_pub_key: Optional[str] = None,
        output_address: Optional[str] = None,
        reward_delegators: Optional[Mapping[str, int]] = None,
    ) -> MsgProtoNodeStakeTx:
        return MsgProtoNodeStakeTx(
            node_pub_key or self.signer.get_public_key(),
            output_address or self.signer.get_address(),
            chains,
            amount,
            service_url,
            reward_delegators,
        )

    def node_unstake(
        self, *, node_address: Optional[str] = None, signer_address: Optional[str] = None
    ) -> MsgProtoNodeUnstake:
        return MsgProtoNodeUnstake(
            node_address or self.signer.get_address(),
            signer_address or self.signer.get_address(),
        )

    def node_unjail(
        self, *, node_address: Optional[str] = None, signer_address: Optional[str] = None
    ) -> MsgProtoNodeUnjail:
        return MsgProtoNodeUnjail(
            node_address or self.signer.get_address(),
            signer_address or self.signer.get_address(),
        )

    def gov_dao_transfer(
        self,
        *,
        amount: str,
        action: Union[DAOAction, str],
        to_address: str = "",
        from_address: Optional[str] = None,
    ) -> MsgProtoGovDAOTransfer:
        return MsgProtoGovDAOTransfer(from_address or self.signer.get_address(), to_address, amount, action)

    def gov_change_param(
        self,
        *,
        param_key: Union[GovParameter, str],
        param_value: Any,
        from_address: Optional[str] = None,
        override_gov_params_whitelist_validation: bool = False,
    ) -> MsgProtoGovChangeParam:
        return MsgProtoGovChangeParam(
            from_address or self.signer.get_address(),
            param_key,
            param_value,
            override_gov_params_whitelist_validation,
        )

    def gov_upgrade(
        self,
        *,
        height: int,
        version: str,
        features: Iterable[str] = (),
        from_address: Optional[str] = None,
    ) -> MsgProtoGovUpgrade:
        return MsgProtoGovUpgrade(
            from_address or self.signer.get_address(),
            height,
            version,
            features,
            OLD_UPGRADE_HEIGHT_EMPTY_VALUE,
        )

    def gov_upgrade_version(
        self, *, height: int, version: str, from_address: Optional[str] = None
    ) -> MsgProtoGovUpgrade:
        return self.gov_upgrade(height=height, version=version, features=(), from_address=from_address)

    def gov_upgrade_features(
        self, *, features: Iterable[str], from_address: Optional[str] = None
    ) -> MsgProtoGovUpgrade:
        return self.gov_upgrade(
            height=FEATURE_UPGRADE_ONLY_HEIGHT,
            version=FEATURE_UPGRADE_KEY,
            features=features,
            from_address=from_address,
        )

    def __repr__(self) -> str:
        return f"TransactionBuilder(chain_id={self._chain_id!r}, signer={self.signer!r})"


__all__ = ["TransactionBuilder"]
