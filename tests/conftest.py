"""
Shared pytest fixtures:
- Known key/address vector (derivation only)
- Deterministic Ed25519 signer built from a fixed seed
- In-memory provider and signer doubles that record what they were given
- Clean POKT_* environment for config/CLI tests
"""
from __future__ import annotations

import os
from typing import List

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from pokt_sdk.tx.models import RawTxRequest, TransactionResponse
from pokt_sdk.wallet.signer import KeyManager

# ---------- VECTORS ----------

PRIVATE_KEY = (
    "1f8cbde30ef5a9db0a5a9d5eb40536fc9defc318b8581d543808b7504e0902bc"
    "b243b27bc9fbe5580457a46370ae5f03a6f6753633e51efdaf2cf534fdc26cc3"
)
PUBLIC_KEY = "b243b27bc9fbe5580457a46370ae5f03a6f6753633e51efdaf2cf534fdc26cc3"
ADDRESS = "b50a6e20d3733fb89631ae32385b3c85c533c560"

ADDR_A = "073b1fbbf246d17bb75d270580c53fd356876d70"
ADDR_B = "5f8027e4aa0b971842199998cb585a1d65b20065"


def expanded_private_key(seed: bytes) -> str:
    """seed || public key, hex, as Pocket tooling exports it."""
    key = Ed25519PrivateKey.from_private_bytes(seed)
    pub = key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
    )
    return (seed + pub).hex()


SIGNER_PRIVATE_KEY = expanded_private_key(bytes(range(32)))


# ---------- DOUBLES ----------


class FixedEntropy:
    def __init__(self, value: int = 1985308356880269) -> None:
        self.value = value
        self.draws = 0

    def next_entropy(self) -> int:
        self.draws += 1
        return self.value


class FakeProvider:
    """Records every broadcast and answers with a fixed hash."""

    def __init__(self, tx_hash: str = "E2A3D2A1B5C9F0AA") -> None:
        self.tx_hash = tx_hash
        self.sent: List[RawTxRequest] = []

    async def send_transaction(self, transaction: RawTxRequest) -> TransactionResponse:
        self.sent.append(transaction)
        return TransactionResponse.from_json({"txhash": self.tx_hash, "logs": None})


class RecordingSigner:
    """Wraps a KeyManager and keeps every payload it was asked to sign."""

    def __init__(self, inner: KeyManager) -> None:
        self.inner = inner
        self.payloads: List[str] = []

    async def sign(self, payload_hex: str) -> str:
        self.payloads.append(payload_hex)
        return await self.inner.sign(payload_hex)

    def get_public_key(self) -> str:
        return self.inner.get_public_key()

    def get_address(self) -> str:
        return self.inner.get_address()


# ---------- FIXTURES ----------


@pytest.fixture
def key_manager() -> KeyManager:
    return KeyManager.from_private_key(SIGNER_PRIVATE_KEY)


@pytest.fixture
def signer(key_manager: KeyManager) -> RecordingSigner:
    return RecordingSigner(key_manager)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in list(os.environ):
        if name.startswith("POKT_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
