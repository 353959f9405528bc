from __future__ import annotations

from .signer import AbstractSigner, KeyManager

__all__ = ["AbstractSigner", "KeyManager"]
