"""
Per-transaction entropy (the StdTx nonce).

Pocket rejects a transaction whose (signer, entropy) pair was already seen,
so every build draws a fresh value. The draw is bounded to `[0, 2**53 - 1)`,
the integers a JSON double can carry exactly; the wire field is an int64,
so the bound narrows uniqueness without affecting validity.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable

MAX_ENTROPY = (1 << 53) - 1


@runtime_checkable
class EntropySource(Protocol):
    def next_entropy(self) -> int: ...


class RandomEntropy:
    """Uniform draw from `[0, MAX_ENTROPY)` backed by the OS CSPRNG by default."""

    __slots__ = ("_rng",)

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.SystemRandom()

    def next_entropy(self) -> int:
        return self._rng.randrange(MAX_ENTROPY)


__all__ = ["MAX_ENTROPY", "EntropySource", "RandomEntropy"]
