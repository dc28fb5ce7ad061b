"""Seedable RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import List, MutableSequence, Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random that provides deterministic helpers.

    Every random draw made by the game goes through this class so tests can
    seed it, or subclass it to script exact outcomes.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (one draw)."""
        return self.random() < probability

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def sample(self, seq: Sequence[T_co], count: int) -> List[T_co]:
        """Return ``count`` distinct elements drawn without replacement."""
        if count > len(seq):
            raise ValueError("Sample larger than population.")
        return self._random.sample(list(seq), count)

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        """Shuffle the sequence in-place."""
        self._random.shuffle(seq)
