from __future__ import annotations

from collections import deque
from typing import Iterable, List, MutableSequence, Sequence, TypeVar

from hugoland.core.rng import RNG

T = TypeVar("T")


class ScriptedRNG(RNG):
    """RNG whose draws come from queues; falls back to a seeded stream when a queue runs dry.

    ``choices`` holds indexes into the sequence passed to ``choice``.
    """

    def __init__(
        self,
        *,
        randoms: Iterable[float] = (),
        ints: Iterable[int] = (),
        choices: Iterable[int] = (),
        seed: int = 0,
    ) -> None:
        super().__init__(seed)
        self._randoms = deque(randoms)
        self._ints = deque(ints)
        self._choices = deque(choices)

    def random(self) -> float:
        if self._randoms:
            return self._randoms.popleft()
        return super().random()

    def randint(self, a: int, b: int) -> int:
        if self._ints:
            return self._ints.popleft()
        return super().randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        if self._choices:
            return seq[self._choices.popleft()]
        return super().choice(seq)

    def sample(self, seq: Sequence[T], count: int) -> List[T]:
        return list(seq)[:count]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        return None

    @property
    def remaining_randoms(self) -> int:
        return len(self._randoms)
