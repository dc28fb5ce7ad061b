"""Result type shared by every state-transition operation."""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Generic, TypeVar

from hugoland.domain.state import GameState

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Transition(Generic[V]):
    """The state after an operation plus the operation's return value.

    A rejected operation returns the exact input state object with a falsy value.
    """

    state: GameState
    value: V

    @property
    def changed(self) -> bool:
        return bool(self.value)


def draft(state: GameState) -> GameState:
    """Return an independent copy to mutate."""
    return copy.deepcopy(state)
