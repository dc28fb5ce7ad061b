"""Gem mining and shiny-gem exchange."""
from __future__ import annotations

from dataclasses import dataclass

from hugoland.core.rng import RNG
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState
from hugoland.services.transition import Transition, draft


@dataclass(frozen=True, slots=True)
class MiningYield:
    gems: int
    shiny_gems: int
    x: float = 0.0
    y: float = 0.0


class MiningService:
    def __init__(self, rng: RNG, rules: GameRules) -> None:
        self._rng = rng
        self._rules = rules

    def mine_gem(self, state: GameState, x: float, y: float) -> Transition[MiningYield]:
        """One click on the rock: a regular gem, or a shiny one with a small chance.

        ``x`` and ``y`` are the click position, echoed back for the presentation layer.
        """
        shiny = self._rng.chance(self._rules.shiny_gem_chance)
        result = MiningYield(gems=0 if shiny else 1, shiny_gems=1 if shiny else 0, x=x, y=y)
        new_state = draft(state)
        new_state.gems += result.gems
        new_state.shiny_gems += result.shiny_gems
        new_state.mining.total_gems_mined += result.gems
        new_state.mining.total_shiny_gems_mined += result.shiny_gems
        new_state.statistics.gems_earned += result.gems
        new_state.statistics.shiny_gems_earned += result.shiny_gems
        return Transition(new_state, result)

    def exchange_shiny_gems(self, state: GameState, amount: int) -> Transition[bool]:
        if amount <= 0 or state.shiny_gems < amount:
            return Transition(state, False)
        gems = amount * self._rules.shiny_exchange_rate
        new_state = draft(state)
        new_state.shiny_gems -= amount
        new_state.gems += gems
        new_state.statistics.gems_earned += gems
        return Transition(new_state, True)
