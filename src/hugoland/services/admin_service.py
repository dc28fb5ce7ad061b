"""Developer and settings operations."""
from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping

from hugoland.core.types import GAME_MODES
from hugoland.domain.state import Cheats, GameState, Settings
from hugoland.services.transition import Transition, draft

_CHEAT_NAMES = frozenset(cheat.name for cheat in fields(Cheats))


def _matches_type(current: Any, value: Any) -> bool:
    if isinstance(current, bool):
        return isinstance(value, bool)
    if isinstance(current, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(current))


class AdminService:
    def add_coins(self, state: GameState, amount: int) -> Transition[bool]:
        if amount <= 0:
            return Transition(state, False)
        new_state = draft(state)
        new_state.coins += amount
        return Transition(new_state, True)

    def add_gems(self, state: GameState, amount: int) -> Transition[bool]:
        if amount <= 0:
            return Transition(state, False)
        new_state = draft(state)
        new_state.gems += amount
        return Transition(new_state, True)

    def teleport_to_zone(self, state: GameState, zone: int) -> Transition[bool]:
        new_state = draft(state)
        new_state.zone = max(1, zone)
        new_state.statistics.zones_reached = max(new_state.statistics.zones_reached, new_state.zone)
        return Transition(new_state, True)

    def set_game_mode(self, state: GameState, mode: str) -> Transition[bool]:
        if mode not in GAME_MODES:
            return Transition(state, False)
        new_state = draft(state)
        game_mode = new_state.game_mode
        game_mode.current = mode  # type: ignore[assignment]
        game_mode.speed_mode_active = mode == "blitz"
        if mode == "survival":
            game_mode.survival_lives = game_mode.max_survival_lives
        return Transition(new_state, True)

    def toggle_cheat(self, state: GameState, cheat: str) -> Transition[bool]:
        if cheat not in _CHEAT_NAMES:
            return Transition(state, False)
        new_state = draft(state)
        setattr(new_state.cheats, cheat, not getattr(new_state.cheats, cheat))
        return Transition(new_state, True)

    def update_settings(self, state: GameState, changes: Mapping[str, Any]) -> Transition[bool]:
        """Apply known setting keys whose values match the stored type; reject anything else."""
        known = {setting.name for setting in fields(Settings)}
        if not changes:
            return Transition(state, False)
        for key, value in changes.items():
            if key not in known or not _matches_type(getattr(state.settings, key), value):
                return Transition(state, False)
        new_state = draft(state)
        for key, value in changes.items():
            setattr(new_state.settings, key, value)
        return Transition(new_state, True)
