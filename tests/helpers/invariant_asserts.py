from __future__ import annotations

from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import calculate_total_stats
from hugoland.domain.state import CombatPhase, GameState

_RULES = GameRules()


def assert_state_invariants(state: GameState, rules: GameRules = _RULES) -> None:
    stats = state.player_stats
    assert 0 <= stats.hp <= stats.max_hp
    assert state.coins >= 0 and state.gems >= 0 and state.shiny_gems >= 0
    assert state.zone >= 1
    assert len(state.combat_log) <= rules.combat_log_limit
    assert len(state.inventory.equipped_relics) <= rules.max_equipped_relics

    inventory = state.inventory
    if inventory.current_weapon_id is not None:
        assert inventory.current_weapon is not None
    if inventory.current_armor_id is not None:
        assert inventory.current_armor is not None

    if state.combat_phase is CombatPhase.IN_COMBAT:
        assert state.current_enemy is not None
    else:
        assert state.current_enemy is None
    if state.combat_phase is CombatPhase.SELECTING:
        assert state.adventure.pending_enemy is not None

    assert 0 <= state.game_mode.survival_lives <= state.game_mode.max_survival_lives
    assert state.garden.growth_cm <= state.garden.max_growth_cm


def assert_stats_derived(state: GameState, rules: GameRules = _RULES) -> None:
    """Derived attack, defense and max hp match a fresh recomputation."""
    totals = calculate_total_stats(state, rules)
    stats = state.player_stats
    assert (stats.attack, stats.defense, stats.max_hp) == (totals.attack, totals.defense, totals.max_hp)
