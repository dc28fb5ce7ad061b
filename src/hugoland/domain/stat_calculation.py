"""Derived player stats from base values, equipment and bonuses."""
from __future__ import annotations

import math
from dataclasses import dataclass

from hugoland.domain.adventure import apply_immediate_transform
from hugoland.domain.entities import Armor, Relic, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState


@dataclass(frozen=True, slots=True)
class TotalStats:
    attack: int
    defense: int
    max_hp: int


def weapon_attack(weapon: Weapon, rules: GameRules) -> float:
    attack = weapon.base_attack + (weapon.level - 1) * rules.weapon_upgrade_attack
    if rules.apply_durability_scaling and weapon.max_durability > 0:
        attack *= weapon.durability / weapon.max_durability
    return attack


def armor_defense(armor: Armor, rules: GameRules) -> float:
    defense = armor.base_defense + (armor.level - 1) * rules.armor_upgrade_defense
    if rules.apply_durability_scaling and armor.max_durability > 0:
        defense *= armor.durability / armor.max_durability
    return defense


def relic_bonus(relic: Relic, rules: GameRules) -> tuple[int, int]:
    """Return the (attack, defense) a relic contributes at its current level."""
    if relic.relic_type == "weapon":
        base = relic.base_attack or 0
        return base + (relic.level - 1) * rules.relic_upgrade_attack, 0
    base = relic.base_defense or 0
    return 0, base + (relic.level - 1) * rules.relic_upgrade_defense


def bonus_percent(state: GameState, rules: GameRules) -> float:
    percent = state.garden.total_growth_bonus
    if rules.research_enabled:
        percent += state.research.level * rules.research_bonus_per_level
    return percent


def calculate_total_stats(state: GameState, rules: GameRules) -> TotalStats:
    stats = state.player_stats
    attack: float = stats.base_attack
    defense: float = stats.base_defense
    max_hp: float = stats.base_hp

    weapon = state.inventory.current_weapon
    if weapon is not None:
        attack += weapon_attack(weapon, rules)
    armor = state.inventory.current_armor
    if armor is not None:
        defense += armor_defense(armor, rules)
    for relic in state.inventory.equipped_relics:
        relic_attack, relic_defense = relic_bonus(relic, rules)
        attack += relic_attack
        defense += relic_defense

    percent = bonus_percent(state, rules)
    attack += attack * percent / 100
    defense += defense * percent / 100
    max_hp += max_hp * percent / 100

    attack, defense = math.floor(attack), math.floor(defense)
    skill = state.adventure.selected_skill
    if state.in_combat and skill is not None:
        # The selected skill's stat transform lasts for the whole fight.
        _, attack, defense = apply_immediate_transform(skill, 0, attack, defense)
    return TotalStats(attack=attack, defense=defense, max_hp=math.floor(max_hp))


def apply_total_stats(state: GameState, rules: GameRules) -> None:
    """Write derived stats into ``state`` in place, keeping hp at the same ratio of max hp."""
    stats = state.player_stats
    totals = calculate_total_stats(state, rules)
    ratio = stats.hp / stats.max_hp if stats.max_hp > 0 else 1.0
    stats.attack = totals.attack
    stats.defense = totals.defense
    stats.max_hp = totals.max_hp
    stats.hp = max(0, min(totals.max_hp, math.floor(totals.max_hp * ratio)))
