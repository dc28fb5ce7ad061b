"""Leveling and reward formulas."""
from __future__ import annotations

import math
from dataclasses import dataclass

from hugoland.core.types import GameModeName
from hugoland.domain.rules import GameRules
from hugoland.domain.state import Progression


@dataclass(frozen=True, slots=True)
class ZoneReward:
    coins: int
    gems: int
    experience: int


def experience_to_next(level: int, rules: GameRules) -> int:
    return rules.experience_base + rules.experience_per_level * level


def add_experience(progression: Progression, amount: int, rules: GameRules) -> int:
    """Add experience and carry over into as many levels as it covers; return levels gained."""
    progression.experience += amount
    gained = 0
    while progression.experience >= progression.experience_to_next:
        progression.experience -= progression.experience_to_next
        progression.level += 1
        progression.skill_points += 1
        progression.experience_to_next = experience_to_next(progression.level, rules)
        gained += 1
    return gained


def streak_multiplier(current_streak: int, rules: GameRules) -> float:
    return 1 + current_streak * rules.streak_multiplier_step


def base_zone_reward(zone: int, rules: GameRules) -> ZoneReward:
    return ZoneReward(
        coins=rules.zone_coin_base + rules.zone_coin_per_zone * zone,
        gems=zone // rules.zone_gem_divisor + rules.zone_gem_base,
        experience=rules.zone_xp_base + rules.zone_xp_per_zone * zone,
    )


def apply_mode_multipliers(coins: int, gems: int, mode: GameModeName, rules: GameRules) -> tuple[int, int]:
    if mode == "blitz":
        return math.floor(coins * rules.blitz_coin_multiplier), math.floor(gems * rules.blitz_gem_multiplier)
    if mode == "survival":
        return math.floor(coins * rules.survival_coin_multiplier), math.floor(gems * rules.survival_gem_multiplier)
    return coins, gems


def daily_reward_amounts(streak: int, rules: GameRules) -> tuple[int, int, int]:
    """Return (day, coins, gems) for a claim streak."""
    day = min(max(streak, 1), rules.daily_streak_cap)
    return day, 50 + 25 * day, 5 + day // 2
