"""Tunable game constants.

Two rule sets of the game diverged over time (reward formula, chest gem odds,
garden seed cost, research). Every such constant lives here with the shipped
default so a deployment can switch variants through configuration instead of
code changes.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameRules:
    # Zone rewards: coins = coin_base + coin_per_zone * zone, gems = zone // gem_divisor + gem_base
    zone_coin_base: int = 10
    zone_coin_per_zone: int = 2
    zone_gem_divisor: int = 5
    zone_gem_base: int = 1
    zone_xp_base: int = 10
    zone_xp_per_zone: int = 2
    streak_multiplier_step: float = 0.1
    blitz_coin_multiplier: float = 1.25
    blitz_gem_multiplier: float = 1.1
    survival_coin_multiplier: float = 2.0
    survival_gem_multiplier: float = 2.0
    cheat_currency_amount: int = 999_999
    premium_zone: int = 50

    # Combat
    combat_log_limit: int = 10
    revival_hp_ratio: float = 0.5
    max_survival_lives: int = 3
    item_drop_min_zone: int = 10
    item_drop_chance: float = 0.3
    enchant_chance: float = 0.05
    enchanted_stat_multiplier: float = 1.5
    adventure_skill_offer_count: int = 3

    # Equipment
    weapon_upgrade_attack: int = 10
    armor_upgrade_defense: int = 5
    upgrade_cost_growth: float = 1.5
    sell_price_growth: float = 1.2
    relic_upgrade_attack: int = 22
    relic_upgrade_defense: int = 15
    relic_upgrade_cost_growth: float = 1.5
    max_equipped_relics: int = 5
    apply_durability_scaling: bool = False

    # Chests and mining
    chest_gem_chance: float = 0.2
    shiny_gem_chance: float = 0.05
    shiny_exchange_rate: int = 10

    # Garden of Growth
    seed_cost: int = 2000
    water_cost: int = 1000
    max_growth_cm: int = 100
    starting_water_hours: int = 24
    growth_cm_per_hour: float = 0.5
    growth_bonus_per_cm: float = 5.0

    # Research (absent from the default rule set)
    research_enabled: bool = False
    research_bonus_per_level: float = 10.0
    research_base_cost: int = 100

    # Progression
    initial_experience_to_next: int = 100
    experience_base: int = 100
    experience_per_level: int = 50
    prestige_min_level: int = 50
    prestige_level_divisor: int = 10

    # Time-based systems
    max_offline_hours: float = 8.0
    min_offline_hours: float = 0.1
    market_size: int = 3
    market_refresh_minutes: int = 5
    daily_streak_cap: int = 14
    menu_skill_cost: int = 100
    autosave_interval_seconds: float = 10.0
