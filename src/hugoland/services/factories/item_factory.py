"""Factory for generated weapons and armor."""
from __future__ import annotations

import math
from typing import Mapping, Sequence

from hugoland.core.rng import RNG
from hugoland.core.types import RARITIES, ItemKind, Rarity
from hugoland.data.repositories import ItemNamesRepository
from hugoland.domain.entities import Armor, Weapon
from hugoland.services.errors import FactoryError

from .id_factory import make_instance_id

DEFAULT_RARITY_WEIGHTS: Mapping[Rarity, int] = {
    "common": 50,
    "rare": 30,
    "epic": 15,
    "legendary": 4,
    "mythical": 1,
}
RARITY_MULTIPLIERS: Mapping[Rarity, float] = {
    "common": 1.0,
    "rare": 1.5,
    "epic": 2.25,
    "legendary": 3.5,
    "mythical": 5.0,
}
UPGRADE_COSTS: Mapping[Rarity, int] = {
    "common": 5,
    "rare": 10,
    "epic": 20,
    "legendary": 40,
    "mythical": 80,
}
SELL_PRICES: Mapping[Rarity, int] = {
    "common": 10,
    "rare": 25,
    "epic": 50,
    "legendary": 100,
    "mythical": 250,
}
WEAPON_ATTACK_RANGE = (10, 20)
ARMOR_DEFENSE_RANGE = (5, 10)
ENCHANTED_MULTIPLIER = 1.5


def roll_rarity(rng: RNG, weights: Sequence[int] | None = None) -> Rarity:
    """Draw a rarity by cumulative weight, one weight per entry of ``RARITIES``."""
    if weights is None:
        weights = [DEFAULT_RARITY_WEIGHTS[rarity] for rarity in RARITIES]
    total = sum(weights)
    if total <= 0:
        raise FactoryError("Rarity weights must sum to a positive value.")
    roll = rng.random() * total
    cumulative = 0.0
    for rarity, weight in zip(RARITIES, weights):
        cumulative += weight
        if roll < cumulative:
            return rarity
    # Floating point edge: fall back to the last rarity with weight.
    return next(rarity for rarity, weight in reversed(list(zip(RARITIES, weights))) if weight > 0)


def _pick_name(kind: ItemKind, rarity: Rarity, names_repo: ItemNamesRepository, rng: RNG) -> str:
    try:
        pool = names_repo.pool(kind, rarity)
    except KeyError as exc:
        raise FactoryError(f"No {kind} names for rarity '{rarity}'.") from exc
    return rng.choice(pool.names)


def create_weapon(
    names_repo: ItemNamesRepository,
    rng: RNG,
    *,
    rarity: Rarity | None = None,
    enchanted: bool = False,
) -> Weapon:
    rarity = rarity or roll_rarity(rng)
    name = _pick_name("weapon", rarity, names_repo, rng)
    attack = math.floor(rng.randint(*WEAPON_ATTACK_RANGE) * RARITY_MULTIPLIERS[rarity])
    if enchanted:
        attack = math.floor(attack * ENCHANTED_MULTIPLIER)
        name = f"Enchanted {name}"
    return Weapon(
        id=make_instance_id("weapon", rng),
        name=name,
        rarity=rarity,
        base_attack=attack,
        upgrade_cost=UPGRADE_COSTS[rarity],
        sell_price=SELL_PRICES[rarity],
        is_enchanted=enchanted,
    )


def create_armor(
    names_repo: ItemNamesRepository,
    rng: RNG,
    *,
    rarity: Rarity | None = None,
    enchanted: bool = False,
) -> Armor:
    rarity = rarity or roll_rarity(rng)
    name = _pick_name("armor", rarity, names_repo, rng)
    defense = math.floor(rng.randint(*ARMOR_DEFENSE_RANGE) * RARITY_MULTIPLIERS[rarity])
    if enchanted:
        defense = math.floor(defense * ENCHANTED_MULTIPLIER)
        name = f"Enchanted {name}"
    return Armor(
        id=make_instance_id("armor", rng),
        name=name,
        rarity=rarity,
        base_defense=defense,
        upgrade_cost=UPGRADE_COSTS[rarity],
        sell_price=SELL_PRICES[rarity],
        is_enchanted=enchanted,
    )


def create_random_item(
    names_repo: ItemNamesRepository,
    rng: RNG,
    *,
    rarity: Rarity | None = None,
    enchant_chance: float = 0.0,
) -> Weapon | Armor:
    """Coin-flip between a weapon and armor piece, then roll for enchantment."""
    is_weapon = rng.chance(0.5)
    enchanted = enchant_chance > 0 and rng.chance(enchant_chance)
    if is_weapon:
        return create_weapon(names_repo, rng, rarity=rarity, enchanted=enchanted)
    return create_armor(names_repo, rng, rarity=rarity, enchanted=enchanted)
