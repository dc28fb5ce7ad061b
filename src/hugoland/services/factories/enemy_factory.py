"""Factory for zone-scaled enemies."""
from __future__ import annotations

import math

from hugoland.core.rng import RNG
from hugoland.data.repositories import EnemiesRepository
from hugoland.domain.entities import Enemy
from hugoland.services.errors import FactoryError

from .id_factory import make_instance_id


def enemy_base_stats(zone: int) -> tuple[int, int, int]:
    """Return the unscaled (hp, attack, defense) for a zone."""
    return 50 + 15 * zone, 8 + 3 * zone, 2 + 2 * zone


def create_enemy(zone: int, enemies_repo: EnemiesRepository, rng: RNG) -> Enemy:
    """Pick a template unlocked at ``zone`` and scale it to the zone."""
    templates = enemies_repo.available_for_zone(zone)
    if not templates:
        raise FactoryError(f"No enemies available for zone {zone}.")
    template = rng.choice(templates)
    hp, attack, defense = enemy_base_stats(zone)
    max_hp = max(1, math.floor(hp * template.hp_scale))
    return Enemy(
        id=make_instance_id("enemy", rng),
        name=template.name,
        zone=zone,
        hp=max_hp,
        max_hp=max_hp,
        attack=max(1, math.floor(attack * template.attack_scale)),
        defense=max(0, math.floor(defense * template.defense_scale)),
    )
