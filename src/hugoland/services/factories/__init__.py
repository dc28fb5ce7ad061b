"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy
from .id_factory import make_instance_id
from .item_factory import create_armor, create_random_item, create_weapon, roll_rarity
from .relic_factory import create_relic

__all__ = [
    "create_armor",
    "create_enemy",
    "create_random_item",
    "create_relic",
    "create_weapon",
    "make_instance_id",
    "roll_rarity",
]
