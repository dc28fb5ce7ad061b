"""Runtime entity exports."""

from .enemy import Enemy
from .items import Armor, Relic, Weapon
from .stats import PlayerStats

__all__ = ["Armor", "Enemy", "PlayerStats", "Relic", "Weapon"]
