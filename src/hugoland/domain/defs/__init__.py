"""Domain definition exports."""

from .adventure_skill_def import AdventureSkillDef
from .chest_tier_def import ChestTierDef
from .enemy_def import EnemyDef
from .item_name_def import ItemNamePoolDef
from .menu_skill_def import MenuSkillDef
from .milestone_def import MilestoneDef
from .relic_def import RelicDef

__all__ = [
    "AdventureSkillDef",
    "ChestTierDef",
    "EnemyDef",
    "ItemNamePoolDef",
    "MenuSkillDef",
    "MilestoneDef",
    "RelicDef",
]
