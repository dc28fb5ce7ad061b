"""Repository for enemy templates."""
from __future__ import annotations

from typing import Dict, List

from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for enemy_id, payload in raw.items():
            context = f"enemies.{enemy_id}"
            mapping = self._require_mapping(payload, context)
            enemies[enemy_id] = EnemyDef(
                id=enemy_id,
                name=self._require_str(mapping.get("name"), f"{context}.name"),
                min_zone=self._require_int(mapping.get("min_zone", 1), f"{context}.min_zone", minimum=1),
                hp_scale=self._require_float(mapping.get("hp_scale", 1.0), f"{context}.hp_scale"),
                attack_scale=self._require_float(mapping.get("attack_scale", 1.0), f"{context}.attack_scale"),
                defense_scale=self._require_float(mapping.get("defense_scale", 1.0), f"{context}.defense_scale"),
            )
        return enemies

    def available_for_zone(self, zone: int) -> List[EnemyDef]:
        return [enemy for enemy in self.all() if enemy.min_zone <= zone]
