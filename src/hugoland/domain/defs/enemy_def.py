"""Enemy template definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EnemyDef:
    id: str
    name: str
    min_zone: int
    hp_scale: float = 1.0
    attack_scale: float = 1.0
    defense_scale: float = 1.0
