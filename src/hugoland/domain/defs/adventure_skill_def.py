"""Adventure skill catalog definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class AdventureSkillDef:
    """Catalog entry for a per-combat adventure skill."""

    id: str
    name: str
    description: str
