"""Menu skill catalog definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MenuSkillDef:
    id: str
    name: str
    description: str
    duration_hours: int
