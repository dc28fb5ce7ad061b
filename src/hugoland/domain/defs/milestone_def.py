"""Achievement and player-tag definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MilestoneDef:
    """A threshold on one state metric that unlocks once."""

    id: str
    name: str
    description: str
    metric: str
    threshold: int
