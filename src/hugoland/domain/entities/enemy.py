"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Enemy:
    """Represents a spawned enemy ready for battle."""

    id: str
    name: str
    zone: int
    hp: int
    max_hp: int
    attack: int
    defense: int
