"""Stat models for the player."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PlayerStats:
    """Current and base combat stats.

    ``attack``, ``defense`` and ``max_hp`` are derived from the base values plus
    equipment and bonuses; see ``hugoland.domain.stat_calculation``.
    """

    hp: int = 100
    max_hp: int = 100
    attack: int = 20
    defense: int = 10
    base_attack: int = 20
    base_defense: int = 10
    base_hp: int = 100
