"""Achievement and player-tag evaluation.

Both are threshold checks over a named state metric. The metric registry is
shared so definition files can be validated at load time.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Mapping

from hugoland.domain.defs import MilestoneDef
from hugoland.domain.state import GameState

MetricReader = Callable[[GameState], int]

METRICS: Mapping[str, MetricReader] = {
    "victories": lambda state: state.statistics.total_victories,
    "zone": lambda state: state.zone,
    "best_streak": lambda state: state.knowledge_streak.best,
    "items_collected": lambda state: state.statistics.items_collected,
    "chests_opened": lambda state: state.statistics.chests_opened,
    "gems_mined": lambda state: state.mining.total_gems_mined,
    "shiny_gems_mined": lambda state: state.mining.total_shiny_gems_mined,
    "level": lambda state: state.progression.level,
    "correct_answers": lambda state: state.statistics.correct_answers,
    "revivals": lambda state: state.statistics.revivals,
    "coins_earned": lambda state: state.statistics.coins_earned,
    "items_upgraded": lambda state: state.statistics.items_upgraded,
    "prestige_level": lambda state: state.progression.prestige_level,
    "deaths": lambda state: state.statistics.total_deaths,
}


def evaluate_milestones(
    state: GameState,
    definitions: Iterable[MilestoneDef],
    unlocked: Mapping[str, datetime],
) -> List[str]:
    """Return ids of milestones that are met but not yet in ``unlocked``."""
    newly: List[str] = []
    for definition in definitions:
        if definition.id in unlocked:
            continue
        if METRICS[definition.metric](state) >= definition.threshold:
            newly.append(definition.id)
    return newly


def merge_unlocks(unlocked: Dict[str, datetime], ids: Iterable[str], now: datetime) -> None:
    for milestone_id in ids:
        unlocked.setdefault(milestone_id, now)
