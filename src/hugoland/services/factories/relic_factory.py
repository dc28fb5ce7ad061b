"""Factory for Yojef Market relics."""
from __future__ import annotations

from hugoland.core.rng import RNG
from hugoland.data.repositories import RelicsRepository
from hugoland.domain.entities import Relic
from hugoland.services.errors import FactoryError

from .id_factory import make_instance_id


def create_relic(relics_repo: RelicsRepository, rng: RNG, relic_id: str | None = None) -> Relic:
    """Instantiate a relic from a template, or from a random one when no id is given."""
    if relic_id is None:
        relic_def = rng.choice(relics_repo.all())
    else:
        try:
            relic_def = relics_repo.get(relic_id)
        except KeyError as exc:
            raise FactoryError(f"Relic '{relic_id}' not found.") from exc

    stat = rng.randint(relic_def.stat_min, relic_def.stat_max)
    cost = rng.randint(relic_def.cost_min, relic_def.cost_max)
    return Relic(
        id=make_instance_id("relic", rng),
        name=relic_def.name,
        description=relic_def.description,
        relic_type=relic_def.relic_type,
        rarity=relic_def.rarity,
        cost=cost,
        upgrade_cost=max(1, cost // 2),
        base_attack=stat if relic_def.relic_type == "weapon" else None,
        base_defense=stat if relic_def.relic_type == "armor" else None,
    )
