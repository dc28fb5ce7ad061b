from __future__ import annotations

from pathlib import Path

import pytest

from hugoland.data import paths
from hugoland.data.json_loader import load_json
from hugoland.domain.adventure import AdventureSkillType
from hugoland.services.catalog import GameCatalog


@pytest.fixture(scope="module")
def definitions_dir() -> Path:
    """Return the canonical definitions directory."""
    return paths.get_definitions_path()


@pytest.fixture(scope="module")
def catalog() -> GameCatalog:
    return GameCatalog.load()


@pytest.mark.parametrize(
    "filename",
    [
        "achievements.json",
        "adventure_skills.json",
        "chest_tiers.json",
        "enemies.json",
        "item_names.json",
        "menu_skills.json",
        "player_tags.json",
        "relics.json",
    ],
)
def test_definition_files_are_valid_json(definitions_dir: Path, filename: str) -> None:
    """Every definition file should be parsable JSON."""
    assert load_json(definitions_dir / filename) is not None


def test_every_adventure_skill_type_has_a_catalog_entry(catalog: GameCatalog) -> None:
    assert set(catalog.adventure_skills.ids()) == {member.value for member in AdventureSkillType}
    assert len(catalog.adventure_skills.all()) == 27


def test_zone_one_has_enemies(catalog: GameCatalog) -> None:
    assert catalog.enemies.available_for_zone(1)


def test_cheapest_chest_tier_is_free(catalog: GameCatalog) -> None:
    assert catalog.chest_tiers.tiers_by_cost()[0].min_cost == 0


def test_all_repositories_load(catalog: GameCatalog) -> None:
    assert catalog.menu_skills.all()
    assert catalog.achievements.all()
    assert catalog.player_tags.all()
    assert catalog.relics.all()
    assert catalog.item_names.pool("weapon", "mythical").names
