import json
from pathlib import Path

import pytest

from hugoland.data.errors import DataLoadError, DataValidationError
from hugoland.data.repositories import (
    AchievementsRepository,
    AdventureSkillsRepository,
    ChestTiersRepository,
    EnemiesRepository,
    ItemNamesRepository,
    MenuSkillsRepository,
    RelicsRepository,
)


def test_enemies_repo_filters_by_zone(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "enemies.json",
        {
            "slime": {"name": "Slime", "min_zone": 1},
            "ogre": {"name": "Ogre", "min_zone": 5, "hp_scale": 1.5},
        },
    )
    repo = EnemiesRepository(base_path=definitions_dir)

    assert [enemy.id for enemy in repo.available_for_zone(1)] == ["slime"]
    assert [enemy.id for enemy in repo.available_for_zone(5)] == ["ogre", "slime"]
    assert repo.get("ogre").hp_scale == 1.5


def test_enemies_repo_get_missing_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "enemies.json", {"slime": {"name": "Slime", "min_zone": 1}})
    repo = EnemiesRepository(base_path=definitions_dir)

    with pytest.raises(KeyError):
        repo.get("dragon")


def test_missing_definition_file_raises_load_error(tmp_path: Path) -> None:
    repo = RelicsRepository(base_path=_make_definitions_dir(tmp_path))

    with pytest.raises(DataLoadError):
        repo.all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "menu_skills.json").write_text("{not json", encoding="utf-8")
    repo = MenuSkillsRepository(base_path=definitions_dir)

    with pytest.raises(DataLoadError):
        repo.all()


def test_chest_tier_weights_must_sum_to_100(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "chest_tiers.json",
        [{"id": "basic", "min_cost": 0, "bonus_gems": 10, "item_count": 1, "weights": {"common": 60, "rare": 30}}],
    )
    repo = ChestTiersRepository(base_path=definitions_dir)

    with pytest.raises(DataValidationError):
        repo.all()


def test_chest_tier_for_cost_picks_highest_reached_tier(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "chest_tiers.json",
        [
            {"id": "basic", "min_cost": 0, "bonus_gems": 10, "item_count": 1, "weights": {"common": 100}},
            {"id": "gold", "min_cost": 400, "bonus_gems": 25, "item_count": 2, "weights": {"epic": 100}},
        ],
    )
    repo = ChestTiersRepository(base_path=definitions_dir)

    assert repo.tier_for_cost(399).id == "basic"
    assert repo.tier_for_cost(400).id == "gold"
    assert repo.tier_for_cost(400).ordered_weights() == [0, 0, 100, 0, 0]


def test_adventure_skill_ids_must_name_a_skill_type(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "adventure_skills.json",
        {"teleport": {"name": "Teleport", "description": "Not a real skill"}},
    )
    repo = AdventureSkillsRepository(base_path=definitions_dir)

    with pytest.raises(DataValidationError):
        repo.all()


def test_milestone_metric_must_be_known(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "achievements.json",
        {"odd": {"name": "Odd", "description": "Unknown metric", "metric": "hats_worn", "threshold": 1}},
    )
    repo = AchievementsRepository(base_path=definitions_dir)

    with pytest.raises(DataValidationError):
        repo.all()


def test_item_names_require_every_rarity(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "item_names.json",
        {"weapon": {"common": ["Stick"]}, "armor": {"common": ["Rag"]}},
    )
    repo = ItemNamesRepository(base_path=definitions_dir)

    with pytest.raises(DataValidationError):
        repo.all()


def test_relic_stat_range_must_be_ordered(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "relics.json",
        {
            "bent_nail": {
                "name": "Bent Nail",
                "description": "Backwards",
                "relic_type": "weapon",
                "rarity": "legendary",
                "stat_min": 10,
                "stat_max": 5,
                "cost_min": 1,
                "cost_max": 2,
            }
        },
    )
    repo = RelicsRepository(base_path=definitions_dir)

    with pytest.raises(DataValidationError):
        repo.all()


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
