"""Serialization helpers for the persisted game document."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, TypeVar

from hugoland.core.types import GAME_MODES, RARITIES
from hugoland.domain.adventure import ActiveAdventureSkill, AdventureSkillOffer, AdventureSkillType
from hugoland.domain.entities import Armor, Enemy, Relic, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import (
    CategoryAccuracy,
    CombatPhase,
    DailyReward,
    DailyRewardRecord,
    GameState,
    MenuSkill,
    new_game_state,
)
from hugoland.services.errors import SaveLoadError

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]
T = TypeVar("T")

SAVE_KEY = "hugoland_game_state"
_MISSING = object()


def to_epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def from_timestamp(value: object) -> datetime | None:
    """Parse epoch milliseconds or an ISO-8601 string; None when unparseable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_epoch_ms(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(key): _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


class SaveService:
    """Converts runtime state to and from the versioned save document.

    Loading is additive: every section of the persisted state is merged over a
    fresh default state, and fields that are missing or of the wrong type keep
    their defaults.
    """

    SAVE_VERSION = 1

    def __init__(self, rules: GameRules | None = None) -> None:
        self._rules = rules or GameRules()

    def serialize(self, state: GameState, saved_at: datetime) -> SavePayload:
        """Return a JSON-serializable payload for persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "saved_at": to_epoch_ms(saved_at),
            "state": _encode(asdict(state)),
        }

    def dumps(self, state: GameState, saved_at: datetime) -> str:
        return json.dumps(self.serialize(state, saved_at), sort_keys=True)

    def loads(self, text: str, now: datetime) -> GameState:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Save data is not valid JSON: {exc}") from exc
        return self.deserialize(payload, now)

    def deserialize(self, payload: object, now: datetime) -> GameState:
        """Rebuild a GameState by merging ``payload`` over defaults created at ``now``."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("save_version")
        state_payload = payload.get("state") if "state" in payload else payload
        if not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing the state section.")
        if isinstance(version, int) and version > self.SAVE_VERSION:
            logger.warning("Save version %s is newer than %s; loading known fields only", version, self.SAVE_VERSION)

        state = new_game_state(now, self._rules)
        self._merge_root(state, state_payload)
        self._normalize(state)
        return state

    # -- sections ---------------------------------------------------------

    def _merge_root(self, state: GameState, raw: Mapping[str, Any]) -> None:
        for name in ("coins", "gems", "shiny_gems"):
            setattr(state, name, self._coerce_non_negative_int(raw.get(name), getattr(state, name)))
        state.zone = max(1, self._coerce_non_negative_int(raw.get("zone"), state.zone))
        state.is_premium = self._coerce_bool(raw.get("is_premium"), state.is_premium)
        state.has_used_revival = self._coerce_bool(raw.get("has_used_revival"), state.has_used_revival)
        state.combat_log = self._coerce_str_list(raw.get("combat_log"))[-self._rules.combat_log_limit:]
        state.combat_started_at = from_timestamp(raw.get("combat_started_at"))
        state.combat_phase = self._coerce_phase(raw.get("combat_phase"))
        state.current_enemy = self._coerce_optional(raw.get("current_enemy"), self._coerce_enemy)

        self._merge_scalars(state.player_stats, raw.get("player_stats"))
        self._merge_inventory(state, raw.get("inventory"))
        self._merge_scalars(state.research, raw.get("research"))
        self._merge_scalars(state.knowledge_streak, raw.get("knowledge_streak"))
        self._merge_scalars(state.mining, raw.get("mining"))
        self._merge_scalars(state.cheats, raw.get("cheats"))
        self._merge_scalars(state.settings, raw.get("settings"))
        self._merge_progression(state, raw.get("progression"))
        self._merge_scalars(state.offline_progress, raw.get("offline_progress"), datetimes=("last_save_time",))
        self._merge_scalars(
            state.garden,
            raw.get("garden"),
            datetimes=("planted_at", "last_watered", "last_growth_update"),
        )
        self._merge_game_mode(state, raw.get("game_mode"))
        self._merge_statistics(state, raw.get("statistics"))
        self._merge_market(state, raw.get("market"))
        self._merge_daily_rewards(state, raw.get("daily_rewards"))
        self._merge_skills(state, raw.get("skills"))
        self._merge_adventure(state, raw.get("adventure"))
        self._merge_collection_book(state, raw.get("collection_book"))
        state.achievements = self._coerce_unlocks(raw.get("achievements"))
        state.player_tags = self._coerce_unlocks(raw.get("player_tags"))

    def _merge_inventory(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        inventory = state.inventory
        inventory.weapons = self._coerce_list(raw.get("weapons"), self._coerce_weapon)
        inventory.armor = self._coerce_list(raw.get("armor"), self._coerce_armor)
        inventory.relics = self._coerce_list(raw.get("relics"), self._coerce_relic)
        inventory.equipped_relics = self._coerce_list(raw.get("equipped_relics"), self._coerce_relic)
        inventory.current_weapon_id = self._coerce_optional_str(raw.get("current_weapon_id"))
        inventory.current_armor_id = self._coerce_optional_str(raw.get("current_armor_id"))

    def _merge_progression(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        progression = state.progression
        self._merge_scalars(progression, raw)
        progression.level = max(1, progression.level)
        progression.unlocked_skills = self._coerce_str_list(raw.get("unlocked_skills"))
        mastery = raw.get("mastery_levels")
        if isinstance(mastery, Mapping):
            progression.mastery_levels = {
                str(key): value
                for key, value in mastery.items()
                if isinstance(value, int) and not isinstance(value, bool)
            }

    def _merge_game_mode(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        self._merge_scalars(state.game_mode, raw)
        if state.game_mode.current not in GAME_MODES:
            state.game_mode.current = "normal"

    def _merge_statistics(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        self._merge_scalars(state.statistics, raw, datetimes=("session_start_time",))
        accuracy = raw.get("accuracy_by_category")
        if isinstance(accuracy, Mapping):
            buckets: Dict[str, CategoryAccuracy] = {}
            for category, bucket in accuracy.items():
                if isinstance(bucket, Mapping):
                    merged = CategoryAccuracy()
                    self._merge_scalars(merged, bucket)
                    buckets[str(category)] = merged
            state.statistics.accuracy_by_category = buckets

    def _merge_market(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        state.market.items = self._coerce_list(raw.get("items"), self._coerce_relic)
        state.market.last_refresh = from_timestamp(raw.get("last_refresh"))
        state.market.next_refresh = from_timestamp(raw.get("next_refresh"))

    def _merge_daily_rewards(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        daily = state.daily_rewards
        self._merge_scalars(daily, raw, datetimes=("last_claim_date",))
        daily.available_reward = self._coerce_optional(raw.get("available_reward"), self._coerce_daily_reward)
        daily.reward_history = self._coerce_list(raw.get("reward_history"), self._coerce_reward_record)

    def _merge_skills(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        self._merge_scalars(state.skills, raw, datetimes=("last_roll_time", "session_start_time"))
        state.skills.active_menu_skill = self._coerce_optional(raw.get("active_menu_skill"), self._coerce_menu_skill)

    def _merge_adventure(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        adventure = state.adventure
        adventure.selected_skill = self._coerce_optional(raw.get("selected_skill"), self._coerce_active_skill)
        adventure.available_skills = self._coerce_list(raw.get("available_skills"), self._coerce_offer)
        adventure.pending_enemy = self._coerce_optional(raw.get("pending_enemy"), self._coerce_enemy)

    def _merge_collection_book(self, state: GameState, raw: object) -> None:
        if not isinstance(raw, Mapping):
            return
        book = state.collection_book
        self._merge_scalars(book, raw)
        book.weapons = self._coerce_flag_dict(raw.get("weapons"))
        book.armor = self._coerce_flag_dict(raw.get("armor"))
        stats = raw.get("rarity_stats")
        if isinstance(stats, Mapping):
            for rarity in RARITIES:
                book.rarity_stats[rarity] = self._coerce_non_negative_int(stats.get(rarity), book.rarity_stats[rarity])

    def _normalize(self, state: GameState) -> None:
        """Repair cross-field invariants a hand-edited or partial save may break."""
        inventory = state.inventory
        if inventory.current_weapon_id and inventory.current_weapon is None:
            inventory.current_weapon_id = None
        if inventory.current_armor_id and inventory.current_armor is None:
            inventory.current_armor_id = None
        limit = self._rules.max_equipped_relics
        if len(inventory.equipped_relics) > limit:
            inventory.relics.extend(inventory.equipped_relics[limit:])
            inventory.equipped_relics = inventory.equipped_relics[:limit]

        if state.combat_phase is CombatPhase.IN_COMBAT and state.current_enemy is None:
            state.combat_phase = CombatPhase.IDLE
        if state.combat_phase is CombatPhase.SELECTING and state.adventure.pending_enemy is None:
            state.combat_phase = CombatPhase.IDLE
        if state.combat_phase is not CombatPhase.IN_COMBAT:
            state.current_enemy = None
            state.combat_started_at = None
        if state.combat_phase is CombatPhase.IDLE:
            state.adventure.selected_skill = None
            state.adventure.available_skills = []
            state.adventure.pending_enemy = None

        stats = state.player_stats
        stats.max_hp = max(1, stats.max_hp)
        stats.hp = max(0, min(stats.hp, stats.max_hp))
        # Derived stats are rebuilt from their inputs rather than trusted.
        apply_total_stats(state, self._rules)

    # -- entities ---------------------------------------------------------

    def _coerce_weapon(self, raw: Mapping[str, Any]) -> Weapon:
        weapon = Weapon(
            id=self._require_str(raw.get("id"), "weapon.id"),
            name=self._require_str(raw.get("name"), "weapon.name"),
            rarity=self._require_rarity(raw.get("rarity")),
            base_attack=self._require_int(raw.get("base_attack"), "weapon.base_attack"),
            upgrade_cost=self._require_int(raw.get("upgrade_cost"), "weapon.upgrade_cost"),
            sell_price=self._require_int(raw.get("sell_price"), "weapon.sell_price"),
        )
        self._merge_scalars(weapon, raw)
        return weapon

    def _coerce_armor(self, raw: Mapping[str, Any]) -> Armor:
        armor = Armor(
            id=self._require_str(raw.get("id"), "armor.id"),
            name=self._require_str(raw.get("name"), "armor.name"),
            rarity=self._require_rarity(raw.get("rarity")),
            base_defense=self._require_int(raw.get("base_defense"), "armor.base_defense"),
            upgrade_cost=self._require_int(raw.get("upgrade_cost"), "armor.upgrade_cost"),
            sell_price=self._require_int(raw.get("sell_price"), "armor.sell_price"),
        )
        self._merge_scalars(armor, raw)
        return armor

    def _coerce_item(self, raw: Mapping[str, Any]) -> Weapon | Armor:
        if "base_attack" in raw:
            return self._coerce_weapon(raw)
        return self._coerce_armor(raw)

    def _coerce_relic(self, raw: Mapping[str, Any]) -> Relic:
        relic_type = raw.get("relic_type")
        if relic_type not in ("weapon", "armor"):
            raise SaveLoadError("relic.relic_type must be 'weapon' or 'armor'.")
        relic = Relic(
            id=self._require_str(raw.get("id"), "relic.id"),
            name=self._require_str(raw.get("name"), "relic.name"),
            description=raw.get("description") if isinstance(raw.get("description"), str) else "",
            relic_type=relic_type,
            rarity=self._require_rarity(raw.get("rarity")),
            cost=self._require_int(raw.get("cost"), "relic.cost"),
            upgrade_cost=self._require_int(raw.get("upgrade_cost"), "relic.upgrade_cost"),
        )
        relic.level = max(1, self._coerce_non_negative_int(raw.get("level"), relic.level))
        relic.base_attack = self._coerce_optional_int(raw.get("base_attack"))
        relic.base_defense = self._coerce_optional_int(raw.get("base_defense"))
        return relic

    def _coerce_enemy(self, raw: Mapping[str, Any]) -> Enemy:
        return Enemy(
            id=self._require_str(raw.get("id"), "enemy.id"),
            name=self._require_str(raw.get("name"), "enemy.name"),
            zone=self._require_int(raw.get("zone"), "enemy.zone"),
            hp=self._require_int(raw.get("hp"), "enemy.hp"),
            max_hp=self._require_int(raw.get("max_hp"), "enemy.max_hp"),
            attack=self._require_int(raw.get("attack"), "enemy.attack"),
            defense=self._require_int(raw.get("defense"), "enemy.defense"),
        )

    def _coerce_daily_reward(self, raw: Mapping[str, Any]) -> DailyReward:
        item_raw = raw.get("item")
        return DailyReward(
            day=self._require_int(raw.get("day"), "daily_reward.day"),
            coins=self._require_int(raw.get("coins"), "daily_reward.coins"),
            gems=self._require_int(raw.get("gems"), "daily_reward.gems"),
            item=self._coerce_optional(item_raw, self._coerce_item),
        )

    def _coerce_reward_record(self, raw: Mapping[str, Any]) -> DailyRewardRecord:
        claimed_at = from_timestamp(raw.get("claimed_at"))
        if claimed_at is None:
            raise SaveLoadError("reward_history.claimed_at must be a timestamp.")
        return DailyRewardRecord(
            day=self._require_int(raw.get("day"), "reward_history.day"),
            claimed_at=claimed_at,
            coins=self._require_int(raw.get("coins"), "reward_history.coins"),
            gems=self._require_int(raw.get("gems"), "reward_history.gems"),
        )

    def _coerce_menu_skill(self, raw: Mapping[str, Any]) -> MenuSkill:
        activated_at = from_timestamp(raw.get("activated_at"))
        expires_at = from_timestamp(raw.get("expires_at"))
        if activated_at is None or expires_at is None:
            raise SaveLoadError("active_menu_skill timestamps are invalid.")
        return MenuSkill(
            id=self._require_str(raw.get("id"), "menu_skill.id"),
            name=self._require_str(raw.get("name"), "menu_skill.name"),
            description=raw.get("description") if isinstance(raw.get("description"), str) else "",
            duration_hours=self._require_int(raw.get("duration_hours"), "menu_skill.duration_hours"),
            activated_at=activated_at,
            expires_at=expires_at,
        )

    def _coerce_active_skill(self, raw: Mapping[str, Any]) -> ActiveAdventureSkill:
        skill = ActiveAdventureSkill(
            skill_type=self._require_skill_type(raw.get("skill_type")),
            name=self._require_str(raw.get("name"), "selected_skill.name"),
        )
        self._merge_scalars(skill, raw)
        return skill

    def _coerce_offer(self, raw: Mapping[str, Any]) -> AdventureSkillOffer:
        return AdventureSkillOffer(
            id=self._require_str(raw.get("id"), "offer.id"),
            skill_type=self._require_skill_type(raw.get("skill_type")),
            name=self._require_str(raw.get("name"), "offer.name"),
            description=raw.get("description") if isinstance(raw.get("description"), str) else "",
        )

    # -- primitives -------------------------------------------------------

    def _merge_scalars(self, target: Any, raw: object, *, datetimes: tuple[str, ...] = ()) -> None:
        """Copy bool/int/float/str fields whose persisted type matches the default's."""
        if not isinstance(raw, Mapping) or not is_dataclass(target):
            return
        for field_def in fields(target):
            if field_def.name not in raw:
                continue
            value = raw[field_def.name]
            if field_def.name in datetimes:
                setattr(target, field_def.name, from_timestamp(value))
                continue
            coerced = self._coerce_scalar(value, getattr(target, field_def.name))
            if coerced is not _MISSING:
                setattr(target, field_def.name, coerced)

    @staticmethod
    def _coerce_scalar(value: object, current: object) -> object:
        if isinstance(current, Enum):
            return _MISSING
        if isinstance(current, bool):
            return value if isinstance(value, bool) else _MISSING
        if isinstance(current, int):
            if not _is_finite_number(value):
                return _MISSING
            return int(value)
        if isinstance(current, float):
            if not _is_finite_number(value):
                return _MISSING
            return float(value)
        if isinstance(current, str):
            return value if isinstance(value, str) else _MISSING
        return _MISSING

    def _coerce_list(self, value: object, build: Callable[[Mapping[str, Any]], T]) -> List[T]:
        if not isinstance(value, list):
            return []
        result: List[T] = []
        for entry in value:
            if not isinstance(entry, Mapping):
                continue
            try:
                result.append(build(entry))
            except SaveLoadError as exc:
                logger.warning("Dropping unreadable save entry: %s", exc)
        return result

    def _coerce_optional(self, value: object, build: Callable[[Mapping[str, Any]], T]) -> T | None:
        if not isinstance(value, Mapping):
            return None
        try:
            return build(value)
        except SaveLoadError as exc:
            logger.warning("Dropping unreadable save entry: %s", exc)
            return None

    @staticmethod
    def _coerce_phase(value: object) -> CombatPhase:
        try:
            return CombatPhase(value)
        except ValueError:
            return CombatPhase.IDLE

    @staticmethod
    def _coerce_bool(value: object, default: bool) -> bool:
        return value if isinstance(value, bool) else default

    @staticmethod
    def _coerce_non_negative_int(value: object, default: int) -> int:
        if not _is_finite_number(value):
            return default
        return max(0, int(value))

    @staticmethod
    def _coerce_optional_int(value: object) -> int | None:
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    @staticmethod
    def _coerce_optional_str(value: object) -> str | None:
        return value if isinstance(value, str) and value else None

    @staticmethod
    def _coerce_str_list(value: object) -> List[str]:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, str)]

    @staticmethod
    def _coerce_flag_dict(value: object) -> Dict[str, bool]:
        if not isinstance(value, Mapping):
            return {}
        return {str(key): flag for key, flag in value.items() if isinstance(flag, bool)}

    @staticmethod
    def _coerce_unlocks(value: object) -> Dict[str, datetime]:
        if not isinstance(value, Mapping):
            return {}
        unlocks: Dict[str, datetime] = {}
        for milestone_id, unlocked_at in value.items():
            moment = from_timestamp(unlocked_at)
            if moment is not None:
                unlocks[str(milestone_id)] = moment
        return unlocks

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise SaveLoadError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_rarity(value: object) -> Any:
        if value not in RARITIES:
            raise SaveLoadError(f"Unknown rarity {value!r}.")
        return value

    @staticmethod
    def _require_skill_type(value: object) -> AdventureSkillType:
        try:
            return AdventureSkillType(value)
        except ValueError as exc:
            raise SaveLoadError(f"Unknown adventure skill {value!r}.") from exc
