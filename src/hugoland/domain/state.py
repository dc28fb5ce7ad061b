"""The root game document and its sections."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List

from hugoland.core.types import GameModeName, ItemKind, RARITIES, Rarity
from hugoland.domain.adventure import ActiveAdventureSkill, AdventureSkillOffer
from hugoland.domain.entities import Armor, Enemy, PlayerStats, Relic, Weapon
from hugoland.domain.rules import GameRules


class CombatPhase(str, Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    IN_COMBAT = "in_combat"


@dataclass
class Inventory:
    """Owned equipment. The equipped weapon and armor are ids into the owned lists."""

    weapons: List[Weapon] = field(default_factory=list)
    armor: List[Armor] = field(default_factory=list)
    relics: List[Relic] = field(default_factory=list)
    equipped_relics: List[Relic] = field(default_factory=list)
    current_weapon_id: str | None = None
    current_armor_id: str | None = None

    @property
    def current_weapon(self) -> Weapon | None:
        return self.find_weapon(self.current_weapon_id) if self.current_weapon_id else None

    @property
    def current_armor(self) -> Armor | None:
        return self.find_armor(self.current_armor_id) if self.current_armor_id else None

    def find_weapon(self, item_id: str) -> Weapon | None:
        return next((weapon for weapon in self.weapons if weapon.id == item_id), None)

    def find_armor(self, item_id: str) -> Armor | None:
        return next((armor for armor in self.armor if armor.id == item_id), None)

    def find_relic(self, relic_id: str) -> Relic | None:
        for relic in self.relics + self.equipped_relics:
            if relic.id == relic_id:
                return relic
        return None

    def add_item(self, item: Weapon | Armor) -> None:
        if isinstance(item, Weapon):
            self.weapons.append(item)
        else:
            self.armor.append(item)


@dataclass
class KnowledgeStreak:
    current: int = 0
    best: int = 0
    multiplier: float = 1.0


@dataclass
class CategoryAccuracy:
    correct: int = 0
    total: int = 0


@dataclass
class Statistics:
    total_questions_answered: int = 0
    correct_answers: int = 0
    accuracy_by_category: Dict[str, CategoryAccuracy] = field(default_factory=dict)
    total_play_time: float = 0.0
    zones_reached: int = 1
    items_collected: int = 0
    coins_earned: int = 0
    gems_earned: int = 0
    shiny_gems_earned: int = 0
    chests_opened: int = 0
    total_deaths: int = 0
    total_victories: int = 0
    longest_streak: int = 0
    fastest_victory: float = 0.0
    total_damage_dealt: int = 0
    total_damage_taken: int = 0
    items_upgraded: int = 0
    items_sold: int = 0
    total_research_spent: int = 0
    average_accuracy: float = 0.0
    revivals: int = 0
    session_start_time: datetime | None = None

    def record_answer(self, correct: bool, category: str | None) -> None:
        self.total_questions_answered += 1
        if correct:
            self.correct_answers += 1
        if category:
            bucket = self.accuracy_by_category.setdefault(category, CategoryAccuracy())
            bucket.total += 1
            if correct:
                bucket.correct += 1
        self.average_accuracy = self.correct_answers / self.total_questions_answered * 100


@dataclass
class Mining:
    total_gems_mined: int = 0
    total_shiny_gems_mined: int = 0


@dataclass
class Market:
    """The Yojef Market: relic offers that rotate on a fixed interval."""

    items: List[Relic] = field(default_factory=list)
    last_refresh: datetime | None = None
    next_refresh: datetime | None = None


@dataclass
class DailyReward:
    day: int
    coins: int
    gems: int
    item: Weapon | Armor | None = None


@dataclass
class DailyRewardRecord:
    day: int
    claimed_at: datetime
    coins: int
    gems: int


@dataclass
class DailyRewards:
    last_claim_date: datetime | None = None
    current_streak: int = 0
    max_streak: int = 0
    available_reward: DailyReward | None = None
    reward_history: List[DailyRewardRecord] = field(default_factory=list)


@dataclass
class Garden:
    """Garden of Growth: a plant that grows while watered and boosts all stats."""

    is_planted: bool = False
    planted_at: datetime | None = None
    last_watered: datetime | None = None
    last_growth_update: datetime | None = None
    water_hours_remaining: float = 0.0
    growth_cm: float = 0.0
    total_growth_bonus: float = 0.0
    seed_cost: int = 2000
    water_cost: int = 1000
    max_growth_cm: int = 100


@dataclass
class Progression:
    level: int = 1
    experience: int = 0
    experience_to_next: int = 100
    skill_points: int = 0
    unlocked_skills: List[str] = field(default_factory=list)
    prestige_level: int = 0
    prestige_points: int = 0
    mastery_levels: Dict[str, int] = field(default_factory=dict)


@dataclass
class Research:
    level: int = 0
    total_spent: int = 0


@dataclass
class OfflineProgress:
    last_save_time: datetime | None = None
    offline_coins: int = 0
    offline_gems: int = 0
    offline_time: float = 0.0
    max_offline_hours: float = 8.0


@dataclass
class Settings:
    sound_volume: int = 50
    music_volume: int = 50
    auto_save: bool = True
    show_animations: bool = True
    dark_mode: bool = False
    language: str = "en"


@dataclass
class Cheats:
    infinite_coins: bool = False
    infinite_gems: bool = False
    obtain_any_item: bool = False


@dataclass
class GameModeState:
    current: GameModeName = "normal"
    speed_mode_active: bool = False
    survival_lives: int = 3
    max_survival_lives: int = 3


@dataclass
class MenuSkill:
    """A timed buff rolled from the menu."""

    id: str
    name: str
    description: str
    duration_hours: int
    activated_at: datetime
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return now < self.expires_at


@dataclass
class SkillsState:
    active_menu_skill: MenuSkill | None = None
    last_roll_time: datetime | None = None
    play_time_this_session: float = 0.0
    session_start_time: datetime | None = None

    def menu_skill_active(self, skill_id: str, now: datetime) -> bool:
        skill = self.active_menu_skill
        return skill is not None and skill.id == skill_id and skill.is_active(now)


@dataclass
class AdventureState:
    selected_skill: ActiveAdventureSkill | None = None
    available_skills: List[AdventureSkillOffer] = field(default_factory=list)
    pending_enemy: Enemy | None = None


@dataclass
class CollectionBook:
    weapons: Dict[str, bool] = field(default_factory=dict)
    armor: Dict[str, bool] = field(default_factory=dict)
    total_weapons_found: int = 0
    total_armor_found: int = 0
    rarity_stats: Dict[str, int] = field(default_factory=lambda: {rarity: 0 for rarity in RARITIES})

    def register_found_item(self, kind: ItemKind, name: str, rarity: Rarity) -> None:
        book = self.weapons if kind == "weapon" else self.armor
        if not book.get(name):
            book[name] = True
            if kind == "weapon":
                self.total_weapons_found += 1
            else:
                self.total_armor_found += 1
        self.rarity_stats[rarity] = self.rarity_stats.get(rarity, 0) + 1


@dataclass
class GameState:
    """Everything the game persists. Services never mutate an instance they are handed."""

    coins: int = 500
    gems: int = 0
    shiny_gems: int = 0
    zone: int = 1
    player_stats: PlayerStats = field(default_factory=PlayerStats)
    inventory: Inventory = field(default_factory=Inventory)
    current_enemy: Enemy | None = None
    combat_phase: CombatPhase = CombatPhase.IDLE
    combat_log: List[str] = field(default_factory=list)
    combat_started_at: datetime | None = None
    research: Research = field(default_factory=Research)
    is_premium: bool = False
    achievements: Dict[str, datetime] = field(default_factory=dict)
    player_tags: Dict[str, datetime] = field(default_factory=dict)
    collection_book: CollectionBook = field(default_factory=CollectionBook)
    knowledge_streak: KnowledgeStreak = field(default_factory=KnowledgeStreak)
    game_mode: GameModeState = field(default_factory=GameModeState)
    statistics: Statistics = field(default_factory=Statistics)
    cheats: Cheats = field(default_factory=Cheats)
    mining: Mining = field(default_factory=Mining)
    market: Market = field(default_factory=Market)
    daily_rewards: DailyRewards = field(default_factory=DailyRewards)
    progression: Progression = field(default_factory=Progression)
    offline_progress: OfflineProgress = field(default_factory=OfflineProgress)
    garden: Garden = field(default_factory=Garden)
    settings: Settings = field(default_factory=Settings)
    has_used_revival: bool = False
    skills: SkillsState = field(default_factory=SkillsState)
    adventure: AdventureState = field(default_factory=AdventureState)

    @property
    def in_combat(self) -> bool:
        return self.combat_phase is CombatPhase.IN_COMBAT

    @property
    def show_selection_modal(self) -> bool:
        return self.combat_phase is CombatPhase.SELECTING

    def add_log(self, message: str, limit: int = 10) -> None:
        self.combat_log.append(message)
        if len(self.combat_log) > limit:
            del self.combat_log[: len(self.combat_log) - limit]


def new_game_state(now: datetime, rules: GameRules | None = None) -> GameState:
    """Return the default starting document for a new game."""
    rules = rules or GameRules()
    state = GameState()
    state.garden = Garden(
        seed_cost=rules.seed_cost,
        water_cost=rules.water_cost,
        max_growth_cm=rules.max_growth_cm,
    )
    state.progression = Progression(experience_to_next=rules.initial_experience_to_next)
    state.game_mode = GameModeState(
        survival_lives=rules.max_survival_lives,
        max_survival_lives=rules.max_survival_lives,
    )
    state.offline_progress = OfflineProgress(
        last_save_time=now,
        max_offline_hours=rules.max_offline_hours,
    )
    state.statistics.session_start_time = now
    state.skills.session_start_time = now
    return state


def market_refresh_due(state: GameState, now: datetime) -> bool:
    next_refresh = state.market.next_refresh
    return next_refresh is None or now > next_refresh


def next_market_refresh(now: datetime, rules: GameRules) -> datetime:
    return now + timedelta(minutes=rules.market_refresh_minutes)
