"""The owning container for the live game state."""
from __future__ import annotations

import copy
import logging
from typing import Any, List, Mapping, Sequence, TypeVar

from hugoland.core.clock import Clock, SystemClock
from hugoland.core.rng import RNG
from hugoland.core.scheduler import ScheduledTask, Scheduler
from hugoland.core.types import ItemKind
from hugoland.data.errors import StorageError
from hugoland.data.storage import StorageAdapter
from hugoland.domain.adventure import AdventureSkillOffer
from hugoland.domain.entities import Armor, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState, MenuSkill, new_game_state
from hugoland.services.admin_service import AdminService
from hugoland.services.catalog import GameCatalog
from hugoland.services.chest_service import ChestReward, ChestService
from hugoland.services.combat_service import CombatService
from hugoland.services.daily_reward_service import DailyRewardService
from hugoland.services.errors import SaveLoadError
from hugoland.services.garden_service import GardenService
from hugoland.services.inventory_service import InventoryService
from hugoland.services.menu_skill_service import MenuSkillService
from hugoland.services.milestone_service import MilestoneService
from hugoland.services.mining_service import MiningService, MiningYield
from hugoland.services.progression_service import ProgressionService
from hugoland.services.relic_service import RelicService
from hugoland.services.save_service import SAVE_KEY, SaveService
from hugoland.services.time_service import OfflineReport, TimeService
from hugoland.services.transition import Transition

logger = logging.getLogger(__name__)

V = TypeVar("V")


class GameStore:
    """Holds the single authoritative GameState and routes every operation through a service.

    Every operation returns None while no state is loaded. Callers only ever
    receive copies of the state.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        catalog: GameCatalog | None = None,
        rng: RNG | None = None,
        clock: Clock | None = None,
        rules: GameRules | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._storage = storage
        self._catalog = catalog or GameCatalog.load()
        self._rng = rng or RNG()
        self._clock = clock or SystemClock()
        self._rules = rules or GameRules()
        self._scheduler = scheduler or Scheduler(self._clock)
        self._state: GameState | None = None
        self._autosave_task: ScheduledTask | None = None

        milestones = MilestoneService(self._catalog, self._clock)
        self._garden = GardenService(self._clock, self._rules)
        self._daily_rewards = DailyRewardService(self._catalog, self._rng, self._clock, self._rules)
        self._combat = CombatService(self._catalog, self._rng, self._clock, self._rules, milestones)
        self._inventory = InventoryService(self._rules)
        self._relics = RelicService(self._rules)
        self._chests = ChestService(self._catalog, self._rng, self._clock, self._rules)
        self._mining = MiningService(self._rng, self._rules)
        self._menu_skills = MenuSkillService(self._catalog, self._rng, self._clock, self._rules)
        self._progression = ProgressionService(self._rules)
        self._admin = AdminService()
        self._time = TimeService(
            self._catalog, self._rng, self._clock, self._rules, self._garden, self._daily_rewards, milestones
        )
        self._saves = SaveService(self._rules)
        self._last_offline_report: OfflineReport | None = None

    @property
    def state(self) -> GameState | None:
        return copy.deepcopy(self._state)

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def last_offline_report(self) -> OfflineReport | None:
        return self._last_offline_report

    # -- lifecycle --------------------------------------------------------

    def load(self) -> GameState:
        """Load the saved game (or start a new one) and catch it up to the present."""
        now = self._clock.now()
        state = self._read_saved_state()
        if state is None:
            state = new_game_state(now, self._rules)
        hydrated = self._time.hydrate(state)
        self._state = hydrated.state
        self._last_offline_report = hydrated.value
        return copy.deepcopy(self._state)

    def save(self) -> bool:
        """Persist the current state; failures are logged and leave the in-memory state untouched."""
        if self._state is None:
            return False
        now = self._clock.now()
        persisted = copy.deepcopy(self._state)
        persisted.offline_progress.last_save_time = now
        try:
            self._storage.set_item(SAVE_KEY, self._saves.dumps(persisted, now))
        except Exception:
            logger.exception("Failed to save game state")
            return False
        return True

    def start_autosave(self) -> ScheduledTask:
        if self._autosave_task is not None and not self._autosave_task.cancelled:
            return self._autosave_task
        self._autosave_task = self._scheduler.call_every(
            self._rules.autosave_interval_seconds, self._autosave, name="autosave"
        )
        return self._autosave_task

    def stop_autosave(self) -> None:
        self._scheduler.cancel(self._autosave_task)
        self._autosave_task = None

    def close(self) -> None:
        """Save once more and cancel every timer owned by this store."""
        self.save()
        self._scheduler.cancel_all()
        self._autosave_task = None

    def reset_game(self) -> GameState:
        now = self._clock.now()
        fresh = self._time.hydrate(new_game_state(now, self._rules))
        self._state = fresh.state
        self.save()
        return copy.deepcopy(self._state)

    def _autosave(self) -> None:
        if self._state is not None and self._state.settings.auto_save:
            self.save()

    def _read_saved_state(self) -> GameState | None:
        try:
            text = self._storage.get_item(SAVE_KEY)
        except StorageError:
            logger.exception("Failed to read saved game; starting a new game")
            return None
        if text is None:
            return None
        try:
            return self._saves.loads(text, self._clock.now())
        except SaveLoadError as exc:
            logger.warning("Saved game unreadable (%s); starting a new game", exc)
            return None

    def _apply(self, transition: Transition[V]) -> V:
        self._state = transition.state
        return transition.value

    # -- operations -------------------------------------------------------

    def start_combat(self) -> List[AdventureSkillOffer] | None:
        if self._state is None:
            return None
        return self._apply(self._combat.start_combat(self._state))

    def select_adventure_skill(self, skill_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._combat.select_adventure_skill(self._state, skill_id))

    def skip_adventure_skills(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._combat.skip_adventure_skills(self._state))

    def use_skip_card(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._combat.use_skip_card(self._state))

    def attack(self, hit: bool, category: str | None = None) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._combat.attack(self._state, hit, category))

    def equip_weapon(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.equip_weapon(self._state, item_id))

    def equip_armor(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.equip_armor(self._state, item_id))

    def upgrade_weapon(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.upgrade_weapon(self._state, item_id))

    def upgrade_armor(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.upgrade_armor(self._state, item_id))

    def sell_weapon(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.sell_weapon(self._state, item_id))

    def sell_armor(self, item_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.sell_armor(self._state, item_id))

    def discard_item(self, item_id: str, kind: ItemKind) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.discard_item(self._state, item_id, kind))

    def bulk_sell(self, item_ids: Sequence[str], kind: ItemKind) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.bulk_sell(self._state, item_ids, kind))

    def bulk_upgrade(self, item_ids: Sequence[str], kind: ItemKind) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._inventory.bulk_upgrade(self._state, item_ids, kind))

    def purchase_relic(self, relic_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._relics.purchase_relic(self._state, relic_id))

    def upgrade_relic(self, relic_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._relics.upgrade_relic(self._state, relic_id))

    def equip_relic(self, relic_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._relics.equip_relic(self._state, relic_id))

    def unequip_relic(self, relic_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._relics.unequip_relic(self._state, relic_id))

    def sell_relic(self, relic_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._relics.sell_relic(self._state, relic_id))

    def open_chest(self, cost: int) -> ChestReward | None:
        if self._state is None:
            return None
        return self._apply(self._chests.open_chest(self._state, cost))

    def purchase_mythical(self, cost: int) -> ChestReward | None:
        if self._state is None:
            return None
        return self._apply(self._chests.purchase_mythical(self._state, cost))

    def generate_cheat_item(self) -> Weapon | Armor | None:
        if self._state is None:
            return None
        return self._apply(self._chests.generate_cheat_item(self._state))

    def mine_gem(self, x: float, y: float) -> MiningYield | None:
        if self._state is None:
            return None
        return self._apply(self._mining.mine_gem(self._state, x, y))

    def exchange_shiny_gems(self, amount: int) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._mining.exchange_shiny_gems(self._state, amount))

    def roll_skill(self) -> MenuSkill | None:
        if self._state is None:
            return None
        return self._apply(self._menu_skills.roll_skill(self._state))

    def plant_seed(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._garden.plant_seed(self._state))

    def buy_water(self, hours: float) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._garden.buy_water(self._state, hours))

    def claim_daily_reward(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._daily_rewards.claim_daily_reward(self._state))

    def claim_offline_rewards(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._time.claim_offline_rewards(self._state))

    def refresh_market(self, force: bool = False) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._time.refresh_market(self._state, force))

    def tick(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._time.tick(self._state))

    def upgrade_skill(self, skill_id: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._progression.upgrade_skill(self._state, skill_id))

    def prestige(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._progression.prestige(self._state))

    def set_experience(self, experience: int) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._progression.set_experience(self._state, experience))

    def upgrade_research(self) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._progression.upgrade_research(self._state))

    def add_coins(self, amount: int) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.add_coins(self._state, amount))

    def add_gems(self, amount: int) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.add_gems(self._state, amount))

    def teleport_to_zone(self, zone: int) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.teleport_to_zone(self._state, zone))

    def set_game_mode(self, mode: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.set_game_mode(self._state, mode))

    def toggle_cheat(self, cheat: str) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.toggle_cheat(self._state, cheat))

    def update_settings(self, changes: Mapping[str, Any]) -> bool | None:
        if self._state is None:
            return None
        return self._apply(self._admin.update_settings(self._state, changes))
