"""Service layer exports."""

from .errors import FactoryError, SaveLoadError
from .game_store import GameStore
from .save_service import SAVE_KEY, SaveService
from .transition import Transition

__all__ = [
    "FactoryError",
    "GameStore",
    "SAVE_KEY",
    "SaveLoadError",
    "SaveService",
    "Transition",
]
