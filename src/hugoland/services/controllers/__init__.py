"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .mining_controller import ClickResult, MiningController, MiningRateLimiter

__all__ = [
    "ClickResult",
    "MiningController",
    "MiningRateLimiter",
]
