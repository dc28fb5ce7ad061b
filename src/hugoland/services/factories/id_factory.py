"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from hugoland.core.rng import RNG

_ID_SPACE = 16**12


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate a deterministic identifier using the provided RNG."""
    suffix = rng.randint(0, _ID_SPACE - 1)
    return f"{prefix}_{suffix:012x}"
