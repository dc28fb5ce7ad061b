"""Per-user paths and rules configuration."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict

from hugoland.domain.rules import GameRules

logger = logging.getLogger(__name__)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Hugoland"
        return Path.home() / "Hugoland"
    return Path.home() / ".config" / "hugoland"


def get_default_rules_path() -> Path:
    return get_user_data_dir() / "rules.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def _coerce_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    defaults = GameRules()
    overrides: Dict[str, Any] = {}
    for rule in fields(GameRules):
        if rule.name not in raw:
            continue
        value = raw[rule.name]
        default = getattr(defaults, rule.name)
        if isinstance(default, bool):
            valid = isinstance(value, bool)
        elif isinstance(default, float):
            valid = isinstance(value, (int, float)) and not isinstance(value, bool)
            value = float(value) if valid else value
        else:
            valid = isinstance(value, int) and not isinstance(value, bool)
        if valid:
            overrides[rule.name] = value
        else:
            logger.warning("Ignoring rule override %s=%r (expected %s)", rule.name, value, type(default).__name__)
    return overrides


def load_rules(path: Path | None = None) -> GameRules:
    """Load rule overrides from disk or return the defaults."""
    rules_path = path or get_default_rules_path()
    try:
        raw = json.loads(rules_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return GameRules()
    except Exception:
        logger.warning("Could not read rules file %s; using defaults", rules_path, exc_info=True)
        return GameRules()
    if not isinstance(raw, dict):
        logger.warning("Rules file %s is not an object; using defaults", rules_path)
        return GameRules()
    return GameRules(**_coerce_overrides(raw))


def save_rules(rules: GameRules, path: Path | None = None) -> None:
    """Persist rules to disk."""
    rules_path = path or get_default_rules_path()
    rules_path.parent.mkdir(parents=True, exist_ok=True)
    rules_path.write_text(json.dumps(asdict(rules), indent=2, sort_keys=True), encoding="utf-8")
