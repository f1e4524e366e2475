"""Seed data loader - builds core objects from JSON and stores them."""

import json
from pathlib import Path
from typing import Any

from src.core.character.abilities import ABILITY_TYPES, Ability
from src.core.character.equipment import Equipment
from src.core.character.models import CHARACTER_CLASSES, Character, Goblin, Player
from src.core.item.models import item_from_dict
from src.core.logging import get_logger
from src.services.repository import CombatRepository

logger = get_logger(__name__)


def ability_from_dict(raw: dict[str, Any]) -> Ability:
    cls = ABILITY_TYPES[raw["type"]]
    params = {k: v for k, v in raw.items() if k != "type"}
    return cls(**params)


def character_from_dict(raw: dict[str, Any], abilities: dict[str, Ability]) -> Character:
    """Build a Player or Goblin. Ability names must be in `abilities`."""
    cls = CHARACTER_CLASSES[raw["type"]]

    equipment = None
    if "equipment" in raw:
        slots = raw["equipment"]
        equipment = Equipment(
            weapon=item_from_dict(slots["weapon"]) if "weapon" in slots else None,
            armor=item_from_dict(slots["armor"]) if "armor" in slots else None,
        )

    character = cls(
        name=raw["name"],
        health=int(raw["health"]),
        max_health=raw.get("max_health"),
        abilities={abilities[name] for name in raw.get("abilities", [])},
        equipment=equipment,
    )
    if isinstance(character, Player):
        character.experience = int(raw.get("experience", 0))
    elif isinstance(character, Goblin):
        character.experience_reward = int(raw.get("experience_reward", 0))
        if "loot" in raw:
            character.loot = item_from_dict(raw["loot"])
    return character


def load_seed(repository: CombatRepository, path: str | Path) -> int:
    """Load seed_encounter.json into the repository. Returns characters stored.

    Entries that fail to parse are logged and skipped.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw: dict[str, Any] = json.load(f)

    abilities: dict[str, Ability] = {}
    for entry in raw.get("abilities", []):
        try:
            ability = repository.save_ability(ability_from_dict(entry))
            abilities[ability.name] = ability
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Failed to load ability: %s - %s", entry.get("name", "?"), e)

    count = 0
    for entry in raw.get("characters", []):
        try:
            character = character_from_dict(entry, abilities)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Failed to load character: %s - %s", entry.get("name", "?"), e)
            continue
        repository.save_character(character)
        count += 1

    repository.commit()
    logger.info("Loaded %d characters from %s", count, path)
    return count
