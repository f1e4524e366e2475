"""Error taxonomy for the combat core.

Combat errors are raised before any state is mutated and are meant to be
reported to the encounter caller. A zero-damage attack is not an error.
"""

from typing import Any, Optional


class GameError(Exception):
    """Base exception for the game."""


class CombatError(GameError):
    """Raised when a combat action is rejected."""


class InvalidTarget(CombatError):
    """Attacking oneself, a defeated target, or attacking while defeated."""


class AbilityNotOwned(CombatError):
    """The acting character does not have the requested ability."""

    def __init__(self, character_name: str, ability_name: str) -> None:
        super().__init__(f"{character_name} does not have the ability {ability_name}!")
        self.character_name = character_name
        self.ability_name = ability_name


class ItemUnusable(CombatError):
    """The item has no durability left."""

    def __init__(self, item_name: str, reason: Optional[str] = None) -> None:
        super().__init__(reason or f"{item_name} is worn out and cannot be used")
        self.item_name = item_name


class NotFound(GameError):
    """A repository lookup failed."""

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id
