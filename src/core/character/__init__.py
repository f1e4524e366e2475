"""Character system core - combatants, equipment slots, abilities"""

from .abilities import ABILITY_TYPES, Ability, AbilityOutcome, ShoveAbility
from .equipment import Equipment
from .models import CHARACTER_CLASSES, Character, Goblin, Player, Targetable

__all__ = [
    "ABILITY_TYPES",
    "Ability",
    "AbilityOutcome",
    "ShoveAbility",
    "Equipment",
    "CHARACTER_CLASSES",
    "Character",
    "Goblin",
    "Player",
    "Targetable",
]
