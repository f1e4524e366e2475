"""Combat Core"""
__version__ = "0.1.0"

from src.core.errors import AbilityNotOwned, CombatError, GameError, InvalidTarget, ItemUnusable, NotFound
from src.core.item import Armor, Item, ItemKind, ItemUseResult, Weapon
from src.core.character import Ability, AbilityOutcome, Character, Equipment, Goblin, Player, ShoveAbility
from src.core.combat import AttackOutcome, resolve_attack

__all__ = [
    "AbilityNotOwned",
    "CombatError",
    "GameError",
    "InvalidTarget",
    "ItemUnusable",
    "NotFound",
    "Armor",
    "Item",
    "ItemKind",
    "ItemUseResult",
    "Weapon",
    "Ability",
    "AbilityOutcome",
    "Character",
    "Equipment",
    "Goblin",
    "Player",
    "ShoveAbility",
    "AttackOutcome",
    "resolve_attack",
]
