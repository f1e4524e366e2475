"""Item system core - pure Python, DB independent"""

from .models import (
    DEFAULT_DURABILITY,
    ITEM_CLASSES,
    Armor,
    Item,
    ItemKind,
    ItemUseResult,
    Weapon,
    item_from_dict,
)
from .durability import WEAR_PER_EXCHANGE, wear

__all__ = [
    "DEFAULT_DURABILITY",
    "ITEM_CLASSES",
    "Armor",
    "Item",
    "ItemKind",
    "ItemUseResult",
    "Weapon",
    "item_from_dict",
    "WEAR_PER_EXCHANGE",
    "wear",
]
