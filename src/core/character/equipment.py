"""Equipment slot - one weapon and one armor reference"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from src.core.item.models import Armor, Item, ItemKind, Weapon


@dataclass
class Equipment:
    """Binds at most one weapon and one armor.

    Slots hold references only: replacing or clearing a slot never mutates
    the item that was there. owner_id is a lookup back to the owning
    character, None while the equipment is detached (e.g. loot).
    """

    weapon: Optional[Weapon] = None
    armor: Optional[Armor] = None
    id: Optional[int] = None
    owner_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.weapon is not None and not isinstance(self.weapon, Weapon):
            raise ValueError(f"{self.weapon.name} is not a weapon")
        if self.armor is not None and not isinstance(self.armor, Armor):
            raise ValueError(f"{self.armor.name} is not armor")

    def equip_weapon(self, weapon: Weapon) -> Optional[Weapon]:
        """Put a weapon in the slot and return the one it replaced."""
        if not isinstance(weapon, Weapon):
            raise ValueError(f"{weapon.name} is not a weapon")
        previous, self.weapon = self.weapon, weapon
        return previous

    def equip_armor(self, armor: Armor) -> Optional[Armor]:
        """Put armor in the slot and return the piece it replaced."""
        if not isinstance(armor, Armor):
            raise ValueError(f"{armor.name} is not armor")
        previous, self.armor = self.armor, armor
        return previous

    def equip(self, item: Item) -> Optional[Item]:
        if item.kind is ItemKind.WEAPON:
            return self.equip_weapon(item)  # type: ignore[arg-type]
        return self.equip_armor(item)  # type: ignore[arg-type]

    def unequip_weapon(self) -> Optional[Weapon]:
        previous, self.weapon = self.weapon, None
        return previous

    def unequip_armor(self) -> Optional[Armor]:
        previous, self.armor = self.armor, None
        return previous

    def items(self) -> Iterator[Item]:
        """Occupied slots, weapon first."""
        if self.weapon is not None:
            yield self.weapon
        if self.armor is not None:
            yield self.armor

    def holds(self, item_id: int) -> bool:
        return any(item.id == item_id for item in self.items())
