"""Item domain models (DB independent)

Items form a closed variant set distinguished by ItemKind. The same tag is
used as the storage discriminator, but nothing here depends on storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from src.core.errors import ItemUnusable

if TYPE_CHECKING:
    from src.core.character.models import Targetable
    from src.core.combat.models import AttackOutcome


DEFAULT_DURABILITY = 10


class ItemKind(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"


@dataclass
class ItemUseResult:
    """Result of a successful Item.use() call."""

    item_id: Optional[int]
    item_name: str
    kind: ItemKind
    durability_left: int
    outcome: Optional[AttackOutcome] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "item_name": self.item_name,
            "kind": self.kind.value,
            "durability_left": self.durability_left,
            "outcome": self.outcome.to_dict() if self.outcome else None,
        }


@dataclass
class Item(ABC):
    """Abstract item. Concrete variants set `kind` and implement use()."""

    name: str
    value: int = 0
    description: str = ""
    durability: int = DEFAULT_DURABILITY
    id: Optional[int] = None

    kind: ClassVar[ItemKind]

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{self.name}: value must be non-negative")
        if self.durability < 0:
            raise ValueError(f"{self.name}: durability must be non-negative")

    @property
    def usable(self) -> bool:
        return self.durability > 0

    def ensure_usable(self) -> None:
        if not self.usable:
            raise ItemUnusable(self.name)

    @abstractmethod
    def use(self, actor: Targetable, target: Targetable) -> ItemUseResult:
        ...


@dataclass
class Weapon(Item):
    attack_power: int = 0

    kind: ClassVar[ItemKind] = ItemKind.WEAPON

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.attack_power < 0:
            raise ValueError(f"{self.name}: attack_power must be non-negative")

    def use(self, actor: Targetable, target: Targetable) -> ItemUseResult:
        """Strike the target with this weapon, one full exchange.

        Raises ItemUnusable before touching the target when worn out.
        """
        from src.core.character.equipment import Equipment
        from src.core.combat.resolver import resolve_attack

        self.ensure_usable()
        outcome = resolve_attack(actor, target, Equipment(weapon=self))
        return ItemUseResult(
            item_id=self.id,
            item_name=self.name,
            kind=self.kind,
            durability_left=self.durability,
            outcome=outcome,
        )


@dataclass
class Armor(Item):
    defense_rating: int = 0

    kind: ClassVar[ItemKind] = ItemKind.ARMOR

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.defense_rating < 0:
            raise ValueError(f"{self.name}: defense_rating must be non-negative")

    def use(self, actor: Targetable, target: Targetable) -> ItemUseResult:
        """Brace behind the armor. No combat effect and no wear."""
        self.ensure_usable()
        return ItemUseResult(
            item_id=self.id,
            item_name=self.name,
            kind=self.kind,
            durability_left=self.durability,
        )


ITEM_CLASSES: dict[ItemKind, type[Item]] = {
    ItemKind.WEAPON: Weapon,
    ItemKind.ARMOR: Armor,
}


def item_from_dict(raw: dict[str, Any]) -> Item:
    """Build a Weapon or Armor from a mapping keyed by "type".

    Unknown types raise ValueError.
    """
    kind = ItemKind(raw["type"])
    common = dict(
        name=raw["name"],
        value=int(raw.get("value", 0)),
        description=raw.get("description", ""),
        durability=int(raw.get("durability", DEFAULT_DURABILITY)),
        id=raw.get("id"),
    )
    if kind is ItemKind.WEAPON:
        return Weapon(attack_power=int(raw.get("attack_power", 0)), **common)
    return Armor(defense_rating=int(raw.get("defense_rating", 0)), **common)
