"""Character domain models (DB independent)"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Protocol

from src.core.character.abilities import Ability, AbilityOutcome
from src.core.character.equipment import Equipment
from src.core.combat.models import AttackOutcome
from src.core.combat.resolver import UNARMED_ATTACK_POWER, resolve_attack
from src.core.errors import AbilityNotOwned
from src.core.item.models import Item

logger = logging.getLogger(__name__)


class Targetable(Protocol):
    """Anything that can attack or be attacked."""

    id: Optional[int]
    name: str
    health: int
    max_health: int
    equipment: Optional[Equipment]

    @property
    def is_defeated(self) -> bool: ...


@dataclass
class Character:
    """Generic combatant.

    health is clamped at 0 and only changes through the combat resolver.
    """

    name: str
    health: int
    max_health: Optional[int] = None
    abilities: set[Ability] = field(default_factory=set)
    equipment: Optional[Equipment] = None
    id: Optional[int] = None

    character_type: ClassVar[str] = "character"

    def __post_init__(self) -> None:
        self.health = max(0, self.health)
        if self.max_health is None:
            self.max_health = self.health
        elif self.max_health < self.health:
            raise ValueError(
                f"{self.name}: health {self.health} exceeds max_health {self.max_health}"
            )
        if self.equipment is not None and self.equipment.owner_id is None:
            self.equipment.owner_id = self.id

    @property
    def is_defeated(self) -> bool:
        return self.health == 0

    def has_ability(self, ability: Ability) -> bool:
        return any(owned.name == ability.name for owned in self.abilities)

    def outfit(self, equipment: Equipment) -> Optional[Equipment]:
        """Attach equipment, returning the detached previous set."""
        previous = self.equipment
        if previous is not None and previous is not equipment:
            previous.owner_id = None
        equipment.owner_id = self.id
        self.equipment = equipment
        return previous

    def attack(
        self,
        target: Targetable,
        equipment: Optional[Equipment] = None,
        unarmed_attack_power: int = UNARMED_ATTACK_POWER,
    ) -> AttackOutcome:
        """Attack a target using `equipment`, or this character's own when omitted.

        Borrowed equipment only supplies the weapon; the target's own armor
        still defends.
        """
        gear = equipment if equipment is not None else self.equipment
        return resolve_attack(self, target, gear, unarmed_attack_power)

    def use_ability(self, ability: Ability, target: Targetable) -> AbilityOutcome:
        if not self.has_ability(ability):
            raise AbilityNotOwned(self.name, ability.name)
        logger.debug("%s activates %s on %s", self.name, ability.name, target.name)
        return ability.activate(self, target)


@dataclass
class Player(Character):
    experience: int = 0

    character_type: ClassVar[str] = "player"

    def gain_experience(self, amount: int) -> int:
        self.experience += max(0, amount)
        return self.experience


@dataclass
class Goblin(Character):
    """Adversary. Fights with its own gear and may carry one loot item."""

    loot: Optional[Item] = None
    experience_reward: int = 0

    character_type: ClassVar[str] = "goblin"

    def attack(
        self,
        target: Targetable,
        equipment: Optional[Equipment] = None,
        unarmed_attack_power: int = UNARMED_ATTACK_POWER,
    ) -> AttackOutcome:
        """Attack with the goblin's own gear; `equipment` is ignored."""
        return resolve_attack(self, target, self.equipment, unarmed_attack_power)

    def drop_loot(self) -> Optional[Item]:
        """Hand over the loot item once the goblin is defeated."""
        if not self.is_defeated or self.loot is None:
            return None
        item, self.loot = self.loot, None
        logger.info("%s dropped %s", self.name, item.name)
        return item


CHARACTER_CLASSES: dict[str, type[Character]] = {
    Player.character_type: Player,
    Goblin.character_type: Goblin,
}
