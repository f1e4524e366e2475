"""Special abilities a character can activate against a target.

Only the activation contract is modelled; concrete effects stay small.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from src.core.combat.resolver import apply_damage, validate_attack

if TYPE_CHECKING:
    from src.core.character.models import Targetable


@dataclass
class AbilityOutcome:
    actor_id: Optional[int]
    actor_name: str
    target_id: Optional[int]
    target_name: str
    ability_name: str
    damage: int
    target_health: int
    defeated: bool
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "actor_id": self.actor_id,
            "actor_name": self.actor_name,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "ability_name": self.ability_name,
            "damage": self.damage,
            "target_health": self.target_health,
            "defeated": self.defeated,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Ability(ABC):
    name: str
    description: str = ""
    id: Optional[int] = field(default=None, compare=False)

    ability_type: ClassVar[str]

    @abstractmethod
    def activate(self, actor: Targetable, target: Targetable) -> AbilityOutcome:
        ...


@dataclass(frozen=True)
class ShoveAbility(Ability):
    """Push the target back, dealing flat damage that armor does not absorb."""

    damage: int = 0
    distance: int = 0

    ability_type: ClassVar[str] = "shove"

    def activate(self, actor: Targetable, target: Targetable) -> AbilityOutcome:
        validate_attack(actor, target)
        defeated = apply_damage(target, self.damage)
        return AbilityOutcome(
            actor_id=actor.id,
            actor_name=actor.name,
            target_id=target.id,
            target_name=target.name,
            ability_name=self.name,
            damage=self.damage,
            target_health=target.health,
            defeated=defeated,
            detail=f"pushed back {self.distance} feet",
        )


ABILITY_TYPES: dict[str, type[Ability]] = {
    ShoveAbility.ability_type: ShoveAbility,
}
