"""Combat outcome records"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class AttackOutcome:
    """Structured result of one attack exchange, ready for reporting.

    weapon_name is None when the attacker fought unarmed (empty slot or
    worn-out weapon).
    """

    attacker_id: Optional[int]
    attacker_name: str
    target_id: Optional[int]
    target_name: str
    weapon_name: Optional[str]
    attack_power: int
    defense_rating: int
    damage: int
    target_health: int
    defeated: bool
    worn_out: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "attacker_id": self.attacker_id,
            "attacker_name": self.attacker_name,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "weapon_name": self.weapon_name,
            "attack_power": self.attack_power,
            "defense_rating": self.defense_rating,
            "damage": self.damage,
            "target_health": self.target_health,
            "defeated": self.defeated,
            "worn_out": list(self.worn_out),
        }
