"""Combat resolver - pure functions over combatants and their equipment.

One exchange: resolve attack power -> resolve defense rating -> compute damage
-> apply damage -> check defeat -> build outcome. Deterministic, no I/O.
Missing equipment never raises; it falls back to the baseline values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from src.core.combat.models import AttackOutcome
from src.core.errors import InvalidTarget
from src.core.item.durability import wear

if TYPE_CHECKING:
    from src.core.character.equipment import Equipment
    from src.core.character.models import Targetable
    from src.core.item.models import Armor, Weapon

logger = logging.getLogger(__name__)

UNARMED_ATTACK_POWER = 0
UNARMORED_DEFENSE_RATING = 0


def active_weapon(equipment: Optional[Equipment]) -> Optional[Weapon]:
    """The equipped weapon if it can still be used, else None."""
    if equipment is None or equipment.weapon is None:
        return None
    return equipment.weapon if equipment.weapon.usable else None


def active_armor(equipment: Optional[Equipment]) -> Optional[Armor]:
    """The equipped armor if it can still be used, else None."""
    if equipment is None or equipment.armor is None:
        return None
    return equipment.armor if equipment.armor.usable else None


def resolve_attack_power(
    equipment: Optional[Equipment],
    unarmed_attack_power: int = UNARMED_ATTACK_POWER,
) -> int:
    weapon = active_weapon(equipment)
    if weapon is None:
        return unarmed_attack_power
    return weapon.attack_power


def resolve_defense_rating(equipment: Optional[Equipment]) -> int:
    armor = active_armor(equipment)
    if armor is None:
        return UNARMORED_DEFENSE_RATING
    return armor.defense_rating


def compute_damage(attack_power: int, defense_rating: int) -> int:
    """Armor can negate an attack entirely but never heals."""
    return max(0, attack_power - defense_rating)


def apply_damage(target: Targetable, damage: int) -> bool:
    """Lower target health, floored at 0. Returns True if the target is defeated."""
    target.health = max(0, target.health - max(0, damage))
    return target.health == 0


def heal(target: Targetable, amount: int) -> int:
    """Restore health up to max_health. Returns the amount actually restored."""
    if target.is_defeated:
        raise InvalidTarget(f"{target.name} is defeated and cannot be healed")
    before = target.health
    target.health = min(target.max_health, target.health + max(0, amount))
    return target.health - before


def _same_combatant(a: Targetable, b: Targetable) -> bool:
    if a is b:
        return True
    return a.id is not None and a.id == b.id and type(a) is type(b)


def validate_attack(attacker: Targetable, target: Targetable) -> None:
    """Reject the exchange before anything is mutated."""
    if _same_combatant(attacker, target):
        raise InvalidTarget(f"{attacker.name} cannot target itself")
    if target.is_defeated:
        raise InvalidTarget(f"{target.name} is already defeated")
    if attacker.is_defeated:
        raise InvalidTarget(f"{attacker.name} is defeated and cannot attack")


def resolve_attack(
    attacker: Targetable,
    target: Targetable,
    equipment: Optional[Equipment] = None,
    unarmed_attack_power: int = UNARMED_ATTACK_POWER,
) -> AttackOutcome:
    """Run one full exchange of `attacker` (fighting with `equipment`) against `target`.

    The weapon that supplied the attack power loses one point of durability.
    The target armor only wears when damage got through it; armor that
    absorbs the whole attack stays intact, so A <= D never hurts the target.
    """
    validate_attack(attacker, target)

    weapon = active_weapon(equipment)
    armor = active_armor(target.equipment)

    attack_power = resolve_attack_power(equipment, unarmed_attack_power)
    defense_rating = resolve_defense_rating(target.equipment)
    damage = compute_damage(attack_power, defense_rating)
    defeated = apply_damage(target, damage)

    worn = (weapon, armor if damage > 0 else None)
    worn_out = [item.name for item in worn if item is not None and wear(item)]

    logger.debug(
        "%s -> %s: atk=%d def=%d dmg=%d hp=%d",
        attacker.name,
        target.name,
        attack_power,
        defense_rating,
        damage,
        target.health,
    )
    if defeated:
        logger.info("%s was defeated by %s", target.name, attacker.name)

    return AttackOutcome(
        attacker_id=attacker.id,
        attacker_name=attacker.name,
        target_id=target.id,
        target_name=target.name,
        weapon_name=weapon.name if weapon else None,
        attack_power=attack_power,
        defense_rating=defense_rating,
        damage=damage,
        target_health=target.health,
        defeated=defeated,
        worn_out=worn_out,
    )
