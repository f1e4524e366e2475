"""Display text for combat outcomes. Formatting only, no output."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.character.abilities import AbilityOutcome
    from src.core.combat.models import AttackOutcome
    from src.core.errors import GameError


def describe_attack(outcome: AttackOutcome) -> str:
    weapon = f"a {outcome.weapon_name}" if outcome.weapon_name else "bare hands"
    lines = [
        f"{outcome.attacker_name} attacks {outcome.target_name} with {weapon} "
        f"({outcome.attack_power} attack)."
    ]
    if outcome.defense_rating:
        lines.append(
            f"{outcome.target_name}'s armor reduces damage by {outcome.defense_rating}."
        )
    if outcome.damage == 0:
        lines.append(f"{outcome.target_name} takes no damage.")
    else:
        lines.append(
            f"{outcome.target_name} takes {outcome.damage} damage "
            f"({outcome.target_health} HP left)."
        )
    for name in outcome.worn_out:
        lines.append(f"{name} is worn out.")
    if outcome.defeated:
        lines.append(f"{outcome.target_name} is defeated!")
    return " ".join(lines)


def describe_ability(outcome: AbilityOutcome) -> str:
    text = (
        f"{outcome.actor_name} uses {outcome.ability_name} on {outcome.target_name}, "
        f"dealing {outcome.damage} damage"
    )
    if outcome.detail:
        text += f" ({outcome.detail})"
    text += "."
    if outcome.defeated:
        text += f" {outcome.target_name} is defeated!"
    return text


def describe_rejection(error: GameError) -> str:
    return f"Action rejected: {error}"
