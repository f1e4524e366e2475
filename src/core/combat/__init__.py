"""Combat core - attack resolution, outcome records, narration"""

from .models import AttackOutcome
from .narration import describe_ability, describe_attack, describe_rejection
from .resolver import (
    UNARMED_ATTACK_POWER,
    UNARMORED_DEFENSE_RATING,
    apply_damage,
    compute_damage,
    heal,
    resolve_attack,
    resolve_attack_power,
    resolve_defense_rating,
    validate_attack,
)

__all__ = [
    "AttackOutcome",
    "describe_ability",
    "describe_attack",
    "describe_rejection",
    "UNARMED_ATTACK_POWER",
    "UNARMORED_DEFENSE_RATING",
    "apply_damage",
    "compute_damage",
    "heal",
    "resolve_attack",
    "resolve_attack_power",
    "resolve_defense_rating",
    "validate_attack",
]
