"""Encounter Service - load -> resolve -> save -> report, one exchange at a time.

Every attempt is reported on the EventBus: successful exchanges publish their
structured outcome, rejected ones publish ACTION_REJECTED and re-raise the
error to the caller. Events go out only after the commit.

One service and one session serve every request, so exchanges are
serialized by a lock: each one finishes before the next begins.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from src.core.character.abilities import AbilityOutcome
from src.core.character.equipment import Equipment
from src.core.character.models import Character, Goblin, Player
from src.core.combat.models import AttackOutcome
from src.core.combat.narration import describe_rejection
from src.core.combat.resolver import UNARMED_ATTACK_POWER, heal
from src.core.errors import GameError, NotFound
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.item.models import Item, ItemUseResult
from src.core.logging import get_logger
from src.services.repository import CombatRepository

logger = get_logger(__name__)

SOURCE = "encounter_service"


class EncounterService:
    """Orchestrates combat exchanges between stored characters."""

    def __init__(
        self,
        repository: CombatRepository,
        event_bus: EventBus,
        unarmed_attack_power: int = UNARMED_ATTACK_POWER,
    ):
        self._repo = repository
        self._bus = event_bus
        self._unarmed_attack_power = unarmed_attack_power
        self._pending: list[GameEvent] = []
        self._lock = threading.RLock()
        self.loot: list[Item] = []

    # === Queries ===

    def get_character(self, character_id: int) -> Character:
        with self._lock:
            return self._repo.get_character(character_id)

    def list_characters(self) -> list[Character]:
        with self._lock:
            return self._repo.list_characters()

    # === Combat ===

    def attack(
        self,
        attacker_id: int,
        target_id: int,
        equipment_id: Optional[int] = None,
    ) -> AttackOutcome:
        """One attack exchange.

        equipment_id lets a player fight with a borrowed equipment set;
        goblins always fight with their own gear.
        """
        with self._exchange(
            "attack",
            attacker_id=attacker_id,
            target_id=target_id,
            equipment_id=equipment_id,
        ):
            attacker = self._repo.get_character(attacker_id)
            target = self._repo.get_character(target_id)
            borrowed = None
            if equipment_id is not None and not isinstance(attacker, Goblin):
                borrowed = self._repo.get_equipment(equipment_id)

            outcome = attacker.attack(target, borrowed, self._unarmed_attack_power)

            self._queue(EventTypes.ATTACK_RESOLVED, outcome.to_dict())
            self._queue_worn_out(outcome)
            if outcome.defeated:
                self._handle_defeat(attacker, target)

            self._repo.save_character(attacker)
            self._repo.save_character(target)
            # only the borrowed weapon takes part in the exchange
            if borrowed is not None and borrowed.weapon is not None:
                self._repo.save_item(borrowed.weapon)
            self._repo.commit()

        logger.info(
            "Attack %s -> %s: %d damage%s",
            outcome.attacker_name,
            outcome.target_name,
            outcome.damage,
            " (defeated)" if outcome.defeated else "",
        )
        return outcome

    def use_ability(
        self, actor_id: int, ability_name: str, target_id: int
    ) -> AbilityOutcome:
        with self._exchange(
            "ability",
            actor_id=actor_id,
            ability_name=ability_name,
            target_id=target_id,
        ):
            actor = self._repo.get_character(actor_id)
            target = self._repo.get_character(target_id)
            ability = self._repo.get_ability(ability_name)

            outcome = actor.use_ability(ability, target)

            self._queue(EventTypes.ABILITY_ACTIVATED, outcome.to_dict())
            if outcome.defeated:
                self._handle_defeat(actor, target)

            self._repo.save_character(actor)
            self._repo.save_character(target)
            self._repo.commit()
        return outcome

    def use_item(self, actor_id: int, item_id: int, target_id: int) -> ItemUseResult:
        """Use an item from the actor's own equipment on a target."""
        with self._exchange(
            "use_item", actor_id=actor_id, item_id=item_id, target_id=target_id
        ):
            actor = self._repo.get_character(actor_id)
            target = self._repo.get_character(target_id)
            item = self._equipped_item(actor, item_id)

            result = item.use(actor, target)

            self._queue(EventTypes.ITEM_USED, result.to_dict())
            if result.outcome is not None:
                self._queue_worn_out(result.outcome)
                if result.outcome.defeated:
                    self._handle_defeat(actor, target)

            self._repo.save_character(actor)
            self._repo.save_character(target)
            self._repo.commit()
        return result

    def heal(self, character_id: int, amount: int) -> int:
        """Restore health. Returns the amount actually restored."""
        with self._exchange("heal", character_id=character_id, amount=amount):
            character = self._repo.get_character(character_id)
            restored = heal(character, amount)
            self._queue(
                EventTypes.CHARACTER_HEALED,
                {
                    "character_id": character.id,
                    "name": character.name,
                    "restored": restored,
                    "health": character.health,
                },
            )
            self._repo.save_character(character)
            self._repo.commit()
        return restored

    # === Equipment ===

    def equip(self, character_id: int, item_id: int) -> Equipment:
        """Put an item in the matching slot, outfitting the character if needed.

        The item is first released from any other equipment set.
        """
        with self._exchange("equip", character_id=character_id, item_id=item_id):
            character = self._repo.get_character(character_id)
            item = self._repo.get_item(item_id)

            if character.equipment is None:
                character.outfit(Equipment())
            self._repo.release_item(item_id)
            replaced = character.equipment.equip(item)

            self._repo.save_character(character)
            self._repo.commit()
            self.loot = [dropped for dropped in self.loot if dropped.id != item_id]

            self._queue(
                EventTypes.EQUIPMENT_CHANGED,
                {
                    "character_id": character.id,
                    "equipment_id": character.equipment.id,
                    "slot": item.kind.value,
                    "item_id": item.id,
                    "replaced_item_id": replaced.id if replaced else None,
                },
            )
        return character.equipment

    # === Internals ===

    def _equipped_item(self, actor: Character, item_id: int) -> Item:
        if actor.equipment is not None:
            for item in actor.equipment.items():
                if item.id == item_id:
                    return item
        raise NotFound("Equipped item", item_id)

    def _handle_defeat(self, victor: Character, defeated: Character) -> None:
        """Loot drop and experience for a finished combatant."""
        self._queue(
            EventTypes.CHARACTER_DEFEATED,
            {
                "character_id": defeated.id,
                "name": defeated.name,
                "defeated_by": victor.id,
            },
        )
        if not isinstance(defeated, Goblin):
            return

        if isinstance(victor, Player) and defeated.experience_reward:
            victor.gain_experience(defeated.experience_reward)

        dropped = defeated.drop_loot()
        if dropped is not None:
            self.loot.append(dropped)
            self._queue(
                EventTypes.ITEM_DROPPED,
                {
                    "item_id": dropped.id,
                    "item_name": dropped.name,
                    "dropped_by": defeated.id,
                },
            )

    def _queue_worn_out(self, outcome: AttackOutcome) -> None:
        if outcome.worn_out:
            self._queue(EventTypes.ITEMS_WORN_OUT, {"items": list(outcome.worn_out)})

    def _queue(self, event_type: str, data: dict[str, Any]) -> None:
        self._pending.append(GameEvent(event_type=event_type, data=data, source=SOURCE))

    @contextmanager
    def _exchange(self, action: str, **context: Any) -> Iterator[None]:
        """Wrap one exchange: publish on success, roll back and report on failure."""
        with self._lock:
            self._pending = []
            try:
                yield
            except GameError as e:
                self._repo.rollback()
                self._pending = []
                logger.info("%s rejected: %s", action, e)
                self._bus.emit(
                    GameEvent(
                        event_type=EventTypes.ACTION_REJECTED,
                        data={
                            "action": action,
                            "error": type(e).__name__,
                            "description": describe_rejection(e),
                            **context,
                        },
                        source=SOURCE,
                    )
                )
                raise
            except Exception:
                self._repo.rollback()
                self._pending = []
                raise
            else:
                pending, self._pending = self._pending, []
                for event in pending:
                    self._bus.emit(event)
