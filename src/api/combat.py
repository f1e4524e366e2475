"""Combat API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    AbilityRequest,
    ActionResponse,
    AttackRequest,
    CharacterInfo,
    EquipmentInfo,
    EquipRequest,
    ErrorResponse,
    HealRequest,
    ItemInfo,
    LootResponse,
    UseItemRequest,
)
from src.core.character.equipment import Equipment
from src.core.character.models import Character, Goblin, Player
from src.core.combat.narration import describe_ability, describe_attack
from src.core.errors import CombatError, NotFound
from src.core.item.models import Armor, Item, Weapon
from src.core.logging import get_logger
from src.services.encounter_service import EncounterService

logger = get_logger(__name__)

router = APIRouter(prefix="/combat", tags=["combat"])

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def get_encounter_service(request: Request) -> EncounterService:
    """EncounterService instance (dependency injection)"""
    service: EncounterService = request.app.state.encounter_service
    return service


def _to_http_error(e: Exception) -> HTTPException:
    """NotFound -> 404, rejected combat actions and bad input -> 400"""
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


def _build_item_info(item: Optional[Item]) -> Optional[ItemInfo]:
    if item is None:
        return None
    return ItemInfo(
        id=item.id,
        kind=item.kind.value,
        name=item.name,
        value=item.value,
        description=item.description,
        durability=item.durability,
        attack_power=item.attack_power if isinstance(item, Weapon) else None,
        defense_rating=item.defense_rating if isinstance(item, Armor) else None,
    )


def _build_equipment_info(equipment: Optional[Equipment]) -> Optional[EquipmentInfo]:
    if equipment is None:
        return None
    return EquipmentInfo(
        id=equipment.id,
        weapon=_build_item_info(equipment.weapon),
        armor=_build_item_info(equipment.armor),
    )


def _build_character_info(character: Character) -> CharacterInfo:
    return CharacterInfo(
        id=character.id,
        character_type=character.character_type,
        name=character.name,
        health=character.health,
        max_health=character.max_health,
        defeated=character.is_defeated,
        abilities=sorted(a.name for a in character.abilities),
        equipment=_build_equipment_info(character.equipment),
        experience=character.experience if isinstance(character, Player) else None,
        loot=_build_item_info(character.loot) if isinstance(character, Goblin) else None,
    )


@router.get("/characters", response_model=list[CharacterInfo])
def list_characters(
    service: EncounterService = Depends(get_encounter_service),
) -> list[CharacterInfo]:
    """All stored combatants."""
    return [_build_character_info(c) for c in service.list_characters()]


@router.get(
    "/characters/{character_id}",
    response_model=CharacterInfo,
    responses={404: {"model": ErrorResponse}},
)
def get_character(
    character_id: int,
    service: EncounterService = Depends(get_encounter_service),
) -> CharacterInfo:
    try:
        character = service.get_character(character_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_character_info(character)


@router.post("/attack", response_model=ActionResponse, responses=_ERROR_RESPONSES)
def attack(
    request: AttackRequest,
    service: EncounterService = Depends(get_encounter_service),
) -> ActionResponse:
    """
    One attack exchange

    Damage is the weapon attack power minus the target's armor defense rating,
    never below zero.
    """
    try:
        outcome = service.attack(
            request.attacker_id, request.target_id, request.equipment_id
        )
    except (CombatError, NotFound) as e:
        raise _to_http_error(e)

    return ActionResponse(
        success=True,
        action="attack",
        narrative=describe_attack(outcome),
        data=outcome.to_dict(),
    )


@router.post("/ability", response_model=ActionResponse, responses=_ERROR_RESPONSES)
def use_ability(
    request: AbilityRequest,
    service: EncounterService = Depends(get_encounter_service),
) -> ActionResponse:
    try:
        outcome = service.use_ability(
            request.actor_id, request.ability_name, request.target_id
        )
    except (CombatError, NotFound) as e:
        raise _to_http_error(e)

    return ActionResponse(
        success=True,
        action="ability",
        narrative=describe_ability(outcome),
        data=outcome.to_dict(),
    )


@router.post("/use-item", response_model=ActionResponse, responses=_ERROR_RESPONSES)
def use_item(
    request: UseItemRequest,
    service: EncounterService = Depends(get_encounter_service),
) -> ActionResponse:
    try:
        result = service.use_item(request.actor_id, request.item_id, request.target_id)
    except (CombatError, NotFound) as e:
        raise _to_http_error(e)

    if result.outcome is not None:
        narrative = describe_attack(result.outcome)
    else:
        narrative = f"{result.item_name} is braced and ready."
    return ActionResponse(
        success=True,
        action="use_item",
        narrative=narrative,
        data=result.to_dict(),
    )


@router.post("/equip", response_model=EquipmentInfo, responses=_ERROR_RESPONSES)
def equip(
    request: EquipRequest,
    service: EncounterService = Depends(get_encounter_service),
) -> EquipmentInfo:
    try:
        equipment = service.equip(request.character_id, request.item_id)
    except (CombatError, NotFound, ValueError) as e:
        raise _to_http_error(e)
    return _build_equipment_info(equipment)


@router.post("/heal", response_model=ActionResponse, responses=_ERROR_RESPONSES)
def heal(
    request: HealRequest,
    service: EncounterService = Depends(get_encounter_service),
) -> ActionResponse:
    try:
        restored = service.heal(request.character_id, request.amount)
    except (CombatError, NotFound) as e:
        raise _to_http_error(e)
    return ActionResponse(
        success=True,
        action="heal",
        narrative=f"Restored {restored} health.",
        data={"restored": restored},
    )


@router.get("/loot", response_model=LootResponse)
def list_loot(
    service: EncounterService = Depends(get_encounter_service),
) -> LootResponse:
    """Items dropped so far in this encounter."""
    return LootResponse(items=[_build_item_info(i) for i in service.loot])
