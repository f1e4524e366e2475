"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class AttackRequest(BaseModel):
    """Attack request"""

    attacker_id: int = Field(..., description="Attacking character ID")
    target_id: int = Field(..., description="Target character ID")
    equipment_id: Optional[int] = Field(
        None, description="Borrowed equipment set (defaults to the attacker's own)"
    )


class AbilityRequest(BaseModel):
    """Ability activation request"""

    actor_id: int
    ability_name: str = Field(..., min_length=1)
    target_id: int


class UseItemRequest(BaseModel):
    """Use an equipped item on a target"""

    actor_id: int
    item_id: int
    target_id: int


class EquipRequest(BaseModel):
    """Equip an item into the matching slot"""

    character_id: int
    item_id: int


class HealRequest(BaseModel):
    character_id: int
    amount: int = Field(..., ge=0)


# === Response Schemas ===


class ItemInfo(BaseModel):
    """Item info"""

    id: Optional[int]
    kind: str
    name: str
    value: int
    description: str
    durability: int
    attack_power: Optional[int] = None
    defense_rating: Optional[int] = None


class EquipmentInfo(BaseModel):
    """Equipment slot info"""

    id: Optional[int]
    weapon: Optional[ItemInfo] = None
    armor: Optional[ItemInfo] = None


class CharacterInfo(BaseModel):
    """Character info"""

    id: int
    character_type: str
    name: str
    health: int
    max_health: int
    defeated: bool
    abilities: list[str] = []
    equipment: Optional[EquipmentInfo] = None
    experience: Optional[int] = None
    loot: Optional[ItemInfo] = None


class ActionResponse(BaseModel):
    """Combat action response"""

    success: bool
    action: str
    narrative: str
    data: Optional[dict[str, Any]] = None


class LootResponse(BaseModel):
    items: list[ItemInfo] = []


class ErrorResponse(BaseModel):
    """Error response"""

    success: bool = False
    error: str
    detail: Optional[str] = None
