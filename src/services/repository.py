"""Repository boundary - load/save of characters, equipment, items and abilities.

The combat core never sees a Session. Services load core objects through a
CombatRepository, run the exchange, then save and commit.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from src.core.character.abilities import Ability, ShoveAbility
from src.core.character.equipment import Equipment
from src.core.character.models import Character, Goblin, Player
from src.core.errors import NotFound
from src.core.item.models import Armor, Item, ItemKind, Weapon
from src.core.logging import get_logger
from src.db.models import (
    AbilityModel,
    ArmorModel,
    CharacterModel,
    EquipmentModel,
    GoblinModel,
    ItemModel,
    PlayerModel,
    ShoveAbilityModel,
    WeaponModel,
)

logger = get_logger(__name__)


class CombatRepository(ABC):
    """Storage-agnostic load/save interface used by the encounter service.

    Every get_* raises NotFound when the record does not exist.
    """

    @abstractmethod
    def get_character(self, character_id: int) -> Character:
        ...

    @abstractmethod
    def list_characters(self) -> list[Character]:
        ...

    @abstractmethod
    def get_item(self, item_id: int) -> Item:
        ...

    @abstractmethod
    def get_equipment(self, equipment_id: int) -> Equipment:
        ...

    @abstractmethod
    def get_ability(self, name: str) -> Ability:
        ...

    @abstractmethod
    def save_character(self, character: Character) -> Character:
        """Insert or update a character and everything it owns."""
        ...

    @abstractmethod
    def save_equipment(self, equipment: Equipment) -> Equipment:
        ...

    @abstractmethod
    def save_item(self, item: Item) -> Item:
        ...

    @abstractmethod
    def save_ability(self, ability: Ability) -> Ability:
        ...

    @abstractmethod
    def release_item(self, item_id: int) -> None:
        """Clear the item from whatever equipment slot currently holds it."""
        ...

    @abstractmethod
    def count_characters(self) -> int:
        ...

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...


class SqlCombatRepository(CombatRepository):
    """CombatRepository on a SQLAlchemy session."""

    def __init__(self, db: Session):
        self._db = db

    # === Load ===

    def get_character(self, character_id: int) -> Character:
        orm = (
            self._db.query(CharacterModel)
            .filter(CharacterModel.id == character_id)
            .first()
        )
        if orm is None:
            raise NotFound("Character", character_id)
        return self._character_to_core(orm)

    def list_characters(self) -> list[Character]:
        rows = self._db.query(CharacterModel).order_by(CharacterModel.id).all()
        return [self._character_to_core(r) for r in rows]

    def get_item(self, item_id: int) -> Item:
        orm = self._db.query(ItemModel).filter(ItemModel.id == item_id).first()
        if orm is None:
            raise NotFound("Item", item_id)
        return self._item_to_core(orm)

    def get_equipment(self, equipment_id: int) -> Equipment:
        orm = (
            self._db.query(EquipmentModel)
            .filter(EquipmentModel.id == equipment_id)
            .first()
        )
        if orm is None:
            raise NotFound("Equipment", equipment_id)
        return self._equipment_to_core(orm)

    def get_ability(self, name: str) -> Ability:
        orm = self._db.query(AbilityModel).filter(AbilityModel.name == name).first()
        if orm is None:
            raise NotFound("Ability", name)
        return self._ability_to_core(orm)

    def count_characters(self) -> int:
        return self._db.query(CharacterModel).count()

    # === Save ===

    def save_item(self, item: Item) -> Item:
        orm = self._get_or_new(ItemModel, item.id, _ITEM_MODELS[item.kind])
        if orm.item_type != item.kind.value:
            raise ValueError(
                f"Item {item.id} is stored as {orm.item_type}, not {item.kind.value}"
            )
        orm.name = item.name
        orm.value = item.value
        orm.description = item.description
        orm.durability = item.durability
        if isinstance(item, Weapon):
            orm.attack_power = item.attack_power
        elif isinstance(item, Armor):
            orm.defense_rating = item.defense_rating
        self._db.flush()
        item.id = orm.id
        return item

    def save_ability(self, ability: Ability) -> Ability:
        orm = self._get_or_new(AbilityModel, ability.id, ShoveAbilityModel)
        orm.name = ability.name
        orm.description = ability.description
        if isinstance(ability, ShoveAbility):
            orm.damage = ability.damage
            orm.distance = ability.distance
        self._db.flush()
        if ability.id == orm.id:
            return ability
        return replace(ability, id=orm.id)

    def save_equipment(self, equipment: Equipment) -> Equipment:
        for item in equipment.items():
            self.save_item(item)

        orm = self._get_or_new(EquipmentModel, equipment.id, EquipmentModel)
        orm.weapon_id = equipment.weapon.id if equipment.weapon else None
        orm.armor_id = equipment.armor.id if equipment.armor else None
        self._db.flush()
        self._db.expire(orm, ["weapon", "armor"])
        equipment.id = orm.id
        return equipment

    def save_character(self, character: Character) -> Character:
        model_cls = _CHARACTER_MODELS[type(character).character_type]
        orm = self._get_or_new(CharacterModel, character.id, model_cls)
        orm.name = character.name
        orm.health = character.health
        orm.max_health = character.max_health

        if character.equipment is not None:
            self.save_equipment(character.equipment)
            orm.equipment_id = character.equipment.id
        else:
            orm.equipment_id = None

        saved_abilities = {self.save_ability(a) for a in character.abilities}
        character.abilities = saved_abilities
        ability_ids = [a.id for a in saved_abilities]
        orm.abilities = (
            self._db.query(AbilityModel).filter(AbilityModel.id.in_(ability_ids)).all()
            if ability_ids
            else []
        )

        if isinstance(character, Player):
            orm.experience = character.experience
        elif isinstance(character, Goblin):
            orm.experience_reward = character.experience_reward
            if character.loot is not None:
                self.save_item(character.loot)
                orm.loot_item_id = character.loot.id
            else:
                orm.loot_item_id = None

        self._db.flush()
        stale = ["equipment"]
        if isinstance(orm, GoblinModel):
            stale.append("loot_item")
        self._db.expire(orm, stale)
        character.id = orm.id
        if character.equipment is not None:
            character.equipment.owner_id = orm.id
        logger.debug("Saved %s %s (id=%s)", orm.character_type, orm.name, orm.id)
        return character

    def release_item(self, item_id: int) -> None:
        rows = (
            self._db.query(EquipmentModel)
            .filter(
                or_(
                    EquipmentModel.weapon_id == item_id,
                    EquipmentModel.armor_id == item_id,
                )
            )
            .all()
        )
        for row in rows:
            if row.weapon_id == item_id:
                row.weapon_id = None
            if row.armor_id == item_id:
                row.armor_id = None
        if rows:
            self._db.flush()
            self._db.expire_all()
            logger.debug("Released item %s from %d equipment set(s)", item_id, len(rows))

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()

    # === Helpers ===

    def _get_or_new(self, base_cls, record_id: Optional[int], new_cls):
        """Fetch a row by id, or stage a new row of new_cls when id is None."""
        if record_id is None:
            orm = new_cls()
            self._db.add(orm)
            return orm
        orm = self._db.query(base_cls).filter(base_cls.id == record_id).first()
        if orm is None:
            raise NotFound(base_cls.__name__.removesuffix("Model"), record_id)
        return orm

    # === ORM -> Core ===

    def _item_to_core(self, orm: ItemModel) -> Item:
        common = dict(
            id=orm.id,
            name=orm.name,
            value=orm.value,
            description=orm.description,
            durability=orm.durability,
        )
        if isinstance(orm, WeaponModel):
            return Weapon(attack_power=orm.attack_power or 0, **common)
        if isinstance(orm, ArmorModel):
            return Armor(defense_rating=orm.defense_rating or 0, **common)
        raise ValueError(f"Unknown item type: {orm.item_type}")

    def _ability_to_core(self, orm: AbilityModel) -> Ability:
        if isinstance(orm, ShoveAbilityModel):
            return ShoveAbility(
                id=orm.id,
                name=orm.name,
                description=orm.description,
                damage=orm.damage or 0,
                distance=orm.distance or 0,
            )
        raise ValueError(f"Unknown ability type: {orm.ability_type}")

    def _equipment_to_core(self, orm: EquipmentModel) -> Equipment:
        return Equipment(
            id=orm.id,
            weapon=self._item_to_core(orm.weapon) if orm.weapon else None,
            armor=self._item_to_core(orm.armor) if orm.armor else None,
            owner_id=orm.owner.id if orm.owner else None,
        )

    def _character_to_core(self, orm: CharacterModel) -> Character:
        common = dict(
            id=orm.id,
            name=orm.name,
            health=orm.health,
            max_health=orm.max_health,
            abilities={self._ability_to_core(a) for a in orm.abilities},
            equipment=self._equipment_to_core(orm.equipment) if orm.equipment else None,
        )
        if isinstance(orm, PlayerModel):
            return Player(experience=orm.experience or 0, **common)
        if isinstance(orm, GoblinModel):
            return Goblin(
                experience_reward=orm.experience_reward or 0,
                loot=self._item_to_core(orm.loot_item) if orm.loot_item else None,
                **common,
            )
        raise ValueError(f"Unknown character type: {orm.character_type}")


_ITEM_MODELS: dict[ItemKind, type[ItemModel]] = {
    ItemKind.WEAPON: WeaponModel,
    ItemKind.ARMOR: ArmorModel,
}

_CHARACTER_MODELS: dict[str, type[CharacterModel]] = {
    Player.character_type: PlayerModel,
    Goblin.character_type: GoblinModel,
}
