"""SQLAlchemy declarative models for characters, equipment, items and abilities.

Item, character and ability variants each share one table (single table
inheritance) and are told apart by a type tag column. The tag values match
the core ItemKind / character_type / ability_type values.
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""


# ── items (single table) ──────────────────────────────────


class ItemModel(Base):
    """ORM model for every item kind."""

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    durability: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __mapper_args__ = {"polymorphic_on": "item_type"}
    __table_args__ = (Index("idx_item_type", "item_type"),)


class WeaponModel(ItemModel):
    attack_power: Mapped[int] = mapped_column(Integer, nullable=True, default=0)

    __mapper_args__ = {"polymorphic_identity": "weapon"}


class ArmorModel(ItemModel):
    defense_rating: Mapped[int] = mapped_column(Integer, nullable=True, default=0)

    __mapper_args__ = {"polymorphic_identity": "armor"}


# ── abilities (single table) ──────────────────────────────


class AbilityModel(Base):
    """ORM model for every ability kind."""

    __tablename__ = "abilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ability_type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __mapper_args__ = {"polymorphic_on": "ability_type"}


class ShoveAbilityModel(AbilityModel):
    damage: Mapped[int] = mapped_column(Integer, nullable=True, default=0)
    distance: Mapped[int] = mapped_column(Integer, nullable=True, default=0)

    __mapper_args__ = {"polymorphic_identity": "shove"}


# ── equipment ─────────────────────────────────────────────


class EquipmentModel(Base):
    """ORM model for an equipment slot set.

    weapon_id / armor_id are unique: an item sits in at most one slot set.
    """

    __tablename__ = "equipment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    weapon_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, unique=True
    )
    armor_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, unique=True
    )

    weapon: Mapped[Optional["WeaponModel"]] = relationship(
        "WeaponModel", foreign_keys=[weapon_id]
    )
    armor: Mapped[Optional["ArmorModel"]] = relationship(
        "ArmorModel", foreign_keys=[armor_id]
    )
    owner: Mapped[Optional["CharacterModel"]] = relationship(
        "CharacterModel", back_populates="equipment", uselist=False
    )


# ── characters (single table) ─────────────────────────────


character_abilities = Table(
    "character_abilities",
    Base.metadata,
    Column(
        "character_id",
        Integer,
        ForeignKey("characters.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "ability_id",
        Integer,
        ForeignKey("abilities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class CharacterModel(Base):
    """ORM model for every combatant kind."""

    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    health: Mapped[int] = mapped_column(Integer, nullable=False)
    max_health: Mapped[int] = mapped_column(Integer, nullable=False)

    # one-to-one: unique FK, at most one character per equipment set
    equipment_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("equipment.id"), nullable=True, unique=True
    )

    equipment: Mapped[Optional["EquipmentModel"]] = relationship(
        "EquipmentModel", back_populates="owner"
    )
    abilities: Mapped[list["AbilityModel"]] = relationship(
        "AbilityModel", secondary=character_abilities
    )

    __mapper_args__ = {"polymorphic_on": "character_type"}
    __table_args__ = (Index("idx_character_type", "character_type"),)


class PlayerModel(CharacterModel):
    experience: Mapped[int] = mapped_column(Integer, nullable=True, default=0)

    __mapper_args__ = {"polymorphic_identity": "player"}


class GoblinModel(CharacterModel):
    experience_reward: Mapped[int] = mapped_column(Integer, nullable=True, default=0)
    loot_item_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True
    )

    loot_item: Mapped[Optional["ItemModel"]] = relationship(
        "ItemModel", foreign_keys=[loot_item_id]
    )

    __mapper_args__ = {"polymorphic_identity": "goblin"}
