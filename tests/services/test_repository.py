"""SqlCombatRepository tests (in-memory SQLite)"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.character.abilities import ShoveAbility
from src.core.character.equipment import Equipment
from src.core.character.models import Goblin, Player
from src.core.errors import NotFound
from src.core.item.models import Armor, Weapon
from src.db.models import EquipmentModel
from src.services.repository import SqlCombatRepository


class TestItems:
    def test_round_trip_keeps_variant(self, repository: SqlCombatRepository) -> None:
        sword = repository.save_item(Weapon(name="Sword", attack_power=15, durability=7))
        plate = repository.save_item(Armor(name="Plate", defense_rating=9))
        repository.commit()

        loaded_sword = repository.get_item(sword.id)
        loaded_plate = repository.get_item(plate.id)

        assert isinstance(loaded_sword, Weapon)
        assert loaded_sword.attack_power == 15
        assert loaded_sword.durability == 7
        assert isinstance(loaded_plate, Armor)
        assert loaded_plate.defense_rating == 9

    def test_single_table_type_tag(
        self, repository: SqlCombatRepository, db_session: Session
    ) -> None:
        repository.save_item(Weapon(name="Sword"))
        repository.save_item(Armor(name="Plate"))
        repository.commit()

        rows = db_session.execute(
            text("SELECT name, item_type FROM items ORDER BY id")
        ).all()
        assert [tuple(r) for r in rows] == [("Sword", "weapon"), ("Plate", "armor")]

    def test_update_in_place(self, repository: SqlCombatRepository) -> None:
        sword = repository.save_item(Weapon(name="Sword", durability=5))
        sword.durability = 2
        repository.save_item(sword)
        repository.commit()
        assert repository.get_item(sword.id).durability == 2

    def test_kind_mismatch_rejected(self, repository: SqlCombatRepository) -> None:
        plate = repository.save_item(Armor(name="Plate"))
        with pytest.raises(ValueError):
            repository.save_item(Weapon(name="Impostor", id=plate.id))

    def test_missing_item(self, repository: SqlCombatRepository) -> None:
        with pytest.raises(NotFound) as exc_info:
            repository.get_item(999)
        assert str(exc_info.value) == "Item not found: 999"


class TestCharacters:
    def test_player_round_trip(self, repository: SqlCombatRepository) -> None:
        shove = repository.save_ability(ShoveAbility(name="Shove", damage=5, distance=10))
        hero = Player(
            name="Aldric",
            health=100,
            experience=3,
            abilities={shove},
            equipment=Equipment(
                weapon=Weapon(name="Longsword", attack_power=15),
                armor=Armor(name="Chainmail", defense_rating=6),
            ),
        )
        repository.save_character(hero)
        repository.commit()

        loaded = repository.get_character(hero.id)

        assert isinstance(loaded, Player)
        assert loaded.experience == 3
        assert loaded.equipment.weapon.name == "Longsword"
        assert loaded.equipment.armor.defense_rating == 6
        assert loaded.equipment.owner_id == hero.id
        assert {a.name for a in loaded.abilities} == {"Shove"}
        assert next(iter(loaded.abilities)).id == shove.id

    def test_goblin_with_loot(self, repository: SqlCombatRepository) -> None:
        goblin = Goblin(
            name="Grubnik",
            health=20,
            experience_reward=25,
            loot=Weapon(name="Goblin Spear", attack_power=11),
        )
        repository.save_character(goblin)
        repository.commit()

        loaded = repository.get_character(goblin.id)

        assert isinstance(loaded, Goblin)
        assert loaded.equipment is None
        assert loaded.experience_reward == 25
        assert loaded.loot.name == "Goblin Spear"

    def test_health_persisted(self, repository: SqlCombatRepository) -> None:
        goblin = repository.save_character(Goblin(name="Snivvet", health=12))
        goblin.health = 4
        repository.save_character(goblin)
        repository.commit()

        loaded = repository.get_character(goblin.id)
        assert loaded.health == 4
        assert loaded.max_health == 12

    def test_list_and_count(self, seeded_repository: SqlCombatRepository) -> None:
        names = [c.name for c in seeded_repository.list_characters()]
        assert names == ["Sir Aldric", "Grubnik", "Snivvet"]
        assert seeded_repository.count_characters() == 3

    def test_missing_character(self, repository: SqlCombatRepository) -> None:
        with pytest.raises(NotFound):
            repository.get_character(42)

    def test_missing_ability(self, repository: SqlCombatRepository) -> None:
        with pytest.raises(NotFound):
            repository.get_ability("Fireball")


class TestEquipment:
    def test_item_held_by_one_set_only(
        self, repository: SqlCombatRepository, db_session: Session
    ) -> None:
        sword = repository.save_item(Weapon(name="Sword"))
        db_session.add(EquipmentModel(weapon_id=sword.id))
        db_session.flush()
        db_session.add(EquipmentModel(weapon_id=sword.id))
        with pytest.raises(IntegrityError):
            db_session.flush()

    def test_release_item(self, repository: SqlCombatRepository) -> None:
        equipment = repository.save_equipment(
            Equipment(weapon=Weapon(name="Sword"), armor=Armor(name="Plate"))
        )
        repository.commit()

        repository.release_item(equipment.weapon.id)
        repository.commit()

        loaded = repository.get_equipment(equipment.id)
        assert loaded.weapon is None
        assert loaded.armor.name == "Plate"

    def test_missing_equipment(self, repository: SqlCombatRepository) -> None:
        with pytest.raises(NotFound):
            repository.get_equipment(7)
