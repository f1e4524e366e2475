"""Equipment slot tests"""

import pytest

from src.core.character.equipment import Equipment
from src.core.item.models import Armor, Weapon


class TestSlots:
    def test_empty_by_default(self) -> None:
        equipment = Equipment()
        assert equipment.weapon is None
        assert equipment.armor is None
        assert list(equipment.items()) == []

    def test_equip_returns_replaced_without_mutating_it(self) -> None:
        old = Weapon(name="Dagger", attack_power=4, durability=5)
        new = Weapon(name="Sword", attack_power=15)
        equipment = Equipment(weapon=old)

        replaced = equipment.equip_weapon(new)

        assert replaced is old
        assert equipment.weapon is new
        assert old.attack_power == 4
        assert old.durability == 5

    def test_equip_dispatches_on_kind(self) -> None:
        equipment = Equipment()
        sword = Weapon(name="Sword")
        plate = Armor(name="Plate")
        assert equipment.equip(sword) is None
        assert equipment.equip(plate) is None
        assert equipment.weapon is sword
        assert equipment.armor is plate
        assert list(equipment.items()) == [sword, plate]

    def test_wrong_kind_rejected(self) -> None:
        equipment = Equipment()
        with pytest.raises(ValueError):
            equipment.equip_weapon(Armor(name="Plate"))  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            equipment.equip_armor(Weapon(name="Sword"))  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            Equipment(weapon=Armor(name="Plate"))  # type: ignore[arg-type]

    def test_unequip(self) -> None:
        sword = Weapon(name="Sword")
        plate = Armor(name="Plate")
        equipment = Equipment(weapon=sword, armor=plate)
        assert equipment.unequip_weapon() is sword
        assert equipment.unequip_armor() is plate
        assert equipment.unequip_weapon() is None

    def test_holds(self) -> None:
        equipment = Equipment(weapon=Weapon(name="Sword", id=7))
        assert equipment.holds(7)
        assert not equipment.holds(8)
