"""Character model tests: players, goblins, abilities"""

import pytest

from src.core.character.abilities import ABILITY_TYPES, ShoveAbility
from src.core.character.equipment import Equipment
from src.core.character.models import CHARACTER_CLASSES, Character, Goblin, Player
from src.core.errors import AbilityNotOwned, InvalidTarget
from src.core.item.models import Armor, Weapon


@pytest.fixture()
def shove() -> ShoveAbility:
    return ShoveAbility(name="Shove", damage=5, distance=10)


class TestCharacterBasics:
    def test_max_health_defaults_to_health(self) -> None:
        hero = Player(name="Aldric", health=100)
        assert hero.max_health == 100
        assert not hero.is_defeated

    def test_health_above_max_rejected(self) -> None:
        with pytest.raises(ValueError):
            Player(name="Aldric", health=30, max_health=20)

    def test_wounded_start_allowed(self) -> None:
        hero = Player(name="Aldric", health=20, max_health=30)
        assert hero.max_health == 30

    def test_negative_health_clamped(self) -> None:
        ghost = Character(name="Ghost", health=-5)
        assert ghost.health == 0
        assert ghost.is_defeated

    def test_equipment_owner_follows_character(self) -> None:
        equipment = Equipment()
        hero = Player(name="Aldric", health=10, equipment=equipment, id=3)
        assert equipment.owner_id == 3
        assert hero.equipment is equipment

    def test_outfit_detaches_previous(self) -> None:
        first = Equipment()
        second = Equipment()
        hero = Player(name="Aldric", health=10, equipment=first, id=1)

        previous = hero.outfit(second)

        assert previous is first
        assert first.owner_id is None
        assert second.owner_id == 1
        assert hero.equipment is second

    def test_class_registry(self) -> None:
        assert CHARACTER_CLASSES["player"] is Player
        assert CHARACTER_CLASSES["goblin"] is Goblin


class TestPlayer:
    def test_gain_experience(self) -> None:
        hero = Player(name="Aldric", health=10)
        assert hero.gain_experience(25) == 25
        assert hero.gain_experience(-3) == 25

    def test_attack_with_own_equipment(self) -> None:
        hero = Player(
            name="Aldric",
            health=100,
            equipment=Equipment(weapon=Weapon(name="Longsword", attack_power=15)),
        )
        goblin = Goblin(name="Grubnik", health=20)
        outcome = hero.attack(goblin)
        assert outcome.damage == 15
        assert outcome.weapon_name == "Longsword"

    def test_attack_with_borrowed_equipment(self) -> None:
        hero = Player(name="Aldric", health=100)
        goblin = Goblin(
            name="Grubnik",
            health=20,
            equipment=Equipment(armor=Armor(name="Hide Vest", defense_rating=5)),
        )
        borrowed = Equipment(weapon=Weapon(name="Spear", attack_power=11))

        outcome = hero.attack(goblin, borrowed)

        assert outcome.damage == 6
        assert goblin.health == 14

    def test_unarmed_attack_power_override(self) -> None:
        hero = Player(name="Aldric", health=100)
        goblin = Goblin(name="Grubnik", health=20)
        outcome = hero.attack(goblin, unarmed_attack_power=2)
        assert outcome.weapon_name is None
        assert outcome.damage == 2


class TestGoblin:
    def test_goblin_uses_own_gear(self) -> None:
        goblin = Goblin(
            name="Grubnik",
            health=20,
            equipment=Equipment(weapon=Weapon(name="Rusty Dagger", attack_power=8)),
        )
        hero = Player(
            name="Aldric",
            health=100,
            equipment=Equipment(armor=Armor(name="Chainmail", defense_rating=6)),
        )
        outcome = goblin.attack(hero)
        assert outcome.damage == 2
        assert hero.health == 98

    def test_goblin_ignores_offered_equipment(self) -> None:
        goblin = Goblin(
            name="Grubnik",
            health=20,
            equipment=Equipment(weapon=Weapon(name="Rusty Dagger", attack_power=8)),
        )
        hero = Player(name="Aldric", health=100)
        offered = Equipment(weapon=Weapon(name="Greatsword", attack_power=40))

        character: Character = goblin
        outcome = character.attack(hero, offered, 0)

        assert outcome.weapon_name == "Rusty Dagger"
        assert outcome.damage == 8
        assert offered.weapon.durability == 10

    def test_drop_loot_only_when_defeated(self) -> None:
        spear = Weapon(name="Goblin Spear", attack_power=11)
        goblin = Goblin(name="Grubnik", health=5, loot=spear)
        assert goblin.drop_loot() is None
        assert goblin.loot is spear

        goblin.health = 0
        assert goblin.drop_loot() is spear
        assert goblin.loot is None
        assert goblin.drop_loot() is None


class TestAbilities:
    def test_registry(self) -> None:
        assert ABILITY_TYPES["shove"] is ShoveAbility

    def test_equality_ignores_id(self, shove: ShoveAbility) -> None:
        stored = ShoveAbility(name="Shove", damage=5, distance=10, id=42)
        assert stored == shove
        assert hash(stored) == hash(shove)

    def test_shove_ignores_armor(self, shove: ShoveAbility) -> None:
        hero = Player(name="Aldric", health=100, abilities={shove})
        goblin = Goblin(
            name="Grubnik",
            health=20,
            equipment=Equipment(armor=Armor(name="Hide Vest", defense_rating=5)),
        )

        outcome = hero.use_ability(shove, goblin)

        assert outcome.damage == 5
        assert goblin.health == 15
        assert outcome.detail == "pushed back 10 feet"
        assert goblin.equipment.armor.durability == 10

    def test_ability_not_owned(self, shove: ShoveAbility) -> None:
        hero = Player(name="Aldric", health=100)
        goblin = Goblin(name="Grubnik", health=20)
        with pytest.raises(AbilityNotOwned) as exc_info:
            hero.use_ability(shove, goblin)
        assert str(exc_info.value) == "Aldric does not have the ability Shove!"
        assert goblin.health == 20

    def test_ownership_checked_by_name(self, shove: ShoveAbility) -> None:
        hero = Player(name="Aldric", health=100, abilities={shove})
        goblin = Goblin(name="Grubnik", health=20)
        stronger = ShoveAbility(name="Shove", damage=50)
        outcome = hero.use_ability(stronger, goblin)
        assert outcome.defeated

    def test_shove_defeated_target_rejected(self, shove: ShoveAbility) -> None:
        hero = Player(name="Aldric", health=100, abilities={shove})
        goblin = Goblin(name="Grubnik", health=0)
        with pytest.raises(InvalidTarget):
            hero.use_ability(shove, goblin)
