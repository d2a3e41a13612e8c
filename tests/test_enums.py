import pytest

from gridtactics.enums import (
    AbilityCategory,
    AbilityVariantType,
    CombatAttributeType,
    SpellArea,
    SpellPattern,
)


@pytest.mark.parametrize(
    "member, name",
    [
        (AbilityCategory.UTILITY, "Utility"),
        (AbilityCategory.SPELL_ATTACK, "Spell Attack"),
        (AbilityVariantType.TWO_ACTION, "2 Actions"),
        (AbilityVariantType.RANGED_MODE, "Ranged"),
        (CombatAttributeType.AC, "Armor Class"),
        (CombatAttributeType.MAX_DIE_ROLL, "Max Die Roll"),
        (SpellArea.SELF_OR_EMANATION, "SelfOrEmanation"),
        (SpellArea.SINGLE_TARGET, "Single Target"),
        (SpellPattern.INVALID, "Debug"),
        (SpellPattern.EMANATION, "Emanation Pattern"),
    ],
)
def test_display_names(member, name):
    assert member.display_name() == name


@pytest.mark.parametrize(
    "enum_class",
    [AbilityCategory, AbilityVariantType, CombatAttributeType, SpellArea, SpellPattern],
)
def test_every_member_has_a_distinct_display_name(enum_class):
    names = [member.display_name() for member in enum_class]
    assert all(names)
    assert len(set(names)) == len(names)


def test_spell_pattern_values_are_fixed():
    assert SpellPattern(0) is SpellPattern.INVALID
    assert SpellPattern(1) is SpellPattern.BURST
    assert SpellPattern(2) is SpellPattern.LINE
    assert SpellPattern(3) is SpellPattern.CONE
    assert SpellPattern(4) is SpellPattern.EMANATION


def test_unknown_spell_pattern_value_raises():
    with pytest.raises(ValueError):
        SpellPattern(9)


def test_combat_attribute_display_names_in_order():
    names = [CombatAttributeType.display_name(member) for member in CombatAttributeType]
    assert names[0] == "Health"
    assert names[-1] == "Max Die Roll"
    assert len(names) == 17
    assert CombatAttributeType.HEALTH.display_name() == "Health"
    assert CombatAttributeType.MAX_DIE_ROLL.display_name() == "Max Die Roll"