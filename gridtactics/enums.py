"""Ability, attribute and spell-shape enumerations."""

from __future__ import annotations

from enum import IntEnum


class AbilityCategory(IntEnum):
    """Broad kind of ability."""

    UTILITY = 0
    ATTACK = 1
    SPELL_ATTACK = 2
    SAVE = 3

    def display_name(self) -> str:
        """Human-readable name."""
        return _ABILITY_CATEGORY_NAMES[self]


class AbilityVariantType(IntEnum):
    """Way an ability with variants can be used."""

    ONE_ACTION = 0
    TWO_ACTION = 1
    THREE_ACTION = 2
    MELEE_MODE = 3
    RANGED_MODE = 4

    def display_name(self) -> str:
        """Human-readable name."""
        return _ABILITY_VARIANT_NAMES[self]


class CombatAttributeType(IntEnum):
    """Combat attribute a combatant carries."""

    HEALTH = 0
    MAX_HEALTH = 1
    AC = 2
    FORTITUDE = 3
    REFLEX = 4
    WILL = 5
    PERCEPTION = 6
    MOVEMENT_SPEED = 7
    INITIATIVE = 8
    ACTIONS_REMAINING = 9
    MAX_ACTIONS = 10
    REACTION_AVAILABLE = 11
    ATTACK_BONUS = 12
    DAMAGE_BONUS = 13
    DAMAGE_DIE = 14
    DAMAGE_DIE_COUNT = 15
    MAX_DIE_ROLL = 16

    def display_name(self) -> str:
        """Human-readable name."""
        return _COMBAT_ATTRIBUTE_NAMES[self]


class SpellArea(IntEnum):
    """Area a spell affects."""

    SINGLE_TARGET = 0
    MULTIPLE_TARGETS = 1
    LINE = 2
    CONE = 3
    BURST = 4
    SELF_OR_EMANATION = 5

    def display_name(self) -> str:
        """Human-readable name."""
        return _SPELL_AREA_NAMES[self]


class SpellPattern(IntEnum):
    """Shape generator used for ranges and areas of effect."""

    INVALID = 0
    BURST = 1
    LINE = 2
    CONE = 3
    EMANATION = 4

    def display_name(self) -> str:
        """Human-readable name."""
        return _SPELL_PATTERN_NAMES[self]


_ABILITY_CATEGORY_NAMES = {
    AbilityCategory.UTILITY: "Utility",
    AbilityCategory.ATTACK: "Attack",
    AbilityCategory.SPELL_ATTACK: "Spell Attack",
    AbilityCategory.SAVE: "Save",
}

_ABILITY_VARIANT_NAMES = {
    AbilityVariantType.ONE_ACTION: "1 Action",
    AbilityVariantType.TWO_ACTION: "2 Actions",
    AbilityVariantType.THREE_ACTION: "3 Actions",
    AbilityVariantType.MELEE_MODE: "Melee",
    AbilityVariantType.RANGED_MODE: "Ranged",
}

_COMBAT_ATTRIBUTE_NAMES = {
    CombatAttributeType.HEALTH: "Health",
    CombatAttributeType.MAX_HEALTH: "Max Health",
    CombatAttributeType.AC: "Armor Class",
    CombatAttributeType.FORTITUDE: "Fortitude Save",
    CombatAttributeType.REFLEX: "Reflex Save",
    CombatAttributeType.WILL: "Will Save",
    CombatAttributeType.PERCEPTION: "Perception",
    CombatAttributeType.MOVEMENT_SPEED: "Movement Speed",
    CombatAttributeType.INITIATIVE: "Initiative",
    CombatAttributeType.ACTIONS_REMAINING: "Actions Remaining",
    CombatAttributeType.MAX_ACTIONS: "Max Actions",
    CombatAttributeType.REACTION_AVAILABLE: "Reaction Available",
    CombatAttributeType.ATTACK_BONUS: "Attack Bonus",
    CombatAttributeType.DAMAGE_BONUS: "Damage Bonus",
    CombatAttributeType.DAMAGE_DIE: "Damage Die",
    CombatAttributeType.DAMAGE_DIE_COUNT: "Damage Die Count",
    CombatAttributeType.MAX_DIE_ROLL: "Max Die Roll",
}

_SPELL_AREA_NAMES = {
    SpellArea.SINGLE_TARGET: "Single Target",
    SpellArea.MULTIPLE_TARGETS: "Multiple Targets",
    SpellArea.LINE: "Line",
    SpellArea.CONE: "Cone",
    SpellArea.BURST: "Burst",
    SpellArea.SELF_OR_EMANATION: "SelfOrEmanation",
}

_SPELL_PATTERN_NAMES = {
    SpellPattern.INVALID: "Debug",
    SpellPattern.BURST: "Burst Pattern",
    SpellPattern.LINE: "Line Pattern",
    SpellPattern.CONE: "Cone Pattern",
    SpellPattern.EMANATION: "Emanation Pattern",
}