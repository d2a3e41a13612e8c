"""Character sheets: identity, combat stats, skills, spell resources and enemy placements."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, TypeVar

from gridtactics.tiles import IntPoint, TileType

_T = TypeVar("_T")


class FacingDirection(IntEnum):
    """Direction an enemy faces when it is placed on the grid."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3


@dataclass
class CharacterInfo:
    """Who a character is."""

    character_name: str = "Character"
    character_description: str = "Default Description"
    character_type: str = "Fighter"
    level: int = 1


@dataclass
class CombatAttributes:
    """Base combat numbers of a character."""

    max_health: float = 50.0
    ac: float = 15.0
    fortitude: float = 3.0
    reflex: float = 2.0
    will: float = 1.0
    perception: float = 2.0
    movement_speed: float = 5.0  # in squares
    max_actions: float = 3.0
    attack_bonus: int = 5
    damage_bonus: int = 3
    damage_die: int = 6
    damage_die_count: int = 1
    max_die_roll: int = 20


@dataclass
class Skills:
    """Skill modifiers; every skill starts untrained at zero."""

    acrobatics: int = 0
    arcana: int = 0
    athletics: int = 0
    crafting: int = 0
    deception: int = 0
    diplomacy: int = 0
    intimidation: int = 0
    medicine: int = 0
    nature: int = 0
    occultism: int = 0
    performance: int = 0
    religion: int = 0
    society: int = 0
    stealth: int = 0
    survival: int = 0
    thievery: int = 0


@dataclass
class SpellResources:
    """Spell slots, focus and divine font, and spellcasting numbers."""

    is_spontaneous: bool = False
    preparable_cantrips: int = 0
    level1_slots: int = 0
    level1_slot1: bool = False
    level1_slot2: bool = False
    level1_slot3: bool = False
    level2_slots: int = 0
    level2_slot1: bool = False
    level2_slot2: bool = False
    level2_slot3: bool = False
    level3_slots: int = 0
    level3_slot1: bool = False
    level3_slot2: bool = False
    level3_slot3: bool = False
    divine_font: int = 0
    max_focus_points: int = 0
    spell_attack_bonus: int = 0
    spell_save_dc: int = 10


@dataclass
class CharacterAbilities:
    """Abilities and effects a character starts with or can learn, named by identifier."""

    starting_abilities: list[str] = field(default_factory=list)
    starting_effects: list[str] = field(default_factory=list)
    available_abilities: list[str] = field(default_factory=list)
    character_traits: list[str] = field(default_factory=list)


@dataclass
class CombatantDataAssets:
    """References to the visual assets of a character."""

    skeletal_mesh: Optional[str] = None
    character_portrait: Optional[str] = None
    anim_instance_class: Optional[str] = None


@dataclass
class CombatantStats:
    """Combat attributes, abilities and the tile types a character may enter."""

    combat_attributes: CombatAttributes = field(default_factory=CombatAttributes)
    character_abilities: CharacterAbilities = field(default_factory=CharacterAbilities)
    accessible_tiles: list[TileType] = field(default_factory=list)


def _build(cls: Callable[..., _T], data: Any, nested: Optional[Mapping[str, Callable[[Any], Any]]] = None) -> _T:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a mapping, got {type(data).__name__}")
    values = dict(data)
    for name, convert in (nested or {}).items():
        if name in values:
            values[name] = convert(values[name])
    return cls(**values)


def _tile_type(value: Any) -> TileType:
    if isinstance(value, TileType):
        return value
    if isinstance(value, str):
        try:
            return TileType[value]
        except KeyError:
            raise ValueError(f"unknown tile type {value!r}") from None
    return TileType(value)


def _string_list(value: Any) -> list[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise TypeError("expected a list of strings")
    return [str(item) for item in value]


def _abilities(data: Any) -> CharacterAbilities:
    return _build(
        CharacterAbilities,
        data,
        {name.name: _string_list for name in dataclasses.fields(CharacterAbilities)},
    )


def _stats(data: Any) -> CombatantStats:
    return _build(
        CombatantStats,
        data,
        {
            "combat_attributes": lambda v: _build(CombatAttributes, v),
            "character_abilities": _abilities,
            "accessible_tiles": lambda v: [_tile_type(t) for t in v],
        },
    )


@dataclass
class CompleteCharacterData:
    """Everything needed to put a character into play."""

    character_info: CharacterInfo = field(default_factory=CharacterInfo)
    combatant_stats: CombatantStats = field(default_factory=CombatantStats)
    visual_assets: CombatantDataAssets = field(default_factory=CombatantDataAssets)
    spell_resources: SpellResources = field(default_factory=SpellResources)
    skills: Skills = field(default_factory=Skills)

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-ready representation; tile types are stored by name."""
        data = dataclasses.asdict(self)
        data["combatant_stats"]["accessible_tiles"] = [
            tile.name for tile in self.combatant_stats.accessible_tiles
        ]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompleteCharacterData:
        """Rebuild from to_dict output; missing fields take their defaults."""
        return _build(
            cls,
            data,
            {
                "character_info": lambda v: _build(CharacterInfo, v),
                "combatant_stats": _stats,
                "visual_assets": lambda v: _build(CombatantDataAssets, v),
                "spell_resources": lambda v: _build(SpellResources, v),
                "skills": lambda v: _build(Skills, v),
            },
        )


@dataclass
class EnemyWithAI:
    """One enemy of an encounter: its behaviour, placement and character sheet."""

    ai_behavior: Optional[str] = None
    spawn_location: IntPoint = (0, 0)
    facing_direction: FacingDirection = FacingDirection.LEFT
    character_data: CompleteCharacterData = field(default_factory=CompleteCharacterData)


@dataclass
class EnemiesOnMap:
    """The enemies spawned for one encounter."""

    enemies: list[EnemyWithAI] = field(default_factory=list)