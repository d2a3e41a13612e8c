"""Tile types, tile states, per-tile data and grid modifier volumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

IntPoint = tuple[int, int]
Vector = tuple[float, float, float]


class TileType(IntEnum):
    """Terrain kind of a grid tile."""

    NONE = 0
    NORMAL = 1
    OBSTACLE = 2
    DIFFICULT_TERRAIN = 3
    GREATER_DIFF_TERRAIN = 4
    FLY_ONLY = 5

    def is_walkable(self) -> bool:
        """True for every type a unit can stand on."""
        return self not in (TileType.NONE, TileType.OBSTACLE)


class TileState(IntEnum):
    """Transient highlight state a tile can carry."""

    NONE = 0
    HOVERED = 1
    SELECTED = 2
    IS_REACHABLE = 3
    IS_REACHABLE2 = 4
    IS_IN_RANGE = 5
    IS_IN_RANGE2 = 6
    IS_SPELL_AOE = 7


@dataclass
class TileData:
    """Everything the grid knows about one tile."""

    index: IntPoint = (0, 0)
    tile_type: TileType = TileType.NORMAL
    location: Vector = (0.0, 0.0, 0.0)
    rotation: Vector = (0.0, 0.0, 0.0)
    scale: Vector = (1.0, 1.0, 1.0)
    tile_states: list[TileState] = field(default_factory=list)
    unit_on_tile: Any = None

    def add_state(self, state: TileState) -> bool:
        """Add a state unless already present; return whether it was added."""
        if state in self.tile_states:
            return False
        self.tile_states.append(state)
        return True

    def remove_state(self, state: TileState) -> bool:
        """Remove a state; return whether the tile had it."""
        if state not in self.tile_states:
            return False
        self.tile_states = [s for s in self.tile_states if s != state]
        return True


@dataclass
class GridModifier:
    """A volume placed in the level that overrides tile type or tile height."""

    tile_type: TileType = TileType.NORMAL
    use_for_tile_height: bool = False
    hidden_in_game: bool = False
    mesh: Any = None
    material: Any = None
    material_parameters: dict[str, Any] = field(default_factory=dict)
    overlaps_ground_channel: bool = False
    actor_hidden: bool = False

    def set_up_construction(self, mesh: Any, material: Any, color: Any) -> None:
        """Apply mesh, material and colour, and make it visible to ground traces."""
        self.mesh = mesh
        self.material = material
        self.material_parameters["Color"] = color
        self.material_parameters["IsFilled"] = 0.6
        self.overlaps_ground_channel = True
        self.actor_hidden = self.hidden_in_game