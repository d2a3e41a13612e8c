"""The tactical grid: tile lookup, index/world conversion, ground tracing and tile states."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from gridtactics.mesh_instance import GridMeshInstance
from gridtactics.movement_spline import MovementSpline
from gridtactics.tiles import GridModifier, IntPoint, TileData, TileState, TileType, Vector

_DEFAULT_TRACE_HEIGHT = 2.0


def grid_snap(value: float, grid: float) -> float:
    """Snap a value to the nearest multiple of grid; a zero grid leaves it unchanged."""
    if grid == 0:
        return value
    return math.floor((value + 0.5 * grid) / grid) * grid


def _round_to_int(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class GroundHit:
    """One hit of a vertical trace through a tile: where it hit and, if any, the modifier hit."""

    location: Vector
    modifier: Optional[GridModifier] = None


@dataclass
class Grid:
    """A rectangular grid of tiles laid over the ground."""

    starting_position: Vector = (0.0, 0.0, 0.0)
    final_tile_size: Vector = (100.0, 100.0, 100.0)
    tile_size: Vector = (100.0, 100.0, 100.0)
    tile_count_x: int = 5
    tile_count_y: int = 5
    grid_offset_from_ground: float = 2.0
    enemies_on_map_row_name: str = ""
    grid_tiles: dict[IntPoint, TileData] = field(default_factory=dict)
    is_height_found: bool = False
    tile_states_to_indexes: dict[TileState, list[IntPoint]] = field(default_factory=dict)
    mesh_instance: Optional[GridMeshInstance] = None
    movement_spline: MovementSpline = field(default_factory=MovementSpline)
    start_corner: IntPoint = (0, 0)
    end_corner: IntPoint = (0, 0)
    mesh_handle_location: Vector = (0.0, 0.0, 0.0)

    def is_index_valid(self, index: IntPoint) -> bool:
        """True if the grid has a tile at this index."""
        return index in self.grid_tiles

    def tile_location_from_index(self, index: IntPoint) -> Vector:
        """World location of a tile's origin."""
        return self._offset_location(index, 0.0)

    def tiles_with_state(self, state: TileState) -> list[IntPoint]:
        """Indexes of every tile currently carrying a state."""
        return list(self.tile_states_to_indexes.get(state, []))

    def squares_spawn_location(self, index: IntPoint) -> Vector:
        """Where to place a tile's square, lifted slightly above the grid plane."""
        return self._offset_location(index, 0.01)

    def _offset_location(self, index: IntPoint, lift: float) -> Vector:
        sx, sy, sz = self.starting_position
        fx, fy, _ = self.final_tile_size
        return (sx + index[0] * fx, sy + index[1] * fy, sz + lift)

    def snap_starting_position(self) -> Vector:
        """Snap the starting position's X and Y to the tile size and move the mesh handle there."""
        x, y, z = self.starting_position
        fx, fy, _ = self.final_tile_size
        snapped = (grid_snap(x, fx), grid_snap(y, fy), z)
        self.mesh_handle_location = snapped
        self.starting_position = snapped
        return snapped

    def trace_for_ground(
        self, potential_location: Vector, hits: Sequence[GroundHit]
    ) -> tuple[Vector, TileType]:
        """Resolve a tile's height and type from the hits of a vertical trace through it."""
        if not hits:
            return tuple(potential_location), TileType.NONE

        tile_type = TileType.NORMAL
        self.is_height_found = False
        height = _DEFAULT_TRACE_HEIGHT
        step = self.tile_size[2]

        for hit in hits:
            modifier = hit.modifier
            if modifier is not None:
                tile_type = modifier.tile_type
                if modifier.use_for_tile_height:
                    self.is_height_found = True
                    height = grid_snap(hit.location[2], step) + self.grid_offset_from_ground
            elif not self.is_height_found:
                height = grid_snap(hit.location[2], step) + self.grid_offset_from_ground

        return (potential_location[0], potential_location[1], height), tile_type

    def index_from_world_location(self, location: Vector) -> IntPoint:
        """Grid index of the tile nearest to a world location."""
        fx, fy, _ = self.final_tile_size
        return (
            _round_to_int((location[0] - self.starting_position[0]) / fx),
            _round_to_int((location[1] - self.starting_position[1]) / fy),
        )

    def remove_obstacle_tiles(self, indices: Iterable[IntPoint]) -> list[IntPoint]:
        """Keep only indexes of existing tiles that are neither obstacles nor empty."""
        return [
            index
            for index in indices
            if (tile := self.grid_tiles.get(index)) is not None and tile.tile_type.is_walkable()
        ]

    def add_state_to_tile(self, index: IntPoint, state: TileState) -> None:
        """Give a tile a state, track it and refresh the tile's visual."""
        tile = self.grid_tiles.get(index)
        if tile is None:
            return
        tile.add_state(state)
        tracked = self.tile_states_to_indexes.setdefault(state, [])
        if index not in tracked:
            tracked.append(index)
        if self.mesh_instance is not None:
            self.mesh_instance.update_tile_visual(tile)

    def remove_state_from_tile(self, index: IntPoint, state: TileState) -> None:
        """Take a state off a tile, stop tracking it and refresh the tile's visual."""
        tile = self.grid_tiles.get(index)
        if tile is None or not tile.remove_state(state):
            return
        tracked = self.tile_states_to_indexes.get(state)
        if tracked is not None:
            tracked[:] = [i for i in tracked if i != index]
        if self.mesh_instance is not None:
            self.mesh_instance.update_tile_visual(tile)

    def clear_state_from_tiles(self, state: TileState) -> None:
        """Remove a state from every tile that has it."""
        for index in self.tiles_with_state(state):
            self.remove_state_from_tile(index, state)

    def set_starting_area(self, start: IntPoint, end: IntPoint) -> None:
        """Mark every tile in the inclusive rectangle from start to end as selected."""
        for x in range(start[0], end[0] + 1):
            for y in range(start[1], end[1] + 1):
                self.add_state_to_tile((x, y), TileState.SELECTED)

    def generate_movement_path(
        self,
        start_location: Vector,
        path_indices: Iterable[IntPoint],
        capsule_half_height: float = 50.0,
    ) -> list[Vector]:
        """Build the movement spline along a path of tile indexes."""
        return self.movement_spline.generate_path_from_indices(
            start_location, path_indices, self.grid_tiles, capsule_half_height
        )

    def combatant_under_index(self, index: IntPoint) -> Any:
        """The unit standing on a tile, or None."""
        tile = self.grid_tiles.get(index)
        return None if tile is None else tile.unit_on_tile