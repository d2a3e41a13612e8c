"""Spell shapes, movement costs and the pathfinding state used to search the grid."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import product
from typing import Optional

from gridtactics.enums import SpellPattern
from gridtactics.grid import Grid
from gridtactics.line_of_sight import BlockedCheck, line_trace_spells
from gridtactics.tiles import IntPoint, TileType

logger = logging.getLogger(__name__)

_UNSET_INDEX: IntPoint = (-999, -999)

_ORTHOGONAL_COST = {
    TileType.NONE: 2,
    TileType.NORMAL: 2,
    TileType.OBSTACLE: 0,
    TileType.DIFFICULT_TERRAIN: 4,
    TileType.GREATER_DIFF_TERRAIN: 6,
    TileType.FLY_ONLY: 2,
}

_DIAGONAL_COST = {
    TileType.NONE: 3,
    TileType.NORMAL: 3,
    TileType.OBSTACLE: 0,
    TileType.DIFFICULT_TERRAIN: 6,
    TileType.GREATER_DIFF_TERRAIN: 9,
    TileType.FLY_ONLY: 3,
}


@dataclass
class PathfindingData:
    """Search bookkeeping for one tile."""

    index: IntPoint = _UNSET_INDEX
    cost_to_enter_tile: int = 0
    cost_from_start: int = 0
    minimum_cost_to_target: int = 0
    previous_index: IntPoint = _UNSET_INDEX


def _check_area(area: int) -> int:
    if not 0 <= area <= 255:
        raise ValueError(f"area must be between 0 and 255, got {area}")
    return area


def total_cost(origin_point: IntPoint, current_tile: IntPoint) -> int:
    """Minimum distance where every second diagonal step costs double."""
    dx = abs(origin_point[0] - current_tile[0])
    dy = abs(origin_point[1] - current_tile[1])
    return max(dx, dy) + min(dx, dy) // 2


def is_diagonal(first: IntPoint, second: IntPoint) -> bool:
    """True if the two indexes touch only at a corner."""
    return abs(first[0] - second[0]) == 1 and abs(first[1] - second[1]) == 1


def neighbor_indexes(
    index: IntPoint, include_diagonals: bool = False
) -> tuple[list[IntPoint], list[IntPoint]]:
    """Orthogonal neighbours and, if asked for, diagonal neighbours of an index."""
    x, y = index
    orthogonal = [(x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)]
    diagonals = [(x + 1, y - 1), (x + 1, y + 1), (x - 1, y + 1), (x - 1, y - 1)] if include_diagonals else []
    return orthogonal, diagonals


def remove_invalid_neighbors(
    current: IntPoint, index: IntPoint, diagonals: Iterable[IntPoint]
) -> list[IntPoint]:
    """Drop the diagonals that would cut past a blocked orthogonal neighbour."""
    x, y = index
    rx, ry = current[0] - x, current[1] - y
    if rx == -1:
        blocked = {(x - 1, y - 1), (x - 1, y + 1)}
    elif rx == 1:
        blocked = {(x + 1, y + 1), (x + 1, y - 1)}
    elif ry == -1:
        blocked = {(x + 1, y - 1), (x - 1, y - 1)}
    elif ry == 1:
        blocked = {(x - 1, y + 1), (x + 1, y + 1)}
    else:
        blocked = set()
    return [d for d in diagonals if d not in blocked]


def generate_emanation(origin_point: IntPoint, area: int, ignore_origin: bool = False) -> list[IntPoint]:
    """Every tile within area of the origin."""
    area = _check_area(area)
    ox, oy = origin_point
    tiles = [
        (ox + dx, oy + dy)
        for dx, dy in product(range(-area, area + 1), repeat=2)
        if total_cost(origin_point, (ox + dx, oy + dy)) <= area
    ]
    if ignore_origin:
        tiles = [t for t in tiles if t != origin_point]
    return tiles


def generate_cone(origin_point: IntPoint, caster_location: IntPoint, area: int) -> list[IntPoint]:
    """A cone starting at origin_point and opening away from the caster."""
    area = _check_area(area)
    reach = area - 1
    ox, oy = origin_point
    rx, ry = ox - caster_location[0], oy - caster_location[1]

    if abs(rx + ry) == 1:
        if rx == 1:
            xs, ys = (0, reach), (-reach, reach)
        elif rx == -1:
            xs, ys = (-reach, 0), (-reach, reach)
        elif ry == 1:
            xs, ys = (-reach, reach), (0, reach)
        else:
            xs, ys = (-reach, reach), (-reach, 0)
        tiles = []
        for dx, dy in product(range(xs[0], xs[1] + 1), range(ys[0], ys[1] + 1)):
            tile = (ox + dx, oy + dy)
            if total_cost(caster_location, tile) > area:
                continue
            in_wedge = abs(dx) <= abs(dy) if rx == 0 else abs(dy) <= abs(dx)
            if in_wedge:
                tiles.append(tile)
        return tiles

    xs = (0, reach) if rx > 0 else (-reach, 0)
    ys = (0, reach) if ry > 0 else (-reach, 0)
    return [
        (ox + dx, oy + dy)
        for dx, dy in product(range(xs[0], xs[1] + 1), range(ys[0], ys[1] + 1))
        if total_cost(caster_location, (ox + dx, oy + dy)) <= area
    ]


def generate_line(caster_location: IntPoint, origin_point: IntPoint, area: int) -> list[IntPoint]:
    """Tiles on a straight line from the caster to origin_point, caster excluded."""
    area = _check_area(area)
    if total_cost(caster_location, origin_point) > area:
        return []
    dx = abs(origin_point[0] - caster_location[0])
    dy = abs(origin_point[1] - caster_location[1])
    x, y = caster_location
    step_x = 1 if caster_location[0] < origin_point[0] else -1
    step_y = 1 if caster_location[1] < origin_point[1] else -1
    err = dx - dy

    tiles: list[IntPoint] = []
    while (x, y) != origin_point:
        tiles.append((x, y))
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += step_x
        if e2 < dx:
            err += dx
            y += step_y
    if origin_point not in tiles:
        tiles.append(origin_point)
    return [t for t in tiles if t != caster_location]


def generate_burst(origin_point: IntPoint, area: int) -> list[IntPoint]:
    """Four diagonal cones around the 2x2 block whose lower corner is origin_point."""
    ox, oy = origin_point
    return (
        generate_cone(origin_point, (ox + 1, oy + 1), area)
        + generate_cone((ox + 1, oy), (ox, oy + 1), area)
        + generate_cone((ox + 1, oy + 1), (ox, oy), area)
        + generate_cone((ox, oy + 1), (ox + 1, oy), area)
    )


def generate_possible_array(
    origin_point: IntPoint,
    caster_location: IntPoint,
    area: int,
    pattern: SpellPattern,
    ignore_origin: bool = False,
) -> list[IntPoint]:
    """Tiles covered by a spell pattern, before obstacles and line of sight are considered."""
    if pattern == SpellPattern.INVALID:
        return generate_cone(origin_point, caster_location, 1)
    if pattern == SpellPattern.BURST:
        return generate_burst(origin_point, area)
    if pattern == SpellPattern.LINE:
        return generate_line(caster_location, origin_point, area)
    if pattern == SpellPattern.CONE:
        return generate_cone(origin_point, caster_location, area)
    if pattern == SpellPattern.EMANATION:
        return generate_emanation(origin_point, area, ignore_origin)
    return []


class RangeFinder:
    """Search state for finding paths and spell ranges on a grid."""

    def __init__(self, grid: Optional[Grid] = None) -> None:
        self.grid = grid
        self.possible_array: list[IntPoint] = []
        self.start: IntPoint = (0, 0)
        self.reachable = False
        self.max_path_length = 0
        self.discovered_tile_indexes: list[IntPoint] = []
        self.discovered_tile_sorted_cost: list[int] = []
        self.analyzed_tile_indexes: list[IntPoint] = []
        self.origin: IntPoint = (0, 0)
        self.target: IntPoint = (0, 0)
        self.current_discovered_tile = PathfindingData()
        self.current_neighbor = PathfindingData()
        self.current_neighbors: list[PathfindingData] = []
        self.pathfinding_data: dict[IntPoint, PathfindingData] = {}

    def _require_grid(self) -> Grid:
        if self.grid is None:
            raise RuntimeError("range finder has no grid")
        return self.grid

    def insert_tile_in_discovered(self, data: PathfindingData) -> None:
        """Queue a tile so that the discovered list stays ordered by estimated total cost."""
        sorting_cost = data.cost_from_start + data.minimum_cost_to_target
        if not self.discovered_tile_indexes:
            self.discovered_tile_sorted_cost.append(sorting_cost)
            self.discovered_tile_indexes.append(data.index)
            return
        costs = self.discovered_tile_sorted_cost
        if not costs:
            return
        if sorting_cost >= costs[-1]:
            costs.append(sorting_cost)
            self.discovered_tile_indexes.append(data.index)
            return
        for position, cost in enumerate(costs):
            if sorting_cost <= cost:
                costs.insert(position, sorting_cost)
                self.discovered_tile_indexes.insert(position, data.index)
                break

    def discover_tile(self, data: PathfindingData) -> None:
        """Record a tile's search data and queue it."""
        self.pathfinding_data[data.index] = data
        self.insert_tile_in_discovered(data)

    def pull_cheapest_tile(self) -> PathfindingData:
        """Take the cheapest queued tile and mark it as analyzed."""
        if not self.discovered_tile_indexes:
            raise IndexError("no discovered tiles to pull")
        tile_index = self.discovered_tile_indexes[0]
        if self.discovered_tile_sorted_cost:
            del self.discovered_tile_sorted_cost[0]
        if self.analyzed_tile_indexes:
            del self.discovered_tile_indexes[0]
        self.analyzed_tile_indexes.append(tile_index)
        data = self.pathfinding_data.get(tile_index)
        return PathfindingData() if data is None else dataclasses.replace(data)

    def generate_path(self) -> list[IntPoint]:
        """Walk back from the target to the start; the start itself is not included."""
        current = self.target
        path = []
        while current != self.start:
            path.append(current)
            try:
                current = self.pathfinding_data[current].previous_index
            except KeyError:
                raise KeyError(f"no search data for tile {current} on the path") from None
        path.reverse()
        return path

    def discover_next_neighbor(self) -> bool:
        """Consider the next pending neighbour; return True once the target is discovered."""
        if not self.current_neighbors:
            raise IndexError("no neighbours left to discover")
        self.current_neighbor = self.current_neighbors.pop(0)
        neighbor_index = self.current_neighbor.index
        cost_from_start = self.current_discovered_tile.cost_from_start + self.current_neighbor.cost_to_enter_tile

        if neighbor_index in self.analyzed_tile_indexes:
            if not self.reachable:
                return False
            if cost_from_start > self.pathfinding_data[neighbor_index].cost_from_start:
                return False
        if cost_from_start > self.max_path_length:
            return False

        if neighbor_index in self.discovered_tile_indexes:
            position = self.discovered_tile_indexes.index(neighbor_index)
            self.current_neighbor = self.pathfinding_data[neighbor_index]
            if cost_from_start >= self.current_neighbor.cost_from_start:
                return False
            if len(self.current_neighbors) > position:
                del self.current_neighbors[position]
            if len(self.discovered_tile_sorted_cost) > position:
                del self.discovered_tile_sorted_cost[position]

        self.discover_tile(
            PathfindingData(
                index=neighbor_index,
                cost_to_enter_tile=self.current_neighbor.cost_to_enter_tile,
                cost_from_start=cost_from_start,
                minimum_cost_to_target=total_cost(neighbor_index, self.target),
                previous_index=self.current_discovered_tile.index,
            )
        )
        return neighbor_index == self.target

    def loop_through_neighbors(self) -> bool:
        """Discover pending neighbours until the target is found or none are left."""
        while self.current_neighbors:
            if self.discover_next_neighbor():
                return True
        return False

    def is_tile_walkable(self, index: IntPoint) -> bool:
        """True if the grid has a walkable tile at this index."""
        if self.grid is None:
            logger.warning("walkability checked without a grid")
            return False
        tile = self.grid.grid_tiles.get(index)
        return tile is not None and tile.tile_type.is_walkable()

    def clean_generated_data(self) -> None:
        """Forget the results of the previous search."""
        self.pathfinding_data.clear()
        self.discovered_tile_sorted_cost.clear()
        self.discovered_tile_indexes.clear()
        self.analyzed_tile_indexes.clear()

    def is_input_data_valid(self) -> bool:
        """True if start and target allow a search to run."""
        if self.target == self.start:
            return False
        if not self.is_tile_walkable(self.start):
            return False
        if self.reachable:
            return True
        if total_cost(self.start, self.target) > self.max_path_length:
            return False
        return self.is_tile_walkable(self.target)

    def valid_tile_neighbors(
        self, index: IntPoint, valid_types: Sequence[TileType]
    ) -> list[PathfindingData]:
        """Neighbours a unit on this tile may step to, with the cost to enter each."""
        grid = self._require_grid()
        tile = grid.grid_tiles.get(index)
        if tile is None:
            return []
        height = tile.location[2]
        max_step = grid.final_tile_size[2]
        orthogonal, diagonals = neighbor_indexes(index, True)

        def passable(neighbor) -> bool:
            return (
                neighbor.tile_type in valid_types
                and neighbor.unit_on_tile is None
                and abs(neighbor.location[2] - height) < max_step
            )

        result = []
        for neighbor_index in orthogonal:
            neighbor = grid.grid_tiles.get(neighbor_index)
            if neighbor is None:
                continue
            if not passable(neighbor):
                diagonals = remove_invalid_neighbors(neighbor_index, index, diagonals)
                continue
            result.append(
                PathfindingData(
                    index=neighbor.index,
                    cost_to_enter_tile=_ORTHOGONAL_COST.get(neighbor.tile_type, 2),
                    previous_index=index,
                )
            )

        for neighbor_index in diagonals:
            neighbor = grid.grid_tiles.get(neighbor_index)
            if neighbor is None or not passable(neighbor):
                continue
            result.append(
                PathfindingData(
                    index=neighbor.index,
                    cost_to_enter_tile=_DIAGONAL_COST.get(neighbor.tile_type, 3),
                    previous_index=index,
                )
            )
        return result

    def effect_area_or_range(
        self,
        origin_point: IntPoint,
        caster_location: IntPoint,
        area: int,
        pattern: SpellPattern,
        ignore_los: bool = False,
        ignore_origin: bool = False,
        is_blocked: Optional[BlockedCheck] = None,
    ) -> list[IntPoint]:
        """Tiles a spell covers, without obstacles and, unless ignored, without tiles out of sight."""
        grid = self._require_grid()
        if not ignore_los and is_blocked is None:
            raise ValueError("a line-of-sight check is needed unless line of sight is ignored")
        tiles = generate_possible_array(origin_point, caster_location, area, pattern, ignore_origin)
        tiles = grid.remove_obstacle_tiles(tiles)
        if not ignore_los:
            tiles = line_trace_spells(tiles, grid, origin_point, is_blocked)
        return tiles