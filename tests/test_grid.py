import pytest

from gridtactics.grid import Grid, GroundHit, grid_snap
from gridtactics.mesh_instance import GridMeshInstance
from gridtactics.tiles import GridModifier, TileData, TileState, TileType


def make_grid(types=None, size=3):
    grid = Grid(starting_position=(0.0, 0.0, 0.0), final_tile_size=(100.0, 100.0, 100.0))
    types = types or {}
    for x in range(size):
        for y in range(size):
            index = (x, y)
            grid.grid_tiles[index] = TileData(
                index=index,
                tile_type=types.get(index, TileType.NORMAL),
                location=grid.tile_location_from_index(index),
            )
    return grid


@pytest.mark.parametrize("value", [0.0, 49.0, 51.0, 149.9, -73.0, 1234.5])
def test_grid_snap_lands_on_nearest_multiple(value):
    snapped = grid_snap(value, 100.0)
    assert snapped % 100.0 == 0
    assert abs(snapped - value) <= 50.0


def test_grid_snap_zero_grid_is_identity():
    assert grid_snap(37.25, 0) == 37.25


def test_is_index_valid():
    grid = make_grid()
    assert grid.is_index_valid((1, 1))
    assert not grid.is_index_valid((7, 7))


@pytest.mark.parametrize("index", [(0, 0), (2, 3), (-4, 1)])
def test_index_world_round_trip(index):
    grid = Grid(starting_position=(30.0, -20.0, 5.0), final_tile_size=(100.0, 80.0, 50.0))
    assert grid.index_from_world_location(grid.tile_location_from_index(index)) == index


def test_index_from_world_location_rounds_to_nearest_tile():
    grid = Grid(starting_position=(0.0, 0.0, 0.0), final_tile_size=(100.0, 100.0, 100.0))
    base = grid.tile_location_from_index((2, 1))
    near = (base[0] + 40.0, base[1] - 40.0, 0.0)
    assert grid.index_from_world_location(near) == (2, 1)


def test_spawn_location_is_lifted():
    grid = Grid(starting_position=(10.0, 20.0, 30.0))
    plain = grid.tile_location_from_index((1, 2))
    lifted = grid.squares_spawn_location((1, 2))
    assert lifted[:2] == plain[:2]
    assert lifted[2] == pytest.approx(plain[2] + 0.01)


def test_snap_starting_position():
    grid = Grid(starting_position=(149.0, 251.0, 7.0), final_tile_size=(100.0, 100.0, 100.0))
    result = grid.snap_starting_position()
    assert result == grid.starting_position
    assert grid.mesh_handle_location == result
    assert result[2] == 7.0
    assert result[0] % 100.0 == 0 and abs(result[0] - 149.0) <= 50.0
    assert result[1] % 100.0 == 0 and abs(result[1] - 251.0) <= 50.0


def test_trace_without_hits_returns_none_type():
    grid = Grid()
    location, tile_type = grid.trace_for_ground((1.0, 2.0, 3.0), [])
    assert location == (1.0, 2.0, 3.0)
    assert tile_type is TileType.NONE


def test_trace_ground_hit_sets_snapped_height():
    grid = Grid(tile_size=(100.0, 100.0, 100.0))
    location, tile_type = grid.trace_for_ground((5.0, 6.0, 0.0), [GroundHit((5.0, 6.0, 137.0))])
    assert tile_type is TileType.NORMAL
    assert location[:2] == (5.0, 6.0)
    assert location[2] == grid_snap(137.0, 100.0) + grid.grid_offset_from_ground
    assert grid.is_height_found is False


def test_trace_modifier_without_height_keeps_default_height():
    grid = Grid()
    modifier = GridModifier(tile_type=TileType.DIFFICULT_TERRAIN)
    location, tile_type = grid.trace_for_ground((0.0, 0.0, 0.0), [GroundHit((0.0, 0.0, 400.0), modifier)])
    assert tile_type is TileType.DIFFICULT_TERRAIN
    assert location[2] == 2.0


def test_trace_height_modifier_overrides_later_ground():
    grid = Grid(tile_size=(100.0, 100.0, 100.0))
    modifier = GridModifier(tile_type=TileType.OBSTACLE, use_for_tile_height=True)
    hits = [
        GroundHit((0.0, 0.0, 310.0)),
        GroundHit((0.0, 0.0, 520.0), modifier),
        GroundHit((0.0, 0.0, 90.0)),
    ]
    location, tile_type = grid.trace_for_ground((0.0, 0.0, 0.0), hits)
    assert tile_type is TileType.OBSTACLE
    assert grid.is_height_found is True
    assert location[2] == grid_snap(520.0, 100.0) + grid.grid_offset_from_ground


def test_remove_obstacle_tiles_keeps_order_and_walkable_only():
    grid = make_grid({(0, 1): TileType.OBSTACLE, (1, 0): TileType.NONE, (2, 2): TileType.FLY_ONLY})
    result = grid.remove_obstacle_tiles([(2, 2), (0, 1), (9, 9), (1, 0), (0, 0)])
    assert result == [(2, 2), (0, 0)]


def test_add_state_tracks_and_draws():
    colored = []
    grid = make_grid()
    grid.mesh_instance = GridMeshInstance(lambda tile, i: colored.append(tile.index))
    grid.add_state_to_tile((1, 1), TileState.HOVERED)
    grid.add_state_to_tile((1, 1), TileState.HOVERED)
    assert grid.tiles_with_state(TileState.HOVERED) == [(1, 1)]
    assert grid.grid_tiles[(1, 1)].tile_states == [TileState.HOVERED]
    assert grid.mesh_instance.instance_count() == 1
    assert colored == [(1, 1), (1, 1)]


def test_add_state_to_missing_tile_is_ignored():
    grid = make_grid()
    grid.add_state_to_tile((8, 8), TileState.SELECTED)
    assert grid.tiles_with_state(TileState.SELECTED) == []


def test_remove_state_from_tile():
    grid = make_grid()
    grid.add_state_to_tile((0, 0), TileState.IS_IN_RANGE)
    grid.add_state_to_tile((0, 1), TileState.IS_IN_RANGE)
    grid.remove_state_from_tile((0, 0), TileState.IS_IN_RANGE)
    assert grid.tiles_with_state(TileState.IS_IN_RANGE) == [(0, 1)]
    assert TileState.IS_IN_RANGE not in grid.grid_tiles[(0, 0)].tile_states


def test_clear_state_from_tiles():
    grid = make_grid()
    for index in [(0, 0), (1, 2), (2, 1)]:
        grid.add_state_to_tile(index, TileState.IS_REACHABLE)
    grid.add_state_to_tile((1, 2), TileState.HOVERED)
    grid.clear_state_from_tiles(TileState.IS_REACHABLE)
    assert grid.tiles_with_state(TileState.IS_REACHABLE) == []
    assert all(TileState.IS_REACHABLE not in t.tile_states for t in grid.grid_tiles.values())
    assert grid.grid_tiles[(1, 2)].tile_states == [TileState.HOVERED]


def test_set_starting_area_is_inclusive():
    grid = make_grid()
    grid.set_starting_area((0, 0), (1, 1))
    assert sorted(grid.tiles_with_state(TileState.SELECTED)) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_set_starting_area_reversed_corners_selects_nothing():
    grid = make_grid()
    grid.set_starting_area((2, 2), (0, 0))
    assert grid.tiles_with_state(TileState.SELECTED) == []


def test_generate_movement_path_uses_tile_locations():
    grid = make_grid()
    points = grid.generate_movement_path((0.0, 0.0, 50.0), [(0, 1), (5, 5), (1, 1)], 40.0)
    assert len(points) == 3
    assert points[0] == (0.0, 0.0, 50.0)
    tile = grid.grid_tiles[(1, 1)].location
    assert points[2] == (tile[0], tile[1], tile[2] + 40.0)
    assert grid.movement_spline.points == points


def test_combatant_under_index():
    grid = make_grid()
    unit = object()
    grid.grid_tiles[(2, 0)].unit_on_tile = unit
    assert grid.combatant_under_index((2, 0)) is unit
    assert grid.combatant_under_index((0, 0)) is None
    assert grid.combatant_under_index((9, 9)) is None