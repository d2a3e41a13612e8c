# gridtactics

Game logic for a tile-based tactical combat game, kept apart from any engine:
the tile grid, spell areas and ranges, pathfinding costs and search state,
initiative and turn order, and saved character data. It has no dependencies
outside the standard library.

## Install

From a checkout:

```
pip install .
```

For development and tests:

```
pip install -e ".[test]"
pytest
```

## Modules

- `gridtactics.tiles`: the `TileType` and `TileState` enums (`TileType.is_walkable()`
  is false for `NONE` and `OBSTACLE`), `TileData` for one grid cell with
  `add_state` / `remove_state`, and `GridModifier`, an area that sets a tile
  type and can be used for tile height.
- `gridtactics.enums`: `AbilityCategory`, `AbilityVariantType`,
  `CombatAttributeType`, `SpellArea` and `SpellPattern`, each with a
  `display_name()`.
- `gridtactics.grid`: `grid_snap(value, grid)`, `GroundHit` and `Grid`. A `Grid`
  holds its tiles in `grid_tiles`, converts between indexes and world
  locations (`tile_location_from_index`, `squares_spawn_location`,
  `index_from_world_location`), snaps its starting position
  (`snap_starting_position`), resolves a tile's height and type from the hits
  of a vertical trace (`trace_for_ground`), tracks tile states
  (`add_state_to_tile`, `remove_state_from_tile`, `clear_state_from_tiles`,
  `tiles_with_state`, `set_starting_area`), filters out obstacle and empty
  tiles (`remove_obstacle_tiles`) and reports the unit on a tile
  (`combatant_under_index`).
- `gridtactics.mesh_instance`: `GridMeshInstance` keeps one drawn instance per
  visible tile, keeps the tile-to-instance map in step when instances are
  removed, and calls an optional `color_tile(tile, instance_index)` callback.
- `gridtactics.movement_spline`: `MovementSpline` turns a start point and a
  path of tile indexes into world points raised by a capsule half height;
  `Grid.generate_movement_path` uses it.
- `gridtactics.line_of_sight`: `tile_endpoints` and `line_trace_spells`, which
  keeps the tiles that can be seen from an origin tile. You supply an
  `is_blocked(start, end)` callable; a tile counts as visible if any of its
  five endpoints is not blocked.
- `gridtactics.range_finder`: the shape generators `generate_emanation`,
  `generate_cone`, `generate_line`, `generate_burst` and
  `generate_possible_array`, the distance rule `total_cost`, the neighbour
  helpers `neighbor_indexes`, `is_diagonal` and `remove_invalid_neighbors`,
  `PathfindingData`, and `RangeFinder`. `RangeFinder` holds the search state
  (discovered list ordered by estimated cost, analysed tiles, per-tile data),
  gives the steps of a search (`discover_tile`, `pull_cheapest_tile`,
  `discover_next_neighbor`, `loop_through_neighbors`, `generate_path`), finds
  the neighbours a unit may step to with their entry costs
  (`valid_tile_neighbors`) and works out a spell's tiles on its grid
  (`effect_area_or_range`). Areas must be between 0 and 255, or `ValueError`
  is raised.
- `gridtactics.character_data`: character sheets (`CharacterInfo`,
  `CombatAttributes`, `Skills`, `SpellResources`, `CharacterAbilities`,
  `CombatantDataAssets`, `CombatantStats`, `CompleteCharacterData`) and
  encounter data (`FacingDirection`, `EnemyWithAI`, `EnemiesOnMap`).
  `CompleteCharacterData.to_dict()` / `from_dict()` convert to and from plain
  dicts.
- `gridtactics.save`: `SaveFile` (four party members and a save date) and
  `SaveSystem`, which keeps one slot as `<slot_name>.json` in a directory. On
  construction it loads the slot or creates a new save, passing it to an
  optional `set_default_character_values` callback. `save_game`, `load_save`,
  `does_save_exist`, `create_new_save_file` and `new_game` manage the slot; a
  slot that cannot be read as a save raises `ValueError`.
- `gridtactics.turn_manager`: `Combatant` and `TurnManager`. Combatants roll
  initiative through a roller callable you give them; `start_combat` orders
  them highest first and begins the first turn, `end_turn` and
  `on_action_spent` pass the turn along, `end_combat` resets everything, and
  `set_unit_on_grid` moves a unit between tiles. Listeners for combat started,
  turn changed and combat ended are plain lists of callables.

## Example

```python
from gridtactics.range_finder import generate_emanation, total_cost

total_cost((0, 0), (2, 1))                    # 2
tiles = generate_emanation((0, 0), 1, True)   # the eight tiles around the origin
```

Distances count diagonal steps the tabletop way: every second diagonal step
costs one more square. `total_cost` is the larger of the two axis distances
plus half of the smaller one, rounded down.

## What it does not do

There is no rendering, physics or input. The package does not cast rays or
read the cursor itself: ground height comes from `GroundHit` lists you pass to
`Grid.trace_for_ground`, and line of sight from the `is_blocked` callable you
pass in. It does not run a full pathfinding search on its own; `RangeFinder`
provides the search state and steps for a caller to drive. There is no
command-line program.