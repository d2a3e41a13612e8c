import pytest

from gridtactics.grid import Grid
from gridtactics.tiles import TileData, TileState
from gridtactics.turn_manager import Combatant, TurnManager


def make_grid():
    grid = Grid()
    for x in range(3):
        for y in range(3):
            grid.grid_tiles[(x, y)] = TileData(index=(x, y))
    return grid


def make_combatant(name, initiative, log=None):
    def begin(c):
        if log is not None:
            log.append(("begin", c.character_name))

    def end(c):
        if log is not None:
            log.append(("end", c.character_name))

    return Combatant(
        character_name=name,
        initiative_roller=lambda: initiative,
        on_begin_turn=begin,
        on_end_turn=end,
    )


def names(manager):
    return [c.character_name for c in manager.combatant_array]


def test_start_combat_orders_by_initiative_descending():
    manager = TurnManager(make_grid())
    manager.combatant_array = [make_combatant("a", 5), make_combatant("b", 15), make_combatant("c", 10)]
    manager.start_combat()
    assert names(manager) == ["b", "c", "a"]
    assert manager.current_combatant.character_name == "b"
    assert manager.is_combat_active
    assert sorted(manager.current_initiative_holder) == [5.0, 10.0, 15.0]


def test_start_combat_with_no_combatants_stays_inactive():
    manager = TurnManager(make_grid())
    manager.start_combat()
    assert manager.is_combat_active is False
    assert manager.current_combatant is None


def test_start_combat_clears_selected_tiles():
    grid = make_grid()
    grid.set_starting_area((0, 0), (1, 1))
    assert len(grid.tiles_with_state(TileState.SELECTED)) == 4
    manager = TurnManager(grid)
    manager.combatant_array = [make_combatant("a", 3)]
    manager.start_combat()
    assert grid.tiles_with_state(TileState.SELECTED) == []
    assert grid.grid_tiles[(0, 0)].tile_states == []


def test_start_combat_notifies_and_begins_first_turn():
    log = []
    manager = TurnManager(make_grid())
    started = []
    changed = []
    manager.combat_started_listeners.append(started.append)
    manager.turn_changed_listeners.append(changed.append)
    a, b = make_combatant("a", 1, log), make_combatant("b", 2, log)
    manager.combatant_array = [a, b]
    manager.start_combat()
    assert started == [[b, a]]
    assert changed == [b]
    assert log == [("begin", "b")]


def test_equal_initiative_keeps_only_last_combatant():
    manager = TurnManager(make_grid())
    manager.combatant_array = [make_combatant("a", 7), make_combatant("b", 7)]
    manager.start_combat()
    assert names(manager) == ["b"]


def test_empty_entries_are_skipped():
    manager = TurnManager(make_grid())
    manager.combatant_array = [None, make_combatant("a", 4)]
    manager.start_combat()
    assert names(manager) == ["a"]


def test_roll_initiative_without_roller_raises():
    with pytest.raises(RuntimeError):
        Combatant(character_name="x").roll_initiative()


def test_end_turn_advances_and_wraps():
    log = []
    manager = TurnManager(make_grid())
    manager.combatant_array = [make_combatant("a", 1, log), make_combatant("b", 2, log)]
    manager.start_combat()
    manager.end_turn()
    assert manager.current_combatant.character_name == "a"
    assert manager.combatant_turn == 1
    manager.end_turn()
    assert manager.current_combatant.character_name == "b"
    assert manager.combatant_turn == 0
    assert log == [("begin", "b"), ("end", "b"), ("begin", "a"), ("end", "a"), ("begin", "b")]


def test_end_turn_does_nothing_when_inactive():
    manager = TurnManager(make_grid())
    manager.combatant_array = [make_combatant("a", 1)]
    manager.end_turn()
    assert manager.combatant_turn == 0
    assert manager.current_combatant is None


def test_action_spent_ends_turn_only_at_zero():
    manager = TurnManager(make_grid())
    manager.combatant_array = [make_combatant("a", 1), make_combatant("b", 2)]
    manager.start_combat()
    manager.on_action_spent(1.0)
    assert manager.current_combatant.character_name == "b"
    manager.on_action_spent(0.0)
    assert manager.current_combatant.character_name == "a"


def test_end_combat_resets_state_and_notifies():
    manager = TurnManager(make_grid())
    ended = []
    manager.combat_ended_listeners.append(lambda: ended.append(True))
    manager.combatant_array = [make_combatant("a", 1), make_combatant("b", 2)]
    manager.start_combat()
    manager.end_turn()
    manager.end_combat()
    assert ended == [True]
    assert manager.combatant_array == []
    assert manager.current_initiative_holder == {}
    assert manager.current_combatant is None
    assert manager.is_combat_active is False
    assert manager.combatant_turn == 0


def test_set_unit_on_grid_moves_unit():
    grid = make_grid()
    manager = TurnManager(grid)
    unit = Combatant(character_name="u")
    manager.set_unit_on_grid(unit, (1, 1))
    assert unit.location_index == (1, 1)
    assert grid.combatant_under_index((1, 1)) is unit
    manager.set_unit_on_grid(unit, (2, 2))
    assert grid.combatant_under_index((1, 1)) is None
    assert grid.combatant_under_index((2, 2)) is unit


def test_set_unit_on_unknown_tile_clears_old_tile_but_keeps_location():
    grid = make_grid()
    manager = TurnManager(grid)
    unit = Combatant(character_name="u")
    manager.set_unit_on_grid(unit, (0, 0))
    manager.set_unit_on_grid(unit, (9, 9))
    assert unit.location_index == (0, 0)
    assert grid.combatant_under_index((0, 0)) is None


def test_set_unit_on_same_tile_needs_force():
    grid = make_grid()
    manager = TurnManager(grid)
    unit = Combatant(character_name="u")
    manager.set_unit_on_grid(unit, (0, 0))
    grid.grid_tiles[(0, 0)].unit_on_tile = None
    manager.set_unit_on_grid(unit, (0, 0))
    assert grid.combatant_under_index((0, 0)) is None
    manager.set_unit_on_grid(unit, (0, 0), force=True)
    assert grid.combatant_under_index((0, 0)) is unit


def test_set_unit_without_grid_leaves_combatant_alone():
    manager = TurnManager()
    unit = Combatant(character_name="u")
    manager.set_unit_on_grid(unit, (1, 1))
    assert unit.location_index == (-1, -1)