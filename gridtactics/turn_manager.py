"""Combatants on the grid and the initiative-ordered turn loop between them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from gridtactics.grid import Grid
from gridtactics.tiles import IntPoint, TileState, TileType

logger = logging.getLogger(__name__)

TurnHook = Callable[["Combatant"], None]


@dataclass(eq=False)
class Combatant:
    """A unit taking part in combat.

    How initiative is rolled and what happens when a turn begins or ends is
    supplied by the caller through the roller and hook callables.
    """

    character_name: str = ""
    initiative_roller: Optional[Callable[[], float]] = None
    on_begin_turn: Optional[TurnHook] = None
    on_end_turn: Optional[TurnHook] = None
    location_index: IntPoint = (-1, -1)
    path: list[IntPoint] = field(default_factory=list)
    accessible_tiles: list[TileType] = field(default_factory=list)
    enemies_on_map_row_name: str = ""
    conditions: set[str] = field(default_factory=set)
    is_hovered: bool = False
    is_selected: bool = False

    def roll_initiative(self) -> float:
        """Roll initiative with the configured roller."""
        if self.initiative_roller is None:
            raise RuntimeError(f"combatant {self.character_name!r} has no initiative roller")
        return float(self.initiative_roller())

    def begin_turn(self) -> None:
        """Start this combatant's turn."""
        if self.on_begin_turn is not None:
            self.on_begin_turn(self)

    def end_turn_effects(self) -> None:
        """Apply end-of-turn effects."""
        if self.on_end_turn is not None:
            self.on_end_turn(self)


class TurnManager:
    """Rolls initiative, orders combatants and passes the turn between them."""

    def __init__(self, grid: Optional[Grid] = None) -> None:
        self.grid = grid
        self.combatant_array: list[Optional[Combatant]] = []
        self.current_combatant: Optional[Combatant] = None
        self.combatant_turn = 0
        self.is_combat_active = False
        self.current_initiative_holder: dict[float, Combatant] = {}
        self.combat_started_listeners: list[Callable[[list[Combatant]], None]] = []
        self.turn_changed_listeners: list[Callable[[Combatant], None]] = []
        self.combat_ended_listeners: list[Callable[[], None]] = []

    def set_unit_on_grid(self, combatant: Optional[Combatant], index: IntPoint, force: bool = False) -> None:
        """Move a combatant to a tile, clearing the tile it stood on."""
        if combatant is None or self.grid is None:
            return
        if combatant.location_index == index and not force:
            return
        current = self.grid.grid_tiles.get(combatant.location_index)
        if current is not None:
            current.unit_on_tile = None
        new_tile = self.grid.grid_tiles.get(index)
        if new_tile is not None:
            new_tile.unit_on_tile = combatant
            combatant.location_index = index

    def start_combat(self) -> None:
        """Roll initiative for everyone, order them highest first and begin the first turn."""
        if not self.combatant_array:
            logger.error("combatant list is empty, cannot start combat")
            return
        if self.grid is not None:
            self.grid.clear_state_from_tiles(TileState.SELECTED)
        logger.info("starting combat with %d combatants", len(self.combatant_array))

        holder: dict[float, Combatant] = {}
        for combatant in self.combatant_array:
            if combatant is None:
                logger.error("found an empty entry in the combatant list")
                continue
            initiative = combatant.roll_initiative()
            logger.info("%s rolled initiative: %.2f", combatant.character_name, initiative)
            holder[initiative] = combatant

        self.combatant_array = [holder[key] for key in sorted(holder, reverse=True)]
        self.current_initiative_holder = holder

        if not self.combatant_array:
            logger.error("combatant list is empty after sorting, combat failed to start")
            return

        self.current_combatant = self.combatant_array[0]
        self.is_combat_active = True
        ordered = list(self.combatant_array)
        for listener in self.combat_started_listeners:
            listener(ordered)
        self.current_combatant.begin_turn()
        self._announce_turn()

    def on_action_spent(self, actions_left: float) -> None:
        """End the turn once the current combatant has no actions left."""
        if actions_left <= 0.0:
            self.end_turn()

    def end_turn(self) -> None:
        """Finish the current turn and hand it to the next combatant in order."""
        if not self.is_combat_active:
            return
        if self.current_combatant is not None:
            self.current_combatant.end_turn_effects()
        self.combatant_turn += 1
        if self.combatant_turn >= len(self.combatant_array):
            self.combatant_turn = 0
        nxt = self.combatant_array[self.combatant_turn]
        if nxt is not None:
            self.current_combatant = nxt
            nxt.begin_turn()
            self._announce_turn()

    def end_combat(self) -> None:
        """Reset all combat state and announce the end of combat."""
        self.combatant_turn = 0
        self.combatant_array.clear()
        self.current_initiative_holder.clear()
        self.current_combatant = None
        self.is_combat_active = False
        for listener in self.combat_ended_listeners:
            listener()

    def _announce_turn(self) -> None:
        if self.current_combatant is None:
            return
        for listener in self.turn_changed_listeners:
            listener(self.current_combatant)