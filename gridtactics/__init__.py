"""Tile grid, spell areas, pathfinding state, turn order and save data for tactical games."""

__version__ = "0.1.0"