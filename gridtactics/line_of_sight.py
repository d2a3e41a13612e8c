"""Line-of-sight filtering of tiles for spells."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Optional

from gridtactics.grid import Grid
from gridtactics.tiles import IntPoint, Vector

logger = logging.getLogger(__name__)

BlockedCheck = Callable[[Vector, Vector], bool]

_EYE_HEIGHT = 100.0
_HALF_TILE = 50.0


def tile_endpoints(location: Vector, scale: Vector) -> list[Vector]:
    """Points a sight line may reach on a tile: centre, left, up, down and right."""
    x, y, z = location
    z += _EYE_HEIGHT
    sx, sy = scale[0], scale[1]
    offsets = [
        (0.0, 0.0),
        (-_HALF_TILE * sx, 0.0),
        (0.0, _HALF_TILE * sy),
        (0.0, -_HALF_TILE * sy),
        (_HALF_TILE * sx, 0.0),
    ]
    return [(x + dx, y + dy, z) for dx, dy in offsets]


def line_trace_spells(
    indices: Iterable[IntPoint],
    grid: Optional[Grid],
    origin: IntPoint,
    is_blocked: BlockedCheck,
) -> list[IntPoint]:
    """Keep the tiles that can be seen from the origin tile.

    is_blocked(start, end) reports whether a sight line between two world points is blocked.
    A tile is visible if any of its endpoints can be reached.
    """
    if grid is None:
        return []
    origin_tile = grid.grid_tiles.get(origin)
    if origin_tile is None:
        logger.error("line of sight requested from tile %s which is not on the grid", origin)
        return []

    ox, oy, oz = origin_tile.location
    start = (ox, oy, oz + _EYE_HEIGHT)

    visible = []
    for index in indices:
        tile = grid.grid_tiles.get(index)
        if tile is None:
            continue
        if any(not is_blocked(start, end) for end in tile_endpoints(tile.location, tile.scale)):
            visible.append(index)
    return visible