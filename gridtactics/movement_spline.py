"""Spline of world points a unit follows along a grid path."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from gridtactics.tiles import IntPoint, TileData, Vector


class MovementSpline:
    """Ordered world-space points describing a movement path."""

    def __init__(self) -> None:
        self.points: list[Vector] = []
        self.draw_debug = True
        self.unselected_segment_color = (0.0, 1.0, 0.0, 1.0)
        self.selected_segment_color = (1.0, 1.0, 0.0, 1.0)
        self.scale_visualization_width = 5.0

    def generate_path_from_indices(
        self,
        start_location: Vector,
        path_indices: Iterable[IntPoint],
        tiles: Mapping[IntPoint, TileData],
        capsule_half_height: float = 50.0,
    ) -> list[Vector]:
        """Rebuild the spline from a start point and tile indexes; unknown tiles are skipped."""
        self.points = [tuple(start_location)]
        for index in path_indices:
            tile = tiles.get(index)
            if tile is None:
                continue
            x, y, z = tile.location
            self.points.append((x, y, z + capsule_half_height))
        return list(self.points)

    def clear_path(self) -> None:
        """Remove every point."""
        self.points.clear()