"""Bookkeeping for the instanced meshes that draw grid tiles."""

from __future__ import annotations

from typing import Any, Callable, Optional

from gridtactics.tiles import IntPoint, TileData, Vector

ColorTileCallback = Callable[[TileData, int], None]
InstanceTransform = tuple[Vector, Vector, Vector]


class GridMeshInstance:
    """Keeps one drawn instance per visible tile and maps tile indexes to instances."""

    def __init__(self, color_tile: Optional[ColorTileCallback] = None) -> None:
        self._color_tile = color_tile
        self.instances: list[InstanceTransform] = []
        self.instance_indexes: dict[IntPoint, int] = {}
        self.mesh: Any = None
        self.material: Any = None
        self.collision: Any = "no_collision"
        self.color_based_on_tile_type = False

    def initialize(
        self,
        mesh: Any,
        material: Any,
        collision: Any = "no_collision",
        color_based_on_tile_type: bool = False,
    ) -> None:
        """Set the mesh, material and collision used by every instance."""
        self.mesh = mesh
        self.material = material
        self.collision = collision
        self.color_based_on_tile_type = color_based_on_tile_type

    def clear_instances(self) -> None:
        """Drop every instance and the index map."""
        self.instances.clear()
        self.instance_indexes.clear()

    def remove_instance(self, index: IntPoint) -> bool:
        """Remove the instance drawn for a tile; return whether one was removed."""
        removed = self.instance_indexes.get(index)
        if removed is None or not 0 <= removed < len(self.instances):
            return False
        del self.instances[removed]
        del self.instance_indexes[index]
        for tile_index, mesh_index in self.instance_indexes.items():
            if mesh_index > removed:
                self.instance_indexes[tile_index] = mesh_index - 1
        return True

    def add_instance(self, tile: TileData) -> int:
        """Draw a tile, replacing any instance it had; return the new instance index."""
        if tile.index in self.instance_indexes:
            self.remove_instance(tile.index)
        self.instances.append((tile.location, tile.rotation, tile.scale))
        added = len(self.instances) - 1
        self.instance_indexes[tile.index] = added
        self._color(tile, added)
        return added

    def update_tile_visual(self, tile: TileData) -> None:
        """Recolour a drawn tile, or draw it if it is walkable and not drawn yet."""
        mesh_index = self.instance_indexes.get(tile.index)
        if mesh_index is not None:
            self._color(tile, mesh_index)
        elif tile.tile_type.is_walkable():
            self.add_instance(tile)

    def instance_count(self) -> int:
        """Number of drawn instances."""
        return len(self.instances)

    def _color(self, tile: TileData, mesh_index: int) -> None:
        if self._color_tile is not None:
            self._color_tile(tile, mesh_index)