"""Tile maps with terrain and feature layers, loaded from LDTk level data."""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from lowengine.layer import AnimatedTileState, Layer, LayerType
from lowengine.navigation import NavigationCell, NavigationGrid


def _advance(state: AnimatedTileState, delta_time: float) -> None:
    clip = state.clips[state.clip_index]
    state.frame_time += delta_time
    if state.frame_time >= clip.frame_duration:
        state.frame_time = 0.0
        state.current_frame += 1
        if state.current_frame >= clip.frame_count:
            state.current_frame = 0


class TileMap:
    """A map made of a terrain layer, a features layer and a navigation grid."""

    def __init__(self) -> None:
        self.name = ""
        self.size: Tuple[int, int] = (0, 0)
        self.nav_grid = NavigationGrid()
        self.terrain_layer = Layer(LayerType.TERRAIN)
        self.features_layer = Layer(LayerType.FEATURES)

    def update(self, delta_time: float) -> None:
        """Advance the animation of every animated tile by delta_time seconds."""
        for layer in (self.terrain_layer, self.features_layer):
            for state in layer.animated_tiles.values():
                _advance(state, delta_time)

    @staticmethod
    def _fill_cells(layer: Layer, entry: Mapping[str, Any]) -> None:
        layer.set_size((int(entry["__cWid"]), int(entry["__cHei"])), int(entry["__gridSize"]))
        layer.cells = [None] * (layer.cell_count[0] * layer.cell_count[1])
        for tile in entry["gridTiles"]:
            cell_index = int(tile["d"][0])
            layer.cells[cell_index] = int(tile["src"][1]) // layer.cell_size

    def load_ldtk(self, data: Mapping[str, Any]) -> None:
        """Load name, size and layer cells from parsed LDTk level JSON."""
        self.name = str(data["identifier"])
        self.size = (int(data["pxWid"]), int(data["pxHei"]))

        for entry in data["layerInstances"]:
            identifier = entry["__identifier"]
            if identifier == LayerType.TERRAIN.value:
                width, height = int(entry["__cWid"]), int(entry["__cHei"])
                self.nav_grid.width = width
                self.nav_grid.height = height
                self.nav_grid.cells = [NavigationCell() for _ in range(width * height)]
                self._fill_cells(self.terrain_layer, entry)
            elif identifier == LayerType.FEATURES.value:
                self._fill_cells(self.features_layer, entry)