"""Tile map layers, their cell definitions and the image composed from them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from PIL import Image

from lowengine.spritesheet import AnimationClip

TRANSPARENT = (0, 0, 0, 0)


class LayerType(enum.Enum):
    """Purpose of a tile map layer; the value is the layer name used in map files."""

    TERRAIN = "Terrain"
    FEATURES = "Features"

    def __str__(self) -> str:
        return self.value


@dataclass
class AnimatedTileState:
    """Playback state shared by every cell of one animated tile type."""

    clips: List[AnimationClip] = field(default_factory=list)
    clip_index: int = 0
    current_frame: int = 0
    frame_time: float = 0.0


@dataclass
class CellDefinition:
    """Navigation properties and animation clips for one cell type."""

    is_walkable: bool = False
    is_swimmable: bool = False
    is_flyable: bool = False
    move_cost: float = 1.0
    animation_clip_names: List[str] = field(default_factory=list)


@dataclass
class LayerDefinition:
    """Texture and per-cell-type properties supplied when loading a tile map."""

    type: LayerType
    texture_id: int = 0
    cell_definitions: Dict[int, CellDefinition] = field(default_factory=dict)


class Layer:
    """One layer of a tile map: a grid of tile indices painted from a source image."""

    def __init__(self, layer_type: LayerType = LayerType.TERRAIN) -> None:
        self.type = layer_type
        self.cell_size = 0
        self.cell_count: Tuple[int, int] = (0, 0)
        self.layer_size: Tuple[int, int] = (0, 0)
        # Tile index per cell, row by row; None marks an empty cell.
        self.cells: List[Optional[int]] = []
        self.animated_tiles: Dict[int, AnimatedTileState] = {}
        self.cell_clip_index: Dict[int, int] = {}
        self.texture_id: Optional[int] = None
        self._source_image: Optional[Image.Image] = None
        self._image: Optional[Image.Image] = None

    def set_source(self, texture_id: int, image: Image.Image) -> None:
        """Use the given texture image as the tile source for this layer."""
        self.texture_id = texture_id
        self._source_image = image.convert("RGBA")

    def set_size(self, cell_count: Tuple[int, int], cell_size: int) -> None:
        """Resize the layer to a number of cells of the given pixel size."""
        self.cell_count = (cell_count[0], cell_count[1])
        self.cell_size = cell_size
        self.layer_size = (self.cell_count[0] * cell_size, self.cell_count[1] * cell_size)
        self._image = Image.new("RGBA", self.layer_size, TRANSPARENT)

    def _source_origin(self, cell_index: int, tile_index: int) -> Tuple[int, int]:
        state = self.animated_tiles.get(tile_index)
        if state is None:
            return 0, tile_index * self.cell_size
        clip = state.clips[self.cell_clip_index.get(cell_index, 0)]
        x = clip.first_frame_origin[0] + state.current_frame * self.cell_size
        return x, tile_index * self.cell_size

    def render(self) -> Optional[Image.Image]:
        """Repaint every cell into the layer image and return it.

        Returns None when no source image is set or the layer has no size.
        """
        source = self._source_image
        if source is None or source.size == (0, 0):
            return None
        if self._image is None or self.layer_size[0] == 0 or self.layer_size[1] == 0:
            return None

        size = self.cell_size
        layer_width = self.layer_size[0]
        for cell_index, tile_index in enumerate(self.cells):
            if tile_index is None:
                continue
            sx, sy = self._source_origin(cell_index, tile_index)
            if sx < 0 or sy < 0 or sx + size > source.width or sy + size > source.height:
                raise ValueError(
                    f"tile {tile_index} of cell {cell_index} lies outside the source image"
                )
            tx = cell_index * size % layer_width
            ty = (cell_index * size // layer_width) * size
            self._image.paste(source.crop((sx, sy, sx + size, sy + size)), (tx, ty))
        return self._image