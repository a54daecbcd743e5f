"""Building tile maps from LDTk level data and per-layer definitions."""

from __future__ import annotations

import random
from typing import Any, Iterable, Mapping, Optional, Protocol

from PIL import Image

from lowengine.layer import AnimatedTileState, Layer, LayerDefinition, LayerType
from lowengine.spritesheet import SpriteSheet
from lowengine.tilemap import TileMap


class MapLoadError(RuntimeError):
    """Raised when a tile map cannot be assembled from its data and definitions."""


class TextureSource(Protocol):
    """What the loader needs from an asset library."""

    def get_texture(self, texture: Any) -> Image.Image:
        ...

    def get_sprite_sheet(self, texture: Any) -> Optional[SpriteSheet]:
        ...


def _collect_layer_definitions(
    definitions: Iterable[LayerDefinition],
) -> tuple[Optional[LayerDefinition], Optional[LayerDefinition]]:
    terrain: Optional[LayerDefinition] = None
    features: Optional[LayerDefinition] = None
    for definition in definitions:
        if definition.type is LayerType.TERRAIN:
            terrain = definition
        elif definition.type is LayerType.FEATURES:
            features = definition
        else:
            raise MapLoadError(f"invalid layer definition type: {definition.type!r}")
    return terrain, features


def _prepare_layer(
    library: TextureSource, definition: LayerDefinition, layer: Layer
) -> None:
    """Attach the texture and gather the animation clips named by the definition."""
    texture_id = definition.texture_id
    layer.set_source(texture_id, library.get_texture(texture_id))

    sheet = library.get_sprite_sheet(texture_id)
    if sheet is None:
        raise MapLoadError(f"sprite sheet does not exist for texture id {texture_id}")

    for tile_index, cell_definition in definition.cell_definitions.items():
        for clip_name in cell_definition.animation_clip_names:
            clip = sheet.get_animation_clip(clip_name)
            if clip is None:
                raise MapLoadError(
                    f"animation clip {clip_name!r} does not exist for texture id {texture_id}"
                )
            layer.animated_tiles.setdefault(tile_index, AnimatedTileState()).clips.append(clip)


def load_terrain_layer_data(
    library: TextureSource,
    definition: LayerDefinition,
    tile_map: TileMap,
    rng: Optional[random.Random] = None,
) -> None:
    """Attach texture and animations to the terrain layer and pick a clip per cell."""
    rng = rng if rng is not None else random.Random()
    layer = tile_map.terrain_layer
    _prepare_layer(library, definition, layer)

    animated_count = len(layer.animated_tiles)
    for cell_index, tile_index in enumerate(layer.cells):
        if tile_index is None:
            continue
        if animated_count > 1:
            if tile_index in layer.animated_tiles:
                layer.cell_clip_index[cell_index] = rng.randint(0, animated_count - 1)
        else:
            layer.cell_clip_index[cell_index] = 0


def load_feature_layer_data(
    library: TextureSource,
    definition: LayerDefinition,
    tile_map: TileMap,
    rng: Optional[random.Random] = None,
) -> None:
    """Attach texture and animations to the features layer and pick a clip per cell."""
    rng = rng if rng is not None else random.Random()
    layer = tile_map.features_layer
    _prepare_layer(library, definition, layer)

    for cell_index, tile_index in enumerate(layer.cells):
        if tile_index is None:
            continue
        state = layer.animated_tiles.get(tile_index)
        if state is None:
            continue
        if len(state.clips) >= 2:
            layer.cell_clip_index[cell_index] = rng.randint(0, len(state.clips) - 1)
        else:
            layer.cell_clip_index[cell_index] = 0


def read_nav_data(tile_map: TileMap, layer: Layer, definition: LayerDefinition) -> None:
    """Copy navigation properties of each cell's tile type into the navigation grid."""
    grid = tile_map.nav_grid
    width = grid.width
    for cell_index, nav_cell in enumerate(grid.cells):
        nav_cell.position = (cell_index % width, cell_index // width)

        if cell_index >= len(layer.cells):
            raise MapLoadError(
                f"{layer.type} layer has no cell {cell_index} of the navigation grid"
            )
        tile_index = layer.cells[cell_index]
        if tile_index is None:
            continue

        cell_definition = definition.cell_definitions.get(tile_index)
        if cell_definition is None:
            raise MapLoadError(
                f"no cell definition for tile {tile_index} on the {layer.type} layer"
            )
        nav_cell.is_walkable = cell_definition.is_walkable
        nav_cell.is_swimmable = cell_definition.is_swimmable
        nav_cell.is_flyable = cell_definition.is_flyable
        nav_cell.move_cost = cell_definition.move_cost


def build_tile_map(
    library: TextureSource,
    data: Mapping[str, Any],
    definitions: Iterable[LayerDefinition],
    rng: Optional[random.Random] = None,
) -> TileMap:
    """Create a tile map from parsed LDTk level JSON and layer definitions."""
    terrain_definition, features_definition = _collect_layer_definitions(definitions)
    rng = rng if rng is not None else random.Random()

    tile_map = TileMap()
    tile_map.load_ldtk(data)

    if terrain_definition is not None:
        load_terrain_layer_data(library, terrain_definition, tile_map, rng)
        read_nav_data(tile_map, tile_map.terrain_layer, terrain_definition)
    if features_definition is not None:
        load_feature_layer_data(library, features_definition, tile_map, rng)
        read_nav_data(tile_map, tile_map.features_layer, features_definition)

    return tile_map