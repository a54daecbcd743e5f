# lowengine

Building blocks for 2D tile-based games:

- **Sprite sheets and animation clips** (`lowengine.spritesheet`). A `SpriteSheet` describes a texture as a grid of frames. An `AnimationClip` names a run of those frames and gives each one a duration. Each clip exposes `frames` (rectangles as `(x, y, width, height)`), `fps` and `duration`.
- **Tile map layers** (`lowengine.layer`). `Layer` holds a grid of tile indices, with `None` marking an empty cell. `Layer.render()` paints the grid from a source image into a Pillow image. `LayerDefinition` and `CellDefinition` give each tile index its navigation flags, its move cost and its animation clip names.
- **Tile maps** (`lowengine.tilemap`). `TileMap.load_ldtk()` reads parsed LDTk level JSON that has a `Terrain` and a `Features` layer. `TileMap.update(delta_time)` advances tile animations.
- **Map building** (`lowengine.maploader`). `build_tile_map()` assembles a `TileMap` from parsed level data and layer definitions. It attaches textures and animation clips and fills in the navigation grid. Problems raise `MapLoadError`.
- **Navigation** (`lowengine.navigation`). `NavigationGrid.find_path()` and `AStar` search the grid over eight neighbours. You choose walking, swimming or flying movement (`MovementType`).
- **Asset library** (`lowengine.assets`). `AssetLibrary` holds textures (Pillow images), sprite sheets, sounds and tile maps. Each one is reachable by numeric id or by alias. Failures raise `AssetError`.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## Example

```python
from lowengine.assets import AssetLibrary
from lowengine.layer import CellDefinition, LayerDefinition, LayerType
from lowengine.navigation import MovementType

assets = AssetLibrary()

terrain = assets.load_texture_with_sprite_sheet(
    "textures/green_terrain.png", 16, 16, 3, 2, alias="green_terrain"
)
assets.add_animation_clip("green_terrain", "water", 3, 3, 0.5)

map_id = assets.load_tile_map(
    "maps/BasicMap.ldtkl",
    [
        LayerDefinition(
            LayerType.TERRAIN,
            terrain,
            {
                0: CellDefinition(True, False, True, 1.0, []),
                1: CellDefinition(False, True, True, 1.0, ["water"]),
            },
        ),
    ],
    alias="BasicMap",
)

tile_map = assets.get_tile_map("BasicMap")
tile_map.update(0.016)                      # advance tile animations
image = tile_map.terrain_layer.render()     # Pillow image of the layer

path = tile_map.nav_grid.find_path((4, 7), (8, 4), MovementType.WALK)
print([cell.position for cell in path])
```

`find_path` returns copies of the navigation cells, running from the start cell to the end cell. If the end cannot be reached, it returns an empty list.

## Notes on behaviour

- Layer names in the LDTk file must be `Terrain` and `Features`. The navigation grid takes its size from the `Terrain` layer.
- A layer definition names the texture the layer is painted from. That texture must have a sprite sheet, and every clip name in the definition must exist on that sheet. Otherwise `MapLoadError` is raised.
- If a tile type has more than one clip, each cell of that type gets one of them at random when the map loads. To make the choice repeatable, pass a `random.Random` as `rng` to `build_tile_map()`.
- On creation, `AssetLibrary` generates two defaults, both with id 0 and alias `"default"`:
  - a 32×32 magenta texture (`default_texture`);
  - a one-second 440 Hz tone (`default_sound`, made by `generate_tone()`).
- `unload_all()` drops every asset, including these defaults.
- `load_texture()` accepts any image format Pillow can open. `load_sound()` reads 16-bit PCM WAV files into a `Sound`.
- A texture can have only one sprite sheet. Adding a second one raises `AssetError`. `get_sprite_sheet()` returns `None` for a texture that has no sheet.
- The library logs through the standard `logging` module, under the logger name `lowengine`.

## What this package does not do

This package provides data and logic only. It does not:

- open a window;
- run a game loop;
- draw to the screen;
- read keyboard or mouse input;
- play sounds;
- load fonts;
- manage scenes or entities.

It also has no editor and no command-line program. `Layer.render()` produces a Pillow image, and displaying it is up to the caller.