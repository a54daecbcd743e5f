"""Asset library holding textures, sprite sheets, sounds and tile maps."""

from __future__ import annotations

import json
import logging
import math
import random
import sys
import wave
from array import array
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from lowengine.layer import LayerDefinition
from lowengine.maploader import build_tile_map
from lowengine.spritesheet import AnimationClip, SpriteSheet
from lowengine.tilemap import TileMap

log = logging.getLogger("lowengine")

AssetRef = Union[int, str]
PathLike = Union[str, Path]

DEFAULT_TEXTURE_SIZE = (32, 32)
MAGENTA = (255, 0, 255, 255)


class AssetError(RuntimeError):
    """Raised when an asset cannot be loaded or does not exist."""


@dataclass(frozen=True)
class Sound:
    """Signed 16-bit PCM samples, interleaved by channel."""

    samples: Tuple[int, ...]
    sample_rate: int
    channel_count: int = 1

    @property
    def duration(self) -> float:
        """Length of the sound, in seconds."""
        frames = len(self.samples) / self.channel_count
        return frames / self.sample_rate


def generate_tone(
    frequency: float = 440.0,
    duration: float = 1.0,
    sample_rate: int = 44100,
    amplitude: float = 30000.0,
) -> Sound:
    """A mono sine wave of the given frequency and length."""
    sample_count = int(sample_rate * duration)
    two_pi_f = 2 * 3.14159 * frequency
    samples = tuple(
        int(amplitude * math.sin(two_pi_f * i / sample_rate)) for i in range(sample_count)
    )
    return Sound(samples, sample_rate, 1)


def _read_wav(path: PathLike) -> Sound:
    with wave.open(str(path), "rb") as reader:
        if reader.getsampwidth() != 2:
            raise AssetError(f"unsupported sample width in {path}: only 16-bit PCM is read")
        channels = reader.getnchannels()
        rate = reader.getframerate()
        raw = reader.readframes(reader.getnframes())
    samples = array("h")
    samples.frombytes(raw)
    if sys.byteorder == "big":
        samples.byteswap()
    return Sound(tuple(samples), rate, channels)


class AssetLibrary:
    """Stores loaded assets by numeric id, with optional aliases."""

    def __init__(self) -> None:
        self._maps: List[TileMap] = []
        self._map_aliases: Dict[str, int] = {}
        self._textures: List[Image.Image] = []
        self._texture_aliases: Dict[str, int] = {}
        self._sprite_sheets: Dict[int, SpriteSheet] = {}
        self._sounds: List[Sound] = []
        self._sound_aliases: Dict[str, int] = {}

        self._textures.append(Image.new("RGBA", DEFAULT_TEXTURE_SIZE, MAGENTA))
        self._texture_aliases["default"] = 0
        log.debug("Generated default texture with id %d", 0)

        self._sounds.append(generate_tone())
        self._sound_aliases["default"] = 0
        log.debug("Generated default sound with id %d", 0)

    # textures

    def _texture_id(self, texture: AssetRef) -> int:
        if isinstance(texture, str):
            return self.get_texture_id(texture)
        return texture

    def load_texture(self, path: PathLike, alias: Optional[str] = None) -> int:
        """Load an image file as a texture and return its id."""
        try:
            with Image.open(path) as image:
                texture = image.convert("RGBA")
        except (OSError, UnidentifiedImageError) as exc:
            log.error("Failed to load texture: %s", path)
            raise AssetError(f"failed to load texture: {path}") from exc

        self._textures.append(texture)
        index = len(self._textures) - 1
        log.debug("New texture loaded: %s with id %d", path, index)
        if alias is not None:
            self._texture_aliases[alias] = index
            log.debug("Texture with id %d loaded with alias '%s'", index, alias)
        return index

    def load_texture_with_sprite_sheet(
        self,
        path: PathLike,
        frame_width: int,
        frame_height: int,
        frame_count_x: int,
        frame_count_y: int,
        alias: Optional[str] = None,
    ) -> int:
        """Load a texture and define a sprite sheet for it."""
        texture_id = self.load_texture(path, alias)
        self.add_sprite_sheet(texture_id, frame_width, frame_height, frame_count_x, frame_count_y)
        return texture_id

    def add_sprite_sheet(
        self,
        texture: AssetRef,
        frame_width: int,
        frame_height: int,
        frame_count_x: int,
        frame_count_y: int,
    ) -> SpriteSheet:
        """Define the frame layout of a texture."""
        texture_id = self._texture_id(texture)
        if texture_id in self._sprite_sheets:
            log.error("Texture with id %d already has an animation sheet.", texture_id)
            raise AssetError(f"texture with id {texture_id} already has a sprite sheet")

        sheet = SpriteSheet(
            texture_id=texture_id,
            frame_size=(frame_width, frame_height),
            frame_count=(frame_count_x, frame_count_y),
        )
        self._sprite_sheets[texture_id] = sheet
        log.debug(
            "Animation sheet added for texture id: %d with frame size: %dx%d and frame count: %dx%d",
            texture_id, frame_width, frame_height, frame_count_x, frame_count_y,
        )
        return sheet

    def add_animation_clip(
        self,
        texture: AssetRef,
        name: str,
        first_frame_index: int,
        frame_count: int,
        frame_duration: float,
    ) -> AnimationClip:
        """Define an animation clip on a texture that has a sprite sheet."""
        texture_id = self._texture_id(texture)
        sheet = self._sprite_sheets.get(texture_id)
        if sheet is None:
            log.error("Texture with id %d does not have an animation sheet.", texture_id)
            raise AssetError(f"texture with id {texture_id} does not have a sprite sheet")

        count_x = sheet.frame_count[0]
        if count_x == 0:
            raise AssetError(f"sprite sheet of texture {texture_id} has no frames along x")
        origin = (
            first_frame_index % count_x * sheet.frame_size[0],
            first_frame_index // count_x * sheet.frame_size[1],
        )
        clip = sheet.add_animation_clip(name, first_frame_index, frame_count, frame_duration, origin)
        log.debug(
            "Animation clip added for texture id: %d with name: '%s' and frame count: %d",
            texture_id, name, frame_count,
        )
        return clip

    def get_sprite_sheet(self, texture: AssetRef) -> Optional[SpriteSheet]:
        """The sprite sheet of a texture, or None if it has none."""
        return self._sprite_sheets.get(self._texture_id(texture))

    @property
    def default_texture(self) -> Image.Image:
        """The generated placeholder texture."""
        if not self._textures:
            raise AssetError("default texture is not loaded")
        return self._textures[0]

    def get_texture(self, texture: AssetRef) -> Image.Image:
        """A texture by id or alias."""
        texture_id = self._texture_id(texture)
        if not 0 <= texture_id < len(self._textures):
            log.error("Texture with id %d does not exist", texture_id)
            raise AssetError(f"texture with id {texture_id} does not exist")
        return self._textures[texture_id]

    def get_texture_id(self, alias: str) -> int:
        """The id of the texture with this alias."""
        try:
            return self._texture_aliases[alias]
        except KeyError:
            log.error("Texture alias %s does not exist", alias)
            raise AssetError(f"texture alias {alias!r} does not exist") from None

    # tile maps

    def load_tile_map(
        self,
        path: PathLike,
        definitions: Iterable[LayerDefinition],
        alias: Optional[str] = None,
    ) -> int:
        """Load an LDTk level file (*.ldtkl) as a tile map and return its id."""
        definitions = list(definitions)
        try:
            with open(path, encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            log.error("Failed to load terrain file: %s", path)
            raise AssetError(f"failed to load terrain file: {path}") from exc
        except json.JSONDecodeError as exc:
            raise AssetError(f"terrain file is not valid JSON: {path}") from exc

        tile_map = build_tile_map(self, data, definitions, random.Random())
        self._maps.append(tile_map)
        index = len(self._maps) - 1
        log.debug("New map loaded: %s with id %d", path, index)
        if alias is not None:
            self._map_aliases[alias] = index
        return index

    def get_tile_map(self, map_ref: AssetRef) -> TileMap:
        """A tile map by id or alias."""
        map_id = self.get_tile_map_id(map_ref) if isinstance(map_ref, str) else map_ref
        if not 0 <= map_id < len(self._maps):
            log.error("Map with id %d does not exist", map_id)
            raise AssetError(f"map with id {map_id} does not exist")
        return self._maps[map_id]

    def get_tile_map_id(self, alias: str) -> int:
        """The id of the tile map with this alias."""
        try:
            return self._map_aliases[alias]
        except KeyError:
            log.error("Map with alias %s does not exist", alias)
            raise AssetError(f"map with alias {alias!r} does not exist") from None

    # sounds

    def load_sound(self, path: PathLike, alias: Optional[str] = None) -> int:
        """Load a 16-bit PCM WAV file and return its id."""
        try:
            sound = _read_wav(path)
        except (OSError, EOFError, wave.Error) as exc:
            log.error("Failed to load sound: %s", path)
            raise AssetError(f"failed to load sound: {path}") from exc

        self._sounds.append(sound)
        index = len(self._sounds) - 1
        log.debug("New sound loaded: %s with id %d", path, index)
        if alias is not None:
            self._sound_aliases[alias] = index
            log.debug("Sound with id %d loaded with alias '%s'", index, alias)
        return index

    @property
    def default_sound(self) -> Sound:
        """The generated placeholder tone."""
        if not self._sounds:
            raise AssetError("default sound is not loaded")
        return self._sounds[0]

    def get_sound(self, sound: AssetRef) -> Sound:
        """A sound by id or alias."""
        if isinstance(sound, str):
            try:
                sound = self._sound_aliases[sound]
            except KeyError:
                log.error("Sound alias %s does not exist", sound)
                raise AssetError(f"sound alias {sound!r} does not exist") from None
        if not 0 <= sound < len(self._sounds):
            log.error("Sound with id %d does not exist", sound)
            raise AssetError(f"sound with id {sound} does not exist")
        return self._sounds[sound]

    def unload_all(self) -> None:
        """Drop every asset, the generated defaults included."""
        self._maps.clear()
        self._map_aliases.clear()
        self._textures.clear()
        self._texture_aliases.clear()
        self._sprite_sheets.clear()
        self._sounds.clear()
        self._sound_aliases.clear()
        log.info("All assets unloaded")