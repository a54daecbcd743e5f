"""Sprite sheets and the animation clips defined on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

Rect = Tuple[int, int, int, int]


@dataclass
class AnimationClip:
    """A named run of frames on a sprite sheet."""

    name: str = ""
    start_frame: int = 0
    end_frame: int = 0
    frame_count: int = 0
    frame_duration: float = 0.0
    first_frame_origin: Tuple[int, int] = (0, 0)
    frames: List[Rect] = field(default_factory=list)

    @property
    def fps(self) -> float:
        """Frames per second implied by the frame duration."""
        if self.frame_duration == 0:
            return math.inf
        return 1.0 / self.frame_duration

    @property
    def duration(self) -> float:
        """Total length of the clip, in seconds."""
        return self.frame_duration * self.frame_count


@dataclass
class SpriteSheet:
    """Frame layout of a texture and the clips defined on it."""

    texture_id: int = 0
    frame_size: Tuple[int, int] = (0, 0)
    frame_count: Tuple[int, int] = (0, 0)
    _animations: Dict[str, AnimationClip] = field(default_factory=dict, repr=False)

    def add_animation_clip(
        self,
        name: str,
        frame_index: int,
        frame_count: int,
        frame_duration: float,
        first_frame_origin: Tuple[int, int],
    ) -> AnimationClip:
        """Define a clip, or redefine an existing one in place, and return it."""
        count_x = self.frame_count[0]
        if count_x == 0:
            raise ValueError("sprite sheet has no frames along the x axis")
        width, height = self.frame_size

        clip = self._animations.setdefault(name, AnimationClip())
        clip.name = name
        clip.start_frame = frame_index
        clip.frame_count = frame_count
        clip.end_frame = frame_index + frame_count - 1
        clip.frame_duration = frame_duration
        clip.first_frame_origin = (first_frame_origin[0], first_frame_origin[1])

        row_top = frame_index // count_x * height
        clip.frames = [
            ((frame_index + i) % count_x * width, row_top, width, height)
            for i in range(frame_count)
        ]
        return clip

    def animation_clip_names(self) -> List[str]:
        """Names of all clips defined on this sheet."""
        return list(self._animations)

    def get_animation_clip(self, name: str) -> Optional[AnimationClip]:
        """The clip with this name, or None."""
        return self._animations.get(name)