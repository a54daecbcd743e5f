import math

import pytest

from lowengine.spritesheet import AnimationClip, SpriteSheet


@pytest.fixture
def sheet():
    return SpriteSheet(texture_id=1, frame_size=(16, 16), frame_count=(3, 2))


def test_clip_fields(sheet):
    sheet.add_animation_clip("water", 3, 3, 0.5, (0, 16))
    clip = sheet.get_animation_clip("water")
    assert clip.name == "water"
    assert clip.start_frame == 3
    assert clip.frame_count == 3
    assert clip.end_frame == clip.start_frame + clip.frame_count - 1
    assert clip.frame_duration == 0.5
    assert clip.first_frame_origin == (0, 16)


def test_clip_frames_layout(sheet):
    clip = sheet.add_animation_clip("water", 3, 3, 0.5, (0, 16))
    assert len(clip.frames) == 3
    assert clip.frames[0] == (0, 16, 16, 16)
    assert [f[0] for f in clip.frames] == [0, 16, 32]
    assert all(f[2:] == (16, 16) for f in clip.frames)


def test_frames_keep_start_row(sheet):
    clip = sheet.add_animation_clip("wrap", 2, 3, 0.2, (32, 0))
    assert len({f[1] for f in clip.frames}) == 1
    assert clip.frames[0][1] == 0


def test_get_missing_clip_returns_none(sheet):
    assert sheet.get_animation_clip("nothing") is None


def test_clip_names(sheet):
    sheet.add_animation_clip("forest1", 0, 2, 0.2, (0, 0))
    sheet.add_animation_clip("forest2", 2, 2, 0.2, (32, 0))
    assert sorted(sheet.animation_clip_names()) == ["forest1", "forest2"]


def test_redefining_clip_updates_in_place(sheet):
    first = sheet.add_animation_clip("anim", 0, 2, 0.2, (0, 0))
    second = sheet.add_animation_clip("anim", 1, 4, 0.1, (16, 0))
    assert first is second
    assert sheet.get_animation_clip("anim").frame_count == 4
    assert sheet.animation_clip_names() == ["anim"]


def test_fps_and_duration(sheet):
    clip = sheet.add_animation_clip("anim", 0, 4, 0.25, (0, 0))
    assert clip.fps == pytest.approx(4.0)
    assert clip.duration == pytest.approx(1.0)


def test_fps_of_zero_duration_is_infinite():
    assert AnimationClip(frame_duration=0.0).fps == math.inf
    assert AnimationClip(frame_duration=0.5).fps == pytest.approx(2.0)


def test_empty_sheet_rejects_clip():
    with pytest.raises(ValueError):
        SpriteSheet().add_animation_clip("anim", 0, 1, 0.1, (0, 0))