import pytest

from nexusretro.renderer import FlipFlags, Renderer
from nexusretro.rotation import draw_rotated_sprite

SPRITE = bytes(range(1, 17))  # 4x4, no transparent pixels


def _renderer():
    renderer = Renderer(width=32, height=32)
    renderer.add_surface("sheet", 4, 4, SPRITE)
    return renderer


def _region(renderer, x, y, w, h):
    sw = renderer.screen_width
    return [bytes(renderer.frame_buffer[x + sw * row:x + sw * row + w]) for row in range(y, y + h)]


def _sprite_rows():
    return [SPRITE[i * 4:i * 4 + 4] for i in range(4)]


def test_zero_rotation_matches_plain_sprite():
    rotated = _renderer()
    draw_rotated_sprite(rotated, FlipFlags.NONE, 10, 10, 0, 0, 0, 0, 4, 4, 0, 0)
    plain = _renderer()
    plain.draw_sprite(10, 10, 4, 4, 0, 0, 0)
    assert rotated.frame_buffer == plain.frame_buffer


def test_full_turn_matches_zero_rotation():
    a = _renderer()
    draw_rotated_sprite(a, FlipFlags.NONE, 10, 10, 1, 2, 0, 0, 4, 4, 0, 0)
    b = _renderer()
    draw_rotated_sprite(b, FlipFlags.NONE, 10, 10, 1, 2, 0, 0, 4, 4, 512, 0)
    assert a.frame_buffer == b.frame_buffer


def test_zero_rotation_places_pixels_at_position():
    renderer = _renderer()
    draw_rotated_sprite(renderer, FlipFlags.NONE, 10, 10, 0, 0, 0, 0, 4, 4, 0, 0)
    assert _region(renderer, 10, 10, 4, 4) == _sprite_rows()
    assert sum(1 for v in renderer.frame_buffer if v) == 16


def test_flip_x_mirrors_left_of_pivot():
    renderer = _renderer()
    draw_rotated_sprite(renderer, FlipFlags.X, 10, 10, 0, 0, 0, 0, 4, 4, 0, 0)
    assert _region(renderer, 6, 10, 4, 4) == [row[::-1] for row in _sprite_rows()]
    assert sum(1 for v in renderer.frame_buffer if v) == 16


def test_half_turn_flips_both_axes():
    renderer = Renderer(width=32, height=32)
    renderer.add_surface("sheet", 2, 2, bytes([1, 2, 3, 4]))
    draw_rotated_sprite(renderer, FlipFlags.NONE, 10, 10, 0, 0, 0, 0, 2, 2, 256, 0)
    assert _region(renderer, 9, 8, 2, 2) == [bytes([4, 3]), bytes([2, 1])]
    assert sorted(v for v in renderer.frame_buffer if v) == [1, 2, 3, 4]


def test_transparent_pixels_keep_screen():
    renderer = Renderer(width=32, height=32)
    renderer.add_surface("sheet", 2, 2, bytes([0, 5, 0, 6]))
    renderer.clear_screen(9)
    draw_rotated_sprite(renderer, FlipFlags.NONE, 4, 4, 0, 0, 0, 0, 2, 2, 0, 0)
    assert _region(renderer, 4, 4, 2, 2) == [bytes([9, 5]), bytes([9, 6])]


def test_quarter_turn_preserves_pixel_set():
    renderer = _renderer()
    draw_rotated_sprite(renderer, FlipFlags.NONE, 16, 16, 2, 2, 0, 0, 4, 4, 128, 0)
    drawn = sorted(v for v in renderer.frame_buffer if v)
    assert set(drawn) <= set(SPRITE)
    assert len(drawn) == 16


def test_offscreen_draw_changes_nothing():
    renderer = _renderer()
    draw_rotated_sprite(renderer, FlipFlags.NONE, 200, 200, 0, 0, 0, 0, 4, 4, 0, 0)
    assert renderer.frame_buffer == bytearray(32 * 32)


def test_partially_offscreen_is_clipped():
    renderer = _renderer()
    draw_rotated_sprite(renderer, FlipFlags.NONE, -2, 0, 0, 0, 0, 0, 4, 4, 0, 0)
    assert _region(renderer, 0, 0, 2, 4) == [row[2:] for row in _sprite_rows()]


def test_missing_sheet_raises():
    renderer = _renderer()
    with pytest.raises(IndexError):
        draw_rotated_sprite(renderer, FlipFlags.NONE, 10, 10, 0, 0, 0, 0, 4, 4, 0, 5)