"""Rotated sprite drawing with 9-bit fixed-point sampling.

Rotation is measured in 512 steps per turn. The sprite is turned about its
pivot, which stays at the given screen position; index 0 is transparent.
"""

from __future__ import annotations

from .renderer import FlipFlags, Renderer
from .trig import COS_VALUE_512, SIN_VALUE_512


def _corners(
    direction: int, x: int, y: int, pivot_x: int, pivot_y: int,
    width: int, height: int, sine: int, cosine: int,
) -> list[tuple[int, int]]:
    """Screen positions of the rotated bounding box corners, with a 2-pixel margin."""
    if direction == FlipFlags.X:
        xs = (pivot_x + 2, pivot_x - width - 2)
    else:
        xs = (-pivot_x - 2, width - pivot_x + 2)
    ys = (-pivot_y - 2, height - pivot_y + 2)
    return [
        (x + ((sine * b + cosine * a) >> 9), y + ((cosine * b - sine * a) >> 9))
        for b in ys
        for a in xs
    ]


def draw_rotated_sprite(
    renderer: Renderer, direction: int, x: int, y: int, pivot_x: int, pivot_y: int,
    spr_x: int, spr_y: int, width: int, height: int, rotation: int, sheet_id: int,
) -> None:
    """Draw a sprite region rotated about its pivot by ``rotation`` (512 per turn)."""
    sw, sh = renderer.screen_width, renderer.screen_height

    spr_x_pos = (pivot_x + spr_x) << 9
    spr_y_pos = (pivot_y + spr_y) << 9
    full_width = (width + spr_x) << 9
    full_height = (height + spr_y) << 9
    angle = rotation & 0x1FF
    if angle:
        angle = 0x200 - angle
    sine = SIN_VALUE_512[angle]
    cosine = COS_VALUE_512[angle]

    corners = _corners(direction, x, y, pivot_x, pivot_y, width, height, sine, cosine)
    xs = [cx for cx, _ in corners]
    ys = [cy for _, cy in corners]
    left = max(min(sw, *xs), 0)
    right = min(max(0, *xs), sw)
    top = max(min(sh, *ys), 0)
    bottom = min(max(0, *ys), sh)
    max_x = right - left
    max_y = bottom - top
    if max_x <= 0 or max_y <= 0:
        return

    if not 0 <= sheet_id < len(renderer.surfaces):
        raise IndexError(f"sprite sheet {sheet_id} does not exist")
    surface = renderer.surfaces[sheet_id]

    start_x = left - x
    start_y = top - y
    min_x = (spr_x << 9) - 1
    min_y = (spr_y << 9) - 1
    if cosine < 0 or sine < 0:
        spr_y_pos += sine + cosine

    if direction == FlipFlags.X:
        draw_x = spr_x_pos - (cosine * start_x - sine * start_y) - 0x100
        step_x = -cosine
        row_step_x = sine
    else:
        draw_x = spr_x_pos + cosine * start_x - sine * start_y
        step_x = cosine
        row_step_x = -sine
    draw_y = cosine * start_y + spr_y_pos + sine * start_x

    gfx = renderer.graphic_data
    fb = renderer.frame_buffer
    base = surface.data_position
    for row in range(top, bottom):
        final_x, final_y = draw_x, draw_y
        dst = left + sw * row
        for pixel in range(dst, dst + max_x):
            if min_x < final_x < full_width and min_y < final_y < full_height:
                index = gfx[base + (final_y >> 9) * surface.width + (final_x >> 9)]
                if index:
                    fb[pixel] = index
            final_x += step_x
            final_y += sine
        draw_x += row_step_x
        draw_y += cosine