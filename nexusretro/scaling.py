"""Scaled sprite drawing with 11-bit fixed-point stepping.

A scale of 0x200 draws a sprite at its natural size, 0x400 doubles it and
0x100 halves it. The pivot is scaled with the sprite, so it stays at the
given screen position.
"""

from __future__ import annotations

import struct
from typing import Callable

from .renderer import TINT_TABLE_COUNT, FlipFlags, Renderer

_Plot = Callable[[int, int], None]


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _final_scale(true_scale: int) -> int:
    """Source step per screen pixel, in 1/2048ths of a source pixel."""
    return int(_f32(_f32(2048.0 / _f32(float(true_scale))) * 2048.0))


def _fraction(position: int, final_scale: int) -> int:
    """Sub-pixel remainder left over after clipping ``-position`` pixels."""
    return ((position & 0xFFFF) * -_s16(final_scale)) & 0x7FF


def _steps(count: int, step: int, fraction: int) -> list[int]:
    """Whole-pixel source offsets for ``count`` consecutive screen pixels."""
    offsets = []
    position = 0
    for _ in range(count):
        offsets.append(position)
        total = step + fraction
        position += total >> 11
        fraction = total & 0x7FF
    return offsets


def _scaled_pass(
    renderer: Renderer, direction: int, x: int, y: int, pivot_x: int, pivot_y: int,
    scale_x: int, scale_y: int, width: int, height: int, spr_x: int, spr_y: int,
    sheet_id: int, plot: _Plot,
) -> None:
    true_scale_x = 4 * scale_x
    true_scale_y = 4 * scale_y
    if true_scale_x == 0 or true_scale_y == 0:
        # A zero scale gives a sprite with no area.
        return

    width_m1 = width - 1
    true_x = x - (true_scale_x * pivot_x >> 11)
    width = true_scale_x * width >> 11
    true_y = y - (true_scale_y * pivot_y >> 11)
    height = true_scale_y * height >> 11
    final_x = _final_scale(true_scale_x)
    final_y = _final_scale(true_scale_y)
    sw, sh = renderer.screen_width, renderer.screen_height

    round_x = 0
    round_y = 0
    if width + true_x > sw:
        width = sw - true_x
    if true_x < 0:
        skipped = true_x * -final_x >> 11
        if direction:
            width_m1 -= skipped
        else:
            spr_x += skipped
        round_x = _fraction(true_x, final_x)
        width += true_x
        true_x = 0

    if height + true_y > sh:
        height = sh - true_y
    if true_y < 0:
        spr_y += true_y * -final_y >> 11
        round_y = _fraction(true_y, final_y)
        height += true_y
        true_y = 0

    if width <= 0 or height <= 0:
        return

    surface = renderer.surfaces[sheet_id]
    base = spr_x + surface.width * spr_y + surface.data_position
    columns = _steps(width, final_x, round_x)
    if direction == FlipFlags.X:
        base += width_m1
        columns = [-offset for offset in columns]
    rows = _steps(height, final_y, round_y)

    gfx = renderer.graphic_data
    for screen_y, row_offset in enumerate(rows, start=true_y):
        src_row = base + row_offset * surface.width
        dst_row = true_x + sw * screen_y
        for dst, column in zip(range(dst_row, dst_row + width), columns):
            src = src_row + column
            if not 0 <= src < len(gfx):
                raise IndexError(f"sprite read at {src} is outside the graphics buffer")
            value = gfx[src]
            if value:
                plot(dst, value)


def draw_scaled_sprite(
    renderer: Renderer, direction: int, x: int, y: int, pivot_x: int, pivot_y: int,
    scale_x: int, scale_y: int, width: int, height: int, spr_x: int, spr_y: int,
    sheet_id: int,
) -> None:
    """Draw a sprite region scaled by ``scale_x / 0x200`` and ``scale_y / 0x200``."""
    fb = renderer.frame_buffer

    def plot(dst: int, value: int) -> None:
        fb[dst] = value

    _scaled_pass(
        renderer, direction, x, y, pivot_x, pivot_y, scale_x, scale_y,
        width, height, spr_x, spr_y, sheet_id, plot,
    )


def draw_scaled_tint_mask(
    renderer: Renderer, direction: int, x: int, y: int, pivot_x: int, pivot_y: int,
    scale_x: int, scale_y: int, width: int, height: int, spr_x: int, spr_y: int,
    tint_id: int, sheet_id: int,
) -> None:
    """Tint the screen wherever the scaled sprite has a non-transparent pixel."""
    if not 0 <= tint_id < TINT_TABLE_COUNT:
        raise IndexError(f"tint table {tint_id} does not exist")
    table = renderer.tint_tables[tint_id]
    fb = renderer.frame_buffer

    def plot(dst: int, value: int) -> None:
        fb[dst] = table[fb[dst]]

    _scaled_pass(
        renderer, direction, x, y, pivot_x, pivot_y, scale_x, scale_y,
        width, height, spr_x, spr_y, sheet_id, plot,
    )