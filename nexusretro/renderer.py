"""Software renderer for an indexed 8-bit frame buffer.

Sprites are copied from surfaces stored in one shared graphics buffer; colour
index 0 is transparent for keyed draws. Blend and tint lookup tables remap
indices, and the frame can be converted to RGB888 or RGB565 through the
palettes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

from .palette import PaletteBank

DEFAULT_SCREEN_WIDTH = 320
DEFAULT_SCREEN_HEIGHT = 240

SPRITESHEETS_MAX = 16
SURFACE_MAX = 24
GFXDATA_MAX = 0x400000
DRAWLAYER_COUNT = 7
TINT_TABLE_COUNT = 4

_RowOp = Callable[[bytes, bytes], bytes]


class FlipFlags(enum.IntEnum):
    NONE = 0
    X = 1
    Y = 2
    XY = 3


@dataclass
class GfxSurface:
    """A sprite sheet stored inside the shared graphics buffer."""

    file_name: str
    width: int
    height: int
    data_position: int


def _s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _keyed(src: bytes, dst: bytes) -> bytes:
    return bytes(s if s else d for s, d in zip(src, dst))


def _opaque(src: bytes, dst: bytes) -> bytes:
    return src


class Renderer:
    """Frame buffer, sprite surfaces and colour lookup tables."""

    def __init__(
        self,
        width: int = DEFAULT_SCREEN_WIDTH,
        height: int = DEFAULT_SCREEN_HEIGHT,
        palette: PaletteBank | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen dimensions must be positive")
        self.screen_height = height
        self.palette = palette if palette is not None else PaletteBank()
        self.blend_table = bytearray(0x100 * 0x100)
        self.tint_tables = [bytearray(0x100) for _ in range(TINT_TABLE_COUNT)]
        self.graphic_data = bytearray(GFXDATA_MAX)
        self.surfaces: list[GfxSurface] = []
        self.gfx_data_position = 0
        self.set_screen_size(width)

    # Setup -----------------------------------------------------------------

    def set_screen_size(self, width: int) -> None:
        """Change the screen width and reallocate the frame buffer."""
        if width <= 0:
            raise ValueError("screen width must be positive")
        self.screen_width = width
        self.center_x = width // 2
        self.scroll_left = self.center_x - 8
        self.scroll_right = self.center_x + 8
        self.object_border_x2 = width + 0x80
        self.frame_buffer = bytearray(width * self.screen_height)

    def add_surface(self, file_name: str, width: int, height: int, pixels: bytes) -> int:
        """Store a sheet of indexed pixels and return its sheet id."""
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be positive")
        if len(pixels) != width * height:
            raise ValueError(f"expected {width * height} pixels, got {len(pixels)}")
        if len(self.surfaces) >= SURFACE_MAX:
            raise ValueError("no free surface slots")
        start = self.gfx_data_position
        end = start + len(pixels)
        if end > GFXDATA_MAX:
            raise ValueError("graphics buffer is full")
        self.graphic_data[start:end] = pixels
        self.surfaces.append(GfxSurface(file_name, width, height, start))
        self.gfx_data_position = end
        return len(self.surfaces) - 1

    def clear_graphics_data(self) -> None:
        """Forget every surface and rewind the graphics buffer."""
        self.surfaces.clear()
        self.gfx_data_position = 0

    def clear_screen(self, index: int) -> None:
        """Fill the frame buffer with one colour index."""
        self.frame_buffer[:] = bytes([index & 0xFF]) * len(self.frame_buffer)

    # Lookup tables ---------------------------------------------------------

    def generate_blend_table(self, alpha: int, blend_type: int, a3: int, a4: int) -> None:
        """Fill the 256x256 blend table indexed by (destination, source)."""
        alpha &= 0xFFFF
        a3 &= 0xFF
        a4 &= 0xFF
        if blend_type == 0:
            # Nearest-colour matching starts from negative sentinels, so no
            # candidate ever qualifies and every entry maps to index 0.
            self.blend_table[:] = bytes(len(self.blend_table))
        elif blend_type == 1:
            grey = [((c.r + c.g + c.b) // 3) & 0xFF for c in self.palette.tile]
            table = bytearray()
            for v1 in grey:
                base = (0xFF - alpha) * v1
                table.extend(
                    (a4 + a3 * (((base + alpha * v2) & 0xFFFF) >> 8) // 0x100) & 0xFF
                    for v2 in grey
                )
            self.blend_table[:] = table

    def generate_tint_table(
        self, alpha: int, a2: int, tint_type: int, a4: int, a5: int, table_id: int
    ) -> None:
        """Fill one of the four tint tables from the main palette."""
        table = self._tint_table(table_id)
        alpha = _s16(alpha)
        a2 = _s16(a2)
        a4 &= 0xFF
        a5 &= 0xFF
        pickers = {
            0: lambda c: ((c.r + c.g + c.b) // 3) & 0xFF,
            1: lambda c: c.r,
            2: lambda c: c.g,
            3: lambda c: c.b,
        }
        pick = pickers.get(tint_type)
        if pick is None:
            return
        for i, colour in enumerate(self.palette.tile):
            mix = (((0xFF - alpha) * pick(colour) + alpha * a2) & 0xFFFF) >> 8
            table[i] = (a5 + a4 * mix // 256) & 0xFF

    def _tint_table(self, tint_id: int) -> bytearray:
        if not 0 <= tint_id < TINT_TABLE_COUNT:
            raise IndexError(f"tint table {tint_id} does not exist")
        return self.tint_tables[tint_id]

    # Shapes ----------------------------------------------------------------

    def draw_tint_rect(self, x: int, y: int, width: int, height: int, tint_id: int) -> None:
        """Remap a screen rectangle through a tint table."""
        sw, sh = self.screen_width, self.screen_height
        if width + x > sw:
            width = sw - x
        if x < 0:
            width += x
            x = 0
        if height + y > sh:
            height = sh - y
        if y < 0:
            height += y
            y = 0
        if width < 0 or height < 0:
            return
        table = bytes(self._tint_table(tint_id))
        fb = self.frame_buffer
        for row in range(y, y + height):
            start = x + sw * row
            fb[start:start + width] = fb[start:start + width].translate(table)

    # Sprites ---------------------------------------------------------------

    def _blit(
        self, x: int, y: int, width: int, height: int,
        spr_x: int, spr_y: int, sheet_id: int, clip_y: int, op: _RowOp,
    ) -> None:
        sw = self.screen_width
        clip_y = min(clip_y, self.screen_height)
        if width + x > sw:
            width = sw - x
        if x < 0:
            spr_x -= x
            width += x
            x = 0
        if height + y > clip_y:
            height = clip_y - y
        if y < 0:
            spr_y -= y
            height += y
            y = 0
        if width <= 0 or height <= 0:
            return

        surface = self.surfaces[sheet_id]
        src = spr_x + surface.width * spr_y + surface.data_position
        dst = x + sw * y
        gfx, fb = self.graphic_data, self.frame_buffer
        for _ in range(height):
            fb[dst:dst + width] = op(gfx[src:src + width], fb[dst:dst + width])
            src += surface.width
            dst += sw

    def draw_sprite(self, x, y, width, height, spr_x, spr_y, sheet_id) -> None:
        """Copy a sprite region, treating index 0 as transparent."""
        self._blit(x, y, width, height, spr_x, spr_y, sheet_id, self.screen_height, _keyed)

    def draw_sprite_no_key(self, x, y, width, height, spr_x, spr_y, sheet_id) -> None:
        """Copy a sprite region including its index-0 pixels."""
        self._blit(x, y, width, height, spr_x, spr_y, sheet_id, self.screen_height, _opaque)

    def draw_sprite_clipped(self, x, y, width, height, spr_x, spr_y, sheet_id, clip_y) -> None:
        """Like draw_sprite, but rows at or below ``clip_y`` are not drawn."""
        self._blit(x, y, width, height, spr_x, spr_y, sheet_id, clip_y, _keyed)

    def draw_blended_sprite(self, x, y, width, height, spr_x, spr_y, sheet_id) -> None:
        """Combine sprite pixels with the screen through the blend table."""
        blend = self.blend_table

        def op(src: bytes, dst: bytes) -> bytes:
            return bytes(blend[(d << 8) | s] if s else d for s, d in zip(src, dst))

        self._blit(x, y, width, height, spr_x, spr_y, sheet_id, self.screen_height, op)

    # Output ----------------------------------------------------------------

    def _convert(self, water_draw_pos: int, above: list[int], below: list[int]) -> list[int]:
        split = min(max(water_draw_pos, 0), self.screen_height) * self.screen_width
        fb = self.frame_buffer
        return [above[i] for i in fb[:split]] + [below[i] for i in fb[split:]]

    def to_rgb888(self, water_draw_pos: int) -> list[int]:
        """Return the frame as packed 0xFFRRGGBB values, rows from the water line on using the water palette."""
        p = self.palette
        if p.mode:
            return self._convert(water_draw_pos, p.fade32, p.water_fade32)
        return self._convert(water_draw_pos, p.tile32, p.water32)

    def to_rgb565(self, water_draw_pos: int) -> list[int]:
        """Return the frame as RGB565 values, rows from the water line on using the water palette."""
        p = self.palette
        if p.mode:
            return self._convert(water_draw_pos, p.fade16, p.water_fade16)
        return self._convert(water_draw_pos, p.tile16, p.water16)