"""Line-scrolled tile layer drawing.

A layer is a grid of 128x128-pixel chunks, each made of 8x8 tiles of 16x16
pixels. Horizontal layers are drawn one screen row at a time and vertical
layers one screen column at a time. Each line picks a parallax entry through
the layer's line-scroll table and can be pushed sideways by deformation data.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .renderer import DEFAULT_SCREEN_HEIGHT, FlipFlags, Renderer

TILE_SIZE = 16
CHUNK_TILES = 8
LAYER_COUNT = 9
PARALLAX_COUNT = 0x100
DEFORM_COUNT = 0x240
CHUNKTILE_COUNT = 0x8000
TILESET_SIZE = 0x40000
LAYER_TILE_COUNT = 0x10000
LINE_SCROLL_SIZE = 0x8000


class LayerType(enum.IntEnum):
    NONE = 0
    HSCROLL = 1
    VSCROLL = 2
    CLOUD3D = 3


def _int_list(size: int) -> Callable[[], list[int]]:
    return lambda: [0] * size


@dataclass
class TileLayer:
    """A layer of chunk ids laid out 256 chunks to a row."""

    xsize: int = 0
    ysize: int = 0
    type: LayerType = LayerType.NONE
    parallax_factor: int = 0
    scroll_speed: int = 0
    scroll_pos: int = 0
    tiles: list[int] = field(default_factory=_int_list(LAYER_TILE_COUNT))
    line_scroll: bytearray = field(default_factory=lambda: bytearray(LINE_SCROLL_SIZE))


@dataclass
class ChunkTiles:
    """Per-tile data of every chunk, indexed by ``(chunk << 6) + tile``."""

    gfx_data_pos: list[int] = field(default_factory=_int_list(CHUNKTILE_COUNT))
    direction: list[int] = field(default_factory=_int_list(CHUNKTILE_COUNT))
    visual_plane: list[int] = field(default_factory=_int_list(CHUNKTILE_COUNT))


@dataclass
class Parallax:
    """Scroll state for the lines of a layer."""

    entry_count: int = 0
    parallax_factor: list[int] = field(default_factory=_int_list(PARALLAX_COUNT))
    scroll_speed: list[int] = field(default_factory=_int_list(PARALLAX_COUNT))
    scroll_pos: list[int] = field(default_factory=_int_list(PARALLAX_COUNT))
    line_pos: list[int] = field(default_factory=_int_list(PARALLAX_COUNT))
    deform: list[bool] = field(default_factory=lambda: [False] * PARALLAX_COUNT)


@dataclass
class StageView:
    """Everything a stage needs to draw its tile layers."""

    layers: list[TileLayer] = field(default_factory=lambda: [TileLayer() for _ in range(LAYER_COUNT)])
    active_layers: list[int] = field(default_factory=lambda: [LAYER_COUNT] * 4)
    layer_mid_point: int = 3
    x_scroll_offset: int = 0
    y_scroll_offset: int = 0
    water_draw_pos: int = DEFAULT_SCREEN_HEIGHT
    deformation_data: list[list[int]] = field(
        default_factory=lambda: [[0] * DEFORM_COUNT for _ in range(4)]
    )
    deformation_pos: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    last_x_size: int = 0
    last_y_size: int = 0
    hparallax: Parallax = field(default_factory=Parallax)
    vparallax: Parallax = field(default_factory=Parallax)
    chunk_tiles: ChunkTiles = field(default_factory=ChunkTiles)
    tile_gfx: bytearray = field(default_factory=lambda: bytearray(TILESET_SIZE))
    reduce_deformation: bool = False


def _cmod(a: int, b: int) -> int:
    """Remainder truncated toward zero."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _active_layer(view: StageView, layer_id: int) -> tuple[int, TileLayer]:
    index = view.active_layers[layer_id]
    if not 0 <= index < len(view.layers):
        raise IndexError(f"tile layer {index} does not exist")
    return index, view.layers[index]


def _walk(
    chunk: int, offset: int, tile_in_chunk: int, chunk_pos: int, total: int,
    stride: int, wrap: int, restart: Callable[[int], int],
) -> Iterator[tuple[int, int, int]]:
    """Yield (chunk tile, offset in tile, pixel count) along one line."""
    remain = total
    while remain > 0:
        count = min(TILE_SIZE - offset, remain)
        yield chunk, offset, count
        remain -= count
        offset = 0
        tile_in_chunk += 1
        if tile_in_chunk < CHUNK_TILES:
            chunk += stride
        else:
            tile_in_chunk = 0
            chunk_pos += 1
            if chunk_pos == wrap:
                chunk_pos = 0
            chunk = restart(chunk_pos)


def _plot(fb: bytearray, gfx: bytearray, dst: int, dst_step: int,
          src: int, src_step: int, count: int) -> None:
    if min(src, src + src_step * (count - 1)) < 0:
        raise IndexError("tile read before the start of the tile graphics")
    for _ in range(count):
        value = gfx[src]
        if value:
            fb[dst] = value
        dst += dst_step
        src += src_step


def _h_source(tiles: ChunkTiles, chunk: int, row: int, col: int) -> tuple[int, int]:
    base = tiles.gfx_data_pos[chunk]
    flip = FlipFlags(tiles.direction[chunk])
    if flip & FlipFlags.Y:
        row = 0xF - row
    if flip & FlipFlags.X:
        return base + TILE_SIZE * row + 0xF - col, -1
    return base + TILE_SIZE * row + col, 1


def _v_source(tiles: ChunkTiles, chunk: int, row: int, column: int,
              screen_height: int) -> tuple[int, int]:
    base = tiles.gfx_data_pos[chunk]
    flip = FlipFlags(tiles.direction[chunk])
    if flip == FlipFlags.NONE:
        return base + TILE_SIZE * row + column, TILE_SIZE
    if flip == FlipFlags.X:
        return base + TILE_SIZE * row + 0xF - column, TILE_SIZE
    if flip == FlipFlags.Y:
        return base + column + screen_height - TILE_SIZE * row, -TILE_SIZE
    return base + 0xFF - column - TILE_SIZE * row, -TILE_SIZE


def draw_hline_scroll_layer(renderer: Renderer, view: StageView, layer_id: int) -> None:
    """Draw the active layer ``layer_id`` one screen row at a time."""
    index, layer = _active_layer(view, layer_id)
    if not layer.xsize or not layer.ysize:
        raise ValueError("tile layer has no size")
    sw, sh = renderer.screen_width, renderer.screen_height
    width, height = layer.xsize, layer.ysize
    above = int(layer_id >= view.layer_mid_point)
    hp = view.hparallax
    data, pos = view.deformation_data, view.deformation_pos
    water = view.water_draw_pos

    if index:
        y_scroll = view.y_scroll_offset * layer.parallax_factor >> 6
        full_height = height << 7
        layer.scroll_pos = _i32(layer.scroll_pos + layer.scroll_speed)
        if layer.scroll_pos > full_height << 16:
            layer.scroll_pos -= full_height << 16
        y_offset = _cmod(y_scroll + (layer.scroll_pos >> 16), full_height)
        deform_above, above_at = data[2], (y_offset + pos[2]) & 0xFF
        deform_below, below_at = data[3], (y_offset + water + pos[3]) & 0xFF
    else:
        view.last_x_size = layer.xsize
        y_offset = view.y_scroll_offset
        hp.line_pos[:] = [view.x_scroll_offset] * PARALLAX_COUNT
        deform_above, above_at = data[0], (y_offset + pos[0]) & 0xFF
        deform_below, below_at = data[1], (y_offset + water + pos[1]) & 0xFF

    full_width = width << 7
    if layer.type == LayerType.HSCROLL:
        if view.last_x_size != width:
            for i in range(hp.entry_count):
                line = view.x_scroll_offset * hp.parallax_factor[i] >> 7
                scroll = _i32(hp.scroll_pos[i] + hp.scroll_speed[i])
                if scroll > full_width << 16:
                    scroll -= full_width << 16
                if scroll < 0:
                    scroll += full_width << 16
                hp.scroll_pos[i] = scroll
                hp.line_pos[i] = _cmod(line + (scroll >> 16), full_width)
        view.last_x_size = width

    tile_y_pos = _cmod(y_offset, height << 7)
    if tile_y_pos < 0:
        tile_y_pos += height << 7
    scroll_index = tile_y_pos
    tile_y16 = tile_y_pos & 0xF
    chunk_y = tile_y_pos >> 7
    tile_y = (tile_y_pos & 0x7F) >> 4

    water_line = min(max(water, 0), sh)
    fb, gfx, tiles = renderer.frame_buffer, view.tile_gfx, view.chunk_tiles
    for line in range(sh):
        flags = layer.line_scroll[scroll_index]
        chunk_x = hp.line_pos[flags]
        if line < water_line:
            deform = deform_above[above_at] if hp.deform[flags] else 0
            if view.reduce_deformation:
                deform >>= 4
            chunk_x += deform
            above_at += 1
        else:
            if hp.deform[flags]:
                chunk_x += deform_below[below_at]
            below_at += 1
        scroll_index += 1

        if chunk_x < 0:
            chunk_x += full_width
        if chunk_x >= full_width:
            chunk_x -= full_width

        def restart(p: int, cy: int = chunk_y, ty: int = tile_y) -> int:
            return (layer.tiles[p + (cy << 8)] << 6) + CHUNK_TILES * ty

        first = (
            (layer.tiles[(chunk_x >> 7) + (chunk_y << 8)] << 6)
            + ((chunk_x & 0x7F) >> 4) + CHUNK_TILES * tile_y
        )
        dst = line * sw
        segments = _walk(first, chunk_x & 0xF, (chunk_x & 0x7F) >> 4, chunk_x >> 7,
                         sw, 1, width, restart)
        for chunk, col, count in segments:
            if tiles.visual_plane[chunk] == above:
                src, step = _h_source(tiles, chunk, tile_y16, col)
                _plot(fb, gfx, dst, 1, src, step, count)
            dst += count

        tile_y16 += 1
        if tile_y16 >= TILE_SIZE:
            tile_y16 = 0
            tile_y += 1
        if tile_y >= CHUNK_TILES:
            chunk_y += 1
            if chunk_y == height:
                chunk_y = 0
                scroll_index -= 0x80 * height
            tile_y = 0


def draw_vline_scroll_layer(renderer: Renderer, view: StageView, layer_id: int) -> None:
    """Draw the active layer ``layer_id`` one screen column at a time."""
    index, layer = _active_layer(view, layer_id)
    if not layer.xsize or not layer.ysize:
        return
    sw, sh = renderer.screen_width, renderer.screen_height
    width, height = layer.xsize, layer.ysize
    above = int(layer_id >= view.layer_mid_point)
    vp = view.vparallax
    data, pos = view.deformation_data, view.deformation_pos

    if index:
        x_scroll = view.x_scroll_offset * layer.parallax_factor >> 6
        full_width = width << 7
        layer.scroll_pos = _i32(layer.scroll_pos + layer.scroll_speed)
        if layer.scroll_pos > full_width << 16:
            layer.scroll_pos -= full_width << 16
        x_offset = _cmod(x_scroll + (layer.scroll_pos >> 16), full_width)
        deform_data, deform_at = data[2], (x_offset + pos[2]) & 0xFF
    else:
        view.last_y_size = layer.ysize
        x_offset = view.x_scroll_offset
        vp.line_pos[0] = view.y_scroll_offset
        vp.deform[0] = True
        deform_data, deform_at = data[0], (view.x_scroll_offset + pos[0]) & 0xFF

    if layer.type == LayerType.VSCROLL:
        if view.last_y_size != height:
            full_height = height << 7
            for i in range(vp.entry_count):
                line = view.y_scroll_offset * vp.parallax_factor[i] >> 7
                scroll = _i32(vp.scroll_pos[i] + (vp.scroll_pos[i] << 16))
                if scroll > full_height << 16:
                    scroll -= full_height << 16
                vp.scroll_pos[i] = scroll
                vp.line_pos[i] = _cmod(line + (scroll >> 16), full_height)
        view.last_y_size = height

    tile_x_pos = _cmod(x_offset, height << 7)
    if tile_x_pos < 0:
        tile_x_pos += height << 7
    scroll_index = tile_x_pos
    chunk_x = tile_x_pos >> 7
    tile_x16 = tile_x_pos & 0xF
    tile_x = (tile_x_pos & 0x7F) >> 4

    full_height = height << 7
    fb, gfx, tiles = renderer.frame_buffer, view.tile_gfx, view.chunk_tiles
    for column in range(sw):
        flags = layer.line_scroll[scroll_index]
        chunk_y = vp.line_pos[flags]
        if vp.deform[flags]:
            chunk_y += deform_data[deform_at]
        deform_at += 1
        scroll_index += 1

        if chunk_y < 0:
            chunk_y += full_height
        if chunk_y >= full_height:
            chunk_y -= full_height

        def restart(p: int, cx: int = chunk_x, tx: int = tile_x) -> int:
            return (layer.tiles[cx + (p << 8)] << 6) + tx

        first = (
            (layer.tiles[chunk_x + ((chunk_y >> 7) << 8)] << 6)
            + tile_x + CHUNK_TILES * ((chunk_y & 0x7F) >> 4)
        )
        dst = column
        segments = _walk(first, chunk_y & 0xF, (chunk_y & 0x7F) >> 4, chunk_y >> 7,
                         sh, CHUNK_TILES, height, restart)
        for chunk, row, count in segments:
            if tiles.visual_plane[chunk] == above:
                src, step = _v_source(tiles, chunk, row, tile_x16, sh)
                _plot(fb, gfx, dst, sw, src, step, count)
            dst += sw * count

        tile_x16 += 1
        if tile_x16 >= TILE_SIZE:
            tile_x16 = 0
            tile_x += 1
        if tile_x >= CHUNK_TILES:
            chunk_x += 1
            if chunk_x == width:
                chunk_x = 0
                scroll_index -= 0x80 * width
            tile_x = 0