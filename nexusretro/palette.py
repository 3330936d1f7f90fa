"""Indexed colour palettes with water, fade and packed colour variants."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

PALETTE_SIZE = 0x100


@dataclass(frozen=True)
class Colour:
    """An 8-bit-per-channel colour."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


def pack_rgb888(r: int, g: int, b: int) -> int:
    """Pack channels into an opaque 0xAARRGGBB value."""
    return (0xFF << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def rgb888_to_rgb565(r: int, g: int, b: int) -> int:
    """Convert 8-bit channels to a 16-bit RGB565 value."""
    return ((b & 0xFF) >> 3) | (((g & 0xFF) >> 2) << 5) | (((r & 0xFF) >> 3) << 11)


def _colours() -> list[Colour]:
    return [Colour() for _ in range(PALETTE_SIZE)]


def _zeros() -> list[int]:
    return [0] * PALETTE_SIZE


def _mix(channel: int, base: int, alpha: int) -> int:
    return ((channel * alpha + (0xFF - alpha) * base) & 0xFFFF) >> 8


@dataclass
class PaletteBank:
    """The stage palette together with its water and faded copies.

    Each palette is kept as colours, RGB565 values and packed RGB888 values.
    """

    tile: list[Colour] = field(default_factory=_colours)
    tile16: list[int] = field(default_factory=_zeros)
    tile32: list[int] = field(default_factory=_zeros)
    water: list[Colour] = field(default_factory=_colours)
    water16: list[int] = field(default_factory=_zeros)
    water32: list[int] = field(default_factory=_zeros)
    fade: list[Colour] = field(default_factory=_colours)
    fade16: list[int] = field(default_factory=_zeros)
    fade32: list[int] = field(default_factory=_zeros)
    water_fade: list[Colour] = field(default_factory=_colours)
    water_fade16: list[int] = field(default_factory=_zeros)
    water_fade32: list[int] = field(default_factory=_zeros)
    mode: int = 0

    @staticmethod
    def _store(colours, table16, table32, index, r, g, b) -> None:
        colours[index] = Colour(r, g, b, colours[index].a)
        table16[index] = rgb888_to_rgb565(r, g, b)
        table32[index] = pack_rgb888(r, g, b)

    def set_entry(self, index: int, r: int, g: int, b: int) -> None:
        """Set one entry of the main palette."""
        self._store(self.tile, self.tile16, self.tile32, index & 0xFF, r & 0xFF, g & 0xFF, b & 0xFF)

    def rotate(self, start_index: int, end_index: int, right: bool) -> None:
        """Rotate the main palette entries between two indices by one place."""
        start, end = start_index & 0xFF, end_index & 0xFF
        for table in (self.tile, self.tile16, self.tile32):
            if right:
                saved = table[end]
                table[start + 1:end + 1] = table[start:end]
                table[start] = saved
            else:
                saved = table[start]
                table[start:end] = table[start + 1:end + 1]
                table[end] = saved

    def set_fade(self, r: int, g: int, b: int, a: int, start: int, end: int) -> None:
        """Blend a colour over the main and water palettes into the fade palettes.

        ``end`` is inclusive when it is at most 0xFF.
        """
        self.mode = 1
        r, g, b = r & 0xFF, g & 0xFF, b & 0xFF
        a = min(a & 0xFFFF, 0xFF)
        if end <= 0xFF:
            end += 1
        if start < 0 or end > PALETTE_SIZE:
            raise IndexError(f"palette range {start}..{end} out of bounds")
        for i in range(start, end):
            base = self.tile[i]
            self._store(
                self.fade, self.fade16, self.fade32, i,
                _mix(r, base.r, a), _mix(g, base.g, a), _mix(b, base.b, a),
            )
            base = self.water[i]
            self._store(
                self.water_fade, self.water_fade16, self.water_fade32, i,
                _mix(r, base.r, a), _mix(g, base.g, a), _mix(b, base.b, a),
            )

    def set_water_colour(self, r: int, g: int, b: int, a: int) -> None:
        """Build the water palette by blending a colour over the main palette."""
        self.mode = 1
        r, g, b = r & 0xFF, g & 0xFF, b & 0xFF
        a = min(a & 0xFFFF, 0xFF)
        for i, base in enumerate(self.tile):
            self._store(
                self.water, self.water16, self.water32, i,
                _mix(r, base.r, a), _mix(g, base.g, a), _mix(b, base.b, a),
            )

    def water_flash(self) -> None:
        """Turn the faded water palette fully white."""
        self.mode = 5
        for i in range(PALETTE_SIZE):
            self._store(self.water_fade, self.water_fade16, self.water_fade32, i, 0xFF, 0xFF, 0xFF)

    def load(self, path: str | os.PathLike, start_index: int, end_index: int) -> None:
        """Load RGB triplets for entries ``start_index`` up to ``end_index`` from a file."""
        count = max(end_index - start_index, 0)
        with open(path, "rb") as fh:
            fh.seek(3 * start_index)
            data = fh.read(3 * count)
        if len(data) < 3 * count:
            raise ValueError(f"palette file {os.fspath(path)!r} is too short")
        triplets = zip(*[iter(data)] * 3)
        for index, (r, g, b) in zip(range(start_index, end_index), triplets):
            self.set_entry(index, r, g, b)