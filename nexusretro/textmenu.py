"""Text menus drawn from an 8x8 bitmap font sheet.

A glyph code ``c`` (1 and up) is read from the font sheet at row ``8 * c - 8``;
code 0 draws nothing. The sheet column selects the style: 0 for plain text and
8 for highlighted text.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterable, Union

from .renderer import Renderer

GLYPH_SIZE = 8
HIGHLIGHT_OFFSET = 8

_Draw = Callable[[int, int, int, int, int, int, int], None]


class MenuAlignment(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    CENTER = 2


@dataclass
class TextMenu:
    """Rows of glyph codes together with the menu's selection state."""

    text_data: list[int] = field(default_factory=list)
    entry_start: list[int] = field(default_factory=list)
    entry_size: list[int] = field(default_factory=list)
    entry_highlight: list[int] = field(default_factory=list)
    selection1: int = 0
    selection2: int = 0
    selection_count: int = 1
    alignment: MenuAlignment = MenuAlignment.LEFT

    @property
    def row_count(self) -> int:
        return len(self.entry_start)

    def add_row(self, text: Union[str, Iterable[int]]) -> int:
        """Append a row of text (characters or glyph codes) and return its index."""
        codes = [ord(ch) for ch in text] if isinstance(text, str) else [int(c) for c in text]
        self.entry_start.append(len(self.text_data))
        self.entry_size.append(len(codes))
        self.entry_highlight.append(0)
        self.text_data.extend(codes)
        return self.row_count - 1

    def row(self, row_id: int) -> list[int]:
        """Return the glyph codes of one row."""
        if not 0 <= row_id < self.row_count:
            raise IndexError(f"menu row {row_id} does not exist")
        start = self.entry_start[row_id]
        return self.text_data[start:start + self.entry_size[row_id]]


def _draw_row(
    draw: _Draw, menu: TextMenu, row_id: int, x: int, y: int,
    highlight: int, surface_id: int, last_plain: bool = False,
) -> None:
    codes = menu.row(row_id)
    last = len(codes) - 1
    for i, code in enumerate(codes):
        if code > 0:
            column = 0 if last_plain and i == last else highlight
            draw(x + GLYPH_SIZE * i, y, GLYPH_SIZE, GLYPH_SIZE, column,
                 GLYPH_SIZE * code - GLYPH_SIZE, surface_id)


def draw_text_menu_entry(
    renderer: Renderer, menu: TextMenu, row_id: int, x: int, y: int,
    highlight: int, surface_id: int,
) -> None:
    """Draw one menu row; ``highlight`` is the font sheet column to use."""
    _draw_row(renderer.draw_sprite, menu, row_id, x, y, highlight, surface_id)


def draw_blended_text_menu_entry(
    renderer: Renderer, menu: TextMenu, row_id: int, x: int, y: int,
    highlight: int, surface_id: int,
) -> None:
    """Draw one menu row through the renderer's blend table."""
    _draw_row(renderer.draw_blended_sprite, menu, row_id, x, y, highlight, surface_id)


def draw_stage_text_entry(
    renderer: Renderer, menu: TextMenu, row_id: int, x: int, y: int,
    highlight: int, surface_id: int,
) -> None:
    """Draw one menu row with its last glyph always in the plain style."""
    _draw_row(renderer.draw_sprite, menu, row_id, x, y, highlight, surface_id, last_plain=True)


def draw_text_menu(renderer: Renderer, menu: TextMenu, x: int, y: int, surface_id: int) -> None:
    """Draw every row of a menu, one glyph row apart, honouring its selection mode."""
    if menu.selection_count == 3:
        menu.selection2 = -1
        for i, flag in enumerate(menu.entry_highlight[:menu.selection1 + 1]):
            if flag == 1:
                menu.selection2 = i

    for i, size in enumerate(menu.entry_size):
        if menu.alignment == MenuAlignment.RIGHT:
            text_x = x - (size << 3)
        elif menu.alignment == MenuAlignment.CENTER:
            text_x = x - (size >> 1 << 3)
        else:
            text_x = x

        if menu.selection_count == 1:
            selected = i == menu.selection1
        elif menu.selection_count == 2:
            selected = i in (menu.selection1, menu.selection2)
        elif menu.selection_count == 3:
            selected = i == menu.selection1
        else:
            y += GLYPH_SIZE
            continue

        draw_text_menu_entry(
            renderer, menu, i, text_x, y, HIGHLIGHT_OFFSET if selected else 0, surface_id
        )
        if menu.selection_count == 3 and i == menu.selection2 and i != menu.selection1:
            draw_stage_text_entry(renderer, menu, i, text_x, y, HIGHLIGHT_OFFSET, surface_id)
        y += GLYPH_SIZE