# nexusretro

The software-rendering core of a small retro game engine. Everything works on an
8-bit indexed frame buffer held in memory, and the package uses only the standard
library.

## Modules

- **`nexusretro.trig`**: fixed-point sine and cosine tables with 512 and 256 steps
  per turn. `calculate_trig_angles()` fills `SIN_VALUE_512`, `COS_VALUE_512`,
  `SIN_VALUE_256` and `COS_VALUE_256`. It runs once on import. The lookups are
  `sin512`, `cos512`, `sin256` and `cos256`. Results are scaled so that 1.0 is
  0x200 for the 512-step tables and 0x100 for the 256-step tables.
- **`nexusretro.palette`**: `Colour`, `pack_rgb888`, `rgb888_to_rgb565` and
  `PaletteBank`. A bank holds the main, water, fade and water-fade palettes, each
  as colours, RGB565 values and packed 0xFFRRGGBB values. Its methods are:
  - `set_entry`
  - `rotate`, which rotates a range by one place in either direction
  - `set_fade`, which blends a colour over the main and water palettes into the
    fade palettes; `end` is inclusive when it is at most 0xFF
  - `set_water_colour`
  - `water_flash`
  - `load`, which reads RGB triplets from a raw palette file and raises
    `ValueError` if the file is too short
- **`nexusretro.ini`**: `IniParser`, `ConfigItem` and `ItemType`.
  - `IniParser(filename)` or `read()` reads a file, and `parse()` reads text.
  - `get_string`, `get_integer`, `get_float` and `get_bool` raise `KeyError` when
    the key is missing.
  - `set_string`, `set_integer`, `set_float`, `set_bool` and `set_comment` add or
    replace items.
  - `dumps()` and `write()` output the sectionless items first, then one block
    for each section.
- **`nexusretro.renderer`**: `Renderer`, `GfxSurface` and `FlipFlags`. A renderer
  owns the frame buffer, which is 320×240 by default. It also owns the sprite
  surfaces stored in one shared graphics buffer (`add_surface`,
  `clear_graphics_data`), a 256×256 blend table and four tint tables. Its other
  methods are:
  - `generate_blend_table`: type 1 builds a greyscale blend, and type 0 gives a
    table that is all index 0.
  - `generate_tint_table`
  - `clear_screen`
  - `set_screen_size`
  - `draw_tint_rect`
  - `draw_sprite`, where index 0 is transparent
  - `draw_sprite_no_key`
  - `draw_sprite_clipped`
  - `draw_blended_sprite`
  - `to_rgb888` and `to_rgb565`, which convert the frame through the palettes.
    Rows from the water line down use the water palette, and the fade palettes
    are used while the palette's `mode` is non-zero.
- **`nexusretro.scaling`**: `draw_scaled_sprite` and `draw_scaled_tint_mask`. A
  scale of 0x200 is natural size.
- **`nexusretro.rotation`**: `draw_rotated_sprite`, which rotates about the pivot,
  with 512 steps per turn.
- **`nexusretro.textmenu`**: `TextMenu`, whose `add_row` takes a string or glyph
  codes, and `MenuAlignment`. The drawing functions are `draw_text_menu_entry`,
  `draw_blended_text_menu_entry`, `draw_stage_text_entry` and `draw_text_menu`.
  They draw 8×8 glyphs from a font sheet.
- **`nexusretro.tilelayers`**: `TileLayer`, `ChunkTiles`, `Parallax`, `StageView`
  and `LayerType`. `draw_hline_scroll_layer` and `draw_vline_scroll_layer` draw
  chunked tile layers line by line, with parallax and deformation.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from nexusretro.palette import PaletteBank
from nexusretro.renderer import Renderer

palette = PaletteBank()
palette.set_entry(1, 255, 0, 0)

renderer = Renderer(palette=palette)
sheet = renderer.add_surface("box.gif", 2, 2, bytes([1, 1, 1, 0]))
renderer.clear_screen(0)
renderer.draw_sprite(10, 10, 2, 2, 0, 0, sheet)
rgb = renderer.to_rgb888(water_draw_pos=240)
```

```python
from nexusretro.ini import IniParser

config = IniParser()
config.set_bool("Window", "FullScreen", False)
config.set_integer("Window", "WindowScale", 2)
config.write("settings.ini")

loaded = IniParser("settings.ini")
assert loaded.get_integer("Window", "WindowScale") == 2
```

## What it does not do

This is a library, not a game. The package does not provide any of the following:

- a command
- a window or display output
- audio or input handling
- object or script processing
- stage loading

`add_surface` takes raw index bytes rather than decoding image files, so image
decoding is up to the caller. The same goes for presenting the RGB frames that
`to_rgb888` and `to_rgb565` return. There is no drawing for 3D cloud layers.