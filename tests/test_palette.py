import pytest

from nexusretro.palette import (
    PALETTE_SIZE,
    Colour,
    PaletteBank,
    pack_rgb888,
    rgb888_to_rgb565,
)


def test_pack_rgb888_is_opaque():
    assert pack_rgb888(0, 0, 0) == 0xFF000000
    assert pack_rgb888(0x12, 0x34, 0x56) & 0x00FFFFFF == 0x123456


def test_rgb565_white_and_black():
    assert rgb888_to_rgb565(0xFF, 0xFF, 0xFF) == 0xFFFF
    assert rgb888_to_rgb565(0, 0, 0) == 0


def test_rgb565_channels_are_separate():
    red = rgb888_to_rgb565(0xFF, 0, 0)
    green = rgb888_to_rgb565(0, 0xFF, 0)
    blue = rgb888_to_rgb565(0, 0, 0xFF)
    assert red & green == 0 and green & blue == 0 and red & blue == 0
    assert red | green | blue == rgb888_to_rgb565(0xFF, 0xFF, 0xFF)


def test_set_entry_updates_all_formats():
    bank = PaletteBank()
    bank.set_entry(10, 200, 100, 50)
    assert bank.tile[10] == Colour(200, 100, 50)
    assert bank.tile16[10] == rgb888_to_rgb565(200, 100, 50)
    assert bank.tile32[10] == pack_rgb888(200, 100, 50)


def test_set_entry_wraps_index_to_byte():
    bank = PaletteBank()
    bank.set_entry(256 + 3, 1, 2, 3)
    assert bank.tile[3] == Colour(1, 2, 3)


def _numbered_bank():
    bank = PaletteBank()
    for i in range(PALETTE_SIZE):
        bank.set_entry(i, i, i, i)
    return bank


def test_rotate_right_moves_end_to_start():
    bank = _numbered_bank()
    bank.rotate(4, 8, True)
    assert [c.r for c in bank.tile[4:9]] == [8, 4, 5, 6, 7]
    assert bank.tile32[4] == pack_rgb888(8, 8, 8)
    assert bank.tile[3].r == 3 and bank.tile[9].r == 9


def test_rotate_left_then_right_restores():
    bank = _numbered_bank()
    original = list(bank.tile), list(bank.tile16), list(bank.tile32)
    bank.rotate(20, 40, False)
    assert bank.tile[20].r == 21
    assert bank.tile[40].r == 20
    bank.rotate(20, 40, True)
    assert (bank.tile, bank.tile16, bank.tile32) == original


def test_set_fade_clamps_alpha():
    first, second = _numbered_bank(), _numbered_bank()
    first.set_fade(10, 20, 30, 1000, 0, 255)
    second.set_fade(10, 20, 30, 255, 0, 255)
    assert first.fade == second.fade
    assert first.water_fade32 == second.water_fade32
    assert first.mode == 1


def test_set_fade_end_is_inclusive():
    bank = _numbered_bank()
    bank.set_fade(255, 255, 255, 128, 0, 3)
    assert bank.fade[3] != Colour()
    assert bank.fade[4] == Colour()
    assert bank.fade32[4] == 0


def test_set_fade_keeps_channels_in_range():
    bank = _numbered_bank()
    bank.set_fade(255, 0, 128, 77, 0, 255)
    for colour in bank.fade:
        assert 0 <= colour.r <= 255 and 0 <= colour.g <= 255 and 0 <= colour.b <= 255


def test_set_fade_out_of_range_raises():
    bank = PaletteBank()
    with pytest.raises(IndexError):
        bank.set_fade(0, 0, 0, 0, 0, 300)


def test_set_water_colour_matches_fade_blend():
    bank = _numbered_bank()
    bank.set_water_colour(40, 80, 120, 100)
    bank.set_fade(40, 80, 120, 100, 0, 255)
    assert bank.water == bank.fade
    assert bank.water16 == bank.fade16
    assert bank.mode == 1


def test_water_flash_is_white():
    bank = PaletteBank()
    bank.water_flash()
    assert bank.mode == 5
    assert all(c == Colour(255, 255, 255) for c in bank.water_fade)
    assert all(v == pack_rgb888(255, 255, 255) for v in bank.water_fade32)
    assert all(v == rgb888_to_rgb565(255, 255, 255) for v in bank.water_fade16)


def test_load_reads_from_offset(tmp_path):
    path = tmp_path / "pal.act"
    path.write_bytes(bytes([0, 0, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9]))
    bank = PaletteBank()
    bank.load(path, 1, 3)
    assert bank.tile[1] == Colour(1, 2, 3)
    assert bank.tile[2] == Colour(4, 5, 6)
    assert bank.tile[3] == Colour()


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PaletteBank().load(tmp_path / "missing.act", 0, 1)


def test_load_truncated_file(tmp_path):
    path = tmp_path / "short.act"
    path.write_bytes(bytes([1, 2, 3, 4]))
    with pytest.raises(ValueError):
        PaletteBank().load(path, 0, 2)