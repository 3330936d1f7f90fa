import pytest

from nexusretro.ini import ConfigItem, IniParser, ItemType


def _parsed(text):
    parser = IniParser()
    parser.parse(text)
    return parser


def test_parse_sections_and_keys():
    parser = _parsed("top=1\n[Game]\nName=Sonic\n[Video]\nScale=2\n")
    assert parser.get_string("", "top") == "1"
    assert parser.get_string("Game", "Name") == "Sonic"
    assert parser.get_integer("Video", "Scale") == 2
    assert parser.items[1].has_section is True
    assert parser.items[0].has_section is False


def test_hash_and_semicolon_lines_are_ignored():
    parser = _parsed("#a=1\n;b=2\nc=3\n")
    assert [item.key for item in parser.items] == ["c"]


def test_empty_value_is_ignored():
    parser = _parsed("a=\nb=  \nc=x\n")
    assert [item.key for item in parser.items] == ["c"]


def test_key_keeps_spaces_and_value_skips_leading_space():
    parser = _parsed("Name = Foo\n")
    assert parser.items[0].key == "Name "
    assert parser.get_string("", "Name ") == "Foo"


def test_value_stops_at_tab_and_cr():
    parser = _parsed("a=left\tright\r\nb=one two\n")
    assert parser.get_string("", "a") == "left"
    assert parser.get_string("", "b") == "one two"


def test_missing_key_raises():
    parser = _parsed("[s]\nk=v\n")
    with pytest.raises(KeyError):
        parser.get_string("", "k")
    with pytest.raises(KeyError):
        parser.get_bool("s", "other")


def test_get_integer_uses_leading_digits():
    parser = _parsed("a=  -12xyz\nb=abc\n")
    assert parser.get_integer("", "a") == -12
    assert parser.get_integer("", "b") == 0


def test_get_float_parses_leading_number():
    parser = _parsed("a=1.5rest\nb=none\nc=0x10\n")
    assert parser.get_float("", "a") == 1.5
    assert parser.get_float("", "b") == 0.0
    assert parser.get_float("", "c") == 16.0


def test_get_bool():
    parser = _parsed("a=true\nb=1\nc=yes\nd=false\n")
    assert parser.get_bool("", "a") is True
    assert parser.get_bool("", "b") is True
    assert parser.get_bool("", "c") is False
    assert parser.get_bool("", "d") is False


def test_first_match_wins():
    parser = _parsed("k=first\nk=second\n")
    assert parser.get_string("", "k") == "first"


def test_set_replaces_in_place():
    parser = _parsed("a=1\nb=2\n")
    parser.set_integer("", "a", 7)
    assert [item.key for item in parser.items] == ["a", "b"]
    assert parser.get_integer("", "a") == 7
    assert parser.items[0].type is ItemType.INT


def test_set_appends_new_item():
    parser = IniParser()
    parser.set_string("mods", "MyMod", "value")
    assert parser.items == [ConfigItem(section="mods", key="MyMod", value="value", type=ItemType.STRING)]


def test_set_values_round_trip():
    parser = IniParser()
    parser.set_float("s", "f", 0.5)
    parser.set_bool("s", "b", True)
    parser.set_bool("s", "n", False)
    parser.set_integer("s", "i", -3)
    assert parser.get_float("s", "f") == 0.5
    assert parser.get_bool("s", "b") is True
    assert parser.get_bool("s", "n") is False
    assert parser.get_integer("s", "i") == -3


def test_dumps_layout():
    parser = IniParser()
    parser.set_integer("", "a", 1)
    parser.set_bool("s", "b", True)
    assert parser.dumps() == "a=1\n\n[s]\nb=true\n"


def test_dumps_comment_and_section_grouping():
    parser = IniParser()
    parser.set_string("x", "k1", "v1")
    parser.set_string("y", "k2", "v2")
    parser.set_string("x", "k3", "v3")
    parser.set_comment("", "note", "hello")
    text = parser.dumps()
    assert text.startswith("; hello\n\n")
    assert text.count("[x]") == 1
    assert text.index("k3=v3") < text.index("[y]")


def test_write_and_read_round_trip(tmp_path):
    path = tmp_path / "settings.ini"
    parser = IniParser()
    parser.set_string("", "top", "level")
    parser.set_bool("Game", "DevMenu", True)
    parser.set_integer("Window", "Scale", 3)
    parser.write(path)

    loaded = IniParser(path)
    assert loaded.get_string("", "top") == "level"
    assert loaded.get_bool("Game", "DevMenu") is True
    assert loaded.get_integer("Window", "Scale") == 3


def test_reading_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        IniParser(tmp_path / "absent.ini")