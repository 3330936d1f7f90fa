"""A small INI reader and writer for engine and mod settings."""

from __future__ import annotations

import enum
import math
import os
import re
import struct
from dataclasses import dataclass

_WS = " \t\n\v\f\r"
_SECTION = re.compile(r"\[([^\[\]]+)")
_ENTRY = re.compile(r"([^;=]+)=[ \t\n\v\f\r]*([^ \t\n\v\f\r][^\t\r\n]*)")
_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_HEX_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*([+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?)"
)
_DEC_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ItemType(enum.IntEnum):
    STRING = 0
    INT = 1
    FLOAT = 2
    BOOL = 3
    COMMENT = 4


@dataclass
class ConfigItem:
    section: str = ""
    key: str = ""
    value: str = ""
    has_section: bool = False
    type: ItemType = ItemType.STRING


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _atoi(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _HEX_FLOAT.match(text)
    if match:
        return float.fromhex(match.group(1))
    match = _DEC_FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


class IniParser:
    """An ordered list of key/value items grouped by section."""

    def __init__(self, filename: str | os.PathLike | None = None) -> None:
        self.items: list[ConfigItem] = []
        if filename is not None:
            self.read(filename)

    def read(self, filename: str | os.PathLike) -> None:
        """Parse a file and append its items."""
        with open(filename, encoding="utf-8", newline="") as fh:
            self.parse(fh.read())

    def parse(self, text: str) -> None:
        """Parse INI text and append its items."""
        section = ""
        has_section = False
        for line in text.split("\n"):
            if line.startswith("#"):
                continue
            match = _SECTION.match(line)
            if match:
                section = match.group(1)
                has_section = True
                continue
            match = _ENTRY.match(line)
            if match:
                self.items.append(
                    ConfigItem(
                        section=section if has_section else "",
                        key=match.group(1),
                        value=match.group(2),
                        has_section=has_section,
                    )
                )

    def _find(self, section: str, key: str) -> ConfigItem | None:
        return next(
            (item for item in self.items if item.section == section and item.key == key),
            None,
        )

    def _value(self, section: str, key: str) -> str:
        item = self._find(section, key)
        if item is None:
            raise KeyError(f"{section}/{key}")
        return item.value

    def get_string(self, section: str, key: str) -> str:
        """Return the raw value; raise KeyError if absent."""
        return self._value(section, key)

    def get_integer(self, section: str, key: str) -> int:
        """Return the leading integer of the value, or 0 if there is none."""
        return _atoi(self._value(section, key))

    def get_float(self, section: str, key: str) -> float:
        """Return the leading number of the value at single precision."""
        return _to_f32(_atof(self._value(section, key)))

    def get_bool(self, section: str, key: str) -> bool:
        """Return True for the values "true" and "1"."""
        return self._value(section, key) in ("true", "1")

    def _set(self, section: str, key: str, value: str, item_type: ItemType) -> None:
        item = self._find(section, key)
        if item is None:
            item = ConfigItem()
            self.items.append(item)
        item.section = section
        item.key = key
        item.value = value
        item.type = item_type

    def set_string(self, section: str, key: str, value: str) -> None:
        self._set(section, key, value, ItemType.STRING)

    def set_integer(self, section: str, key: str, value: int) -> None:
        self._set(section, key, str(int(value)), ItemType.INT)

    def set_float(self, section: str, key: str, value: float) -> None:
        self._set(section, key, f"{_to_f32(value):f}", ItemType.FLOAT)

    def set_bool(self, section: str, key: str, value: bool) -> None:
        self._set(section, key, "true" if value else "false", ItemType.BOOL)

    def set_comment(self, section: str, key: str, comment: str) -> None:
        self._set(section, key, comment, ItemType.COMMENT)

    @staticmethod
    def _format(item: ConfigItem) -> str:
        if item.type is ItemType.COMMENT:
            return f"; {item.value}\n"
        return f"{item.key}={item.value}\n"

    def dumps(self) -> str:
        """Render the items as INI text, sectionless items first."""
        head = "".join(self._format(item) for item in self.items if item.section == "") + "\n"
        sections = dict.fromkeys(item.section for item in self.items if item.section)
        blocks = [
            f"[{name}]\n"
            + "".join(self._format(item) for item in self.items if item.section == name)
            for name in sections
        ]
        return head + "\n".join(blocks)

    def write(self, filename: str | os.PathLike) -> None:
        """Write the rendered items to a file."""
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(self.dumps())