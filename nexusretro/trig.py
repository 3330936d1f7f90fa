"""Fixed-point sine and cosine lookup tables.

Angles are expressed in 512 or 256 steps per turn and results are scaled so
that 1.0 maps to 0x200 (512-step tables) or 0x100 (256-step tables).
"""

from __future__ import annotations

import math
import struct

_PI_F32 = 3.1415927

SIN_VALUE_512: list[int] = [0] * 0x200
COS_VALUE_512: list[int] = [0] * 0x200
SIN_VALUE_256: list[int] = [0] * 0x100
COS_VALUE_256: list[int] = [0] * 0x100


def _f32(value: float) -> float:
    """Round a Python float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def calculate_trig_angles() -> tuple[list[int], list[int], list[int], list[int]]:
    """Fill the lookup tables and return copies of (sin512, cos512, sin256, cos256)."""
    pi = _f32(_PI_F32)
    for i in range(0x200):
        angle = _f32(_f32(i / 256) * pi)
        SIN_VALUE_512[i] = int(_f32(math.sin(angle)) * 512.0)
        COS_VALUE_512[i] = int(_f32(math.cos(angle)) * 512.0)

    COS_VALUE_512[0] = 0x200
    COS_VALUE_512[128] = 0
    COS_VALUE_512[256] = -0x200
    COS_VALUE_512[384] = 0
    SIN_VALUE_512[0] = 0
    SIN_VALUE_512[128] = 0x200
    SIN_VALUE_512[256] = 0
    SIN_VALUE_512[384] = -0x200

    SIN_VALUE_256[:] = [value >> 1 for value in SIN_VALUE_512[::2]]
    COS_VALUE_256[:] = [value >> 1 for value in COS_VALUE_512[::2]]

    return (
        list(SIN_VALUE_512),
        list(COS_VALUE_512),
        list(SIN_VALUE_256),
        list(COS_VALUE_256),
    )


def _wrap(angle: int, size: int) -> int:
    if angle < 0:
        angle = size - angle
    return angle & (size - 1)


def sin512(angle: int) -> int:
    """Sine of an angle measured in 512 steps per turn, scaled by 0x200."""
    return SIN_VALUE_512[_wrap(angle, 0x200)]


def cos512(angle: int) -> int:
    """Cosine of an angle measured in 512 steps per turn, scaled by 0x200."""
    return COS_VALUE_512[_wrap(angle, 0x200)]


def sin256(angle: int) -> int:
    """Sine of an angle measured in 256 steps per turn, scaled by 0x100."""
    return SIN_VALUE_256[_wrap(angle, 0x100)]


def cos256(angle: int) -> int:
    """Cosine of an angle measured in 256 steps per turn, scaled by 0x100."""
    return COS_VALUE_256[_wrap(angle, 0x100)]


calculate_trig_angles()