from __future__ import annotations

"""
Text payloads embedded in an .osr replay.

Frames (LZMA-compressed, after decompression):
  "delta|x|y|keys,delta|x|y|keys,..."
  - delta: i32 milliseconds since the previous frame
  - x, y: f32 cursor position (osu!mania stores the pressed columns in x)
  - keys: i32 button bit-set

Lifebar (plain tagged string):
  "time|percent,time|percent,..."

Segments that do not split into the expected number of well-formed numbers are
dropped. A frame whose delta is SENTINEL_DELTA does not advance the clock.
"""

import re
import struct
from typing import Final, Iterator

from .flags import KeySet
from .geom import Vec2
from .types import LifebarSample, ReplayFrame

SENTINEL_DELTA: Final[int] = -12345

SEGMENT_SEPARATOR: Final[str] = ","
FIELD_SEPARATOR: Final[str] = "|"

I32_MIN: Final[int] = -(1 << 31)
I32_MAX: Final[int] = (1 << 31) - 1

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


def _as_text(data: str | bytes | bytearray | memoryview) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode("ascii", errors="replace")


def _quantize_f32(value: float) -> float:
    # The format stores positions and lifebar percentages as float32.
    return struct.unpack("<f", struct.pack("<f", float(value)))[0]


def _wrap_i32(value: int) -> int:
    # The frame clock is a 32-bit signed counter in the format.
    return ((value - I32_MIN) & 0xFFFF_FFFF) + I32_MIN


def parse_i32(token: str) -> int | None:
    if _INT_RE.fullmatch(token) is None:
        return None
    value = int(token)
    if value < I32_MIN or value > I32_MAX:
        return None
    return value


def parse_f32(token: str) -> float | None:
    if _FLOAT_RE.fullmatch(token) is None:
        return None
    try:
        return _quantize_f32(float(token))
    except OverflowError:
        return None


def _fields(segment: str, count: int) -> list[str] | None:
    parts = segment.split(FIELD_SEPARATOR)
    if len(parts) != count:
        return None
    return parts


def iter_segments(data: str | bytes | bytearray | memoryview) -> Iterator[str]:
    for segment in _as_text(data).split(SEGMENT_SEPARATOR):
        if segment:
            yield segment


def parse_frame_fields(segment: str) -> tuple[int, float, float, int] | None:
    """Split one frame segment into (delta, x, y, keys), or None if malformed."""
    parts = _fields(segment, 4)
    if parts is None:
        return None
    delta = parse_i32(parts[0])
    x = parse_f32(parts[1])
    y = parse_f32(parts[2])
    keys = parse_i32(parts[3])
    if delta is None or x is None or y is None or keys is None:
        return None
    return delta, x, y, keys


def parse_lifebar_fields(segment: str) -> tuple[int, float] | None:
    parts = _fields(segment, 2)
    if parts is None:
        return None
    time = parse_i32(parts[0])
    percent = parse_f32(parts[1])
    if time is None or percent is None:
        return None
    return time, percent


def decode_frames(data: str | bytes | bytearray | memoryview) -> list[ReplayFrame]:
    frames: list[ReplayFrame] = []
    elapsed = 0
    for segment in iter_segments(data):
        parsed = parse_frame_fields(segment)
        if parsed is None:
            continue
        delta, x, y, keys = parsed
        if delta != SENTINEL_DELTA:
            elapsed = _wrap_i32(elapsed + delta)
        frames.append(ReplayFrame(delta=delta, time=elapsed, position=Vec2(x, y), keys=KeySet(keys)))
    return frames


def decode_lifebar(data: str | bytes | bytearray | memoryview) -> list[LifebarSample]:
    samples: list[LifebarSample] = []
    for segment in iter_segments(data):
        parsed = parse_lifebar_fields(segment)
        if parsed is None:
            continue
        time, percent = parsed
        samples.append(LifebarSample(time=time, percent=percent))
    return samples
