from __future__ import annotations

import lzma
from typing import Any

from construct import Flag, Float64l, Int8ul, Int16sl, Int32sl, Int32ul, Int64sl, Struct

from osr.versioning import VERSION_FIRST_OSZ2, VERSION_HAS_LONG_ID

_PREFIX = Struct(
    "mode" / Int8ul,
    "version" / Int32sl,
)

_SCORE = Struct(
    "count_300" / Int16sl,
    "count_100" / Int16sl,
    "count_50" / Int16sl,
    "count_geki" / Int16sl,
    "count_katu" / Int16sl,
    "count_miss" / Int16sl,
    "score" / Int32sl,
    "max_combo" / Int16sl,
    "perfect" / Flag,
    "mods" / Int32ul,
)

DEFAULT_FRAMES = "0|256|-500|0,-1|256|-500|0,16|100.5|200.25|1,16|110|210|5,"
DEFAULT_LIFEBAR = "0|1,2000|0.75,4000|0.5,"

DEFAULTS: dict[str, Any] = {
    "mode": 0,
    "version": 20131216,
    "beatmap_hash": "c81c5d5e63a0b3e3c4ea4ba1ba0a2b18",
    "player_name": "peppy",
    "replay_hash": "4d1d4a2a8b8c8e7e0f5a7d9b6c3e2f10",
    "count_300": 312,
    "count_100": 20,
    "count_50": 3,
    "count_geki": 61,
    "count_katu": 12,
    "count_miss": 1,
    "score": 4_321_987,
    "max_combo": 455,
    "perfect": False,
    "mods": 0,
    "lifebar": DEFAULT_LIFEBAR,
    "timestamp": 635_235_123_456_789_000,
}


def uleb128(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def tagged_string(text: str | None) -> bytes:
    if not text:
        return b"\x00"
    raw = text.encode("utf-8")
    return b"\x0b" + uleb128(len(raw)) + raw


def compress_frames(text: str) -> bytes:
    return lzma.compress(text.encode("ascii"), format=lzma.FORMAT_ALONE)


def build_replay(
    *,
    frames: str | None = DEFAULT_FRAMES,
    compressed: bytes | None = None,
    frames_len: int | None = None,
    online_score_id: int = 0,
    score_id_raw: bytes | None = None,
    accuracy: float | None = None,
    trailing: bytes = b"",
    **overrides: Any,
) -> bytes:
    """Assemble an .osr byte string.

    The online score id is written with the width `version` implies unless
    `score_id_raw` supplies the bytes verbatim.
    """

    fields = {**DEFAULTS, **overrides}
    version = int(fields["version"])
    out = bytearray()
    out += _PREFIX.build(fields)
    out += tagged_string(fields["beatmap_hash"])
    out += tagged_string(fields["player_name"])
    out += tagged_string(fields["replay_hash"])
    out += _SCORE.build(fields)
    out += tagged_string(fields["lifebar"])
    out += Int64sl.build(fields["timestamp"])
    if compressed is None:
        compressed = compress_frames(frames or "")
    out += Int32sl.build(len(compressed) if frames_len is None else frames_len)
    out += compressed
    if score_id_raw is not None:
        out += score_id_raw
    elif version >= VERSION_HAS_LONG_ID:
        out += Int64sl.build(online_score_id)
    elif version >= VERSION_FIRST_OSZ2:
        out += Int32sl.build(online_score_id)
    if accuracy is not None:
        out += Float64l.build(accuracy)
    out += trailing
    return bytes(out)


def score_id_i32(value: int) -> bytes:
    return Int32sl.build(value)


def score_id_i64(value: int) -> bytes:
    return Int64sl.build(value)
