from __future__ import annotations

"""
osu! replay (.osr) decoder.

File layout (little-endian):
  - u8 mode, i32 version
  - string beatmap_hash, string player_name, string replay_hash
  - i16 count_300, count_100, count_50, count_geki, count_katu, count_miss
  - i32 score, i16 max_combo, u8 perfect, u32 mods
  - string lifebar ("time|percent,...")
  - i64 timestamp (.NET ticks)
  - i32 frames_len, byte[frames_len] LZMA stream of "delta|x|y|keys,..."
  - online score id: i64 if version >= VERSION_HAS_LONG_ID,
    i32 if version >= VERSION_FIRST_OSZ2, otherwise absent
  - f64 target practice accuracy, only if mods has TARGET

Builds from VERSION_HAS_RNG on append a frame "-12345|0|0|seed" to the stream.
"""

from pathlib import Path
from typing import Any

from .compression import decompress
from .config import DEFAULT_CONFIG, DecodeConfig
from .cursor import ByteCursor
from .delta_text import SENTINEL_DELTA, decode_frames, decode_lifebar
from .errors import DecompressionError, FrameStreamError, ReplayNotFoundError, ReplayReadError
from .flags import Mod, ModSet
from .types import Replay, ReplayFrame
from .versioning import has_rng_seed_frame, online_score_id_width, warn_on_unknown_mode

_COUNTER_FIELDS = (
    "count_300",
    "count_100",
    "count_50",
    "count_geki",
    "count_katu",
    "count_miss",
)


def _decode_common_fields(cursor: ByteCursor, out: dict[str, Any]) -> None:
    out["mode"] = cursor.read_u8("mode")
    out["version"] = cursor.read_i32("version")
    out["beatmap_hash"] = cursor.read_string("beatmap_hash")
    out["player_name"] = cursor.read_string("player_name")
    out["replay_hash"] = cursor.read_string("replay_hash")
    for name in _COUNTER_FIELDS:
        out[name] = cursor.read_i16(name)
    out["score"] = cursor.read_i32("score")
    out["max_combo"] = cursor.read_i16("max_combo")
    out["perfect"] = cursor.read_bool("perfect")
    out["mods"] = ModSet(cursor.read_u32("mods"))


def extract_rng_seed(frames: list[ReplayFrame], version: int) -> int | None:
    """Pop the trailing seed frame if present and return the seed.

    Only the last frame is inspected; `frames` is left untouched unless it is
    a seed frame.
    """

    if not frames or not has_rng_seed_frame(version):
        return None
    last = frames[-1]
    if last.delta != SENTINEL_DELTA or not last.position.is_origin():
        return None
    frames.pop()
    seed = last.keys.bits
    if seed >= 1 << 31:
        seed -= 1 << 32
    return int(seed)


def _decode_complex_fields(cursor: ByteCursor, out: dict[str, Any], config: DecodeConfig) -> None:
    out["lifebar"] = tuple(decode_lifebar(cursor.read_string("lifebar")))
    out["timestamp"] = cursor.read_i64("timestamp")

    offset = cursor.position
    frames_len = cursor.read_i32("frames_len")
    if frames_len <= 0:
        raise FrameStreamError(f"frames_len: invalid frame stream length {frames_len} at offset {offset}")
    compressed = cursor.slice(frames_len, what="frames")

    text = decompress(compressed, memlimit=config.lzma_memlimit)
    if not text:
        raise DecompressionError(f"frames: failed to decompress {frames_len} bytes at offset {offset + 4}")

    frames = decode_frames(text)
    out["rng_seed"] = extract_rng_seed(frames, int(out["version"]))
    out["frames"] = tuple(frames)


def _decode_optional_fields(cursor: ByteCursor, out: dict[str, Any]) -> None:
    width = online_score_id_width(int(out["version"]))
    if width == 8:
        out["online_score_id"] = cursor.read_i64("online_score_id")
    elif width == 4:
        out["online_score_id"] = cursor.read_i32("online_score_id")

    mods: ModSet = out["mods"]
    if mods.has(Mod.TARGET):
        out["target_practice_accuracy"] = cursor.read_f64("target_practice_accuracy")


def decode_from_bytes(data: bytes | bytearray | memoryview, *, config: DecodeConfig | None = None) -> Replay:
    """Decode a replay held in memory.

    Raises a `ReplayDecodeError` subclass on any failure; never returns a
    partially decoded replay. Bytes after the last field are ignored.
    """

    config = DEFAULT_CONFIG if config is None else config
    cursor = ByteCursor(data)
    fields: dict[str, Any] = {}

    _decode_common_fields(cursor, fields)
    _decode_complex_fields(cursor, fields, config)
    _decode_optional_fields(cursor, fields)

    if config.warn_unknown_mode:
        warn_on_unknown_mode(int(fields["mode"]))

    return Replay(**fields)


def decode_from_path(path: str | Path, *, config: DecodeConfig | None = None) -> Replay:
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise ReplayNotFoundError(f"replay file not found: {path}") from exc
    except OSError as exc:
        raise ReplayReadError(f"failed to read replay file {path}: {exc}") from exc
    return decode_from_bytes(data, config=config)
