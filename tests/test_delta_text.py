from __future__ import annotations

import struct

from osr.delta_text import SENTINEL_DELTA, decode_frames, decode_lifebar, parse_f32, parse_i32
from osr.flags import Key
from osr.geom import Vec2


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def test_frame_times_skip_sentinel_delta() -> None:
    frames = decode_frames(f"10|0|0|0,{SENTINEL_DELTA}|5|5|0,5|1|1|0")
    assert [frame.delta for frame in frames] == [10, -12345, 5]
    assert [frame.time for frame in frames] == [10, 10, 15]


def test_frame_times_accept_negative_deltas() -> None:
    frames = decode_frames("0|256|-500|0,-1|256|-500|0,16|0|0|0,")
    assert [frame.time for frame in frames] == [0, -1, 15]


def test_frame_clock_wraps_at_32_bits() -> None:
    frames = decode_frames("2147483647|0|0|0,1|0|0|0,-1|0|0|0")
    assert [frame.time for frame in frames] == [2147483647, -2147483648, 2147483647]


def test_malformed_frame_segment_is_dropped() -> None:
    frames = decode_frames("0|1.0|2.0|3,garbage,10|1|1|1")
    assert len(frames) == 2
    assert frames[0].position == Vec2(1.0, 2.0)
    assert frames[0].keys.has(Key.M1 | Key.M2)
    assert frames[1].time == 10


def test_one_bad_field_rejects_whole_frame() -> None:
    frames = decode_frames("5|1|x|0,5|1|2|0|9,5|1|2,5|1.5|2|abc,7|3|4|0")
    assert [(frame.delta, frame.time) for frame in frames] == [(7, 7)]


def test_rejected_frames_do_not_advance_clock() -> None:
    frames = decode_frames("100|nope|0|0,1|0|0|0")
    assert [frame.time for frame in frames] == [1]


def test_frame_bytes_input_and_empty_segments() -> None:
    frames = decode_frames(b",,16|10|20|4,,")
    assert len(frames) == 1
    assert frames[0].keys.has(Key.K1)
    assert decode_frames(b"") == []


def test_frame_positions_are_float32() -> None:
    (frame,) = decode_frames("1|0.1|-3.3e1|0")
    assert frame.position.x == _f32(0.1)
    assert frame.position.y == -33.0


def test_negative_keys_become_unsigned_bits() -> None:
    (frame,) = decode_frames("0|0|0|-1")
    assert frame.keys.bits == 0xFFFF_FFFF


def test_lifebar_samples_in_order() -> None:
    samples = decode_lifebar("0|1,2000|0.75,bad|0.5,4000|0.5,4500,")
    assert [(sample.time, sample.percent) for sample in samples] == [(0, 1.0), (2000, 0.75), (4000, 0.5)]


def test_parse_i32_is_strict() -> None:
    assert parse_i32("-12345") == -12345
    assert parse_i32("2147483647") == 2147483647
    assert parse_i32("2147483648") is None
    assert parse_i32("+1") is None
    assert parse_i32(" 1") is None
    assert parse_i32("1_000") is None
    assert parse_i32("12abc") is None
    assert parse_i32("") is None


def test_parse_f32_is_strict() -> None:
    assert parse_f32("1.") == 1.0
    assert parse_f32(".5") == 0.5
    assert parse_f32("-2e3") == -2000.0
    assert parse_f32("nan") is None
    assert parse_f32("1e60") is None
    assert parse_f32("1.0.0") is None
    assert parse_f32(".") is None
