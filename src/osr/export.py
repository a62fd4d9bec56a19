from __future__ import annotations

from pathlib import Path
from typing import Any

import msgspec

from .types import Replay, ReplayFrame

_JSON_ENCODER = msgspec.json.Encoder(order="deterministic")


def frame_to_array(frame: ReplayFrame) -> list[int | float]:
    return [
        int(frame.delta),
        int(frame.time),
        float(frame.position.x),
        float(frame.position.y),
        int(frame.keys.bits),
    ]


def replay_to_obj(replay: Replay) -> dict[str, Any]:
    game_mode = replay.game_mode
    played_at = replay.played_at
    return {
        "mode": int(replay.mode),
        "mode_name": None if game_mode is None else game_mode.name.lower(),
        "version": int(replay.version),
        "beatmap_hash": replay.beatmap_hash,
        "player_name": replay.player_name,
        "replay_hash": replay.replay_hash,
        "counts": {
            "300": int(replay.count_300),
            "100": int(replay.count_100),
            "50": int(replay.count_50),
            "geki": int(replay.count_geki),
            "katu": int(replay.count_katu),
            "miss": int(replay.count_miss),
        },
        "score": int(replay.score),
        "max_combo": int(replay.max_combo),
        "perfect": bool(replay.perfect),
        "mods": {
            "bits": int(replay.mods.bits),
            "names": list(replay.mods.names()),
        },
        "timestamp": int(replay.timestamp),
        "played_at": None if played_at is None else played_at.isoformat(),
        "rng_seed": replay.rng_seed,
        "online_score_id": replay.online_score_id,
        "target_practice_accuracy": replay.target_practice_accuracy,
        "lifebar": [[int(sample.time), float(sample.percent)] for sample in replay.lifebar],
        # frames[i] == [delta, time, x, y, keys]
        "frames": [frame_to_array(frame) for frame in replay.frames],
    }


def dump_json(replay: Replay) -> bytes:
    return _JSON_ENCODER.encode(replay_to_obj(replay))


def dump_json_file(path: Path, replay: Replay) -> None:
    path = Path(path)
    path.write_bytes(dump_json(replay))
