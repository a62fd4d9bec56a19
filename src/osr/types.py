from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .flags import GameMode, KeySet, ModSet
from .geom import Vec2

# .NET `DateTime.Ticks`: 100ns intervals since 0001-01-01 UTC.
TICKS_PER_MICROSECOND = 10
_TICKS_EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class LifebarSample:
    time: int
    percent: float


@dataclass(frozen=True, slots=True)
class ReplayFrame:
    delta: int
    time: int
    position: Vec2
    keys: KeySet


@dataclass(frozen=True, slots=True)
class Replay:
    mode: int
    version: int
    beatmap_hash: str
    player_name: str
    replay_hash: str
    count_300: int
    count_100: int
    count_50: int
    count_geki: int
    count_katu: int
    count_miss: int
    score: int
    max_combo: int
    perfect: bool
    mods: ModSet
    lifebar: tuple[LifebarSample, ...]
    timestamp: int
    frames: tuple[ReplayFrame, ...]
    rng_seed: int | None = None
    online_score_id: int | None = None
    target_practice_accuracy: float | None = None

    @property
    def game_mode(self) -> GameMode | None:
        try:
            return GameMode(int(self.mode))
        except ValueError:
            return None

    # Mode-dependent names for the shared counter slots. They read the same
    # stored value; pick the one that matches `game_mode`.

    @property
    def count_150(self) -> int:
        """Taiko: 150s (the `count_100` slot)."""
        return self.count_100

    @property
    def count_small_fruit(self) -> int:
        """Catch: small fruit (droplets) caught (the `count_50` slot)."""
        return self.count_50

    @property
    def count_max_300(self) -> int:
        """Mania: MAX/rainbow 300s (the `count_geki` slot)."""
        return self.count_geki

    @property
    def count_200(self) -> int:
        """Mania: 200s (the `count_katu` slot)."""
        return self.count_katu

    @property
    def played_at(self) -> datetime | None:
        if self.timestamp <= 0:
            return None
        try:
            return _TICKS_EPOCH + timedelta(microseconds=self.timestamp // TICKS_PER_MICROSECOND)
        except OverflowError:
            return None

    @property
    def duration(self) -> int:
        if not self.frames:
            return 0
        return int(self.frames[-1].time)
