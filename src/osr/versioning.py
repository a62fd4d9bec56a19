from __future__ import annotations

import warnings
from typing import Final

from .flags import GameMode

# First client build whose replays carry an online score id (32-bit).
VERSION_FIRST_OSZ2: Final[int] = 20121008
# First build that appends the score RNG seed as a trailing sentinel frame.
VERSION_HAS_RNG: Final[int] = 20130319
# First build that widens the online score id to 64 bits.
VERSION_HAS_LONG_ID: Final[int] = 20140721


class ReplayFormatWarning(UserWarning):
    """Non-fatal oddities found while decoding a replay."""


def has_rng_seed_frame(version: int) -> bool:
    return int(version) >= VERSION_HAS_RNG


def online_score_id_width(version: int) -> int | None:
    """Return the byte width of the online score id field, or None if absent."""
    version = int(version)
    if version >= VERSION_HAS_LONG_ID:
        return 8
    if version >= VERSION_FIRST_OSZ2:
        return 4
    return None


def warn_on_unknown_mode(mode: int) -> bool:
    """Warn if `mode` is not a known game mode byte.

    Returns True if a warning was emitted.
    """

    try:
        GameMode(int(mode))
    except ValueError:
        warnings.warn(
            f"Replay has unknown game mode {int(mode)}; counters are reported without mode aliases.",
            category=ReplayFormatWarning,
            stacklevel=3,
        )
        return True
    return False
