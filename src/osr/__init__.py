from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("osr-replay")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

from .config import DecodeConfig
from .decoder import decode_from_bytes, decode_from_path
from .errors import (
    DecompressionError,
    FrameStreamError,
    InvalidStringError,
    InvalidTagError,
    ReplayDecodeError,
    ReplayNotFoundError,
    ReplayReadError,
    TruncatedError,
    UlebOverflowError,
)
from .flags import GameMode, Key, KeySet, Mod, ModSet
from .types import LifebarSample, Replay, ReplayFrame
from .versioning import VERSION_FIRST_OSZ2, VERSION_HAS_LONG_ID, VERSION_HAS_RNG, ReplayFormatWarning

__all__ = [
    "DecodeConfig",
    "DecompressionError",
    "FrameStreamError",
    "GameMode",
    "InvalidStringError",
    "InvalidTagError",
    "Key",
    "KeySet",
    "LifebarSample",
    "Mod",
    "ModSet",
    "Replay",
    "ReplayDecodeError",
    "ReplayFormatWarning",
    "ReplayFrame",
    "ReplayNotFoundError",
    "ReplayReadError",
    "TruncatedError",
    "UlebOverflowError",
    "VERSION_FIRST_OSZ2",
    "VERSION_HAS_LONG_ID",
    "VERSION_HAS_RNG",
    "decode_from_bytes",
    "decode_from_path",
]
