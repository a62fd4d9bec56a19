from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENV_LZMA_MEMLIMIT = "OSR_LZMA_MEMLIMIT"
ENV_WARN_UNKNOWN_MODE = "OSR_WARN_UNKNOWN_MODE"

_FALSE_VALUES = frozenset({"0", "false", "off", "no"})


@dataclass(frozen=True, slots=True)
class DecodeConfig:
    # Upper bound on decompressor memory in bytes; None means no limit.
    lzma_memlimit: int | None = None
    warn_unknown_mode: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DecodeConfig:
        env = os.environ if environ is None else environ
        return cls(
            lzma_memlimit=_memlimit_from_env(env.get(ENV_LZMA_MEMLIMIT)),
            warn_unknown_mode=_flag_from_env(env.get(ENV_WARN_UNKNOWN_MODE), default=True),
        )


def _memlimit_from_env(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        parsed = int(str(raw).strip(), 0)
    except ValueError:
        return None
    if parsed <= 0:
        return None
    return int(parsed)


def _flag_from_env(raw: str | None, *, default: bool) -> bool:
    if raw is None:
        return bool(default)
    return str(raw).strip().lower() not in _FALSE_VALUES


DEFAULT_CONFIG = DecodeConfig()
