from __future__ import annotations


class ReplayDecodeError(ValueError):
    """Base class for every failure raised while decoding a replay."""


class TruncatedError(ReplayDecodeError):
    pass


class InvalidTagError(ReplayDecodeError):
    pass


class InvalidStringError(ReplayDecodeError):
    pass


class UlebOverflowError(ReplayDecodeError):
    pass


class FrameStreamError(ReplayDecodeError):
    pass


class DecompressionError(ReplayDecodeError):
    pass


class ReplayNotFoundError(ReplayDecodeError):
    pass


class ReplayReadError(ReplayDecodeError):
    pass
