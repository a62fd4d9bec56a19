from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar, Iterable

U32_MASK = 0xFFFF_FFFF


class GameMode(IntEnum):
    OSU = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3


class Mod(IntFlag):
    NO_FAIL = 1 << 0
    EASY = 1 << 1
    NO_VIDEO = 1 << 2
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    SUDDEN_DEATH = 1 << 5
    DOUBLE_TIME = 1 << 6
    RELAX = 1 << 7
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUN_OUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADE_IN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEY_COOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCORE_V2 = 1 << 29
    MIRROR = 1 << 30


class Key(IntFlag):
    M1 = 1 << 0
    M2 = 1 << 1
    K1 = 1 << 2
    K2 = 1 << 3
    SMOKE = 1 << 4


@dataclass(frozen=True, slots=True)
class FlagSet:
    """Opaque unsigned 32-bit bit-set with named-bit queries.

    Subclasses bind `flag_type` to the `IntFlag` whose members name the bits.
    Set algebra is exposed as methods and always returns the caller's type.
    """

    bits: int = 0

    flag_type: ClassVar[type[IntFlag]] = IntFlag

    def __post_init__(self) -> None:
        object.__setattr__(self, "bits", int(self.bits) & U32_MASK)

    @classmethod
    def of(cls, *flags: int) -> FlagSet:
        bits = 0
        for flag in flags:
            bits |= int(flag)
        return cls(bits)

    def has(self, flag: int) -> bool:
        mask = int(flag)
        return (self.bits & mask) == mask

    def union(self, other: FlagSet | int) -> FlagSet:
        return type(self)(self.bits | _bits(other))

    def intersection(self, other: FlagSet | int) -> FlagSet:
        return type(self)(self.bits & _bits(other))

    def difference(self, other: FlagSet | int) -> FlagSet:
        return type(self)(self.bits & ~_bits(other))

    def is_empty(self) -> bool:
        return self.bits == 0

    def members(self) -> tuple[IntFlag, ...]:
        return tuple(flag for flag in _single_bit_members(self.flag_type) if self.bits & int(flag))

    def unknown_bits(self) -> int:
        known = 0
        for flag in _single_bit_members(self.flag_type):
            known |= int(flag)
        return self.bits & ~known

    def names(self) -> tuple[str, ...]:
        return tuple(str(flag.name) for flag in self.members())


def _bits(value: FlagSet | int) -> int:
    if isinstance(value, FlagSet):
        return value.bits
    return int(value) & U32_MASK


def _single_bit_members(flag_type: type[IntFlag]) -> Iterable[IntFlag]:
    for member in flag_type.__members__.values():
        value = int(member)
        if value and value & (value - 1) == 0:
            yield member


@dataclass(frozen=True, slots=True)
class ModSet(FlagSet):
    flag_type: ClassVar[type[IntFlag]] = Mod


@dataclass(frozen=True, slots=True)
class KeySet(FlagSet):
    """Button state of a replay frame.

    In osu!mania frames the x coordinate carries the pressed columns instead,
    and this set is usually empty.
    """

    flag_type: ClassVar[type[IntFlag]] = Key
