from __future__ import annotations

"""
Forward-only byte cursor for the osu! replay container.

Primitive layout (all little-endian):
  - fixed-width integers/floats, parsed with construct `FormatField`s
  - uleb128: 7 payload bits per byte, high bit = continuation, at most 9 bytes
  - tagged string: u8 tag; tag 0x00 = empty, tag 0x0B = uleb128 length + utf8 bytes

Every read either succeeds and advances the cursor, or raises and leaves the
position where it was before the call.
"""

from typing import Final

from construct import Construct, Flag, Float64l, Int8ul, Int16sl, Int32sl, Int32ul, Int64sl

from .errors import InvalidStringError, InvalidTagError, TruncatedError, UlebOverflowError

STRING_TAG_EMPTY: Final[int] = 0x00
STRING_TAG_PRESENT: Final[int] = 0x0B

# 9 bytes carry 63 payload bits; a 10th byte would shift past bit 63.
ULEB128_MAX_BYTES: Final[int] = 9


class ByteCursor:
    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        view = memoryview(data)
        if view.ndim != 1 or view.itemsize != 1:
            view = view.cast("B")
        self._data = view.toreadonly()
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def __len__(self) -> int:
        return len(self._data)

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, length: int, what: str) -> memoryview:
        length = int(length)
        if length < 0 or length > self.remaining():
            raise TruncatedError(
                f"{what}: need {length} bytes at offset {self._pos}, {self.remaining()} remaining"
            )
        start = self._pos
        self._pos = start + length
        return self._data[start : self._pos]

    def read_exact(self, length: int, *, what: str = "bytes") -> bytes:
        return bytes(self._take(length, what))

    def slice(self, length: int, *, what: str = "slice") -> memoryview:
        """Return a view of the next `length` bytes without copying."""
        return self._take(length, what)

    def read_fixed(self, fmt: Construct, *, what: str | None = None):
        size = int(fmt.sizeof())
        raw = self._take(size, what or str(fmt.name or fmt.__class__.__name__))
        return fmt.parse(raw.tobytes())

    def read_u8(self, what: str = "u8") -> int:
        return int(self.read_fixed(Int8ul, what=what))

    def read_bool(self, what: str = "bool") -> bool:
        return bool(self.read_fixed(Flag, what=what))

    def read_i16(self, what: str = "i16") -> int:
        return int(self.read_fixed(Int16sl, what=what))

    def read_i32(self, what: str = "i32") -> int:
        return int(self.read_fixed(Int32sl, what=what))

    def read_u32(self, what: str = "u32") -> int:
        return int(self.read_fixed(Int32ul, what=what))

    def read_i64(self, what: str = "i64") -> int:
        return int(self.read_fixed(Int64sl, what=what))

    def read_f64(self, what: str = "f64") -> float:
        return float(self.read_fixed(Float64l, what=what))

    def read_uleb128(self, what: str = "uleb128") -> int:
        start = self._pos
        value = 0
        shift = 0
        try:
            for _ in range(ULEB128_MAX_BYTES):
                byte = self.read_u8(what)
                value |= (byte & 0x7F) << shift
                shift += 7
                if not byte & 0x80:
                    return value
            raise UlebOverflowError(f"{what}: uleb128 at offset {start} exceeds 64 bits")
        except (TruncatedError, UlebOverflowError):
            self._pos = start
            raise

    def read_string(self, what: str = "string") -> str:
        start = self._pos
        try:
            tag = self.read_u8(what)
            if tag == STRING_TAG_EMPTY:
                return ""
            if tag != STRING_TAG_PRESENT:
                raise InvalidTagError(f"{what}: invalid string tag 0x{tag:02x} at offset {start}")
            length = self.read_uleb128(what)
            raw = self.read_exact(length, what=what)
        except (TruncatedError, InvalidTagError, UlebOverflowError):
            self._pos = start
            raise
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            self._pos = start
            raise InvalidStringError(f"{what}: string at offset {start} is not valid utf-8") from exc
