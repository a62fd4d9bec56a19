from __future__ import annotations

import lzma


def decompress(data: bytes | bytearray | memoryview, *, memlimit: int | None = None) -> bytes:
    """Decompress an LZMA (`.lzma` "alone" or `.xz`) stream.

    Returns b"" when the stream is truncated, has a bad header, or fails its
    integrity check.
    """

    try:
        return lzma.decompress(bytes(data), format=lzma.FORMAT_AUTO, memlimit=memlimit)
    except (lzma.LZMAError, EOFError):
        return b""
