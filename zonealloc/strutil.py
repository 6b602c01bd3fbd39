"""String and byte-buffer helpers: splitting, slicing, comparing and filling."""

from __future__ import annotations

from itertools import zip_longest


def strsplit(s: str, c: str) -> list[str]:
    """Split ``s`` on the character ``c``, dropping empty pieces.

    Runs of ``c`` and leading or trailing separators produce no empty items.
    """
    if len(c) != 1:
        raise ValueError(f"separator must be a single character, got {c!r}")
    return [piece for piece in s.split(c) if piece]


def strsub(s: str, start: int, length: int) -> str:
    """Return the ``length`` characters of ``s`` that begin at ``start``."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start + length > len(s):
        raise IndexError(
            f"substring [{start}, {start + length}) runs past a string of length {len(s)}"
        )
    return s[start:start + length]


def strcmp(s1: str, s2: str) -> int:
    """Compare two strings the way the C library does.

    Returns 0 when equal, otherwise the difference of the code points at the
    first position where they differ; a string that ends counts as code 0.
    """
    for a, b in zip_longest(s1, s2, fillvalue="\0"):
        if a != b:
            return ord(a) - ord(b)
    return 0


def memalloc(size: int) -> bytearray:
    """Return a new zero-filled buffer of ``size`` bytes."""
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    return bytearray(size)


def memset(buf: bytearray, c: int, length: int) -> bytearray:
    """Fill the first ``length`` bytes of ``buf`` with ``c`` taken as an unsigned byte."""
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    if length > len(buf):
        raise IndexError(f"cannot set {length} bytes in a buffer of {len(buf)}")
    buf[:length] = bytes([c & 0xFF]) * length
    return buf


def memcpy(dst: bytearray, src: bytes | bytearray, n: int) -> bytearray:
    """Copy the first ``n`` bytes of ``src`` into the start of ``dst``."""
    if n < 0:
        raise ValueError(f"count must not be negative, got {n}")
    if n > len(src):
        raise IndexError(f"cannot read {n} bytes from a source of {len(src)}")
    if n > len(dst):
        raise IndexError(f"cannot write {n} bytes into a destination of {len(dst)}")
    dst[:n] = src[:n]
    return dst