"""Writing characters, strings and numbers to streams or file descriptors."""

from __future__ import annotations

import os
import sys
from typing import Protocol, Union

from zonealloc.numfmt import format_hex


class _TextSink(Protocol):
    def write(self, text: str) -> object: ...


Target = Union[int, _TextSink, None]

_LOG_FLAGS = os.O_RDWR | os.O_CREAT | os.O_APPEND
_LOG_MODE = 0o600


def _emit(text: str, fd: Target) -> None:
    """Write ``text`` to a file descriptor, a text stream, or standard output."""
    if fd is None:
        sys.stdout.write(text)
        return
    if isinstance(fd, int):
        data = memoryview(text.encode())
        while data:
            written = os.write(fd, data)
            data = data[written:]
        return
    fd.write(text)


def put_char(c: str, fd: Target = None) -> None:
    """Write the single character ``c``."""
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    _emit(c, fd)


def put_str(s: str | None, fd: Target = None) -> None:
    """Write ``s``; ``None`` writes nothing."""
    if s is not None:
        _emit(s, fd)


def put_endl(s: str | None, fd: Target = None) -> None:
    """Write ``s`` followed by a newline; ``None`` writes only the newline."""
    _emit(("" if s is None else s) + "\n", fd)


def put_nbr(n: int, fd: Target = None) -> None:
    """Write the decimal text of the integer ``n``."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer, got {type(n).__name__}")
    _emit(str(n), fd)


def put_hex(n: int, fd: Target = None) -> None:
    """Write ``n`` as ``0x``-prefixed uppercase hexadecimal."""
    _emit(format_hex(n), fd)


def create_log_file(name: str | os.PathLike[str], text: str) -> bool:
    """Append ``text`` to the file ``name``, creating it owner-readable and writable.

    Returns ``False`` when the file cannot be opened, ``True`` once written.
    """
    try:
        fd = os.open(name, _LOG_FLAGS, _LOG_MODE)
    except OSError:
        return False
    try:
        _emit(text, fd)
    finally:
        os.close(fd)
    return True