"""Report of the allocations currently in use, zone by zone."""

from __future__ import annotations

from typing import TextIO

from zonealloc.allocator import Allocator, Block, ZoneKind
from zonealloc.colors import END, Color
from zonealloc.numfmt import format_hex
from zonealloc.output import put_str

_UINT32_MASK = 2**32 - 1

_HEADERS = {
    ZoneKind.TINY: f"{Color.YELLOW.value}\033[1mTINY : ",
    ZoneKind.SMALL: f"{Color.ORANGE.value}SMALL : ",
    ZoneKind.LARGE: f"{Color.RED.value}LARGE : ",
}


def _short_addr(addr: int) -> int:
    return addr & _UINT32_MASK


def _section(kind: ZoneKind, base: int, blocks: list[Block]) -> tuple[list[str], int]:
    lines = [f"{_HEADERS[kind]}{format_hex(_short_addr(base))}\n"]
    total = 0
    for block in blocks:
        if block.used:
            start = _short_addr(block.ptr)
            lines.append(
                f"{format_hex(start)} - {format_hex(start + block.size)} : "
                f"{block.size} octets\n"
            )
            total += block.size
    lines.append("\n")
    return lines, total


def format_alloc_mem(allocator: Allocator) -> str:
    """Describe the in-use blocks of each zone and their total size.

    A zone is listed only when the first block of its list is in use.
    """
    parts: list[str] = []
    total = 0
    with allocator._lock:
        for kind in ZoneKind:
            base = allocator.zone_base(kind)
            blocks = allocator.blocks(kind)
            if base is None or not blocks or not blocks[0].used:
                continue
            lines, subtotal = _section(kind, base, blocks)
            parts.extend(lines)
            total += subtotal
    parts.append(f"{Color.PURPLE.value}Total : {total} octets{END}\n")
    return "".join(parts)


def show_alloc_mem(allocator: Allocator, stream: TextIO | None = None) -> None:
    """Write :func:`format_alloc_mem` to ``stream``, or to standard output."""
    put_str(format_alloc_mem(allocator), stream)