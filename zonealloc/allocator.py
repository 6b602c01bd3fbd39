"""Zone-based memory allocator over a simulated, page-mapped address space.

Requests up to ``TINY`` bytes are served from zones of ``BLOCKS_PER_ZONE``
fixed slots of ``TINY`` bytes, requests up to ``SMALL`` bytes from zones of
``SMALL``-byte slots, and anything larger gets a mapping of its own.
"""

from __future__ import annotations

import bisect
import mmap
import threading
from dataclasses import dataclass, field
from enum import Enum

TINY = 1024
SMALL = 4096
BLOCKS_PER_ZONE = 128
SIZE_T_MAX = 2**64 - 1


class ZoneKind(Enum):
    """The three size classes an allocation can belong to."""

    TINY = "t"
    SMALL = "s"
    LARGE = "l"


_SLOT_SIZE = {ZoneKind.TINY: TINY, ZoneKind.SMALL: SMALL}


def _kind_for(size: int) -> ZoneKind:
    if size <= TINY:
        return ZoneKind.TINY
    if size <= SMALL:
        return ZoneKind.SMALL
    return ZoneKind.LARGE


@dataclass
class Block:
    """Bookkeeping for one slot or large mapping."""

    kind: ZoneKind
    ptr: int
    capacity: int
    size: int = 0
    used: bool = False


@dataclass
class _Zone:
    meta: int
    data: int
    blocks: list[Block] = field(default_factory=list)


class Allocator:
    """A thread-safe malloc/calloc/realloc/free over simulated memory."""

    def __init__(self, page_size: int | None = None) -> None:
        if page_size is None:
            page_size = mmap.PAGESIZE
        if page_size <= 0 or page_size & (page_size - 1):
            raise ValueError(f"page size must be a positive power of two, got {page_size}")
        self.page_size = page_size
        self.max_size = SIZE_T_MAX - 2 * page_size
        self._regions: dict[int, bytearray] = {}
        self._bases: list[int] = []
        self._next = page_size * 16
        self._zones: dict[ZoneKind, list[_Zone]] = {ZoneKind.TINY: [], ZoneKind.SMALL: []}
        self._large_meta: int | None = None
        self._large: list[Block] = []
        self._lock = threading.RLock()

    # -- simulated mappings -------------------------------------------------

    def _round_to_page(self, n: int) -> int:
        return max(1, -(-n // self.page_size)) * self.page_size

    def _map(self, length: int) -> int:
        length = self._round_to_page(length)
        base = self._next
        self._regions[base] = bytearray(length)
        bisect.insort(self._bases, base)
        # Leave an unmapped page between mappings so overruns are caught.
        self._next += length + self.page_size
        return base

    def _unmap(self, base: int) -> None:
        del self._regions[base]
        self._bases.remove(base)

    def _locate(self, addr: int, length: int) -> tuple[bytearray, int]:
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")
        idx = bisect.bisect_right(self._bases, addr) - 1
        if idx < 0:
            raise ValueError(f"address {addr:#x} is not mapped")
        base = self._bases[idx]
        buf = self._regions[base]
        offset = addr - base
        if offset >= len(buf) or offset + length > len(buf):
            raise ValueError(f"range of {length} bytes at {addr:#x} is not mapped")
        return buf, offset

    # -- zone management ----------------------------------------------------

    def _add_zone(self, kind: ZoneKind) -> None:
        slot = _SLOT_SIZE[kind]
        meta = self._map(self.page_size)
        data = self._map(slot * BLOCKS_PER_ZONE)
        blocks = [Block(kind, data + i * slot, slot) for i in range(BLOCKS_PER_ZONE)]
        self._zones[kind].append(_Zone(meta, data, blocks))

    def _alloc_zone(self, kind: ZoneKind, size: int) -> int:
        zones = self._zones[kind]
        free_block = next(
            (b for zone in zones for b in zone.blocks if not b.used), None
        )
        # A new zone is added as soon as only the last slot remains free.
        if not zones or free_block is None or free_block is zones[-1].blocks[-1]:
            self._add_zone(kind)
            if free_block is None:
                free_block = zones[-1].blocks[0]
        free_block.used = True
        free_block.size = size
        return free_block.ptr

    def _alloc_large(self, size: int) -> int:
        if self._large_meta is None:
            self._large_meta = self._map(self.page_size)
        ptr = self._map(size)
        capacity = len(self._regions[ptr])
        self._large.append(Block(ZoneKind.LARGE, ptr, capacity, size, True))
        return ptr

    # -- public interface ---------------------------------------------------

    def malloc(self, size: int) -> int:
        """Allocate ``size`` bytes and return their address."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        if size > self.max_size:
            raise MemoryError(f"cannot allocate {size} bytes")
        with self._lock:
            kind = _kind_for(size)
            if kind is ZoneKind.LARGE:
                return self._alloc_large(size)
            return self._alloc_zone(kind, size)

    def calloc(self, nmemb: int, size: int) -> int | None:
        """Allocate a zeroed array of ``nmemb`` items of ``size`` bytes.

        Returns ``None`` when either count is zero.
        """
        if nmemb < 0 or size < 0:
            raise ValueError("counts must not be negative")
        if size > self.max_size:
            raise MemoryError(f"cannot allocate items of {size} bytes")
        if size == 0 or nmemb == 0:
            return None
        total = nmemb * size
        with self._lock:
            ptr = self.malloc(total)
            self.write(ptr, bytes(total))
            return ptr

    def realloc(self, ptr: int | None, size: int) -> int | None:
        """Resize the allocation at ``ptr``, moving it when it does not fit.

        A ``None`` pointer allocates; a size of zero frees and returns ``None``.
        """
        if ptr is None:
            return self.malloc(size)
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        with self._lock:
            if size == 0:
                self.free(ptr)
                return None
            block = self.find_block(ptr)
            if block is None:
                raise ValueError(f"address {ptr:#x} is not an allocation")
            if size <= block.capacity and (block.kind is not ZoneKind.LARGE or size > SMALL):
                block.size = size
                return ptr
            new_ptr = self.malloc(size)
            self.write(new_ptr, self.read(ptr, min(size, block.size)))
            self.free(ptr)
            return new_ptr

    def free(self, ptr: int | None) -> None:
        """Release the allocation at ``ptr``; unknown addresses are ignored."""
        if ptr is None:
            return
        with self._lock:
            block = self.find_block(ptr)
            if block is None:
                return
            if block.kind is ZoneKind.LARGE:
                self._unmap(block.ptr)
                self._large.remove(block)
            else:
                block.used = False
                block.size = 0

    def read(self, ptr: int, length: int) -> bytes:
        """Return ``length`` bytes of memory starting at ``ptr``."""
        with self._lock:
            buf, offset = self._locate(ptr, length)
            return bytes(buf[offset:offset + length])

    def write(self, ptr: int, data: bytes | bytearray) -> None:
        """Store ``data`` in memory starting at ``ptr``."""
        with self._lock:
            buf, offset = self._locate(ptr, len(data))
            buf[offset:offset + len(data)] = data

    def blocks(self, kind: ZoneKind) -> list[Block]:
        """Every block of ``kind``, in list order; tiny and small include unused slots."""
        with self._lock:
            if kind is ZoneKind.LARGE:
                return list(self._large)
            return [b for zone in self._zones[kind] for b in zone.blocks]

    def find_block(self, ptr: int) -> Block | None:
        """The in-use block whose address is ``ptr``, or ``None``."""
        with self._lock:
            for kind in (ZoneKind.TINY, ZoneKind.SMALL):
                for zone in self._zones[kind]:
                    for block in zone.blocks:
                        if block.used and block.ptr == ptr:
                            return block
            return next((b for b in self._large if b.ptr == ptr), None)

    def zone_base(self, kind: ZoneKind) -> int | None:
        """Address of the first metadata page for ``kind``, or ``None`` if unused."""
        with self._lock:
            if kind is ZoneKind.LARGE:
                return self._large_meta
            zones = self._zones[kind]
            return zones[0].meta if zones else None