# zonealloc

`zonealloc` is a memory allocator written in pure Python that works on a
simulated address space. It puts each request into one of three kinds of zone:

- **tiny**: requests of up to 1024 bytes. These come from zones of 128 slots
  of 1024 bytes each.
- **small**: requests of up to 4096 bytes. These come from zones of 128 slots
  of 4096 bytes each.
- **large**: anything bigger. Each gets its own page-rounded mapping.

Addresses are plain integers. You can read and write bytes at them, look
through the block lists, trace allocations and print a report of the blocks in
use. The allocator is thread-safe.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The allocator

```python
from zonealloc.allocator import Allocator, ZoneKind

alloc = Allocator(page_size=4096)   # defaults to the system page size

ptr = alloc.malloc(42)              # served from a tiny zone
alloc.write(ptr, b"hello")
assert alloc.read(ptr, 5) == b"hello"

buf = alloc.calloc(4, 256)          # 1024 zeroed bytes
ptr = alloc.realloc(ptr, 2000)      # moved into a small zone, first 42 bytes kept
alloc.free(ptr)
alloc.free(buf)

for block in alloc.blocks(ZoneKind.TINY):
    print(hex(block.ptr), block.size, block.used)
```

How the allocator behaves:

- `malloc(size)` raises `ValueError` for a negative size. It raises
  `MemoryError` above `alloc.max_size`. A size of 0 is served from a tiny zone.
- When a tiny or small request leaves only the last slot free, a new zone of
  that kind is added.
- `calloc(nmemb, size)` returns `None` when either count is zero.
- `realloc(None, size)` allocates. `realloc(ptr, 0)` frees and returns `None`.
  If the new size still fits the block's capacity, the pointer stays where it
  is. A large block stays only when the new size is also above 4096 bytes.
  Otherwise the data moves to a new allocation and the old one is freed.
  `realloc` raises `ValueError` for an address that is not an allocation.
- `free(ptr)` ignores `None` and unknown addresses. A large block's mapping is
  removed when it is freed. Tiny and small slots are marked unused.
- `read` and `write` raise `ValueError` for ranges outside any mapping. Each
  mapping is followed by an unmapped page, so an overrun is detected.
- `find_block(ptr)` returns the in-use `Block` at an address, or `None`.
- `blocks(kind)` lists the blocks of a kind. For tiny and small, unused slots
  are included.
- `zone_base(kind)` gives the address of the first metadata page of a kind,
  or `None` if that kind has not been used.

A `Block` has the fields `kind`, `ptr`, `capacity`, `size` and `used`.

## Reporting

```python
import sys
from zonealloc.show import format_alloc_mem, show_alloc_mem

text = format_alloc_mem(alloc)
show_alloc_mem(alloc, sys.stdout)   # standard output if no stream is given
```

The report has a coloured header for each zone kind. A kind is shown only when
the first block in its list is in use. Under each header is one
`start - end : size octets` line for every in-use block. The report ends with
`Total : N octets`. Addresses are printed as 32-bit, `0x`-prefixed uppercase
hexadecimal.

## Tracing

`AllocationTracer` can append one line per allocation to a history file. It can
also print a running total of allocated bytes in B, KB, MB and GB:

```python
import os
import sys
from zonealloc.debug import AllocationTracer

tracer = AllocationTracer.from_env(os.environ, "Malloc_history", sys.stdout)
ptr = alloc.malloc(42)
tracer.record(42, ptr)
```

`from_env` turns on the history when `MALLOC_HISTORY` is `1` and the running
total when `MALLOC_SHOW_CONSUM` is `1`. You can also pass `history` and
`show_consum` to the constructor directly. The first history entry truncates
the file. `save_history` returns `False` if the file cannot be opened. The
`total` property holds the running total.

## Helpers

- `zonealloc.numfmt`:
  - `itoa`, `ltoa` and `ultoa` give decimal text. They raise `OverflowError`
    outside the 32/64-bit range.
  - `hexa_itoa` and `hexa_ltoa` give hexadecimal text.
  - `ltoa_base` gives text in bases 2 to 36.
  - `format_hex` gives text like `0x1F`.
- `zonealloc.strutil`:
  - `strsplit` drops empty pieces.
  - `strsub` and `strcmp` behave like the C library functions.
  - `memalloc`, `memset` and `memcpy` work on `bytearray`s.
- `zonealloc.output`:
  - `put_char`, `put_str`, `put_endl`, `put_nbr` and `put_hex` write to a
    file descriptor, a text stream or standard output.
  - `create_log_file` appends text to a file, creating it with mode `0600`.
- `zonealloc.colors`: the `Color` enum of ANSI sequences, `END`, and
  `colorize(text, color)`.

## What it does not do

`zonealloc` does not replace or hook Python's own memory allocation. The memory
it manages exists only inside an `Allocator` object. The package has no
command-line program.