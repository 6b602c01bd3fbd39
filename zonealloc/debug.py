"""Optional tracing of allocations: a history file and running consumption totals."""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping
from typing import TextIO

from zonealloc.colors import END, Color
from zonealloc.numfmt import format_hex
from zonealloc.output import put_str

HISTORY_FILE = "Malloc_history"
HISTORY_ENV = "MALLOC_HISTORY"
SHOW_CONSUM_ENV = "MALLOC_SHOW_CONSUM"

_UINT32_MASK = 2**32 - 1
_FILE_MODE = 0o600


class AllocationTracer:
    """Records allocations to a history file and reports total consumption."""

    def __init__(
        self,
        history_path: str | os.PathLike[str] = HISTORY_FILE,
        history: bool = False,
        show_consum: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.history_path = os.fspath(history_path)
        self.history = history
        self.show_consum = show_consum
        self.stream = stream
        self._calls = 1
        self._total = 0
        self._lock = threading.Lock()

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        history_path: str | os.PathLike[str] = HISTORY_FILE,
        stream: TextIO | None = None,
    ) -> "AllocationTracer":
        """Build a tracer switched on by ``MALLOC_HISTORY`` and ``MALLOC_SHOW_CONSUM`` set to ``1``."""
        env = os.environ if environ is None else environ
        return cls(
            history_path,
            history=env.get(HISTORY_ENV) == "1",
            show_consum=env.get(SHOW_CONSUM_ENV) == "1",
            stream=stream,
        )

    @property
    def total(self) -> int:
        """Bytes reported to :meth:`show_consumption` so far."""
        return self._total

    def record(self, size: int, address: int | None) -> None:
        """Trace one allocation according to the enabled options."""
        if self.history:
            self.save_history(size, address)
        if self.show_consum:
            self.show_consumption(size)

    def save_history(self, size: int, address: int | None) -> bool:
        """Append one line for this allocation to the history file.

        The first successful call truncates the file. Returns ``False`` when the
        file cannot be opened, in which case the call counter does not advance.
        """
        with self._lock:
            mode_flag = os.O_TRUNC if self._calls == 1 else os.O_APPEND
            try:
                fd = os.open(self.history_path, os.O_RDWR | os.O_CREAT | mode_flag, _FILE_MODE)
            except OSError:
                return False
            addr = (address or 0) & _UINT32_MASK
            line = (
                f"{Color.CYAN.value}Malloc_call : {self._calls}"
                f"{Color.ORANGE.value} Size :{size}"
                f"{Color.GREEN.value} Addr :{format_hex(addr)}"
                f"{END}\n"
            )
            try:
                put_str(line, fd)
            finally:
                os.close(fd)
            self._calls += 1
            return True

    def show_consumption(self, size: int) -> int:
        """Add ``size`` to the running total, print it in B, KB, MB and GB, and return it."""
        with self._lock:
            self._total += size
            total = self._total
        text = (
            "=====================================\n"
            f"{Color.PINK.value}Memory allocated in  B : {total}\n"
            f"{Color.GREEN.value}Memory allocated in KB : {total // 1024}\n"
            f"{Color.ORANGE.value}Memory allocated in MB : {total // 1024 // 1024}\n"
            f"{Color.RED.value}Memory allocated in GB : {total // 1024 // 1024 // 1024}"
            f"\n{END}\n"
        )
        put_str(text, self.stream)
        return total