# plank_solver/logger.py
# Search diagnostics for the optimizer runners.
# - progress lines (restarts, exports) go to stdout, warnings and errors to stderr
# - one lock serializes lines from restarts running on worker threads
# - errors are always shown, even with --quiet

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class Logger:
    enabled: bool = True
    prefix: str = "[PLANK]"
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def _emit(self, tag: str, msg: str, stream: TextIO) -> None:
        line = f"{self.prefix} {tag}{msg}"
        with self._lock:
            print(line, file=stream, flush=True)

    def info(self, msg: str) -> None:
        if self.enabled:
            self._emit("", msg, sys.stdout)

    def warn(self, msg: str) -> None:
        if self.enabled:
            self._emit("WARNING: ", msg, sys.stderr)

    def error(self, msg: str) -> None:
        self._emit("ERROR: ", msg, sys.stderr)


# Quiet until a runner turns it on
LOGGER = Logger(enabled=False)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def get_logger() -> Logger:
    return LOGGER
