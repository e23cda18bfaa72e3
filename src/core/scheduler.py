"""Fixed-period background runner for the expiry sweep.

Runs a callback on a daemon thread at start + interval, start + 2*interval,
and so on. Ticks missed while a callback was running are dropped, not
replayed.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CleanupScheduler:
    def __init__(self, *, interval: float, callback: Callable[[], object], name: str = "cache-cleanup") -> None:
        self._interval = float(interval)
        self._callback = callback
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        # Each run owns its stop event
        self._stop = threading.Event()
        thread = threading.Thread(target=self._run, args=(self._stop,), name=self._name, daemon=True)
        thread.start()
        self._thread = thread
        logger.info("Cleanup scheduler started (interval=%ss)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("Cleanup scheduler stopped")

    def _run(self, stop: threading.Event) -> None:
        next_fire = time.monotonic() + self._interval

        while not stop.wait(max(0.0, next_fire - time.monotonic())):
            try:
                self._callback()
            except Exception:
                # Sweeping is best-effort; the next tick retries
                logger.exception("Cleanup callback failed")

            next_fire += self._interval
            now = time.monotonic()
            if next_fire <= now:
                missed = math.floor((now - next_fire) / self._interval) + 1
                next_fire += missed * self._interval
                logger.debug("Cleanup scheduler skipped %d missed tick(s)", missed)
