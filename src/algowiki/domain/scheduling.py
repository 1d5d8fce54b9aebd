"""Fixed-interval, cancellable repetition of rebuild cycles."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from algowiki.domain.rebuild import RebuildResult

log = logging.getLogger(__name__)


class RebuildScheduler:
    """Runs one cycle at a time and waits ``interval_seconds`` between cycles.

    Failed cycles are retried on the next tick like any other; there is no
    backoff and no retry ceiling.
    """

    def __init__(
        self,
        cycle: Callable[[], RebuildResult],
        *,
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._cycle = cycle
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self.cycles_run = 0
        self.last_result: RebuildResult | None = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run_once(self) -> RebuildResult | None:
        """Run exactly one cycle; ``None`` only if the cycle itself raised."""

        with self._lock:
            self.cycles_run += 1
            try:
                result = self._cycle()
            except Exception:
                log.exception("Rebuild cycle %d raised", self.cycles_run)
                return None
            self.last_result = result
            return result

    def run_forever(self) -> None:
        log.info("Rebuilding every %.0f seconds", self.interval_seconds)
        while not self._stop.is_set():
            self.run_once()
            if self._stop.wait(self.interval_seconds):
                break
        log.info("Rebuild scheduler stopped after %d cycles", self.cycles_run)

    def start(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="algowiki-rebuild", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, *, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
