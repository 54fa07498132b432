# Filename: scheduler.py

import time
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger("CycleScheduler")


def _spawn_daemon(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True, name="listing-cycle").start()


class CycleScheduler:
    """
    Fires `run_cycle` immediately, then every `interval_seconds` on a fixed
    timeline that does not depend on how long a cycle takes.

    When allow_overlap is False, a tick that fires while the previous cycle
    is still running is skipped. When True, cycles may overlap.
    """

    def __init__(self, run_cycle: Callable[[], object], interval_seconds: float,
                 allow_overlap: bool = False,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep,
                 spawn: Callable[[Callable[[], None]], None] = _spawn_daemon):
        self.run_cycle = run_cycle
        self.interval = interval_seconds
        self.allow_overlap = allow_overlap
        self.clock = clock
        self.sleep = sleep
        self.spawn = spawn
        self._cycle_lock = threading.Lock()
        self.skipped_ticks = 0

    def tick(self) -> bool:
        """Starts one cycle. Returns False if the tick was skipped."""
        if self.allow_overlap:
            self.spawn(self._run_guarded)
            return True

        if not self._cycle_lock.acquire(blocking=False):
            self.skipped_ticks += 1
            logger.warning("[SCHEDULER] Previous cycle still running, skipping this tick.")
            return False

        self.spawn(self._run_locked)
        return True

    def run_forever(self, max_ticks: Optional[int] = None) -> None:
        logger.info(f"[SCHEDULER] Running a cycle every {self.interval / 60:g} minutes.")
        ticks = 0
        next_fire = self.clock()

        while True:
            self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                return
            next_fire += self.interval
            self.sleep(max(0.0, next_fire - self.clock()))

    def _run_guarded(self) -> None:
        try:
            self.run_cycle()
        except Exception as e:
            logger.error(f"[SCHEDULER] Cycle failed: {e}")

    def _run_locked(self) -> None:
        try:
            self._run_guarded()
        finally:
            self._cycle_lock.release()
