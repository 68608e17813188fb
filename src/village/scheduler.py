from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ScheduledCall:
    """Handle for a delayed (or repeating) callback; cancel() is idempotent."""

    def __init__(self, due: float, callback: Callback, interval: Optional[float]) -> None:
        self.due = due
        self.callback = callback
        self.interval = interval
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def _mark_fired(self) -> None:
        self._fired = True

    def cancel(self) -> None:
        if self.active:
            self._cancelled = True
            logger.debug("Scheduled call cancelled: %s", self.callback)

    def __repr__(self) -> str:
        return f"ScheduledCall(due={self.due:.3f}, interval={self.interval}, cancelled={self._cancelled})"


class Scheduler:
    """Cooperative single-threaded timer queue.

    Nothing runs on its own: the host loop calls advance(dt) every frame and due
    callbacks run on the calling thread, in due-time order (ties in scheduling
    order). One-shot calls are spent after running; interval calls re-arm.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if call.active)

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(self._now + max(0.0, float(delay)), callback, None)
        self._push(call)
        return call

    def call_every(self, interval: float, callback: Callback) -> ScheduledCall:
        if interval <= 0:
            raise ValueError("interval must be positive")
        call = ScheduledCall(self._now + float(interval), callback, float(interval))
        self._push(call)
        return call

    def _push(self, call: ScheduledCall) -> None:
        heapq.heappush(self._queue, (call.due, next(self._seq), call))

    def advance(self, dt: float) -> int:
        """Move the clock forward by dt and run every callback that became due.

        Returns the number of callbacks run.
        """
        if dt < 0:
            raise ValueError("dt cannot be negative")
        target = self._now + dt
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, due)
            if call.interval is not None:
                call.due = due + call.interval
                self._push(call)
            else:
                call._mark_fired()
            call.callback()
            ran += 1
        self._now = target
        return ran

    def cancel_all(self) -> None:
        for _, _, call in self._queue:
            call.cancel()
        self._queue.clear()
