"""
Cooperative continuation queue.

Bot pacing and the all-in run-out are scheduled here instead of on ambient
timers. Each continuation carries a guard that is re-checked when it comes
due; a continuation whose guard fails is stale (the hand moved on) and is
dropped without running.
"""
from __future__ import annotations
import asyncio
import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


def _always() -> bool:
    return True


@dataclass(order=True)
class Continuation:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    guard: Callable[[], bool] = field(compare=False, default=_always)
    label: str = field(compare=False, default="")


class Scheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: List[Continuation] = []
        self._seq = itertools.count()
        self._wakeup: Optional[asyncio.Event] = None

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        guard: Callable[[], bool] = _always,
        label: str = "",
    ) -> Continuation:
        cont = Continuation(
            due=self._clock() + max(0.0, delay),
            seq=next(self._seq),
            callback=callback,
            guard=guard,
            label=label,
        )
        heapq.heappush(self._queue, cont)
        if self._wakeup is not None:
            self._wakeup.set()
        return cont

    def cancel_all(self) -> None:
        self._queue.clear()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def next_due(self) -> Optional[float]:
        return self._queue[0].due if self._queue else None

    def _run(self, cont: Continuation) -> bool:
        if not cont.guard():
            logger.debug(f"Skipping stale continuation {cont.label or cont.seq}")
            return False
        cont.callback()
        return True

    def run_due(self, now: Optional[float] = None) -> int:
        """Run every continuation due at `now`. Returns how many actually ran."""
        now = self._clock() if now is None else now
        ran = 0
        while self._queue and self._queue[0].due <= now:
            if self._run(heapq.heappop(self._queue)):
                ran += 1
        return ran

    def drain(self, limit: int = 10_000) -> int:
        """
        Run everything in due order, ignoring delays, including continuations
        scheduled while draining. `limit` bounds runaway loops.
        """
        ran = 0
        steps = 0
        while self._queue and steps < limit:
            steps += 1
            if self._run(heapq.heappop(self._queue)):
                ran += 1
        if self._queue:
            raise RuntimeError(f"Scheduler still busy after {limit} steps")
        return ran

    def run_until_idle(self, sleep: Callable[[float], None] = time.sleep) -> int:
        """Blocking pump for synchronous drivers: wait for each due time, then run."""
        ran = 0
        while self._queue:
            wait = self._queue[0].due - self._clock()
            if wait > 0:
                sleep(wait)
            ran += self.run_due()
        return ran

    async def run_forever(self, idle_interval: float = 0.25) -> None:
        """asyncio pump: sleeps until the next due continuation and runs it."""
        self._wakeup = asyncio.Event()
        try:
            while True:
                self._wakeup.clear()
                due = self.next_due()
                if due is None:
                    timeout = idle_interval
                else:
                    timeout = max(0.0, due - self._clock())
                if timeout > 0:
                    try:
                        await asyncio.wait_for(self._wakeup.wait(), timeout)
                    except asyncio.TimeoutError:
                        pass
                try:
                    self.run_due()
                except Exception as e:
                    logger.error(f"Scheduled continuation failed: {e}")
        finally:
            self._wakeup = None
