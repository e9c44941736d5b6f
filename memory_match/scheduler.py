# memory_match/scheduler.py
from __future__ import annotations
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple


@dataclass
class Task:
    when: float
    callback: Callable[..., Any]
    args: Tuple[Any, ...] = ()
    interval: Optional[float] = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(order=True)
class _Entry:
    when: float
    seq: int
    task: Task = field(compare=False)


class Scheduler:
    """
    Virtual clock driving timer ticks and deferred actions.

    Nothing runs on its own: time only moves when advance() or
    advance_to() is called, and due tasks fire synchronously in
    due-time order (ties in the order they were scheduled).
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: List[_Entry] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Task:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        task = Task(when=self._now + delay, callback=callback, args=args)
        self._push(task)
        return task

    def call_every(self, interval: float, callback: Callable[..., Any], *args: Any) -> Task:
        if interval <= 0:
            raise ValueError("interval must be positive")
        task = Task(when=self._now + interval, callback=callback, args=args, interval=interval)
        self._push(task)
        return task

    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry.task.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything that falls due. Returns the fire count."""
        return self.advance_to(self._now + seconds)

    def advance_to(self, when: float) -> int:
        fired = 0
        while self._queue and self._queue[0].when <= when:
            entry = heapq.heappop(self._queue)
            task = entry.task
            if task.cancelled:
                continue
            self._now = max(self._now, entry.when)
            task.callback(*task.args)
            fired += 1
            # a callback may cancel its own recurring task
            if task.interval is not None and not task.cancelled:
                task.when = entry.when + task.interval
                self._push(task)
        self._now = max(self._now, when)
        return fired

    def _push(self, task: Task) -> None:
        heapq.heappush(self._queue, _Entry(task.when, next(self._seq), task))
