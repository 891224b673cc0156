"""Countdown clock for timed exams."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

log = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def event_loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule on the running asyncio loop (the thread handling requests)."""
    return asyncio.get_running_loop().call_later(delay, callback)


def format_clock(seconds: int) -> str:
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class ExamTimer:
    """
    One-second resolution countdown.

    Each tick decrements the remaining time; at zero the timer stops itself
    and calls on_expire exactly once. stop() is idempotent and cancels the
    pending tick so a discarded session never receives callbacks.
    """

    interval = 1.0

    def __init__(
        self,
        duration_seconds: int,
        on_expire: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
        scheduler: Scheduler | None = None,
    ):
        self.duration_seconds = duration_seconds
        self.remaining_seconds = duration_seconds
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.scheduler = scheduler or event_loop_scheduler
        self.running = False
        self._handle: TimerHandle | None = None

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_seconds - self.remaining_seconds

    def start(self) -> None:
        if self.running:
            return
        self.remaining_seconds = self.duration_seconds
        self._schedule()
        self.running = True
        log.debug("Exam timer started at %s seconds", self.duration_seconds)

    def _schedule(self) -> None:
        self._handle = self.scheduler(self.interval, self.tick)

    def tick(self) -> None:
        if not self.running:
            return
        self._handle = None
        self.remaining_seconds -= 1
        if self.on_tick is not None:
            self.on_tick(self.remaining_seconds)
        if self.remaining_seconds <= 0:
            self.stop()
            log.info("Exam time is up")
            self.on_expire()
            return
        self._schedule()

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
