"""
Periodic tick scheduling
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional


class Ticker(ABC):
    """
    Repeating timer for one callback.

    start/stop are idempotent transitions guarded by ``running``; subclasses
    only implement the backend calls.
    """

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.running = False
        self.interval_ms: Optional[int] = None

    def start(self, interval_ms: int):
        if self.running:
            self._cancel()
        self.interval_ms = interval_ms
        self.running = True
        self._schedule(interval_ms)

    def stop(self):
        if not self.running:
            return
        self.running = False
        self._cancel()

    @abstractmethod
    def _schedule(self, interval_ms: int):
        pass

    @abstractmethod
    def _cancel(self):
        pass


class ManualTicker(Ticker):
    """Ticker driven explicitly, for headless rendering and tests"""

    def __init__(self, callback: Callable[[], None]):
        super().__init__(callback)
        self.fired = 0

    def _schedule(self, interval_ms: int):
        pass

    def _cancel(self):
        pass

    def fire(self) -> bool:
        """Run one tick if running; returns whether it ran"""
        if not self.running:
            return False
        self.fired += 1
        self.callback()
        return True

    def advance(self, ticks: int) -> int:
        """Fire up to `ticks` ticks, stopping early once stopped"""
        count = 0
        for _ in range(ticks):
            if not self.fire():
                break
            count += 1
        return count

    def run_until_stopped(self, limit: int = 10000) -> int:
        return self.advance(limit)
