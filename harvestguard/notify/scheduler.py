"""Timer-based scheduling for delayed and periodic notifications."""

import threading
from typing import Callable

from loguru import logger


class TimerHandle:
    """Cancellable reference to one scheduled callback."""

    def __init__(self, scheduler: "TimerScheduler", timer: threading.Timer):
        self._scheduler = scheduler
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()
        self._scheduler._forget(self._timer)


class TimerScheduler:
    """Runs callbacks on daemon timer threads."""

    def __init__(self):
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()

    def _forget(self, timer: threading.Timer) -> None:
        with self._lock:
            self._timers.discard(timer)

    def call_later(self, delay_seconds: float, callback: Callable, *args) -> TimerHandle:
        """Schedule callback(*args); the returned handle supports cancel()."""

        def run():
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Scheduled callback {getattr(callback, '__name__', callback)} failed: {e}")
            finally:
                self._forget(timer)

        timer = threading.Timer(max(0.0, delay_seconds), run)
        timer.daemon = True
        with self._lock:
            self._timers.add(timer)
        timer.start()
        return TimerHandle(self, timer)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)
