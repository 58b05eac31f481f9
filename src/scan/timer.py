"""Cancellable repeating timer backed by an APScheduler interval job."""

import threading
import uuid
from typing import Callable, Optional, Protocol

import structlog
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = structlog.get_logger().bind(source="timer")


class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


class RepeatingTimer:
    """Calls ``callback`` every ``interval`` seconds until cancelled.

    Uses a shared scheduler when one is given, starting it on first use and
    leaving shutdown to its owner. Otherwise owns a private BackgroundScheduler
    that is shut down on cancel.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.interval = interval
        self.callback = callback
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)
        self._job_id = f"tick-{uuid.uuid4().hex[:8]}"
        self._lock = threading.Lock()
        self._started = False
        self._cancelled = False

    @property
    def active(self) -> bool:
        return self._started and not self._cancelled

    def start(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
            self._scheduler.add_job(
                self.callback,
                "interval",
                seconds=self.interval,
                id=self._job_id,
                max_instances=1,
                coalesce=True,
            )
            if not self._scheduler.running:
                self._scheduler.start()

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled or not self._started:
                self._cancelled = True
                return
            self._cancelled = True
            try:
                self._scheduler.remove_job(self._job_id)
            except JobLookupError:
                logger.debug("timer_job_already_gone", job_id=self._job_id)
            if self._owns_scheduler and self._scheduler.running:
                # May run on the scheduler's own worker thread, so never wait
                self._scheduler.shutdown(wait=False)


def scheduler_timer_factory(scheduler: Optional[BackgroundScheduler] = None) -> TimerFactory:
    """Build a timer factory, optionally sharing one scheduler across timers."""

    def factory(interval: float, callback: Callable[[], None]) -> RepeatingTimer:
        return RepeatingTimer(interval, callback, scheduler=scheduler)

    return factory
