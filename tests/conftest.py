"""Shared test fixtures for declutter."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from entities import EntityStore  # noqa: E402


class SyncTimer:
    """Timer that ticks synchronously on start() until cancelled."""

    max_ticks = 10_000

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.ticks = 0

    def start(self):
        while not self.cancelled and self.ticks < self.max_ticks:
            self.ticks += 1
            self.callback()

    def cancel(self):
        self.cancelled = True


class ManualTimer:
    """Timer that only records start/cancel; tests drive ticks by hand."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self, n=1):
        for _ in range(n):
            self.callback()


@pytest.fixture
def entity_store(tmp_path):
    return EntityStore(tmp_path / "declutter.db")


@pytest.fixture
def sync_timer_factory():
    return SyncTimer


@pytest.fixture
def manual_timers():
    """Factory that keeps every timer it builds, newest last."""
    created = []

    def factory(interval, callback):
        timer = ManualTimer(interval, callback)
        created.append(timer)
        return timer

    factory.created = created
    return factory
