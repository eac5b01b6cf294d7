"""
Shared pytest fixtures for HarvestGuard tests.

Provides a manual clock and scheduler, recording delivery channels and an
in-memory store so that tests never wait on real timers or touch disk.
"""

import os

os.environ.setdefault("APP_ENV", "test")

from datetime import date, datetime, timedelta, timezone

import pytest

from harvestguard.notify.dispatcher import NotificationDispatcher
from harvestguard.notify.session import FarmerSession
from harvestguard.store.connection import MemoryStore
from harvestguard.store.models import CropBatchState, WeatherReading
from harvestguard.utils.errors import PersistenceError

TODAY = date(2026, 3, 1)
START = datetime(2026, 3, 1, 6, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------
class FakeClock:
    def __init__(self, start: datetime = START):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class ManualHandle:
    def __init__(self, fire_at, callback, args):
        self.fire_at = fire_at
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by advance(); fires callbacks in due order."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.handles: list[ManualHandle] = []

    def call_later(self, delay_seconds, callback, *args):
        handle = ManualHandle(self.clock.now() + timedelta(seconds=delay_seconds), callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        target = self.clock.now() + timedelta(seconds=seconds)
        while True:
            due = [h for h in self.handles if not h.cancelled and not h.fired and h.fire_at <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.fire_at)
            handle.fired = True
            self.clock.current = handle.fire_at
            handle.callback(*handle.args)
        self.clock.current = target

    @property
    def pending(self) -> int:
        return sum(1 for h in self.handles if not h.cancelled and not h.fired)


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
class RecordingChannel:
    def __init__(self, mode: str = "ok"):
        self.mode = mode
        self.sent = []

    def deliver(self, title, body, require_interaction=False, tag=None):
        if self.mode == "raise":
            raise RuntimeError("notification permission denied")
        if self.mode == "unavailable":
            return False
        self.sent.append({"title": title, "body": body, "require_interaction": require_interaction, "tag": tag})
        return True


class RecordingFallback:
    def __init__(self):
        self.sent = []

    def deliver_fallback(self, title, body):
        self.sent.append({"title": title, "body": body})


class RecordingSms:
    def __init__(self):
        self.sent = []

    def send(self, phone, title, message):
        self.sent.append({"phone": phone, "title": title, "message": message})


class FailingStore(MemoryStore):
    """Store whose reads and/or writes raise."""

    def __init__(self, fail_reads=True, fail_writes=True):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key, default=None):
        if self.fail_reads:
            raise PersistenceError(f"cannot read {key}")
        return super().get(key, default)

    def put(self, key, value):
        if self.fail_writes:
            raise PersistenceError(f"cannot write {key}")
        super().put(key, value)


# ---------------------------------------------------------------------------
# Domain helpers
# ---------------------------------------------------------------------------
def make_weather(**overrides) -> WeatherReading:
    values = {"temperature": 25, "humidity": 50, "rainfall_mm": 0, "wind_speed_ms": 3}
    values.update(overrides)
    return WeatherReading(**values)


def growing_crop(crop_id="c1", days_out=None, crop_type="ধান") -> CropBatchState:
    harvest = TODAY + timedelta(days=days_out) if days_out is not None else None
    return CropBatchState(crop_id=crop_id, crop_type=crop_type, stage="growing", expected_harvest_date=harvest)


def harvested_crop(crop_id="h1", storage="open_space", crop_type="ধান") -> CropBatchState:
    return CropBatchState(crop_id=crop_id, crop_type=crop_type, stage="harvested", storage_method=storage)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def fallback():
    return RecordingFallback()


@pytest.fixture
def sms():
    return RecordingSms()


@pytest.fixture
def session(store):
    return FarmerSession("farmer-1", store, phone="+8801700000000")


@pytest.fixture
def dispatcher(session, channel, fallback, sms, scheduler, clock):
    return NotificationDispatcher(
        session,
        channel=channel,
        fallback=fallback,
        sms=sms,
        scheduler=scheduler,
        clock=clock.now,
        medium_delay_seconds=300,
    )
