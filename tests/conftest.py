"""Shared fakes: a manual clock scheduler and in-memory collaborators."""

import asyncio
from typing import Callable, Dict, List, Optional

import pytest

from scoreboard.models import PulseDescriptor, VenueInfo
from scoreboard.services import MemoryStore, PersistenceService, ScoreboardSession


class FakeTimer:
    def __init__(self, when: float, seq: int, callback: Callable[[], None]) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual-time scheduler; spawned coroutines wait until a test runs them."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._timers: List[FakeTimer] = []
        self.spawned: list = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + max(0.0, delay), self._seq, callback)
        self._seq += 1
        self._timers.append(timer)
        return timer

    def spawn(self, coro) -> None:
        self.spawned.append(coro)

    @property
    def pending_timers(self) -> List[FakeTimer]:
        return [t for t in self._timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds + 1e-9
        while True:
            self._timers = self.pending_timers
            due = [t for t in self._timers if t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self.now = max(self.now, timer.when)
            timer.fired = True
            timer.callback()
        self.now = target

    def flush(self) -> None:
        """Run callbacks that are already due (e.g. call_later(0, ...))."""
        self.advance(0)

    def run_spawned(self, index: int = 0) -> None:
        asyncio.run(self.spawned.pop(index))

    def run_all_spawned(self) -> None:
        while self.spawned:
            self.run_spawned(0)

    def discard_spawned(self) -> None:
        for coro in self.spawned:
            coro.close()
        self.spawned.clear()


class FakeAudioOutput:
    def __init__(self, scheduler: Optional[FakeScheduler] = None) -> None:
        self.scheduler = scheduler
        self.buffers: list = []
        self.pulses: List[PulseDescriptor] = []
        self.pulse_times: List[float] = []

    def play_buffer(self, buffer) -> None:
        self.buffers.append(buffer)

    def play_pulse(self, pulse: PulseDescriptor) -> None:
        self.pulses.append(pulse)
        if self.scheduler is not None:
            self.pulse_times.append(self.scheduler.now)


class FakeSpeech:
    def __init__(self, audio: Optional[bytes] = b"\x00\x40" * 8, error: Optional[Exception] = None) -> None:
        self.audio = audio
        self.error = error
        self.calls: List[str] = []

    async def synthesize_speech(self, text: str) -> Optional[bytes]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.audio


class FakeLocator:
    def __init__(self, venues: Optional[Dict[str, VenueInfo]] = None, error: Optional[Exception] = None) -> None:
        self.venues = venues or {}
        self.error = error
        self.calls: List[str] = []

    async def lookup_venue(self, team_name: str) -> Optional[VenueInfo]:
        self.calls.append(team_name)
        if self.error is not None:
            raise self.error
        return self.venues.get(team_name)


class CountingStore(MemoryStore):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.writes: List[str] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        super().set(key, value)


class FailingStore:
    def get(self, key: str) -> Optional[str]:
        raise OSError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")


@pytest.fixture
def scheduler():
    fake = FakeScheduler()
    yield fake
    fake.discard_spawned()


@pytest.fixture
def audio(scheduler):
    return FakeAudioOutput(scheduler)


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def locator():
    return FakeLocator({"BM Granollers": VenueInfo("https://maps.google.com/?cid=1", "Palau d'Esports")})


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def session(scheduler, store, speech, locator, audio):
    sess = ScoreboardSession(
        persistence=PersistenceService(store),
        scheduler=scheduler,
        speech=speech,
        locator=locator,
        audio_output=audio,
    )
    sess.load()
    scheduler.flush()
    return sess
