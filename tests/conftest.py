"""
Shared fixtures and fake collaborators.

No real timers, no real files unless a test asks for tmp_path:
clocks are advanced by hand and random sources are scripted.
"""

from decimal import Decimal
from itertools import cycle

import pytest

from fundtracker.audit import AuditLogger
from fundtracker.config import ConfettiSettings, TrackerSettings
from fundtracker.confetti import FrameDriver, ParticleSimulator, RenderingSurface
from fundtracker.orchestrator import ContributionSession
from fundtracker.services.notifications import (
    ConfirmationInterface,
    CooperativeIntervalScheduler,
    NotifierInterface,
)
from fundtracker.services.storage import (
    InMemoryAuditStorage,
    InMemoryContributionStore,
    StorageError,
)


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class SequenceRandom:
    """Random source that cycles through a fixed list of values."""

    def __init__(self, values):
        self._values = cycle(values)

    def random(self) -> float:
        return next(self._values)


class FakeSurface(RenderingSurface):
    """Records every drawing call."""

    def __init__(self, width: int = 800, height: int = 600):
        self._width = width
        self._height = height
        self.visible = False
        self.clear_count = 0
        self.rects = []
        self.listeners = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        for callback in list(self.listeners):
            callback()

    def clear(self) -> None:
        self.clear_count += 1
        self.rects = []

    def fill_rotated_rect(self, cx, cy, width, height, angle, color) -> None:
        self.rects.append((cx, cy, width, height, angle, color))

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def subscribe_resize(self, callback) -> None:
        self.listeners.append(callback)

    def unsubscribe_resize(self, callback) -> None:
        if callback in self.listeners:
            self.listeners.remove(callback)


class FakeFrameDriver(FrameDriver):
    """Holds the pending frame callback until a test fires it."""

    def __init__(self):
        self.pending = None
        self.request_count = 0

    def request_frame(self, callback) -> None:
        self.pending = callback
        self.request_count += 1

    def fire(self, now_ms: float) -> None:
        callback, self.pending = self.pending, None
        if callback is not None:
            callback(now_ms)


class FakeNotifier(NotifierInterface):
    def __init__(self):
        self.messages = []

    def notify(self, message: str, duration_ms: int) -> None:
        self.messages.append((message, duration_ms))

    @property
    def texts(self) -> list[str]:
        return [m for m, _ in self.messages]

    @property
    def last(self) -> str:
        return self.messages[-1][0]


class FakeConfirmer(ConfirmationInterface):
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.prompts = []

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


class RecordingStore(InMemoryContributionStore):
    """In-memory store that remembers every save."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.saves = []

    def save(self, amounts) -> None:
        amounts = list(amounts)
        self.saves.append(amounts)
        super().save(amounts)


class FailingStore(RecordingStore):
    """Store whose writes always fail."""

    def save(self, amounts) -> None:
        raise StorageError("disk full")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker_settings():
    return TrackerSettings(target=Decimal("100.00"))


@pytest.fixture
def confetti_settings():
    return ConfettiSettings()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def frame_driver():
    return FakeFrameDriver()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)


@pytest.fixture
def simulator(surface, frame_driver, confetti_settings, clock, audit_logger):
    return ParticleSimulator(
        surface=surface,
        frame_driver=frame_driver,
        settings=confetti_settings,
        rng=SequenceRandom([0.5]),
        clock=clock,
        audit_logger=audit_logger,
    )


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def confirmer():
    return FakeConfirmer()


@pytest.fixture
def scheduler(clock):
    return CooperativeIntervalScheduler(clock=clock)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def make_session(notifier, confirmer, scheduler, simulator, tracker_settings, audit_logger):
    """Build a session; override any collaborator by keyword."""

    def _make(**overrides) -> ContributionSession:
        kwargs = dict(
            store=RecordingStore(),
            notifier=notifier,
            confirmer=confirmer,
            scheduler=scheduler,
            simulator=simulator,
            settings=tracker_settings,
            audit_logger=audit_logger,
        )
        kwargs.update(overrides)
        return ContributionSession(**kwargs)

    return _make
