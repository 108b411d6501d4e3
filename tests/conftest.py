from __future__ import annotations

import itertools
import os
from typing import Callable, List

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("PYQTGRAPH_QT_LIB", "PySide6")

from cues import AudioCuePlayer, CueUnavailable
from drawing import DrawingState


class FakeTimer:
    _seq = itertools.count()

    def __init__(self, now: int, interval_ms: int, callback: Callable[[], None], repeating: bool) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.repeating = repeating
        self.due = now + interval_ms
        self.seq = next(self._seq)
        self.active = True

    def stop(self) -> None:
        self.active = False

    def is_active(self) -> bool:
        return self.active

    def fire(self) -> None:
        """Invoke the callback directly, even when stopped."""
        self.callback()


class FakeScheduler:
    """Timer stand-in driven by a simulated millisecond clock."""

    def __init__(self) -> None:
        self.now = 0
        self.timers: List[FakeTimer] = []

    def repeat(self, interval_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now, interval_ms, callback, repeating=True)
        self.timers.append(timer)
        return timer

    def once(self, delay_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now, delay_ms, callback, repeating=False)
        self.timers.append(timer)
        return timer

    def active_timers(self) -> List[FakeTimer]:
        return [t for t in self.timers if t.active]

    def advance(self, ms: int) -> None:
        end = self.now + ms
        while True:
            due = [t for t in self.timers if t.active and t.due <= end]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            if timer.repeating:
                timer.due += timer.interval_ms
            else:
                timer.active = False
            timer.callback()
        self.now = end


class RecordingBackend:
    def __init__(self, missing: tuple = ()) -> None:
        self.missing = set(missing)
        self.events: List[tuple] = []

    def play(self, note: str) -> None:
        if note in self.missing:
            raise CueUnavailable(f"no sound for {note}")
        self.events.append(("play", note))

    def stop(self) -> None:
        self.events.append(("stop",))


class RecordingCues:
    def __init__(self) -> None:
        self.played: List[str] = []

    def play(self, note: str) -> bool:
        self.played.append(note)
        return True

    def stop(self) -> None:
        pass


@pytest.fixture(scope="session")
def qapp():
    qt = pytest.importorskip("pyqtgraph.Qt")
    return qt.QtWidgets.QApplication.instance() or qt.QtWidgets.QApplication([])


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def cue_player(backend: RecordingBackend, scheduler: FakeScheduler) -> AudioCuePlayer:
    return AudioCuePlayer(backend, scheduler)


@pytest.fixture
def cues() -> RecordingCues:
    return RecordingCues()


@pytest.fixture
def state(cues: RecordingCues, scheduler: FakeScheduler) -> DrawingState:
    return DrawingState(cues, scheduler)


def _draw(state: DrawingState, points) -> None:
    state.start_stroke(points[0])
    for p in points[1:]:
        state.add_point(p)
    state.end_stroke()


@pytest.fixture
def draw() -> Callable[[DrawingState, list], None]:
    return _draw
