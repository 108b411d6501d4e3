from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from config import PROGRESS_STEP, TICK_MS
from strokes import ActiveStroke, NoStroke, PaletteEntry, Point, Stroke, StrokeSlot, default_palette

logger = logging.getLogger(__name__)

TICKS_PER_STROKE = math.ceil(round(1.0 / PROGRESS_STEP, 9))


@dataclass
class PlaybackSession:
    index: int = 0
    ticks: int = 0
    handle: object = None
    cancelled: bool = False


class DrawingState:
    """Strokes, the in-progress slot, palette selection and the playback loop.

    Pointer handlers and the playback tick both mutate this object; they are
    expected to run on the same (Qt main) thread.
    """

    def __init__(self, cues, scheduler, palette: Optional[List[PaletteEntry]] = None) -> None:
        self.cues = cues
        self.scheduler = scheduler
        self.palette: List[PaletteEntry] = list(palette) if palette is not None else default_palette()
        if not self.palette:
            raise ValueError("Palette must not be empty")
        self.active_index = 0
        self.strokes: List[Stroke] = []
        self.slot: StrokeSlot = NoStroke()
        self._session: Optional[PlaybackSession] = None
        self._listeners: List[Callable[[], None]] = []

    # ---- Observation ----
    def subscribe(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in list(self._listeners):
            callback()

    @property
    def active_entry(self) -> PaletteEntry:
        return self.palette[self.active_index]

    @property
    def current_stroke(self) -> Optional[Stroke]:
        if isinstance(self.slot, ActiveStroke):
            return self.slot.stroke
        return None

    @property
    def is_playing(self) -> bool:
        return self._session is not None

    @property
    def playing_index(self) -> Optional[int]:
        return self._session.index if self._session is not None else None

    # ---- Palette ----
    def select_palette(self, index: int) -> None:
        if not 0 <= index < len(self.palette):
            raise IndexError(f"Palette index out of range: {index}")
        self.active_index = index
        self._changed()

    # ---- Strokes ----
    def start_stroke(self, point: Point) -> None:
        if isinstance(self.slot, ActiveStroke):
            logger.debug("start_stroke ignored: a stroke is already in progress")
            return
        entry = self.active_entry
        self.slot = ActiveStroke(Stroke(color=entry.color, note=entry.note, points=[point], progress=1.0))
        self._changed()

    def add_point(self, point: Point) -> None:
        if not isinstance(self.slot, ActiveStroke):
            return
        self.slot.stroke.points.append(point)
        self._changed()

    def end_stroke(self) -> None:
        if not isinstance(self.slot, ActiveStroke):
            return
        self.strokes.append(self.slot.stroke)
        self.slot = NoStroke()
        self._changed()

    def clear_canvas(self) -> None:
        self.stop_animation()
        self.strokes.clear()
        self.slot = NoStroke()
        self._changed()

    # ---- Playback ----
    def play_drawing(self) -> None:
        self.stop_animation()
        for stroke in self.strokes:
            stroke.progress = 0.0
        if isinstance(self.slot, ActiveStroke):
            self.slot.stroke.progress = 1.0
        if not self.strokes:
            self._changed()
            return
        session = PlaybackSession()
        self._session = session
        session.handle = self.scheduler.repeat(TICK_MS, lambda: self._tick(session))
        logger.info("Playing %d stroke(s)", len(self.strokes))
        self._changed()

    def stop_animation(self) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        session.cancelled = True
        if session.handle is not None:
            session.handle.stop()

    def _tick(self, session: PlaybackSession) -> None:
        if session.cancelled or session is not self._session:
            return
        if session.index >= len(self.strokes):
            self._finish(session)
            return
        stroke = self.strokes[session.index]
        session.ticks += 1
        stroke.progress = min(1.0, stroke.progress + PROGRESS_STEP)
        # Strokes drawn during playback are already at 1.0 and complete on their first tick.
        if session.ticks >= TICKS_PER_STROKE or stroke.progress >= 1.0:
            stroke.progress = 1.0
            self.cues.play(stroke.note)
            session.index += 1
            session.ticks = 0
            if session.index >= len(self.strokes):
                self._finish(session)
        self._changed()

    def _finish(self, session: PlaybackSession) -> None:
        logger.debug("Playback finished after %d stroke(s)", session.index)
        self.stop_animation()
