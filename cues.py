from __future__ import annotations

import logging
import os
import re
from typing import Optional

import mido

from config import CUE_OCTAVE, CUE_STOP_MS, DEFAULT_VELOCITY, SOUND_EXTENSIONS

logger = logging.getLogger(__name__)


class CueUnavailable(RuntimeError):
    """A note could not be resolved or sent to the sound output."""


def note_to_midi(note: str, octave: int = CUE_OCTAVE) -> int:
    """Map a note letter like C, F# or Bb to a MIDI number in the given octave (C4 = 60)."""
    m = re.match(r"^([A-Ga-g])([#b]?)$", note.strip())
    if not m:
        raise ValueError(f"Could not parse note: {note}")
    letter, accidental = m.groups()
    base = {
        "c": 0,
        "d": 2,
        "e": 4,
        "f": 5,
        "g": 7,
        "a": 9,
        "b": 11,
    }[letter.lower()]
    if accidental == "#":
        base += 1
    elif accidental == "b":
        base -= 1
    val = 12 * (octave + 1) + base
    if not (0 <= val <= 127):
        raise ValueError(f"Note out of MIDI range: {note}{octave}")
    return val


def resolve_asset(assets_dir: str, note: str) -> Optional[str]:
    for ext in SOUND_EXTENSIONS:
        path = os.path.join(assets_dir, f"{note}{ext}")
        if os.path.isfile(path):
            return path
    return None


def pick_output_port(preferred: Optional[str] = None) -> Optional[str]:
    ports = mido.get_output_names()
    if not ports:
        logger.warning("No MIDI output ports found.")
        return None
    if preferred:
        for name in ports:
            if preferred.lower() in name.lower():
                return name
    return ports[0]


class MidiCueBackend:
    """Sounds a cue as a note_on on a MIDI output; stop sends the matching note_off."""

    def __init__(self, port, octave: int = CUE_OCTAVE, velocity: int = DEFAULT_VELOCITY) -> None:
        self.port = port
        self.octave = octave
        self.velocity = velocity
        self._sounding: Optional[int] = None

    @classmethod
    def open(cls, preferred: Optional[str] = None) -> "MidiCueBackend":
        name = pick_output_port(preferred)
        if name is None:
            raise CueUnavailable("No MIDI output port available")
        logger.info("Using MIDI output port: %s", name)
        try:
            port = mido.open_output(name)
        except (OSError, ValueError) as exc:
            raise CueUnavailable(f"Could not open MIDI output {name!r}: {exc}") from exc
        return cls(port)

    def play(self, note: str) -> None:
        try:
            midi_note = note_to_midi(note, self.octave)
        except ValueError as exc:
            raise CueUnavailable(str(exc)) from exc
        self._send(mido.Message("note_on", note=midi_note, velocity=self.velocity))
        self._sounding = midi_note

    def stop(self) -> None:
        if self._sounding is None:
            return
        midi_note = self._sounding
        self._sounding = None
        self._send(mido.Message("note_off", note=midi_note, velocity=0))

    def close(self) -> None:
        self.port.close()

    def _send(self, msg: mido.Message) -> None:
        try:
            self.port.send(msg)
        except (OSError, ValueError) as exc:
            raise CueUnavailable(f"MIDI send failed: {exc}") from exc


class AudioCuePlayer:
    """Plays one cue at a time and silences it after ``stop_after_ms``.

    The pending auto-stop belongs to the cue that scheduled it: starting a new
    cue or calling ``stop`` cancels it, so an old cue's timer never cuts off a
    newer one. Backend failures are logged and never raised.
    """

    def __init__(self, backend, scheduler, stop_after_ms: Optional[int] = CUE_STOP_MS) -> None:
        self.backend = backend
        self.scheduler = scheduler
        self.stop_after_ms = stop_after_ms
        self.current_note: Optional[str] = None
        self._pending_stop = None

    def play(self, note: str) -> bool:
        self._cancel_pending_stop()
        self._stop_backend()
        try:
            self.backend.play(note)
        except CueUnavailable as exc:
            logger.warning("Cue %s not played: %s", note, exc)
            return False
        self.current_note = note
        if self.stop_after_ms is not None:
            self._pending_stop = self.scheduler.once(self.stop_after_ms, self._auto_stop)
        return True

    def stop(self) -> None:
        self._cancel_pending_stop()
        self._stop_backend()

    def is_playing(self) -> bool:
        return self.current_note is not None

    def _auto_stop(self) -> None:
        self._pending_stop = None
        self._stop_backend()

    def _cancel_pending_stop(self) -> None:
        if self._pending_stop is not None:
            self._pending_stop.stop()
            self._pending_stop = None

    def _stop_backend(self) -> None:
        if self.current_note is None:
            return
        self.current_note = None
        try:
            self.backend.stop()
        except CueUnavailable as exc:
            logger.warning("Could not stop cue: %s", exc)
