"""
Colour/note sketch pad.

Draw strokes on the canvas; each stroke takes the colour and note of the
selected palette swatch (red=C, orange=D, yellow=E, green=F, blue=G,
indigo=A, purple=B). "Play Drawing" hides every stroke, then reveals them one
by one in drawing order, sounding each stroke's note as it completes.

Sounds are read from assets/<NOTE>.mp3 (or .wav) next to this file. A missing
file is logged and the stroke stays silent. With --midi-out the notes are sent
to a MIDI output port instead (C4 = 60).

Dependencies:
  pip install mido python-rtmidi pyqtgraph PySide6

Usage:
  python main.py [--assets DIR] [--midi-out [PORT]] [--verbose]

Keys:
  1-7        select palette swatch
  P / Space  play drawing
  Backspace  clear canvas
  Esc        stop playback
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

os.environ.setdefault("PYQTGRAPH_QT_LIB", "PySide6")

import pyqtgraph as pg  # noqa: E402
from pyqtgraph.Qt import QtCore, QtGui, QtWidgets  # noqa: E402

from canvas import StrokeCanvas  # noqa: E402
from cues import AudioCuePlayer, CueUnavailable, MidiCueBackend  # noqa: E402
from drawing import DrawingState  # noqa: E402
from media import MediaCueBackend  # noqa: E402
from panel import ControlPanel  # noqa: E402
from timers import QtScheduler  # noqa: E402

logger = logging.getLogger(__name__)

PALETTE_KEYS = [
    QtCore.Qt.Key_1,
    QtCore.Qt.Key_2,
    QtCore.Qt.Key_3,
    QtCore.Qt.Key_4,
    QtCore.Qt.Key_5,
    QtCore.Qt.Key_6,
    QtCore.Qt.Key_7,
]


def build_backend(args: argparse.Namespace):
    if args.midi_out is not None:
        try:
            return MidiCueBackend.open(args.midi_out or None)
        except CueUnavailable as exc:
            logger.warning("%s; falling back to sound files.", exc)
    return MediaCueBackend(args.assets)


def main() -> None:
    parser = argparse.ArgumentParser(description="Draw coloured strokes and replay them as notes")
    parser.add_argument("--assets", help="Directory holding C.mp3 .. B.mp3 (default: assets/ beside this file)")
    parser.add_argument(
        "--midi-out",
        nargs="?",
        const="",
        help="Send notes to a MIDI output port instead of playing sound files. Optional port substring.",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QtWidgets.QApplication([])
    pg.setConfigOptions(antialias=True)

    scheduler = QtScheduler()
    backend = build_backend(args)
    cues = AudioCuePlayer(backend, scheduler)
    state = DrawingState(cues, scheduler)

    window = QtWidgets.QWidget()
    window.setWindowTitle("Sound and Colour")
    layout = QtWidgets.QVBoxLayout()
    layout.setContentsMargins(16, 16, 16, 16)
    window.setLayout(layout)
    canvas = StrokeCanvas(state)
    layout.addWidget(canvas, alignment=QtCore.Qt.AlignHCenter)
    layout.addWidget(ControlPanel(state))

    def handle_key(event: QtGui.QKeyEvent) -> None:
        key = event.key()
        index: Optional[int] = next((i for i, k in enumerate(PALETTE_KEYS) if key == k), None)
        if index is not None and index < len(state.palette):
            state.select_palette(index)
        elif key in (QtCore.Qt.Key_P, QtCore.Qt.Key_Space):
            state.play_drawing()
        elif key in (QtCore.Qt.Key_Backspace, QtCore.Qt.Key_Delete):
            state.clear_canvas()
        elif key == QtCore.Qt.Key_Escape:
            state.stop_animation()
    window.keyPressEvent = handle_key  # type: ignore[assignment]

    window.show()

    try:
        app.exec()
    finally:
        state.stop_animation()
        cues.stop()
        if isinstance(backend, MidiCueBackend):
            backend.close()


if __name__ == "__main__":
    main()
