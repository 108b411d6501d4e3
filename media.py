from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from pyqtgraph.Qt import QT_LIB, QtCore

from cues import CueUnavailable, resolve_asset

# Same binding pyqtgraph picked for QtCore/QtWidgets.
QtMultimedia = importlib.import_module(f"{QT_LIB}.QtMultimedia")

logger = logging.getLogger(__name__)


def default_assets_dir() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")


class MediaCueBackend:
    """Plays ``<note>.mp3`` / ``<note>.wav`` from the assets directory through Qt Multimedia."""

    def __init__(self, assets_dir: Optional[str] = None) -> None:
        self.assets_dir = assets_dir or default_assets_dir()
        if not os.path.isdir(self.assets_dir):
            logger.warning("Sound directory %s does not exist; cues will be silent.", self.assets_dir)
        self._player: Optional[QtMultimedia.QMediaPlayer] = None
        self._output: Optional[QtMultimedia.QAudioOutput] = None

    def _ensure_player(self) -> QtMultimedia.QMediaPlayer:
        # Needs a running QApplication, so it is built on the first cue.
        if self._player is None:
            self._output = QtMultimedia.QAudioOutput()
            self._player = QtMultimedia.QMediaPlayer()
            self._player.setAudioOutput(self._output)
            self._player.errorOccurred.connect(self._on_error)
        return self._player

    def play(self, note: str) -> None:
        path = resolve_asset(self.assets_dir, note)
        if path is None:
            raise CueUnavailable(f"Sound file for {note} not found in {self.assets_dir}")
        player = self._ensure_player()
        player.setSource(QtCore.QUrl.fromLocalFile(path))
        player.play()

    def stop(self) -> None:
        if self._player is not None:
            self._player.stop()

    def _on_error(self, error, message: str) -> None:
        logger.warning("Sound playback error (%s): %s", error, message)
