"""Timer handles backed by QtCore.QTimer.

DrawingState and AudioCuePlayer only talk to a scheduler with two methods:

    scheduler.repeat(interval_ms, callback) -> handle
    scheduler.once(delay_ms, callback) -> handle

and a handle exposes ``stop()`` and ``is_active()``. Everything runs on the Qt
main thread, so callbacks never race with pointer events.
"""

from __future__ import annotations

from typing import Callable, Optional

from pyqtgraph.Qt import QtCore


class QtTimerHandle:
    def __init__(self, timer: QtCore.QTimer) -> None:
        self._timer: Optional[QtCore.QTimer] = timer

    def stop(self) -> None:
        """Stop the timer and release it; safe to call from its own timeout."""
        timer = self._timer
        if timer is None:
            return
        self._timer = None
        timer.stop()
        timer.timeout.disconnect()
        timer.deleteLater()

    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()


class QtScheduler(QtCore.QObject):
    """Timers are children of the scheduler and are deleted with deleteLater once stopped or fired."""

    def repeat(self, interval_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QtCore.QTimer(self)
        timer.timeout.connect(callback)
        timer.start(interval_ms)
        return QtTimerHandle(timer)

    def once(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QtCore.QTimer(self)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer)

        def fire() -> None:
            try:
                callback()
            finally:
                handle.stop()

        timer.timeout.connect(fire)
        timer.start(delay_ms)
        return handle
