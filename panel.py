from __future__ import annotations

from typing import List, Optional

from pyqtgraph.Qt import QtCore, QtWidgets

from drawing import DrawingState

SWATCH_SIZE = 50


class ControlPanel(QtWidgets.QWidget):
    """Palette swatches plus the Play and Clear triggers."""

    def __init__(self, state: DrawingState) -> None:
        super().__init__()
        self.state = state
        self.swatches: List[QtWidgets.QPushButton] = []
        self._styled_index: Optional[int] = None

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        swatch_row = QtWidgets.QHBoxLayout()
        swatch_row.setContentsMargins(12, 12, 12, 12)
        swatch_row.addStretch(1)
        for idx, entry in enumerate(state.palette):
            button = QtWidgets.QPushButton()
            button.setFixedSize(SWATCH_SIZE, SWATCH_SIZE)
            button.setCursor(QtCore.Qt.PointingHandCursor)
            button.setToolTip(entry.note)
            button.clicked.connect(lambda _checked=False, i=idx: self.state.select_palette(i))
            swatch_row.addWidget(button)
            self.swatches.append(button)
        swatch_row.addStretch(1)
        layout.addLayout(swatch_row)

        action_row = QtWidgets.QHBoxLayout()
        action_row.addStretch(1)
        self.play_button = self._action_button("Play Drawing", "#007aff")
        self.play_button.clicked.connect(lambda _checked=False: self.state.play_drawing())
        action_row.addWidget(self.play_button)
        self.clear_button = self._action_button("Clear Canvas", "#ff3b30")
        self.clear_button.clicked.connect(lambda _checked=False: self.state.clear_canvas())
        action_row.addWidget(self.clear_button)
        action_row.addStretch(1)
        layout.addLayout(action_row)

        state.subscribe(self.refresh)
        self.refresh()

    @staticmethod
    def _action_button(text: str, color: str) -> QtWidgets.QPushButton:
        button = QtWidgets.QPushButton(text)
        button.setStyleSheet(
            f"""
            QPushButton {{
                background: {color};
                color: white;
                border: none;
                border-radius: 10px;
                padding: 12px 18px;
            }}
            QPushButton:pressed {{
                background: #2e3545;
            }}
            """
        )
        return button

    def refresh(self) -> None:
        if self._styled_index == self.state.active_index:
            return
        self._styled_index = self.state.active_index
        radius = SWATCH_SIZE // 2
        for idx, (button, entry) in enumerate(zip(self.swatches, self.state.palette)):
            border = "3px solid #1c2230" if idx == self.state.active_index else "none"
            button.setStyleSheet(
                f"background: {entry.color}; border: {border}; border-radius: {radius}px;"
            )
