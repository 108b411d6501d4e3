from __future__ import annotations

from typing import List, Tuple

import pyqtgraph as pg
from pyqtgraph.Qt import QtCore, QtGui, QtWidgets

from config import CANVAS_BG, CANVAS_BORDER, CANVAS_HEIGHT, CANVAS_WIDTH, LINE_WIDTH
from drawing import DrawingState
from strokes import NoStroke, Point, visible_points


def apply_drag(state: DrawingState, point: Point, finished: bool) -> None:
    """Translate one drag update into stroke operations."""
    if finished:
        state.end_stroke()
    elif isinstance(state.slot, NoStroke):
        state.start_stroke(point)
    else:
        state.add_point(point)


class GestureViewBox(pg.ViewBox):
    def __init__(self, state: DrawingState) -> None:
        super().__init__(enableMenu=False)
        self.state = state
        self.setMouseEnabled(x=False, y=False)

    def _point(self, scene_pos: QtCore.QPointF) -> Point:
        view_pos = self.mapSceneToView(scene_pos)
        return (view_pos.x(), view_pos.y())

    def mouseDragEvent(self, ev, axis=None) -> None:  # type: ignore[override]
        if ev.button() != QtCore.Qt.LeftButton:
            ev.ignore()
            return
        ev.accept()
        if ev.isStart():
            apply_drag(self.state, self._point(ev.buttonDownScenePos()), False)
        if ev.isFinish():
            apply_drag(self.state, self._point(ev.scenePos()), True)
        else:
            apply_drag(self.state, self._point(ev.scenePos()), False)

    def mouseClickEvent(self, ev) -> None:  # type: ignore[override]
        if ev.button() != QtCore.Qt.LeftButton:
            ev.ignore()
            return
        ev.accept()
        # A tap leaves a single-point stroke.
        apply_drag(self.state, self._point(ev.scenePos()), False)
        apply_drag(self.state, self._point(ev.scenePos()), True)


class StrokeCanvas(QtWidgets.QWidget):
    def __init__(self, state: DrawingState) -> None:
        super().__init__()
        self.state = state
        self.stroke_items: List[pg.PlotDataItem] = []

        layout = QtWidgets.QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.view_box = GestureViewBox(state)
        self.plot = pg.PlotWidget(viewBox=self.view_box, background=CANVAS_BG)
        self.plot.setFrameShape(QtWidgets.QFrame.Box)
        self.plot.setStyleSheet(f"border: 1px solid {CANVAS_BORDER};")
        self.plot.showGrid(x=False, y=False)
        self.plot.setMenuEnabled(False)
        self.plot.getPlotItem().hideButtons()
        self.plot.getPlotItem().hideAxis("left")
        self.plot.getPlotItem().hideAxis("bottom")
        self.plot.getPlotItem().layout.setContentsMargins(0, 0, 0, 0)
        self.plot.getPlotItem().setDefaultPadding(0)
        self.plot.setFixedSize(CANVAS_WIDTH, CANVAS_HEIGHT)
        self.view_box.invertY(True)
        self.plot.setXRange(0, CANVAS_WIDTH, padding=0)
        self.plot.setYRange(0, CANVAS_HEIGHT, padding=0)
        layout.addWidget(self.plot)

        state.subscribe(self.refresh)
        self.refresh()

    def _render_list(self) -> List[Tuple[str, List[Point]]]:
        items = [(stroke.color, visible_points(stroke)) for stroke in self.state.strokes]
        current = self.state.current_stroke
        if current is not None:
            items.append((current.color, list(current.points)))
        return items

    def refresh(self) -> None:
        wanted = self._render_list()
        while len(self.stroke_items) > len(wanted):
            self.plot.removeItem(self.stroke_items.pop())
        while len(self.stroke_items) < len(wanted):
            item = pg.PlotDataItem(connect="all")
            self.plot.addItem(item)
            self.stroke_items.append(item)
        for item, (color, points) in zip(self.stroke_items, wanted):
            xs = [p[0] for p in points]
            ys = [p[1] for p in points]
            item.setPen(self._pen(color))
            item.setData(xs, ys)

    @staticmethod
    def _pen(color: str) -> QtGui.QPen:
        pen = pg.mkPen(color, width=LINE_WIDTH)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        return pen
