from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from config import PALETTE

Point = Tuple[float, float]


@dataclass(frozen=True)
class PaletteEntry:
    color: str
    note: str


@dataclass
class Stroke:
    color: str
    note: str
    points: List[Point] = field(default_factory=list)
    progress: float = 1.0


@dataclass(frozen=True)
class NoStroke:
    pass


@dataclass
class ActiveStroke:
    stroke: Stroke


StrokeSlot = Union[NoStroke, ActiveStroke]


def default_palette() -> List[PaletteEntry]:
    return [PaletteEntry(color=color, note=note) for color, note in PALETTE]


def visible_points(stroke: Stroke) -> List[Point]:
    """Return the prefix of points whose index ratio is within the stroke's progress.

    A point at index ``i`` is shown when ``i / len(points) <= progress``, so the
    first point is always included and a stroke at 1.0 shows every point.
    """
    total = len(stroke.points)
    if total == 0:
        return []
    return [p for i, p in enumerate(stroke.points) if i / total <= stroke.progress]
