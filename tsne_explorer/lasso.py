"""Freeform lasso capture driven by pointer events."""

from __future__ import annotations

import enum
import logging
import math
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]
LassoPath = Tuple[Point2D, ...]


class LassoPhase(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class LassoCapture:
    """Builds a polygon from a pointer-down / move / up sequence.

    Vertices are stored in raw screen coordinates; zoom is accounted for when
    the polygon is used for selection, not here.

    Parameters
    ----------
    min_distance : float
        Pointer samples closer than this (in pixels) to the last recorded
        vertex are skipped.  ``0`` records every sample.
    """

    def __init__(self, min_distance: float = 0.0) -> None:
        self.min_distance = min_distance
        self.phase = LassoPhase.IDLE
        self._path: List[Point2D] = []
        self._listeners: List[Callable[[LassoPath], None]] = []

    @property
    def is_dragging(self) -> bool:
        return self.phase is LassoPhase.DRAGGING

    @property
    def path(self) -> LassoPath:
        return tuple(self._path)

    def on_complete(self, listener: Callable[[LassoPath], None]) -> None:
        """Run *listener* with the closed path on every pointer-up."""
        self._listeners.append(listener)

    def pointer_down(self, x: float, y: float) -> None:
        if self.is_dragging:
            logger.debug("pointer_down while dragging; restarting lasso")
        self.phase = LassoPhase.DRAGGING
        self._path = [(float(x), float(y))]

    def pointer_move(self, x: float, y: float) -> None:
        if not self.is_dragging:
            return
        point = (float(x), float(y))
        if self.min_distance > 0:
            lx, ly = self._path[-1]
            if math.hypot(point[0] - lx, point[1] - ly) < self.min_distance:
                return
        self._path.append(point)

    def pointer_up(self) -> Optional[LassoPath]:
        """Close the lasso and hand it to the listeners.

        Returns the closed path, or ``None`` when no drag was in progress.
        """
        if not self.is_dragging:
            return None
        closed = tuple(self._path)
        self.phase = LassoPhase.IDLE
        try:
            for listener in self._listeners:
                listener(closed)
        finally:
            self._path = []
        return closed

    def cancel(self) -> None:
        """Abandon any drag in progress without notifying listeners."""
        self.phase = LassoPhase.IDLE
        self._path = []

    def svg_path(self, closed: bool = False) -> str:
        """Current trace as an SVG path string (``M x,y L x,y ... Z``)."""
        if not self._path:
            return ""
        head, *rest = self._path
        d = f"M {head[0]:g},{head[1]:g}"
        for x, y in rest:
            d += f" L {x:g},{y:g}"
        return d + " Z" if closed else d
