"""Pan/zoom state for the primary scatter plot.

The behaviour mirrors d3-zoom: a uniform scale factor ``k`` plus a translation,
a bounded scale extent, and a translate extent that keeps the viewport inside
the world rectangle ``[0, 0] - [width, height]``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .geometry import LinearScale, compose_transform

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class ZoomState:
    """Screen-to-zoomed-screen transform ``p' = k * p + (x, y)``."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point2D) -> Point2D:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Point2D) -> Point2D:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def translate(self, dx: float, dy: float) -> "ZoomState":
        """Translate by ``(dx, dy)`` expressed in untransformed units."""
        return ZoomState(self.k, self.x + self.k * dx, self.y + self.k * dy)


IDENTITY = ZoomState()


class ZoomController:
    """Owns the current :class:`ZoomState` and applies gestures to it.

    Parameters
    ----------
    width, height : float
        Size of the primary plot; also the world rectangle panning is
        bounded to.
    scale_extent : tuple[float, float]
        Minimum and maximum zoom factor.
    """

    def __init__(
        self,
        width: float,
        height: float,
        scale_extent: Tuple[float, float] = (0.5, 10.0),
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.scale_extent = scale_extent
        self._state = IDENTITY
        self._listeners: List[Callable[[ZoomState], None]] = []

    @property
    def state(self) -> ZoomState:
        return self._state

    def on_change(self, listener: Callable[[ZoomState], None]) -> None:
        """Call *listener* with the new state after every update."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------ #
    #  Gestures
    # ------------------------------------------------------------------ #

    def scale_to(self, k: float, anchor: Optional[Point2D] = None) -> ZoomState:
        """Set the zoom factor, keeping *anchor* (default: centre) fixed."""
        if anchor is None:
            anchor = (self.width / 2, self.height / 2)
        return self._update(self._rescale(self._state, k, anchor))

    def scale_by(self, factor: float, anchor: Optional[Point2D] = None) -> ZoomState:
        return self.scale_to(self._state.k * factor, anchor)

    def wheel(
        self,
        delta_y: float,
        anchor: Optional[Point2D] = None,
        delta_mode: int = 0,
    ) -> ZoomState:
        """Zoom in response to a wheel event, d3 style.

        ``delta_mode`` follows the DOM: 0 pixels, 1 lines, 2 pages.
        """
        unit = 0.002 if delta_mode == 0 else 0.05 if delta_mode == 1 else 1.0
        return self.scale_by(2 ** (-delta_y * unit), anchor)

    def pan_by(self, dx: float, dy: float) -> ZoomState:
        """Shift the view by ``(dx, dy)`` screen pixels."""
        s = self._state
        return self._update(ZoomState(s.k, s.x + dx, s.y + dy))

    def apply_viewport(self, x0: float, x1: float, y0: float, y1: float) -> ZoomState:
        """Zoom so that the screen window ``[x0, x1] x [y0, y1]`` fills the plot.

        Rendering backends that zoom on their own report the visible window in
        the coordinates of the currently displayed frame; this folds that
        relative change into the stored state.
        """
        left, right = sorted((x0, x1))
        top, _ = sorted((y0, y1))
        if right - left <= 0:
            logger.debug("Ignoring empty viewport [%s, %s]", x0, x1)
            return self._state
        k_rel = self.width / (right - left)
        s = self._state
        candidate = ZoomState(
            s.k * k_rel,
            k_rel * s.x - k_rel * left,
            k_rel * s.y - k_rel * top,
        )
        lo, hi = self.scale_extent
        if not lo <= candidate.k <= hi:
            centre = (self.width / 2, self.height / 2)
            candidate = self._rescale(candidate, candidate.k, centre)
        return self._update(candidate)

    def reset(self) -> ZoomState:
        return self._update(IDENTITY)

    # ------------------------------------------------------------------ #
    #  Derived scales
    # ------------------------------------------------------------------ #

    def effective_scales(
        self, base_x: LinearScale, base_y: LinearScale
    ) -> Tuple[LinearScale, LinearScale]:
        """Return the zoomed x and y scales for the current state."""
        return (
            compose_transform(base_x, self._state, "x"),
            compose_transform(base_y, self._state, "y"),
        )

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _rescale(self, state: ZoomState, k: float, anchor: Point2D) -> ZoomState:
        lo, hi = self.scale_extent
        k1 = max(lo, min(hi, k))
        px, py = state.invert(anchor)
        return ZoomState(k1, anchor[0] - px * k1, anchor[1] - py * k1)

    def _constrain(self, state: ZoomState) -> ZoomState:
        # Viewport and translate extent are both the world rectangle.
        vx0, vy0 = state.invert((0.0, 0.0))
        vx1, vy1 = state.invert((self.width, self.height))
        dx0, dx1 = vx0, vx1 - self.width
        dy0, dy1 = vy0, vy1 - self.height
        dx = (dx0 + dx1) / 2 if dx1 > dx0 else (min(0.0, dx0) or max(0.0, dx1))
        dy = (dy0 + dy1) / 2 if dy1 > dy0 else (min(0.0, dy0) or max(0.0, dy1))
        return state.translate(dx, dy)

    def _update(self, state: ZoomState) -> ZoomState:
        lo, hi = self.scale_extent
        if not lo <= state.k <= hi:
            state = ZoomState(max(lo, min(hi, state.k)), state.x, state.y)
        self._state = self._constrain(state)
        logger.debug("Zoom state -> %s", self._state)
        for listener in self._listeners:
            listener(self._state)
        return self._state
