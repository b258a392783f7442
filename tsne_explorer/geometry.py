"""Screen-space geometry: linear scales, zoom composition and polygon tests.

Screen coordinates follow SVG conventions: the origin is the top-left corner of
the plot and ``y`` grows downwards.  All functions here are pure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from .zoom import ZoomState

# Absolute tolerance (in pixels) for deciding that a point lies on an edge
_EDGE_EPS = 1e-9

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _tick_spec(start: float, stop: float, count: int) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Return round tick values spanning ``[start, stop]`` in ascending order.

    Uses the 1-2-5 step ladder of d3's ``ticks``.
    """
    if count <= 0:
        return []
    lo, hi = min(start, stop), max(start, stop)
    if lo == hi:
        return [float(lo)]
    i1, i2, inc = _tick_spec(lo, hi, count)
    if i2 < i1:
        return []
    if inc < 0:
        return [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    return [float((i1 + i) * inc) for i in range(i2 - i1 + 1)]


def tick_step(start: float, stop: float, count: int = 10) -> float:
    """Spacing between consecutive values returned by :func:`nice_ticks`."""
    lo, hi = min(start, stop), max(start, stop)
    if lo == hi or count <= 0:
        return 0.0
    _, _, inc = _tick_spec(lo, hi, count)
    return 1 / -inc if inc < 0 else float(inc)


@dataclass(frozen=True)
class LinearScale:
    """Affine map from a data *domain* to a pixel *range*.

    Works on scalars and numpy arrays alike.  A zero-width domain maps every
    value to the middle of the range.
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        value = np.asarray(value, dtype=float)
        if d1 == d0:
            out = np.full_like(value, (r0 + r1) / 2)
        else:
            out = r0 + (value - d0) * (r1 - r0) / (d1 - d0)
        return float(out) if out.ndim == 0 else out

    def invert(self, value):
        """Map pixel positions back to domain values."""
        return LinearScale(self.range, self.domain)(value)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10):
        """Return a formatter whose precision matches the tick spacing."""
        step = tick_step(self.domain[0], self.domain[1], count)
        precision = max(0, -math.floor(math.log10(step))) if step > 0 else 0

        def fmt(value: float) -> str:
            return f"{value:,.{precision}f}"

        return fmt


def extent(values) -> Tuple[float, float]:
    """``(min, max)`` of *values*; ``(0.0, 1.0)`` for an empty input."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return (0.0, 1.0)
    return (float(values.min()), float(values.max()))


def compose_transform(
    base_scale: LinearScale, zoom_state: ZoomState, axis: str = "x"
) -> LinearScale:
    """Return the on-screen scale of *base_scale* under *zoom_state*.

    The range is kept and the domain is replaced by the data interval that is
    visible after zooming, so ``result(v) == k * base_scale(v) + t`` for the
    translation ``t`` of the requested axis.
    """
    if axis not in ("x", "y"):
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
    t = zoom_state.x if axis == "x" else zoom_state.y
    r0, r1 = base_scale.range
    visible = base_scale.invert(np.array([(r0 - t) / zoom_state.k, (r1 - t) / zoom_state.k]))
    return LinearScale((float(visible[0]), float(visible[1])), base_scale.range)


def _as_polygon(polygon) -> np.ndarray | None:
    poly = np.asarray(polygon, dtype=float)
    if poly.ndim != 2 or poly.shape[0] < 3 or poly.shape[1] < 2:
        return None
    return poly[:, :2]


def points_in_polygon(points, polygon) -> np.ndarray:
    """Even-odd membership of *points* in the auto-closed *polygon*.

    Parameters
    ----------
    points : array-like
        Shape ``(n, d)`` with ``d >= 2``; only the first two columns are used.
    polygon : array-like
        Ordered vertices ``(m, 2)``; the last vertex is implicitly joined to the
        first.  With fewer than three vertices nothing is inside.

    Returns
    -------
    np.ndarray
        Boolean mask of length ``n``.  Points exactly on an edge or a vertex
        are reported as outside.
    """
    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        pts = np.empty((0, 2))
    elif pts.ndim != 2 or pts.shape[1] < 2:
        raise ValueError(f"points must have shape (n, 2), got {pts.shape}")
    pts = pts[:, :2]
    inside = np.zeros(len(pts), dtype=bool)
    poly = _as_polygon(polygon)
    if poly is None or len(pts) == 0:
        return inside

    x = pts[:, 0]
    y = pts[:, 1]
    on_edge = np.zeros(len(pts), dtype=bool)
    xj, yj = poly[-1]
    for xi, yi in poly:
        denom = (yj - yi) if abs(yj - yi) > 1e-12 else 1e-12
        crosses = ((yi > y) != (yj > y)) & (x < (xj - xi) * (y - yi) / denom + xi)
        inside ^= crosses

        cross = (xj - xi) * (y - yi) - (yj - yi) * (x - xi)
        seg_len = math.hypot(xj - xi, yj - yi)
        on_edge |= (
            (np.abs(cross) <= _EDGE_EPS * max(seg_len, 1.0))
            & (x >= min(xi, xj) - _EDGE_EPS) & (x <= max(xi, xj) + _EDGE_EPS)
            & (y >= min(yi, yj) - _EDGE_EPS) & (y <= max(yi, yj) + _EDGE_EPS)
        )
        xj, yj = xi, yi
    return inside & ~on_edge


def point_in_polygon(point: Sequence[float], polygon) -> bool:
    """Scalar form of :func:`points_in_polygon`."""
    return bool(points_in_polygon([tuple(point[:2])], polygon)[0])
