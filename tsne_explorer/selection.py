"""Lasso membership of the rendered points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

from .geometry import LinearScale, points_in_polygon

logger = logging.getLogger(__name__)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class SelectedPoint:
    index: int
    point: Tuple[float, ...]


@dataclass(frozen=True, eq=False)
class Selection:
    """Points enclosed by a lasso, in data space.

    ``indices`` are positions in the original arrays (ascending) and
    ``points`` the matching untransformed coordinates.  Both arrays are
    read-only.
    """

    indices: np.ndarray
    points: np.ndarray

    @classmethod
    def empty(cls, dim: int = 2) -> "Selection":
        return cls(
            _frozen(np.empty(0, dtype=int)),
            _frozen(np.empty((0, dim), dtype=float)),
        )

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[SelectedPoint]:
        for idx, point in zip(self.indices, self.points):
            yield SelectedPoint(int(idx), tuple(float(v) for v in point))

    def __contains__(self, index: object) -> bool:
        return bool(np.any(self.indices == index))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return (
            np.array_equal(self.indices, other.indices)
            and np.array_equal(self.points, other.points)
        )

    def index_set(self) -> frozenset[int]:
        return frozenset(int(i) for i in self.indices)


def select(
    lasso_path: Sequence[Sequence[float]],
    points,
    effective_scale_x: LinearScale,
    effective_scale_y: LinearScale,
) -> Selection:
    """Return the points whose on-screen position falls inside *lasso_path*.

    Parameters
    ----------
    lasso_path : sequence of (x, y)
        Closed lasso polygon in screen pixels.
    points : array-like
        Data-space coordinates of shape ``(n, d)``; the first two columns are
        plotted.
    effective_scale_x, effective_scale_y : LinearScale
        The scales currently used to draw the points, zoom included.

    Returns
    -------
    Selection
        Indices and data-space coordinates of the enclosed points.
    """
    data = np.asarray(points, dtype=float)
    dim = data.shape[1] if data.ndim == 2 else 2
    if len(lasso_path) < 3 or data.size == 0:
        return Selection.empty(dim)

    screen = np.column_stack((
        effective_scale_x(data[:, 0]),
        effective_scale_y(data[:, 1]),
    ))
    mask = points_in_polygon(screen, lasso_path)
    indices = np.flatnonzero(mask)
    logger.debug("Lasso with %d vertices encloses %d / %d points",
                 len(lasso_path), len(indices), len(data))
    return Selection(_frozen(indices), _frozen(data[indices].copy()))
