"""Pure scatter-plot rendering: state in, list of draw commands out.

Commands carry screen-space geometry only, so any backend (Plotly figures in
:mod:`tsne_explorer.app.figures`, SVG, a test assertion) can consume them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import PlotConfig
from ..geometry import LinearScale, extent
from ..projection import ProjectionResult
from .colors import LASSO_FILL, LASSO_STROKE, PROJECTION_COLOR, color_mapping, rgba

if TYPE_CHECKING:
    from ..session import ViewSession


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class AxisCommand:
    """An axis line with ticks.

    ``orient`` is ``"bottom"`` (horizontal, drawn at ``y == offset``) or
    ``"left"`` (vertical, drawn at ``x == offset``).
    """

    orient: str
    offset: float
    ticks: Tuple[Tick, ...]


@dataclass(frozen=True)
class CircleCommand:
    cx: float
    cy: float
    r: float
    fill: str
    index: int


@dataclass(frozen=True)
class PathCommand:
    d: str
    fill: str
    stroke: str
    stroke_width: float


DrawCommand = Union[AxisCommand, CircleCommand, PathCommand]


def scales_for(points, plot: PlotConfig) -> Tuple[LinearScale, LinearScale]:
    """Linear scales fitting the data extent into the plot's inner area."""
    data = np.asarray(points, dtype=float).reshape(-1, 2) if len(points) else np.empty((0, 2))
    x = LinearScale(extent(data[:, 0]), plot.x_range)
    y = LinearScale(extent(data[:, 1]), plot.y_range)
    return x, y


def _axis(scale: LinearScale, orient: str, offset: float, count: int = 10) -> AxisCommand:
    fmt = scale.tick_format(count)
    ticks = tuple(
        Tick(value=v, position=float(scale(v)), label=fmt(v))
        for v in scale.ticks(count)
    )
    return AxisCommand(orient=orient, offset=float(offset), ticks=ticks)


def render_axes(
    x_scale: LinearScale, y_scale: LinearScale, plot: PlotConfig
) -> List[AxisCommand]:
    return [
        _axis(x_scale, "bottom", plot.height - plot.margins.bottom),
        _axis(y_scale, "left", plot.margins.left),
    ]


def render_scatter(
    points,
    colors: Union[str, Mapping[int, str], Sequence[str]],
    x_scale: LinearScale,
    y_scale: LinearScale,
    plot: PlotConfig,
    radius: float = 3.0,
) -> List[DrawCommand]:
    """Axes followed by one circle per point.

    *colors* is a single colour, a sequence aligned with *points*, or an
    index -> colour mapping.
    """
    commands: List[DrawCommand] = list(render_axes(x_scale, y_scale, plot))
    data = np.asarray(points, dtype=float)
    if data.size == 0:
        return commands
    cx = np.atleast_1d(x_scale(data[:, 0]))
    cy = np.atleast_1d(y_scale(data[:, 1]))
    for i in range(len(data)):
        fill = colors if isinstance(colors, str) else colors[i]
        commands.append(CircleCommand(float(cx[i]), float(cy[i]), radius, fill, i))
    return commands


def render_lasso(d: str) -> Optional[PathCommand]:
    if not d:
        return None
    return PathCommand(d=d, fill=rgba(LASSO_FILL, 0.4), stroke=LASSO_STROKE, stroke_width=2)


def render_primary(session: ViewSession) -> List[DrawCommand]:
    """Draw commands for the main plot under the session's live zoom."""
    if not session.is_ready:
        return []
    x_scale, y_scale = session.effective_scales()
    colors = color_mapping(session.dataset.labels, session.selection)
    commands = render_scatter(
        session.dataset.coordinates[:, :2],
        colors,
        x_scale,
        y_scale,
        session.config.primary,
        radius=session.config.point_radius,
    )
    lasso = render_lasso(session.lasso.svg_path())
    if lasso is not None:
        commands.append(lasso)
    return commands


def render_projection(
    result: Optional[ProjectionResult],
    plot: PlotConfig,
    radius: float = 3.0,
) -> List[DrawCommand]:
    """Full redraw of the projection plot; nothing when there is no result."""
    if result is None:
        return []
    x_scale, y_scale = scales_for(result.points, plot)
    return render_scatter(result.points, PROJECTION_COLOR, x_scale, y_scale, plot, radius)
