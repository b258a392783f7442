"""Turn draw commands into Plotly figures.

Figures are laid out in screen pixels: the x axis spans ``[0, width]`` and the
y axis ``[height, 0]``, so Plotly's lasso vertices and zoom windows come back
in the same coordinates the selection and zoom engines use.  Tick labels are
the data values computed by the render pipeline.
"""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from ..config import PlotConfig
from ..visualization.commands import AxisCommand, CircleCommand, DrawCommand, PathCommand
from . import theme


def build_figure(
    commands: Sequence[DrawCommand],
    plot: PlotConfig,
    *,
    drag_mode: str = "lasso",
    empty_message: str = "No data loaded",
) -> go.Figure:
    """Build a Plotly figure from *commands*.

    Parameters
    ----------
    commands : sequence of DrawCommand
        Output of :func:`~tsne_explorer.visualization.commands.render_scatter`
        or one of its callers.
    plot : PlotConfig
        Size and margins of the plot region.
    drag_mode : str
        Plotly drag mode (``"lasso"`` or ``"pan"``).
    empty_message : str
        Text shown when *commands* is empty.

    Returns
    -------
    go.Figure
    """
    fig = go.Figure()
    layout = _base_layout(plot, drag_mode)

    circles = [c for c in commands if isinstance(c, CircleCommand)]
    axes = {c.orient: c for c in commands if isinstance(c, AxisCommand)}
    paths = [c for c in commands if isinstance(c, PathCommand)]

    if circles:
        fig.add_trace(go.Scattergl(
            x=[c.cx for c in circles],
            y=[c.cy for c in circles],
            mode="markers",
            name="Points",
            showlegend=False,
            marker=dict(
                size=[2 * c.r for c in circles],
                color=[c.fill for c in circles],
            ),
            customdata=[c.index for c in circles],
            hovertemplate="#%{customdata}<extra></extra>",
        ))

    if "bottom" in axes:
        _apply_ticks(layout["xaxis"], axes["bottom"])
    if "left" in axes:
        _apply_ticks(layout["yaxis"], axes["left"])

    layout["shapes"] = [
        dict(
            type="path",
            path=p.d,
            fillcolor=p.fill,
            line=dict(color=p.stroke, width=p.stroke_width),
            xref="x",
            yref="y",
        )
        for p in paths
    ]

    if not commands:
        layout["annotations"] = [dict(
            text=empty_message,
            xref="x",
            yref="y",
            x=plot.width / 2,
            y=plot.height / 2,
            showarrow=False,
            font=dict(color=theme.BASE1),
        )]

    fig.update_layout(layout)
    return fig


def _apply_ticks(axis: dict, command: AxisCommand) -> None:
    axis["tickmode"] = "array"
    axis["tickvals"] = [t.position for t in command.ticks]
    axis["ticktext"] = [t.label for t in command.ticks]


def _base_layout(plot: PlotConfig, drag_mode: str) -> dict:
    """Return common layout kwargs."""
    m = plot.margins
    return dict(
        width=plot.width,
        height=plot.height,
        dragmode=drag_mode,
        hovermode="closest",
        paper_bgcolor=theme.BASE3,
        plot_bgcolor=theme.BASE3,
        font=dict(family=theme.FONT_STACK, size=11, color=theme.BASE00),
        margin=dict(l=m.left, r=m.right, t=m.top, b=m.bottom),
        xaxis=dict(
            range=[0, plot.width],
            showgrid=False,
            zeroline=False,
            color=theme.BASE00,
        ),
        yaxis=dict(
            range=[plot.height, 0],
            showgrid=False,
            zeroline=False,
            color=theme.BASE00,
        ),
    )
