"""All Dash callbacks for the lasso explorer app."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from dash import Input, Output, callback_context, html
from dash.exceptions import PreventUpdate

from ..config import PlotConfig
from ..visualization.colors import label_color
from .figures import build_figure
from .layout import status_text

logger = logging.getLogger(__name__)

Viewport = Tuple[float, float, float, float]


def lasso_vertices(selected_data: Optional[dict]) -> Optional[List[Tuple[float, float]]]:
    """Extract the lasso polygon from a Plotly ``selectedData`` payload.

    Box selections are turned into the equivalent four-vertex polygon.
    Returns ``None`` when the payload carries no selection shape.
    """
    if not selected_data:
        return None
    lasso = selected_data.get("lassoPoints")
    if lasso and lasso.get("x") and lasso.get("y"):
        return [(float(x), float(y)) for x, y in zip(lasso["x"], lasso["y"])]
    box = selected_data.get("range")
    if box and box.get("x") and box.get("y"):
        (x0, x1), (y0, y1) = box["x"], box["y"]
        return [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return None


def _axis_range(relayout: dict, axis: str) -> Optional[Tuple[float, float]]:
    if f"{axis}.range[0]" in relayout and f"{axis}.range[1]" in relayout:
        return float(relayout[f"{axis}.range[0]"]), float(relayout[f"{axis}.range[1]"])
    if f"{axis}.range" in relayout:
        lo, hi = relayout[f"{axis}.range"]
        return float(lo), float(hi)
    return None


def viewport_from_relayout(relayout: Optional[dict], plot: PlotConfig) -> Optional[Viewport]:
    """Visible screen window ``(x0, x1, y0, y1)`` reported by a Plotly relayout.

    An axis missing from the payload is taken as unchanged.  Returns ``None``
    when neither axis moved.
    """
    if not relayout:
        return None
    x = _axis_range(relayout, "xaxis")
    y = _axis_range(relayout, "yaxis")
    if x is None and y is None:
        return None
    x0, x1 = x if x is not None else (0.0, float(plot.width))
    y0, y1 = y if y is not None else (float(plot.height), 0.0)
    return x0, x1, y0, y1


def is_autorange(relayout: Optional[dict]) -> bool:
    """True for the double-click "reset axes" relayout."""
    return bool(relayout) and any(
        relayout.get(key) for key in ("xaxis.autorange", "yaxis.autorange")
    )


def selection_stats(session) -> html.Div:
    """Per-label counts of the current selection, with a distribution bar."""
    selection = session.selection
    if not session.is_ready or len(selection) == 0:
        return html.Div("No points selected", style={"color": "#93A1A1"})

    frame = session.dataset.to_frame()
    counts = frame.loc[selection.indices, "label"].value_counts()
    total = counts.sum()

    bar_segments = []
    stats_rows = []
    for label, count in counts.items():
        pct = count / total * 100
        dot_color = label_color(label)
        bar_segments.append(
            html.Div(
                style={"width": f"{pct}%", "backgroundColor": dot_color, "height": "100%"},
                title=f"class {label}: {pct:.1f}%",
            )
        )
        stats_rows.append(
            html.Div(
                style={"display": "flex", "gap": "6px", "alignItems": "center"},
                children=[
                    html.Span(style={
                        "backgroundColor": dot_color,
                        "width": "8px", "height": "8px",
                        "borderRadius": "50%", "display": "inline-block",
                    }),
                    html.Span(f"class {label}", style={"flex": "1"}),
                    html.Span(f"{count} ({pct:.1f}%)"),
                ],
            )
        )

    return html.Div([
        html.Div(f"Selected {len(selection)} points", style={"marginBottom": "4px"}),
        html.Div(
            style={"display": "flex", "height": "8px", "marginBottom": "6px"},
            children=bar_segments,
        ),
        *stats_rows,
    ])


def register(app):
    """Register all callbacks on the Dash app instance."""

    # ------------------------------------------------------------------ #
    #  Lasso / zoom / pan → both figures
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("primary-graph", "figure"),
        Output("projection-graph", "figure"),
        Output("selection-stats", "children"),
        Output("status-bar", "children"),
        Input("primary-graph", "selectedData"),
        Input("primary-graph", "relayoutData"),
        Input("reset-zoom-btn", "n_clicks"),
        Input("drag-mode", "value"),
        prevent_initial_call=True,
    )
    def update_view(selected_data, relayout_data, reset_clicks, drag_mode):
        from .app import session
        if session is None or not session.is_ready:
            raise PreventUpdate

        ctx = callback_context
        if not ctx.triggered:
            raise PreventUpdate
        trigger = ctx.triggered[0]["prop_id"]
        drag_mode = drag_mode or "lasso"
        logger.debug("update_view triggered by %s", trigger)

        if trigger == "primary-graph.selectedData":
            vertices = lasso_vertices(selected_data)
            if vertices is None:
                raise PreventUpdate
            session.apply_lasso(vertices)
        elif trigger == "primary-graph.relayoutData":
            if is_autorange(relayout_data):
                session.reset_zoom()
            else:
                viewport = viewport_from_relayout(relayout_data, session.config.primary)
                if viewport is None:
                    raise PreventUpdate
                session.apply_viewport(*viewport)
        elif trigger == "reset-zoom-btn.n_clicks":
            session.reset_zoom()

        primary_fig = build_figure(
            session.primary_commands(), session.config.primary, drag_mode=drag_mode,
        )
        projection_fig = build_figure(
            session.projection_commands(), session.config.projection,
            drag_mode="pan", empty_message="Lasso two or more points",
        )
        return primary_fig, projection_fig, selection_stats(session), status_text(session)
