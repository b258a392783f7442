"""Dash layout: control sidebar, primary scatter plot, projection plot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dash import dcc, html

from . import theme
from .figures import build_figure

if TYPE_CHECKING:
    from ..session import ViewSession


_H4_STYLE = {
    "margin": "12px 0 6px 0",
    "fontSize": "11px",
    "fontWeight": "700",
    "color": theme.BASE01,
    "textTransform": "uppercase",
    "letterSpacing": "0.5px",
}


def status_text(session: ViewSession) -> str:
    if not session.is_ready:
        return "No data loaded"
    return f"{len(session.dataset):,} points loaded"


def build_layout(session: ViewSession) -> html.Div:
    """Return the complete app layout."""
    config = session.config
    primary_fig = build_figure(session.primary_commands(), config.primary)
    projection_fig = build_figure(
        session.projection_commands(), config.projection,
        drag_mode="pan", empty_message="Lasso two or more points",
    )

    return html.Div(
        style={
            "display": "flex",
            "backgroundColor": theme.BASE3,
            "fontFamily": theme.FONT_STACK,
            "color": theme.BASE00,
            "minHeight": "100vh",
        },
        children=[
            # ── Sidebar ──
            html.Div(
                style={
                    "width": theme.SIDEBAR_WIDTH,
                    "backgroundColor": theme.BASE2,
                    "padding": "12px",
                    "borderRight": f"1px solid {theme.BASE1}",
                },
                children=[
                    html.Div("t-SNE Lasso Explorer",
                             style={"fontWeight": "700", "color": theme.BASE01}),
                    html.H4("Drag Mode", style=_H4_STYLE),
                    dcc.RadioItems(
                        id="drag-mode",
                        options=[
                            {"label": "Lasso", "value": "lasso"},
                            {"label": "Pan", "value": "pan"},
                        ],
                        value="lasso",
                        inline=True,
                    ),
                    html.Button(
                        "Reset Zoom", id="reset-zoom-btn",
                        style={"width": "100%", "marginTop": "8px"},
                    ),
                    html.H4("Selection Stats", style=_H4_STYLE),
                    html.Div(id="selection-stats", children="Draw a lasso"),
                    html.Div(
                        id="status-bar",
                        style={"marginTop": "16px", "fontSize": "11px", "color": theme.BASE1},
                        children=status_text(session),
                    ),
                ],
            ),
            # ── Plots ──
            html.Div(
                style={"padding": "12px"},
                children=[
                    dcc.Graph(
                        id="primary-graph",
                        figure=primary_fig,
                        config={"scrollZoom": True, "displayModeBar": False},
                    ),
                    html.H4("Projection of Selected Points", style=_H4_STYLE),
                    dcc.Graph(
                        id="projection-graph",
                        figure=projection_fig,
                        config={"displayModeBar": False},
                    ),
                ],
            ),
        ],
    )
