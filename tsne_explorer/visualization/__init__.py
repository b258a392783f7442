"""Render pipeline: colours and backend-independent draw commands."""

from .colors import CATEGORY10, color_mapping, hex_to_rgb, label_color, rgba
from .commands import (
    AxisCommand,
    CircleCommand,
    PathCommand,
    Tick,
    render_axes,
    render_lasso,
    render_primary,
    render_projection,
    render_scatter,
    scales_for,
)

__all__ = [
    "CATEGORY10",
    "color_mapping",
    "hex_to_rgb",
    "label_color",
    "rgba",
    "AxisCommand",
    "CircleCommand",
    "PathCommand",
    "Tick",
    "render_axes",
    "render_lasso",
    "render_primary",
    "render_projection",
    "render_scatter",
    "scales_for",
]
