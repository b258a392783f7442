"""Colour assignment for class labels and lasso selections."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import plotly.express as px
from matplotlib import colors as mcolors

from ..selection import Selection

# d3.schemeCategory10
CATEGORY10 = tuple(px.colors.qualitative.D3)

SELECTED_COLOR = "red"
PROJECTION_COLOR = "blue"
LASSO_STROKE = "blue"
LASSO_FILL = "#ADD8E6"  # lightblue


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert a hex colour string (e.g. ``'#1f77b4'``) to ``(R, G, B)``."""
    try:
        rgb_float = mcolors.to_rgb(hex_color)
        return tuple(int(round(c * 255)) for c in rgb_float)
    except ValueError:
        return (0, 0, 0)


def rgba(color: str, alpha: float) -> str:
    """CSS ``rgba(...)`` string for any matplotlib-understood colour."""
    r, g, b = hex_to_rgb(color)
    return f"rgba({r},{g},{b}, {alpha:g})"


def label_color(label: int) -> str:
    """Category10 colour of an integer class label."""
    return CATEGORY10[int(label) % len(CATEGORY10)]


def color_mapping(
    labels, selection: Optional[Selection] = None
) -> Dict[int, str]:
    """Map every point index to its display colour.

    Points in *selection* get :data:`SELECTED_COLOR`; the rest keep their
    class colour.
    """
    labels = np.asarray(labels, dtype=int)
    mapping = {i: label_color(lbl) for i, lbl in enumerate(labels)}
    if selection is not None:
        for idx in selection.indices:
            mapping[int(idx)] = SELECTED_COLOR
    return mapping
