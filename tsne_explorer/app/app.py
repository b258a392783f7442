"""Dash app factory and the server-side view session."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import ExplorerConfig
from ..io import Dataset
from ..session import ViewSession

logger = logging.getLogger(__name__)

# Module-level singleton — set by create_app()
session: ViewSession | None = None


def create_app(
    dataset: Optional[Dataset],
    config: Optional[ExplorerConfig] = None,
) -> "dash.Dash":
    """Create and configure the Dash application.

    Parameters
    ----------
    dataset : Dataset or None
        Loaded embeddings and labels.  ``None`` (a failed load) still yields a
        working app that shows two empty plots.
    config : ExplorerConfig, optional
        Plot sizes and interaction settings.

    Returns
    -------
    dash.Dash
    """
    import dash

    from .layout import build_layout
    from . import callbacks

    global session
    session = ViewSession(config)
    session.load(dataset)
    if dataset is None:
        logger.warning("Starting with an empty view; no dataset was loaded")

    app = dash.Dash(
        __name__,
        title="t-SNE Lasso Explorer",
        suppress_callback_exceptions=True,
    )
    app.layout = build_layout(session)
    callbacks.register(app)

    return app
