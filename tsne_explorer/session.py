"""The single view session that owns all interactive state."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .config import ExplorerConfig
from .geometry import LinearScale
from .io import Dataset
from .lasso import LassoCapture, LassoPath
from .projection import ProjectionResult, project
from .selection import Selection, select
from .visualization.commands import (
    DrawCommand,
    render_primary,
    render_projection,
    scales_for,
)
from .zoom import ZoomController, ZoomState

logger = logging.getLogger(__name__)


class ViewSession:
    """Dataset, zoom, lasso, selection and projection for one open view.

    Pointer events always drive the lasso.  Zoom and pan requests that arrive
    while a lasso drag is in progress are dropped.

    Parameters
    ----------
    config : ExplorerConfig, optional
        Plot sizes, zoom limits and lasso sampling.
    """

    def __init__(self, config: Optional[ExplorerConfig] = None) -> None:
        self.config = config or ExplorerConfig()
        primary = self.config.primary
        self.zoom = ZoomController(primary.width, primary.height, self.config.scale_extent)
        self.lasso = LassoCapture(min_distance=self.config.lasso_min_distance)
        self.lasso.on_complete(self._on_lasso_complete)

        self.dataset: Optional[Dataset] = None
        self.base_x: Optional[LinearScale] = None
        self.base_y: Optional[LinearScale] = None
        self.selection: Selection = Selection.empty()
        self.projection: Optional[ProjectionResult] = None

    @property
    def is_ready(self) -> bool:
        return self.dataset is not None

    def load(self, dataset: Optional[Dataset]) -> None:
        """Install *dataset* and reset every piece of derived state.

        ``None`` (a failed load) leaves the session empty and inert.
        """
        self.dataset = dataset
        self.selection = Selection.empty()
        self.projection = None
        self.lasso.cancel()
        self.zoom.reset()
        if dataset is None:
            self.base_x = self.base_y = None
            return
        self.base_x, self.base_y = scales_for(dataset.coordinates[:, :2], self.config.primary)

    def effective_scales(self) -> Tuple[LinearScale, LinearScale]:
        if self.base_x is None or self.base_y is None:
            raise RuntimeError("No dataset loaded")
        return self.zoom.effective_scales(self.base_x, self.base_y)

    # ------------------------------------------------------------------ #
    #  Pointer events (lasso)
    # ------------------------------------------------------------------ #

    def pointer_down(self, x: float, y: float) -> None:
        if not self.is_ready:
            return
        self.lasso.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.lasso.pointer_move(x, y)

    def pointer_up(self) -> Optional[LassoPath]:
        return self.lasso.pointer_up()

    def apply_lasso(self, vertices: Sequence[Sequence[float]]) -> Selection:
        """Replay a complete lasso gesture delivered in one piece."""
        if not self.is_ready or not vertices:
            return self.selection
        (x0, y0), *rest = vertices
        self.pointer_down(x0, y0)
        for x, y in rest:
            self.pointer_move(x, y)
        self.pointer_up()
        return self.selection

    def _on_lasso_complete(self, path: LassoPath) -> None:
        if not self.is_ready:
            return
        x_scale, y_scale = self.effective_scales()
        self.selection = select(path, self.dataset.coordinates, x_scale, y_scale)
        logger.info("Selected %d points", len(self.selection))
        result = project(self.selection)
        if result is not None:
            self.projection = result

    # ------------------------------------------------------------------ #
    #  Zoom / pan
    # ------------------------------------------------------------------ #

    def _zoom_allowed(self, gesture: str) -> bool:
        if self.lasso.is_dragging:
            logger.debug("Ignoring %s during lasso drag", gesture)
            return False
        return True

    def zoom_by(self, factor: float, anchor=None) -> ZoomState:
        if self._zoom_allowed("zoom"):
            self.zoom.scale_by(factor, anchor)
        return self.zoom.state

    def wheel(self, delta_y: float, anchor=None, delta_mode: int = 0) -> ZoomState:
        if self._zoom_allowed("wheel"):
            self.zoom.wheel(delta_y, anchor, delta_mode)
        return self.zoom.state

    def pan_by(self, dx: float, dy: float) -> ZoomState:
        if self._zoom_allowed("pan"):
            self.zoom.pan_by(dx, dy)
        return self.zoom.state

    def apply_viewport(self, x0: float, x1: float, y0: float, y1: float) -> ZoomState:
        if self._zoom_allowed("viewport change"):
            self.zoom.apply_viewport(x0, x1, y0, y1)
        return self.zoom.state

    def reset_zoom(self) -> ZoomState:
        if self._zoom_allowed("zoom reset"):
            self.zoom.reset()
        return self.zoom.state

    # ------------------------------------------------------------------ #
    #  Rendering
    # ------------------------------------------------------------------ #

    def primary_commands(self) -> List[DrawCommand]:
        return render_primary(self)

    def projection_commands(self) -> List[DrawCommand]:
        return render_projection(
            self.projection, self.config.projection, self.config.point_radius
        )
