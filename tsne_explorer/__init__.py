"""tsne_explorer — lasso selection and PCA re-projection of 2-D embeddings."""

from .config import ExplorerConfig, Margins, PlotConfig
from .geometry import LinearScale, compose_transform, point_in_polygon, points_in_polygon
from .io import Dataset, DatasetError, fetch_json, load_dataset
from .lasso import LassoCapture, LassoPhase
from .projection import ProjectionResult, project
from .selection import Selection, select
from .session import ViewSession
from .zoom import ZoomController, ZoomState

__all__ = [
    # config
    "ExplorerConfig",
    "PlotConfig",
    "Margins",
    # geometry
    "LinearScale",
    "compose_transform",
    "point_in_polygon",
    "points_in_polygon",
    # io
    "Dataset",
    "DatasetError",
    "fetch_json",
    "load_dataset",
    # engines
    "LassoCapture",
    "LassoPhase",
    "ZoomController",
    "ZoomState",
    "Selection",
    "select",
    "ProjectionResult",
    "project",
    # session
    "ViewSession",
]
