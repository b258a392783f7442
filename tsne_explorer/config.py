"""Plot geometry and data-source configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_EMBEDDINGS_URL = "http://localhost:8000/data/tsne"
DEFAULT_LABELS_URL = "http://localhost:8000/data/labels"


@dataclass(frozen=True)
class Margins:
    """Plot margins in pixels, ordered like CSS (top, right, bottom, left)."""

    top: int = 20
    right: int = 20
    bottom: int = 30
    left: int = 40

    def __post_init__(self) -> None:
        if min(self.top, self.right, self.bottom, self.left) < 0:
            raise ValueError(f"Margins must be non-negative, got {self}")


@dataclass(frozen=True)
class PlotConfig:
    """Size of one plot region and the margins reserved for its axes."""

    width: int
    height: int
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Plot size must be positive, got {self.width}x{self.height}"
            )
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Margins {self.margins} leave no drawing area in a "
                f"{self.width}x{self.height} plot"
            )

    @property
    def inner_width(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margins.top - self.margins.bottom

    @property
    def x_range(self) -> Tuple[float, float]:
        """Pixel range of the x axis (left to right)."""
        return (float(self.margins.left), float(self.width - self.margins.right))

    @property
    def y_range(self) -> Tuple[float, float]:
        """Pixel range of the y axis; screen y grows downwards."""
        return (float(self.height - self.margins.bottom), float(self.margins.top))


PRIMARY_PLOT = PlotConfig(width=800, height=600)
PROJECTION_PLOT = PlotConfig(width=400, height=400)


@dataclass(frozen=True)
class ExplorerConfig:
    """Everything a :class:`~tsne_explorer.session.ViewSession` needs.

    Parameters
    ----------
    embeddings_source, labels_source : str
        URL or local path of the two JSON arrays loaded at start-up.
    primary, projection : PlotConfig
        Sizes of the main scatter plot and of the PCA projection plot.
    scale_extent : tuple[float, float]
        Allowed zoom factors ``(min_k, max_k)``.
    point_radius : float
        Marker radius in pixels.
    lasso_min_distance : float
        Samples closer than this to the previous lasso vertex are dropped.
        ``0`` keeps every pointer sample.
    request_timeout : float
        Seconds before an HTTP fetch is abandoned.
    """

    embeddings_source: str = DEFAULT_EMBEDDINGS_URL
    labels_source: str = DEFAULT_LABELS_URL
    primary: PlotConfig = PRIMARY_PLOT
    projection: PlotConfig = PROJECTION_PLOT
    scale_extent: Tuple[float, float] = (0.5, 10.0)
    point_radius: float = 3.0
    lasso_min_distance: float = 0.0
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        lo, hi = self.scale_extent
        if not 0 < lo <= hi:
            raise ValueError(f"Invalid scale extent {self.scale_extent}")
        if self.point_radius <= 0:
            raise ValueError("point_radius must be positive")
        if self.lasso_min_distance < 0:
            raise ValueError("lasso_min_distance must be non-negative")

    @classmethod
    def from_args(cls, args) -> "ExplorerConfig":
        """Build a config from the ``run_app.py`` argparse namespace."""
        return cls(
            embeddings_source=args.embeddings,
            labels_source=args.labels,
            request_timeout=getattr(args, "timeout", cls.request_timeout),
        )
