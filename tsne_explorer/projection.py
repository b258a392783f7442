"""PCA re-projection of a lasso selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from sklearn.decomposition import PCA

from .selection import Selection

logger = logging.getLogger(__name__)

N_COMPONENTS = 2


@dataclass(frozen=True, eq=False)
class ProjectionResult:
    """2-D PCA coordinates of a selection, in selection order."""

    points: np.ndarray
    indices: np.ndarray
    explained_variance_ratio: np.ndarray

    def __len__(self) -> int:
        return len(self.points)


def project(selection: Selection) -> Optional[ProjectionResult]:
    """Project the selected vectors onto their top two principal components.

    PCA needs at least two samples, so a selection of zero or one point
    returns ``None`` and callers keep whatever they displayed before.

    The vectors are mean-centred (not scaled).  When fewer than two components
    are available (one feature column, or all points identical) the missing
    output column is zero.  Component signs are arbitrary.

    Parameters
    ----------
    selection : Selection
        Output of :func:`~tsne_explorer.selection.select`.

    Returns
    -------
    ProjectionResult or None
    """
    if len(selection) <= 1:
        logger.debug("Skipping projection of %d point(s)", len(selection))
        return None

    X = np.asarray(selection.points, dtype=float)
    n_samples, n_features = X.shape
    n_components = min(N_COMPONENTS, n_samples, n_features)

    coords = np.zeros((n_samples, N_COMPONENTS))
    ratio = np.zeros(N_COMPONENTS)
    if not np.any(np.ptp(X, axis=0)):
        logger.info("Selected points are identical; projection collapses to origin")
    else:
        pca = PCA(n_components=n_components, svd_solver="full")
        coords[:, :n_components] = pca.fit_transform(X)
        ratio[:n_components] = np.nan_to_num(pca.explained_variance_ratio_)

    coords.flags.writeable = False
    ratio.flags.writeable = False
    logger.info(
        "Projected %d points from %d dims (explained variance %.3f, %.3f)",
        n_samples, n_features, ratio[0], ratio[1],
    )
    return ProjectionResult(
        points=coords,
        indices=selection.indices,
        explained_variance_ratio=ratio,
    )
