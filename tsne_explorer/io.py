"""Data loading for the embedding explorer.

Embeddings and labels arrive as two JSON arrays, either from HTTP endpoints or
from local files.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import numpy as np
import pandas as pd
import requests

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when embeddings and labels do not form a valid dataset."""


@dataclass(frozen=True, eq=False)
class Dataset:
    """Parallel arrays of embedding coordinates and integer class labels.

    Parameters
    ----------
    coordinates : array-like
        Shape ``(n, d)`` with ``d >= 2``; the first two columns are plotted.
    labels : array-like
        ``n`` integer class ids, positionally matched to *coordinates*.

    Raises
    ------
    DatasetError
        If the arrays have different lengths, the coordinates are not a
        2-D numeric matrix with at least two columns, or contain NaN/inf.
    """

    coordinates: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        try:
            coords = np.asarray(self.coordinates, dtype=float)
            labels = np.asarray(self.labels)
        except (TypeError, ValueError) as exc:
            raise DatasetError(f"Non-numeric embedding data: {exc}") from exc

        if coords.size == 0:
            coords = coords.reshape(0, 2)
        if coords.ndim != 2 or coords.shape[1] < 2:
            raise DatasetError(
                f"Embeddings must be a list of [x, y] pairs, got shape {coords.shape}"
            )
        if labels.ndim != 1:
            raise DatasetError(f"Labels must be a flat list, got shape {labels.shape}")
        if len(coords) != len(labels):
            raise DatasetError(
                f"Got {len(coords)} embeddings but {len(labels)} labels"
            )
        if not np.all(np.isfinite(coords)):
            raise DatasetError("Embeddings contain NaN or infinite values")
        if labels.size and not np.issubdtype(labels.dtype, np.integer):
            if not np.issubdtype(labels.dtype, np.number) or np.any(labels != np.round(labels)):
                raise DatasetError("Labels must be integer class ids")
        labels = labels.astype(int)

        coords.flags.writeable = False
        labels.flags.writeable = False
        object.__setattr__(self, "coordinates", coords)
        object.__setattr__(self, "labels", labels)

    def __len__(self) -> int:
        return len(self.labels)

    def to_frame(self) -> pd.DataFrame:
        """DataFrame with ``x``, ``y`` and ``label`` columns."""
        return pd.DataFrame({
            "x": self.coordinates[:, 0],
            "y": self.coordinates[:, 1],
            "label": self.labels,
        })


def fetch_json(source: str, timeout: float = 10.0) -> Any:
    """Read a JSON document from an ``http(s)`` URL or a local file.

    Raises
    ------
    requests.exceptions.RequestException
        On network errors or a non-success HTTP status.
    OSError, ValueError
        On unreadable files or invalid JSON.
    """
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        return response.json()
    return json.loads(Path(source).read_text(encoding="utf-8"))


def load_dataset(
    embeddings_source: str,
    labels_source: str,
    timeout: float = 10.0,
) -> Optional[Dataset]:
    """Fetch embeddings and labels and pair them into a :class:`Dataset`.

    Any failure is logged and ``None`` is returned, leaving the view empty.

    Parameters
    ----------
    embeddings_source : str
        URL or path of a JSON array of coordinate pairs.
    labels_source : str
        URL or path of a JSON array of integer labels.
    timeout : float
        HTTP timeout in seconds.

    Returns
    -------
    Dataset or None
    """
    try:
        embeddings = fetch_json(embeddings_source, timeout=timeout)
        labels = fetch_json(labels_source, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        logger.error("Error fetching data: %s", exc)
        return None
    except (OSError, ValueError) as exc:
        logger.error("Error reading data: %s", exc)
        return None

    try:
        dataset = Dataset(embeddings, labels)
    except DatasetError as exc:
        logger.error("Invalid dataset: %s", exc)
        return None

    logger.info("Loaded %d embeddings (%d classes)",
                len(dataset), len(np.unique(dataset.labels)))
    return dataset
