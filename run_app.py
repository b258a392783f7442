#!/usr/bin/env python
"""Entry point for the Dash t-SNE Lasso Explorer.

Usage
-----
    python run_app.py [--embeddings URL_OR_PATH] [--labels URL_OR_PATH]

Both sources must be JSON arrays: ``[[x, y], ...]`` and ``[label, ...]``.
"""

from __future__ import annotations

import argparse
import logging

from tsne_explorer.config import DEFAULT_EMBEDDINGS_URL, DEFAULT_LABELS_URL, ExplorerConfig
from tsne_explorer.io import load_dataset


def main() -> None:
    parser = argparse.ArgumentParser(description="Launch the t-SNE Lasso Explorer web app")
    parser.add_argument(
        "--embeddings", default=DEFAULT_EMBEDDINGS_URL,
        help=f"URL or path of the embeddings JSON (default: {DEFAULT_EMBEDDINGS_URL})",
    )
    parser.add_argument(
        "--labels", default=DEFAULT_LABELS_URL,
        help=f"URL or path of the labels JSON (default: {DEFAULT_LABELS_URL})",
    )
    parser.add_argument(
        "--timeout", type=float, default=10.0,
        help="HTTP timeout in seconds (default: 10)",
    )
    parser.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", type=int, default=8050,
        help="Port to serve on (default: 8050)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Run Dash in debug mode",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = ExplorerConfig.from_args(args)

    # Load data
    print(f"Loading embeddings from {config.embeddings_source}...")
    dataset = load_dataset(
        config.embeddings_source, config.labels_source, timeout=config.request_timeout,
    )
    if dataset is not None:
        print(f"  Loaded {len(dataset):,} points")

    print(f"Starting Dash app on http://{args.host}:{args.port}/")

    from tsne_explorer.app import create_app
    app = create_app(dataset, config)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
