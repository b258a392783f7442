"""Dash front end for the lasso explorer."""

from .app import create_app

__all__ = ["create_app"]
