"""Expose the application factory at package level.

``from socialapp import create_app`` builds the Flask API; the
:mod:`socialapp.client` package is importable without Flask app state.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
