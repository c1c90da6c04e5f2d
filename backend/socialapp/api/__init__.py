"""HTTP surface: versioned blueprint groups mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*parts: str) -> str:
    """Join URL segments into ``/a/b`` form, skipping empty ones."""

    return "/" + "/".join(p.strip("/") for p in parts if p and p.strip("/"))


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` pair under ``base_prefix``.

    An empty relative prefix mounts the blueprint at the version root, which
    is where ``/health`` lives.
    """

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register every API version known to the application."""

    from socialapp.api.v1 import API_VERSION as V1
    from socialapp.api.v1 import REGISTRY as V1_REGISTRY

    base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=join_prefix(base, V1), entries=V1_REGISTRY)


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
