"""Extension singletons and the per-app services stored in ``app.extensions``."""

from __future__ import annotations

import logging

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)

TOKEN_SERVICE_KEY = "token_service"
OBJECT_STORAGE_KEY = "object_storage"


def init_app(app: Flask) -> None:
    """Bind the extensions and build the token service and image storage.

    The models package is imported here so Alembic autogenerate sees every
    table.
    """
    from socialapp import models  # noqa: F401
    from socialapp.services.tokens import TokenService

    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    app.extensions[TOKEN_SERVICE_KEY] = TokenService.from_config(app.config)
    app.extensions[OBJECT_STORAGE_KEY] = build_object_storage(app)


def build_object_storage(app: Flask):
    """Return the adapter named by ``OBJECT_STORAGE_BACKEND`` (``memory`` or ``cloudinary``)."""
    backend = str(app.config.get("OBJECT_STORAGE_BACKEND", "memory")).strip().lower()
    if backend == "memory":
        from socialapp.services._shared.ports.object_storage import InMemoryObjectStorage

        if not app.testing:
            log.warning("object_storage.memory: uploaded images live only in this process")
        return InMemoryObjectStorage()
    if backend == "cloudinary":
        from socialapp.infra.cloudinary.cloudinary_object_storage import CloudinaryObjectStorage

        return CloudinaryObjectStorage.from_config(app.config)
    raise RuntimeError(f"Unknown OBJECT_STORAGE_BACKEND {backend!r}")


def get_token_service():
    return current_app.extensions[TOKEN_SERVICE_KEY]


def get_object_storage():
    return current_app.extensions[OBJECT_STORAGE_KEY]
