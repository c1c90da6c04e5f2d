"""
socialapp.services._shared.ports
================================

*Ports* (hexagonal interfaces) the service layer depends on. Concrete
adapters live under ``socialapp.infra``.

Modules
-------
- :mod:`object_storage`:
    Defines :class:`~.ObjectStorage`, the image store used by post
    creation, plus :class:`~.InMemoryObjectStorage` for development and
    tests.
"""

from __future__ import annotations

from .object_storage import (
    InMemoryObjectStorage,
    ObjectStorage,
    ObjectStorageError,
    StoredObject,
)

__all__ = [
    "ObjectStorage",
    "ObjectStorageError",
    "StoredObject",
    "InMemoryObjectStorage",
]
