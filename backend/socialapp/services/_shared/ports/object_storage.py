from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class StoredObject:
    """
    Result of an upload.

    :param url: Public HTTPS URL of the stored image.
    :param public_id: Storage-side identifier used for deletion.
    """

    url: str
    public_id: str


class ObjectStorageError(Exception):
    """Raised by adapters when the storage backend rejects an operation."""


class ObjectStorage(Protocol):
    """Port for the external image store."""

    def upload(self, data: bytes, *, filename: str | None = None) -> StoredObject: ...

    def delete(self, public_id: str) -> None: ...


class InMemoryObjectStorage(ObjectStorage):
    """Thread-safe in-process store used in development and tests."""

    def __init__(self, base_url: str = "https://objects.invalid/social-application") -> None:
        self.base_url = base_url.rstrip("/")
        self._objects: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def upload(self, data: bytes, *, filename: str | None = None) -> StoredObject:
        public_id = uuid4().hex
        suffix = ""
        if filename and "." in filename:
            suffix = "." + filename.rsplit(".", 1)[1].lower()
        with self._lock:
            self._objects[public_id] = bytes(data)
        return StoredObject(url=f"{self.base_url}/{public_id}{suffix}", public_id=public_id)

    def delete(self, public_id: str) -> None:
        with self._lock:
            self._objects.pop(public_id, None)

    def __contains__(self, public_id: object) -> bool:
        with self._lock:
            return public_id in self._objects

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
