# socialapp/infra/cloudinary/cloudinary_object_storage.py
from __future__ import annotations

import io
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from socialapp.services._shared.ports import ObjectStorage, ObjectStorageError, StoredObject

ALLOWED_FORMATS = ["jpg", "png", "jpeg", "webp"]
DEFAULT_FOLDER = "social-application"


@dataclass(slots=True)
class CloudinaryObjectStorage(ObjectStorage):
    """
    Adapter uploading post images to Cloudinary.

    .. note::
       Credentials are applied to the process-wide ``cloudinary`` config in
       :meth:`from_config`; the SDK offers no per-client configuration.
    """

    folder: str = DEFAULT_FOLDER
    resource_type: str = "image"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CloudinaryObjectStorage:
        cloud_name = config.get("CLOUDINARY_CLOUD_NAME")
        api_key = config.get("CLOUDINARY_API_KEY")
        api_secret = config.get("CLOUDINARY_API_SECRET")
        if not (cloud_name and api_key and api_secret):
            raise RuntimeError("Cloudinary storage selected but CLOUDINARY_* settings are missing.")
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        return cls(folder=str(config.get("CLOUDINARY_FOLDER") or DEFAULT_FOLDER))

    def upload(self, data: bytes, *, filename: str | None = None) -> StoredObject:
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                folder=self.folder,
                resource_type=self.resource_type,
                allowed_formats=ALLOWED_FORMATS,
            )
        except CloudinaryError as exc:
            raise ObjectStorageError(f"Upload rejected: {exc}") from exc
        return StoredObject(url=result["secure_url"], public_id=result["public_id"])

    def delete(self, public_id: str) -> None:
        try:
            cloudinary.uploader.destroy(public_id, resource_type=self.resource_type)
        except CloudinaryError as exc:
            raise ObjectStorageError(f"Delete rejected: {exc}") from exc
