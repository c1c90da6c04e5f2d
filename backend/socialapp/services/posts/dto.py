# socialapp/services/posts/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

# ---------------------------- Settings ------------------------------------ #


@dataclass(frozen=True, slots=True)
class PostLimits:
    """
    Attachment and feed limits enforced by :class:`PostService`.

    :param max_images: Maximum images per post.
    :param max_image_bytes: Maximum size of one image.
    :param allowed_extensions: Lowercase file extensions accepted.
    :param feed_default_limit: Page size when the caller sends none.
    :param feed_max_limit: Largest accepted page size.
    :param upload_workers: Upper bound of concurrent uploads per post.
    """

    max_images: int = 4
    max_image_bytes: int = 10 * 1024 * 1024
    allowed_extensions: tuple[str, ...] = ("jpg", "jpeg", "png", "webp")
    feed_default_limit: int = 10
    feed_max_limit: int = 50
    upload_workers: int = 4

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> PostLimits:
        defaults = cls()
        return cls(
            max_images=int(config.get("MAX_POST_IMAGES", defaults.max_images)),
            max_image_bytes=int(config.get("MAX_IMAGE_BYTES", defaults.max_image_bytes)),
            allowed_extensions=tuple(
                ext.lower()
                for ext in config.get("ALLOWED_IMAGE_EXTENSIONS", defaults.allowed_extensions)
            ),
            feed_default_limit=int(config.get("FEED_DEFAULT_LIMIT", defaults.feed_default_limit)),
            feed_max_limit=int(config.get("FEED_MAX_LIMIT", defaults.feed_max_limit)),
            upload_workers=int(config.get("UPLOAD_MAX_WORKERS", defaults.upload_workers)),
        )


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """
    One image file received with a new post.

    :param filename: Client-side file name (used for the extension check).
    :type filename: str
    :param data: Raw bytes.
    :type data: bytes
    :param content_type: Declared MIME type, informational only.
    :type content_type: str | None
    """

    filename: str
    data: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""


@dataclass(frozen=True, slots=True)
class CreatePostIn:
    """
    Input DTO for post creation.

    :param author_id: Acting user.
    :type author_id: int
    :param content: Optional text.
    :type content: str | None
    :param images: Attached images, at most ``PostLimits.max_images``.
    :type images: tuple[ImageUpload, ...]
    """

    author_id: int
    content: str | None = None
    images: tuple[ImageUpload, ...] = ()


@dataclass(frozen=True, slots=True)
class AddCommentIn:
    """
    Input DTO for appending a comment.

    :param post_id: Target post.
    :type post_id: int
    :param author_id: Acting user; their display name is copied on write.
    :type author_id: int
    :param text: Comment body.
    :type text: str
    """

    post_id: int
    author_id: int
    text: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthorOut:
    id: int
    name: str
    username: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    """Comment projection. ``replies`` is one level deep."""

    id: int
    user_id: int | None
    name: str
    text: str
    created_at: datetime
    replies: tuple[CommentOut, ...] = ()


@dataclass(frozen=True, slots=True)
class PostOut:
    """
    Post projection.

    ``likes`` is the liker set as user ids. Counts are derived by the
    serialization layer from ``likes`` and ``comments``.
    """

    id: int
    author: AuthorOut
    content: str | None
    images: tuple[str, ...]
    likes: tuple[int, ...]
    comments: tuple[CommentOut, ...]
    created_at: datetime


@dataclass(frozen=True, slots=True)
class FeedPageOut:
    """
    One feed page.

    :param has_more: ``True`` when the page came back full, so another
        request may return more posts. There is no total count.
    """

    posts: tuple[PostOut, ...]
    page: int
    limit: int
    has_more: bool


@dataclass(frozen=True, slots=True)
class LikeToggleOut:
    post_id: int
    liked: bool
    like_count: int
