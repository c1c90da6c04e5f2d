"""
PostService
===========

Post creation, single post reads, the paginated feed, comment appends and
like toggles.

Image uploads for one post run concurrently through the
:class:`~socialapp.services._shared.ports.ObjectStorage` port. When any
upload (or the database write that follows) fails, images already stored
are deleted again before the error propagates.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from collections.abc import Sequence

from socialapp.models.post import Post
from socialapp.repositories.post import PostRepository
from socialapp.services._shared.base import BaseService, ServiceContext
from socialapp.services._shared.errors import NotFoundError, ValidationFailedError
from socialapp.services._shared.ports import ObjectStorage, ObjectStorageError, StoredObject

from ._converters import post_to_out
from .dto import (
    AddCommentIn,
    CreatePostIn,
    FeedPageOut,
    ImageUpload,
    LikeToggleOut,
    PostLimits,
    PostOut,
)

logger = logging.getLogger(__name__)

EMPTY_POST_MESSAGE = "Post must have content or at least one image"


class PostService(BaseService):
    """
    Application service for the post aggregate.

    :param storage: Object storage adapter receiving the images.
    :param limits: Attachment and feed limits.
    :param ctx: Optional request context.
    """

    def __init__(
        self,
        *,
        storage: ObjectStorage,
        limits: PostLimits | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.storage = storage
        self.limits = limits or PostLimits()

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_post(self, dto: CreatePostIn) -> PostOut:
        """
        Validate, upload images, then persist the post.

        Validation happens before any upload or write, so a rejected post
        leaves no trace in storage or in the database.

        :raises ValidationFailedError: Empty post, too many images, bad
            extension or oversized image.
        :raises ObjectStorageError: When an upload fails (after cleanup).
        """
        content = (dto.content or "").strip()
        images = tuple(dto.images)
        self._validate_post(content, images)

        uploaded = self._upload_all(images)
        try:
            with self.rw_uow() as uow:
                repo: PostRepository = uow.posts
                post = repo.add(
                    Post(
                        user_id=dto.author_id,
                        content=content or None,
                        images=[obj.url for obj in uploaded],
                    )
                )
                out = post_to_out(repo.get(post.id, refresh=True))
        except Exception:
            self._discard(uploaded)
            raise

        logger.info(
            "post.created",
            extra={"post_id": out.id, "user_id": dto.author_id},
        )
        return out

    def _validate_post(self, content: str, images: Sequence[ImageUpload]) -> None:
        if not content and not images:
            raise ValidationFailedError(EMPTY_POST_MESSAGE, {"content": [EMPTY_POST_MESSAGE]})

        problems: list[str] = []
        if len(images) > self.limits.max_images:
            problems.append(f"At most {self.limits.max_images} images per post.")
        for image in images:
            if image.extension not in self.limits.allowed_extensions:
                allowed = ", ".join(self.limits.allowed_extensions)
                problems.append(f"{image.filename}: only {allowed} files are accepted.")
            if len(image.data) > self.limits.max_image_bytes:
                problems.append(f"{image.filename}: larger than {self.limits.max_image_bytes} bytes.")
            elif not image.data:
                problems.append(f"{image.filename}: file is empty.")
        if problems:
            raise ValidationFailedError("Invalid post images", {"images": problems})

    def _upload_all(self, images: Sequence[ImageUpload]) -> list[StoredObject]:
        """Upload all images in parallel, keeping input order."""
        if not images:
            return []

        workers = max(1, min(self.limits.upload_workers, len(images)))
        uploaded: list[StoredObject] = []
        failure: Exception | None = None
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="post-upload") as pool:
            futures = [
                pool.submit(self.storage.upload, image.data, filename=image.filename)
                for image in images
            ]
            for future in futures:
                try:
                    uploaded.append(future.result())
                except Exception as exc:
                    failure = failure or exc

        if failure is not None:
            logger.warning(
                "post.upload_failed",
                extra={"status": str(failure), "user_id": self.ctx.actor_id},
            )
            self._discard(uploaded)
            raise failure
        return uploaded

    def _discard(self, uploaded: Sequence[StoredObject]) -> None:
        for obj in uploaded:
            try:
                self.storage.delete(obj.public_id)
            except ObjectStorageError:
                logger.exception("post.upload_cleanup_failed", extra={"status": obj.public_id})

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get_post(self, post_id: int) -> PostOut:
        """
        Return one post with its comments in insertion order, newest last.

        :raises NotFoundError: When the post does not exist.
        """
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            return post_to_out(post)

    def list_feed(self, *, page: int = 1, limit: int | None = None) -> FeedPageOut:
        """
        Return one page of the feed, most recent first.

        ``has_more`` is inferred from a full page. When the last page is
        exactly ``limit`` long the caller makes one extra request that comes
        back empty.
        """
        pagination = self.ensure_pagination(
            page=page,
            limit=limit if limit is not None else self.limits.feed_default_limit,
            max_limit=self.limits.feed_max_limit,
        )
        with self.ro_uow() as uow:
            rows = uow.posts.list_feed(pagination)
            posts = tuple(post_to_out(row) for row in rows)

        logger.debug(
            "feed.page",
            extra={"status": f"page={pagination.page} limit={pagination.limit} returned={len(posts)}"},
        )
        return FeedPageOut(
            posts=posts,
            page=pagination.page,
            limit=pagination.limit,
            has_more=len(posts) == pagination.limit,
        )

    # ------------------------------------------------------------------ #
    # Append operations
    # ------------------------------------------------------------------ #

    def add_comment(self, dto: AddCommentIn) -> PostOut:
        """
        Append a comment and return the whole updated post.

        The new comment is the last element of ``comments``.

        :raises ValidationFailedError: When the text is blank.
        :raises NotFoundError: When the post (or the author) does not exist.
        """
        text = (dto.text or "").strip()
        if not text:
            raise ValidationFailedError("Comment text is required", {"text": ["Comment text is required"]})

        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            if not repo.exists(dto.post_id):
                raise NotFoundError("Post", dto.post_id)
            author = uow.users.get(dto.author_id)
            if author is None:
                raise NotFoundError("User", dto.author_id)

            repo.append_comment(
                post_id=dto.post_id,
                user_id=author.id,
                name=author.name,
                text=text,
            )
            out = post_to_out(repo.get(dto.post_id, refresh=True))

        logger.info("post.commented", extra={"post_id": dto.post_id, "user_id": dto.author_id})
        return out

    def toggle_like(self, post_id: int, user_id: int) -> LikeToggleOut:
        """
        Flip ``user_id`` in the liker set of ``post_id``.

        Two toggles by the same user restore the original liker set.

        :raises NotFoundError: When the post does not exist.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            if not repo.exists(post_id):
                raise NotFoundError("Post", post_id)
            liked = repo.toggle_like(post_id=post_id, user_id=user_id)
            count = len(repo.liker_ids(post_id))

        logger.info(
            "post.like_toggled",
            extra={"post_id": post_id, "user_id": user_id, "status": "liked" if liked else "unliked"},
        )
        return LikeToggleOut(post_id=post_id, liked=liked, like_count=count)
