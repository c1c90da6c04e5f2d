"""Post repository: feed slices and append-only writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import joinedload, selectinload

from socialapp.models.post import Comment, Post, PostLike
from socialapp.repositories.base import BaseRepository, Pagination, paginate_select


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for the :class:`Post` aggregate.

    Comment appends and like toggles are single-statement writes against
    their own tables, so concurrent requests on the same post never race
    on an in-memory copy of it.
    """

    model = Post

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(
            joinedload(Post.author),
            selectinload(Post.comments).joinedload(Comment.author),
            selectinload(Post.comments).selectinload(Comment.replies),
            selectinload(Post.likes),
        )

    # ------------------------------- Feed ------------------------------------

    def list_feed(self, pagination: Pagination) -> list[Post]:
        """Return one page of posts, most recent first.

        Ordering is ``created_at DESC`` with ``id DESC`` as tiebreaker so that
        a fixed dataset always yields the same page for the same input.
        """
        stmt = self._default_eagerload(select(Post)).order_by(
            Post.created_at.desc(), Post.id.desc()
        )
        return paginate_select(self.session, stmt, pagination)

    # ------------------------------ Comments ---------------------------------

    def append_comment(
        self,
        *,
        post_id: int,
        user_id: int,
        name: str,
        text: str,
        parent_id: int | None = None,
    ) -> Comment:
        """Insert a comment row for ``post_id`` and flush it."""
        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            name=name,
            text=text,
            parent_id=parent_id,
        )
        self.session.add(comment)
        self.flush()
        return comment

    # ------------------------------- Likes -----------------------------------

    def toggle_like(self, *, post_id: int, user_id: int) -> bool:
        """Flip membership of ``user_id`` in the post's liker set.

        :returns: ``True`` when the post is liked after the call.
        """
        result = self.session.execute(
            delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        if result.rowcount:
            self.flush()
            return False
        self.session.add(PostLike(post_id=post_id, user_id=user_id))
        self.flush()
        return True

    def liker_ids(self, post_id: int) -> set[int]:
        """Return the ids of users currently liking ``post_id``."""
        stmt = select(PostLike.user_id).where(PostLike.post_id == post_id)
        return set(self.session.execute(stmt).scalars().all())
