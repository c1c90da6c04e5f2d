"""Post aggregate: posts, their comments and their likes."""

from __future__ import annotations

from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialapp.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin
from .user import User


class Post(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    A text and/or image post.

    Invariant: ``content`` is non-empty or ``images`` holds at least one
    URL. The service layer checks it before anything is written.

    ``images`` holds URLs already uploaded to object storage. Comments and
    likes live in their own tables and the collections below are read-only
    views: appending is a single INSERT issued by the repository, never a
    read-modify-write of the post row.
    """

    __tablename__ = "posts"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    author: Mapped[User] = relationship(User)
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        primaryjoin="and_(Comment.post_id == Post.id, Comment.parent_id.is_(None))",
        order_by="Comment.id",
        viewonly=True,
    )
    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        order_by="PostLike.id",
        viewonly=True,
    )


class Comment(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Comment appended to a post.

    ``name`` is the author's display name copied at write time. Replies
    reference their parent through ``parent_id`` (one level deep).
    """

    __tablename__ = "post_comments"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("post_comments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User | None] = relationship(User)
    replies: Mapped[list[Comment]] = relationship(
        "Comment",
        order_by="Comment.id",
        viewonly=True,
    )


class PostLike(PKMixin, CreatedAtMixin, db.Model):
    """Membership row of a user in a post's liker set."""

    __tablename__ = "post_likes"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_id_user_id"),)
