from __future__ import annotations

from socialapp.models.post import Comment, Post

from .dto import AuthorOut, CommentOut, PostOut


def comment_to_out(row: Comment, *, with_replies: bool = True) -> CommentOut:
    replies = tuple(comment_to_out(r, with_replies=False) for r in row.replies) if with_replies else ()
    return CommentOut(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        text=row.text,
        created_at=row.created_at,
        replies=replies,
    )


def post_to_out(row: Post) -> PostOut:
    """Project a loaded post; comments stay in insertion order."""

    comments = [comment_to_out(c) for c in row.comments]
    return PostOut(
        id=row.id,
        author=AuthorOut(id=row.author.id, name=row.author.name, username=row.author.username),
        content=row.content,
        images=tuple(row.images or ()),
        likes=tuple(like.user_id for like in row.likes),
        comments=tuple(comments),
        created_at=row.created_at,
    )
