"""Posts, feed, comments and likes."""

from socialapp.services.posts.dto import (
    AddCommentIn,
    AuthorOut,
    CommentOut,
    CreatePostIn,
    FeedPageOut,
    ImageUpload,
    LikeToggleOut,
    PostLimits,
    PostOut,
)
from socialapp.services.posts.service import EMPTY_POST_MESSAGE, PostService

__all__ = [
    "EMPTY_POST_MESSAGE",
    "AddCommentIn",
    "AuthorOut",
    "CommentOut",
    "CreatePostIn",
    "FeedPageOut",
    "ImageUpload",
    "LikeToggleOut",
    "PostLimits",
    "PostOut",
    "PostService",
]
