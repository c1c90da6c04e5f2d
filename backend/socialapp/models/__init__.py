from socialapp.models.post import Comment, Post, PostLike
from socialapp.models.user import User

__all__ = [
    "Comment",
    "Post",
    "PostLike",
    "User",
]
