"""Post, comment and like schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

MAX_CONTENT_LENGTH = 5000
MAX_COMMENT_LENGTH = 2000


class PostCreateSchema(Schema):
    """Text part of the multipart post form. Files are read separately."""

    content = fields.String(load_default=None, validate=validate.Length(max=MAX_CONTENT_LENGTH))


class CommentCreateSchema(Schema):
    """Input payload for a new comment."""

    text = fields.String(required=True, validate=validate.Length(min=1, max=MAX_COMMENT_LENGTH))


class AuthorSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)
    username = fields.String(required=True)


class CommentSchema(Schema):
    """Comment representation with one level of replies."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(allow_none=True)
    name = fields.String(required=True)
    text = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    replies = fields.List(fields.Nested(lambda: CommentSchema(exclude=("replies",))))


class PostSchema(Schema):
    """Post representation.

    ``like_count`` and ``comment_count`` are computed from the dumped
    collections.
    """

    id = fields.Integer(required=True)
    author = fields.Nested(AuthorSchema, required=True)
    content = fields.String(allow_none=True)
    images = fields.List(fields.String())
    likes = fields.List(fields.Integer())
    like_count = fields.Function(lambda post: len(post.likes))
    comments = fields.List(fields.Nested(CommentSchema))
    comment_count = fields.Function(lambda post: len(post.comments))
    created_at = fields.DateTime(required=True)


class FeedPageSchema(Schema):
    """One page of the feed."""

    posts = fields.List(fields.Nested(PostSchema))
    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    has_more = fields.Boolean(required=True)


class LikeToggleSchema(Schema):
    """Result of a like toggle."""

    post_id = fields.Integer(required=True)
    liked = fields.Boolean(required=True)
    like_count = fields.Integer(required=True)
