"""Post endpoints: feed, creation, single post, comments and likes."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from socialapp.api.deps import (
    call_service,
    current_user,
    require_session,
    service_context,
    success_response,
    timing,
)
from socialapp.core.extensions import get_object_storage
from socialapp.schemas import (
    CommentCreateSchema,
    FeedPageSchema,
    LikeToggleSchema,
    PageQuerySchema,
    PostCreateSchema,
    PostSchema,
)
from socialapp.services.posts import (
    AddCommentIn,
    CreatePostIn,
    ImageUpload,
    PostLimits,
    PostService,
)

bp = Blueprint("posts", __name__)

page_query_schema = PageQuerySchema()
post_create_schema = PostCreateSchema()
comment_create_schema = CommentCreateSchema()
post_schema = PostSchema()
feed_schema = FeedPageSchema()
like_schema = LikeToggleSchema()


def _post_service() -> PostService:
    return PostService(
        storage=get_object_storage(),
        limits=PostLimits.from_config(current_app.config),
        ctx=service_context(),
    )


@bp.get("")
@require_session
@timing
def list_posts():
    """Return one feed page, most recent first."""

    query = page_query_schema.load(request.args)
    feed = call_service(_post_service().list_feed, page=query["page"], limit=query["limit"])
    return success_response(feed_schema.dump(feed))


@bp.post("")
@require_session
@timing
def create_post():
    """Create a post from the multipart fields ``content`` and ``images``."""

    form = post_create_schema.load(request.form.to_dict())
    images = tuple(
        ImageUpload(filename=f.filename, data=f.read(), content_type=f.mimetype)
        for f in request.files.getlist("images")
        if f and f.filename
    )
    post = call_service(
        _post_service().create_post,
        CreatePostIn(author_id=current_user().id, content=form["content"], images=images),
    )
    return success_response({"post": post_schema.dump(post)}, message="Post created", status=201)


@bp.get("/<int:post_id>")
@require_session
@timing
def get_post(post_id: int):
    """Return one post; comments oldest first, so a new one is last."""

    post = call_service(_post_service().get_post, post_id)
    return success_response({"post": post_schema.dump(post)})


@bp.post("/<int:post_id>/comment")
@require_session
@timing
def comment_on_post(post_id: int):
    """Append a comment and return the full updated post."""

    payload = comment_create_schema.load(request.get_json(silent=True) or {})
    post = call_service(
        _post_service().add_comment,
        AddCommentIn(post_id=post_id, author_id=current_user().id, text=payload["text"]),
    )
    return success_response({"post": post_schema.dump(post)}, message="Comment added")


@bp.post("/<int:post_id>/like")
@require_session
@timing
def like_post(post_id: int):
    """Toggle the caller's like on a post."""

    result = call_service(_post_service().toggle_like, post_id, current_user().id)
    message = "Post liked" if result.liked else "Post unliked"
    return success_response(like_schema.dump(result), message=message)
