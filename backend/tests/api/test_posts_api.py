"""Integration tests for the post endpoints."""

from __future__ import annotations

import io

from socialapp.models.post import Post
from socialapp.services.auth.session import NO_TOKEN_MESSAGE
from socialapp.services.posts.service import EMPTY_POST_MESSAGE
from sqlalchemy import func, select

from tests.factories.post import CommentFactory, PostFactory
from tests.helpers.assertions import assert_failure, assert_json_keys, assert_success
from tests.helpers.http import bearer, build_url, json_headers

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _post_count(session) -> int:
    return session.execute(select(func.count()).select_from(Post)).scalar_one()


def _create(client, token, content=None, files=()):
    data = {}
    if content is not None:
        data["content"] = content
    if files:
        data["images"] = [(io.BytesIO(payload), name) for name, payload in files]
    return client.post(
        build_url("posts"),
        data=data,
        headers=bearer(token),
        content_type="multipart/form-data",
    )


class TestCreatePost:
    def test_text_post(self, client, session, user, access_token):
        user_id = user.id

        resp = _create(client, access_token, content="Hello world")

        data = assert_success(resp, 201)
        post = data["post"]
        assert_json_keys(
            post,
            {"id", "author", "content", "images", "likes", "like_count", "comments", "comment_count", "created_at"},
        )
        assert post["author"]["id"] == user_id
        assert post["content"] == "Hello world"
        assert (post["images"], post["likes"], post["comments"]) == ([], [], [])
        assert _post_count(session) == 1

    def test_post_with_images(self, client, storage, user, access_token):
        before = len(storage)

        resp = _create(client, access_token, files=[("one.png", PNG), ("two.jpg", PNG)])

        post = assert_success(resp, 201)["post"]
        assert post["content"] is None
        assert len(post["images"]) == 2
        assert post["images"][0].endswith(".png")
        assert post["images"][1].endswith(".jpg")
        assert len(storage) == before + 2

    def test_empty_post_rejected_without_side_effects(self, client, session, storage, user, access_token):
        before = len(storage)

        resp = _create(client, access_token, content="   ")

        assert_failure(resp, 400, EMPTY_POST_MESSAGE)
        assert _post_count(session) == 0
        assert len(storage) == before

    def test_too_many_images(self, client, session, storage, user, access_token):
        before = len(storage)
        files = [(f"{i}.png", PNG) for i in range(5)]

        resp = _create(client, access_token, content="five", files=files)

        body = assert_failure(resp, 400)
        assert "images" in body["details"]
        assert _post_count(session) == 0
        assert len(storage) == before

    def test_requires_session(self, client, session):
        resp = client.post(build_url("posts"), data={"content": "anonymous"})

        assert_failure(resp, 401, NO_TOKEN_MESSAGE)
        assert _post_count(session) == 0


class TestFeed:
    def test_pages_are_disjoint(self, client, session, user, access_token):
        PostFactory.create_batch(25, author=user)
        session.commit()

        page1 = assert_success(client.get(build_url("posts", page=1, limit=10), headers=json_headers(access_token)))
        page2 = assert_success(client.get(build_url("posts", page=2, limit=10), headers=json_headers(access_token)))
        page3 = assert_success(client.get(build_url("posts", page=3, limit=10), headers=json_headers(access_token)))

        ids1 = [p["id"] for p in page1["posts"]]
        ids2 = [p["id"] for p in page2["posts"]]
        assert len(ids1) == len(ids2) == 10
        assert not set(ids1) & set(ids2)
        assert (page1["has_more"], page2["has_more"]) == (True, True)
        assert len(page3["posts"]) == 5
        assert page3["has_more"] is False

    def test_most_recent_first_with_default_limit(self, client, session, user, access_token):
        PostFactory.create_batch(12, author=user)
        session.commit()

        data = assert_success(client.get(build_url("posts"), headers=json_headers(access_token)))

        assert data["limit"] == 10
        stamps = [p["created_at"] for p in data["posts"]]
        assert stamps == sorted(stamps, reverse=True)

    def test_invalid_page(self, client, access_token):
        resp = client.get(build_url("posts", page=0), headers=json_headers(access_token))
        assert_failure(resp, 400)

    def test_limit_above_cap(self, client, access_token):
        resp = client.get(build_url("posts", limit=500), headers=json_headers(access_token))
        assert_failure(resp, 400)


class TestSinglePost:
    def test_comments_oldest_first(self, client, session, access_token):
        post = PostFactory()
        older = CommentFactory(post=post)
        newer = CommentFactory(post=post)
        session.commit()
        post_id, older_id, newer_id = post.id, older.id, newer.id

        data = assert_success(client.get(build_url(f"posts/{post_id}"), headers=json_headers(access_token)))

        assert [c["id"] for c in data["post"]["comments"]] == [older_id, newer_id]

    def test_unknown_post(self, client, access_token):
        resp = client.get(build_url("posts/987654"), headers=json_headers(access_token))

        body = assert_failure(resp, 404)
        assert body["code"] == "not_found"


class TestComments:
    def test_comment_is_appended_last(self, client, session, user, access_token):
        post = PostFactory()
        CommentFactory(post=post)
        session.commit()
        post_id = post.id

        resp = client.post(
            build_url(f"posts/{post_id}/comment"),
            json={"text": "Great shot!"},
            headers=json_headers(access_token),
        )

        post_body = assert_success(resp)["post"]
        assert post_body["comment_count"] == 2
        last = post_body["comments"][-1]
        assert last["text"] == "Great shot!"
        assert last["name"] == "Alex Martinez"

    def test_refetch_shows_comment_last(self, client, session, user, access_token):
        post = PostFactory()
        CommentFactory(post=post)
        session.commit()
        post_id = post.id
        url = build_url(f"posts/{post_id}")
        before = assert_success(client.get(url, headers=json_headers(access_token)))["post"]["comments"]

        assert_success(
            client.post(
                build_url(f"posts/{post_id}/comment"),
                json={"text": "Great shot!"},
                headers=json_headers(access_token),
            )
        )
        after = assert_success(client.get(url, headers=json_headers(access_token)))["post"]["comments"]

        assert len(after) == len(before) + 1
        assert [c["id"] for c in after[:-1]] == [c["id"] for c in before]
        assert (after[-1]["text"], after[-1]["name"]) == ("Great shot!", "Alex Martinez")

    def test_blank_comment(self, client, session, access_token):
        post = PostFactory()
        session.commit()

        resp = client.post(
            build_url(f"posts/{post.id}/comment"),
            json={"text": ""},
            headers=json_headers(access_token),
        )

        assert_failure(resp, 400)

    def test_comment_on_unknown_post(self, client, access_token):
        resp = client.post(
            build_url("posts/987654/comment"),
            json={"text": "hello?"},
            headers=json_headers(access_token),
        )
        assert_failure(resp, 404)


class TestLikes:
    def test_like_twice_restores_state(self, client, session, user, access_token):
        post = PostFactory()
        session.commit()
        post_id, user_id = post.id, user.id
        url = build_url(f"posts/{post_id}/like")

        liked = client.post(url, headers=json_headers(access_token))
        unliked = client.post(url, headers=json_headers(access_token))

        assert liked.get_json()["message"] == "Post liked"
        assert assert_success(liked) == {"post_id": post_id, "liked": True, "like_count": 1}
        assert unliked.get_json()["message"] == "Post unliked"
        assert assert_success(unliked)["like_count"] == 0

        post_body = assert_success(client.get(build_url(f"posts/{post_id}"), headers=json_headers(access_token)))["post"]
        assert user_id not in post_body["likes"]

    def test_like_unknown_post(self, client, access_token):
        assert_failure(client.post(build_url("posts/987654/like"), headers=json_headers(access_token)), 404)
