"""Tests for :class:`FeedLoader` infinite-scroll state."""

from __future__ import annotations

from socialapp.client import FeedLoader


class StubClient:
    """Serve canned feed pages and record requested page numbers."""

    def __init__(self, pages: dict[int, list[int]]) -> None:
        self.pages = pages
        self.requested: list[tuple[int, int]] = []

    def fetch_posts(self, page: int = 1, limit: int = 10):
        self.requested.append((page, limit))
        ids = self.pages.get(page, [])
        return {"posts": [{"id": i} for i in ids], "page": page, "limit": limit, "has_more": len(ids) == limit}


def _ids(posts):
    return [p["id"] for p in posts]


def test_pages_accumulate_until_short_page():
    client = StubClient({1: [9, 8], 2: [7, 6], 3: [5]})
    loader = FeedLoader(client, limit=2)

    loader.load_first()
    loader.load_more()
    loader.load_more()

    assert _ids(loader.posts) == [9, 8, 7, 6, 5]
    assert loader.has_more is False
    assert loader.load_more() == []
    assert [p for p, _ in client.requested] == [1, 2, 3]


def test_duplicates_from_shifted_pages_are_dropped():
    # A new post arrived between requests, pushing 8 onto page two.
    client = StubClient({1: [9, 8], 2: [8, 7]})
    loader = FeedLoader(client, limit=2)

    loader.load_first()
    fresh = loader.load_more()

    assert _ids(fresh) == [7]
    assert _ids(loader.posts) == [9, 8, 7]


def test_full_last_page_costs_one_empty_request():
    client = StubClient({1: [2, 1]})
    loader = FeedLoader(client, limit=2)

    loader.load_first()
    assert loader.has_more is True
    assert loader.load_more() == []
    assert loader.has_more is False


def test_reset_forgets_loaded_posts():
    loader = FeedLoader(StubClient({1: [3, 2]}), limit=2)
    loader.load_first()

    loader.reset()

    assert (loader.posts, loader.page, loader.has_more) == ([], 0, True)


def test_load_first_reloads_from_page_one():
    client = StubClient({1: [3, 2], 2: [1]})
    loader = FeedLoader(client, limit=2)
    loader.load_first()
    loader.load_more()

    loader.load_first()

    assert _ids(loader.posts) == [3, 2]
    assert loader.page == 1
