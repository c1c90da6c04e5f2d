"""Infinite-scroll feed state."""

from __future__ import annotations

from typing import Any

from .api_client import ApiClient


class FeedLoader:
    """
    Accumulate feed pages, dropping posts already seen.

    Offset pagination may hand back a post twice when new posts arrive
    between page requests; duplicates are filtered by post id.

    :param client: API client.
    :param limit: Page size requested from the server.
    """

    def __init__(self, client: ApiClient, *, limit: int = 10) -> None:
        self.client = client
        self.limit = limit
        self.posts: list[dict[str, Any]] = []
        self.page = 0
        self.has_more = True
        self._seen: set[Any] = set()

    def reset(self) -> None:
        """Forget everything loaded so far (e.g. after creating a post)."""
        self.posts = []
        self.page = 0
        self.has_more = True
        self._seen = set()

    def load_first(self) -> list[dict[str, Any]]:
        """Reload from page one."""
        self.reset()
        return self._load(1)

    def load_more(self) -> list[dict[str, Any]]:
        """Fetch the next page; a no-op once the feed is exhausted."""
        if not self.has_more:
            return []
        return self._load(self.page + 1)

    def _load(self, page: int) -> list[dict[str, Any]]:
        data = self.client.fetch_posts(page=page, limit=self.limit)
        batch = list(data.get("posts") or [])
        fresh = [post for post in batch if post.get("id") not in self._seen]
        self._seen.update(post.get("id") for post in fresh)
        self.posts.extend(fresh)
        self.page = page
        # A short page ends the feed; a full last page costs one empty request.
        self.has_more = len(batch) >= self.limit
        return fresh
