"""
ApiClient
=========

Thin wrapper over :class:`requests.Session` speaking the ``/api/v1``
surface.

- Every request carries ``Authorization: Bearer`` from the
  :class:`SessionCache` when a token is cached.
- Any 401, whichever endpoint produced it, clears the cache, calls the
  ``on_unauthorized`` hook and raises :class:`SessionExpired`.
- Other non-2xx responses raise :class:`ApiError`.

The transport keeps cookies, so the ``jwt`` refresh cookie set by
register/login is replayed on later calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import IO, Any

import requests

from .config import ClientConfig
from .errors import ApiError, SessionExpired
from .session_cache import SessionCache

log = logging.getLogger(__name__)

MAX_POST_IMAGES = 4

ImageFile = tuple[str, bytes | IO[bytes]]


class ApiClient:
    """
    :param config: Client settings.
    :param cache: Session cache shared with guards and the UI layer.
        Defaults to one stored at ``config.session_file``.
    :param transport: Injected HTTP session (defaults to a new one).
    :param on_unauthorized: Called after a 401 cleared the cache.
    """

    def __init__(
        self,
        config: ClientConfig,
        cache: SessionCache | None = None,
        *,
        transport: requests.Session | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else SessionCache.from_config(config)
        self.transport = transport or requests.Session()
        self.on_unauthorized = on_unauthorized

    # ------------------------------------------------------------------ #
    # Interceptors
    # ------------------------------------------------------------------ #

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = dict(kwargs.pop("headers", None) or {})
        token = self.cache.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.transport.request(
                method,
                self.config.url(path),
                headers=headers,
                timeout=self.config.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise ApiError(0, f"Request failed: {exc}") from exc

        body = self._decode(response)
        if response.status_code == 401:
            self._handle_unauthorized()
            raise SessionExpired(str(body.get("message") or "Not Authorized"), body.get("code"))
        if not response.ok:
            raise ApiError(
                response.status_code,
                str(body.get("message") or response.reason or "Request failed"),
                body.get("code"),
            )
        return body

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _handle_unauthorized(self) -> None:
        log.info("Received 401; clearing cached session.")
        self.cache.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    def _remember(self, data: dict[str, Any]) -> dict[str, Any]:
        state = {"user": data.get("user"), "access_token": data.get("access_token")}
        self.cache.save(state)
        return state

    # ------------------------------------------------------------------ #
    # Auth
    # ------------------------------------------------------------------ #

    def register(
        self, name: str, email: str, password: str, *, username: str | None = None
    ) -> dict[str, Any]:
        """Create an account and cache the new session."""
        payload: dict[str, Any] = {"name": name, "email": email, "password": password}
        if username:
            payload["username"] = username
        body = self._request("POST", "auth/register", json=payload)
        return self._remember(body["data"])

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in and cache the session."""
        body = self._request("POST", "auth/login", json={"email": email, "password": password})
        return self._remember(body["data"])

    def logout(self) -> None:
        """Clear the server cookie and the local cache (even if the call fails)."""
        try:
            self._request("POST", "auth/logout")
        finally:
            self.cache.clear()

    def refresh(self) -> str:
        """Trade the refresh cookie for a new access token and cache it."""
        body = self._request("POST", "auth/refresh")
        token = body["data"]["access_token"]
        state = self.cache.load() or {}
        state["access_token"] = token
        self.cache.save(state)
        return token

    def me(self) -> dict[str, Any]:
        return self._request("GET", "auth/me")["data"]["user"]

    # ------------------------------------------------------------------ #
    # Posts
    # ------------------------------------------------------------------ #

    def fetch_posts(self, page: int = 1, limit: int = 10) -> dict[str, Any]:
        """Return ``{posts, page, limit, has_more}`` for one feed page."""
        return self._request("GET", "posts", params={"page": page, "limit": limit})["data"]

    def get_post(self, post_id: int) -> dict[str, Any]:
        return self._request("GET", f"posts/{post_id}")["data"]["post"]

    def create_post(
        self, content: str | None = None, images: Sequence[ImageFile] = ()
    ) -> dict[str, Any]:
        """
        Create a post from text and ``(filename, bytes-or-file)`` pairs.

        :raises ValueError: When more than four images are given.
        """
        if len(images) > MAX_POST_IMAGES:
            raise ValueError(f"At most {MAX_POST_IMAGES} images per post.")
        data = {"content": content} if content else {}
        files = [("images", (name, payload)) for name, payload in images]
        body = self._request("POST", "posts", data=data, files=files or None)
        return body["data"]["post"]

    def comment_on_post(self, post_id: int, text: str) -> dict[str, Any]:
        """Append a comment; returns the updated post."""
        return self._request("POST", f"posts/{post_id}/comment", json={"text": text})["data"]["post"]

    def like_post(self, post_id: int) -> dict[str, Any]:
        """Toggle the like; returns ``{post_id, liked, like_count}``."""
        return self._request("POST", f"posts/{post_id}/like")["data"]
