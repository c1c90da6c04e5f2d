"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode

API_PREFIX = "/api/v1"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers.

    Parameters
    ----------
    auth_token:
        Optional bearer token to include.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def bearer(auth_token: str) -> dict[str, str]:
    """Return only the ``Authorization`` header (multipart requests)."""

    return {"Authorization": f"Bearer {auth_token}"}


def build_url(path: str, **query: str | int | float) -> str:
    """Build an API URL with encoded query parameters.

    Parameters
    ----------
    path:
        Endpoint path relative to ``/api/v1``.
    **query:
        Query parameters to append.

    Returns
    -------
    str
        Absolute path including the version prefix.
    """

    url = f"{API_PREFIX}/{path.lstrip('/')}".rstrip("/")
    if query:
        url = f"{url}?{urlencode(query)}"
    return url
