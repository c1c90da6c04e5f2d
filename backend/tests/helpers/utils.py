"""Tiny helpers shared across test modules."""

from __future__ import annotations

from contextlib import contextmanager

from werkzeug.http import parse_cookie


@contextmanager
def not_raises(exception: type[BaseException]):
    """Context manager asserting that an exception is *not* raised.

    Parameters
    ----------
    exception: type[BaseException]
        Exception type that should not be raised within the context.

    Yields
    ------
    None
        Control enters the managed block when the exception is absent.
    """
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc


def set_cookie_header(response, name: str) -> str | None:
    """Return the raw ``Set-Cookie`` header that sets ``name``, if any."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.split("=", 1)[0].strip() == name:
            return header
    return None


def cookie_value(response, name: str) -> str | None:
    """Return the value ``response`` assigns to cookie ``name``."""
    header = set_cookie_header(response, name)
    if header is None:
        return None
    return parse_cookie(header.split(";", 1)[0]).get(name)
