"""Python client for the social API: session cache, interceptors and feed loader."""

from .api_client import ApiClient
from .config import ClientConfig
from .errors import ApiError, ClientError, SessionExpired, SessionRequired
from .feed import FeedLoader
from .session_cache import SessionCache, require_session

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "ClientError",
    "FeedLoader",
    "SessionCache",
    "SessionExpired",
    "SessionRequired",
    "require_session",
]
