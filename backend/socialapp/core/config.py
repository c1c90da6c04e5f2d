"""Settings classes selected by the ``APP_ENV`` environment variable.

Values come from the process environment (a local ``.env`` is loaded when
present). Each class is passed to :meth:`flask.Config.from_object`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"
TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) is true, anything else false.

    :param name: Variable name.
    :param default: Returned when the variable is unset.
    """
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, returning ``default`` when unset, blank or malformed."""
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class BaseConfig:
    """Defaults shared by every environment.

    Attributes
    ----------
    ACCESS_TOKEN_SECRET, REFRESH_TOKEN_SECRET: str
        Distinct HMAC keys for the two token kinds. ``SECRET_KEY`` signs
        neither.
    REFRESH_COOKIE_NAME, REFRESH_COOKIE_SECURE, REFRESH_COOKIE_SAMESITE
        Attributes of the HttpOnly cookie holding the refresh token.
    MAX_POST_IMAGES, MAX_IMAGE_BYTES, ALLOWED_IMAGE_EXTENSIONS
        Server-side limits on post attachments. ``MAX_CONTENT_LENGTH`` caps
        the whole multipart body.
    OBJECT_STORAGE_BACKEND: str
        ``"memory"`` or ``"cloudinary"``.
    FEED_DEFAULT_LIMIT, FEED_MAX_LIMIT: int
        Feed page size and its upper bound.
    """

    APP_VERSION = os.getenv("APP_VERSION", "dev")
    API_BASE_PREFIX = "/api"
    DEBUG = False
    TESTING = False
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    ACCESS_TOKEN_TTL_MINUTES = env_int("ACCESS_TOKEN_TTL_MINUTES", 15)
    REFRESH_TOKEN_TTL_DAYS = env_int("REFRESH_TOKEN_TTL_DAYS", 7)

    REFRESH_COOKIE_NAME = "jwt"
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", False)
    REFRESH_COOKIE_SAMESITE = os.getenv("REFRESH_COOKIE_SAMESITE", "Lax")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    MAX_CONTENT_LENGTH = env_int("MAX_CONTENT_LENGTH", 45 * 1024 * 1024)
    MAX_POST_IMAGES = 4
    MAX_IMAGE_BYTES = env_int("MAX_IMAGE_BYTES", 10 * 1024 * 1024)
    ALLOWED_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp")
    UPLOAD_MAX_WORKERS = env_int("UPLOAD_MAX_WORKERS", 4)

    OBJECT_STORAGE_BACKEND = os.getenv("OBJECT_STORAGE_BACKEND", "memory")
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "social-application")

    FEED_DEFAULT_LIMIT = 10
    FEED_MAX_LIMIT = 50

    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = True

    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = 600


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, refresh cookie usable over plain HTTP."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """In-memory SQLite, fixed token secrets, no rate limiting, no proxy."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    ACCESS_TOKEN_SECRET = "test-access-secret-0123456789abcdef"
    REFRESH_TOKEN_SECRET = "test-refresh-secret-0123456789abcdef"
    OBJECT_STORAGE_BACKEND = "memory"
    RATELIMIT_ENABLED = False
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Cross-site deployment: the cookie needs ``SameSite=None`` plus ``Secure``."""

    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", True)
    REFRESH_COOKIE_SAMESITE = os.getenv("REFRESH_COOKIE_SAMESITE", "None")
    OBJECT_STORAGE_BACKEND = os.getenv("OBJECT_STORAGE_BACKEND", "cloudinary")


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``; unknown or unset means development."""
    return CONFIG_MAP.get(os.getenv(ENV_VAR, "development").strip().lower(), DevelopmentConfig)
