"""Idempotent demo content for local development databases."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from socialapp.models.post import Comment, Post, PostLike
from socialapp.models.user import User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

SEED_EPOCH = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

USER_FIXTURES: list[dict[str, str]] = [
    {
        "name": "Alex Martinez",
        "email": "alex.martinez@example.com",
        "username": "alexm",
        "password": "devPass123!",
    },
    {
        "name": "Jamie Lee",
        "email": "jamie.lee@example.com",
        "username": "jamielee",
        "password": "strongPass123",
    },
    {
        "name": "Sara Kim",
        "email": "sara.kim@example.com",
        "username": "sarak",
        "password": "shareMore2024",
    },
]

# (author email, content, image urls)
POST_FIXTURES: list[tuple[str, str, list[str]]] = [
    ("alex.martinez@example.com", "First post on the new network!", []),
    ("jamie.lee@example.com", "Sunrise over the bay this morning.", [
        "https://images.example.com/demo/sunrise.jpg",
    ]),
    ("sara.kim@example.com", "Anyone up for a book swap this weekend?", []),
    ("alex.martinez@example.com", "Trying out the new ramen place downtown.", [
        "https://images.example.com/demo/ramen-1.jpg",
        "https://images.example.com/demo/ramen-2.jpg",
    ]),
    ("jamie.lee@example.com", "Finished my first half marathon.", []),
    ("sara.kim@example.com", "Plant update: the monstera finally has a new leaf.", [
        "https://images.example.com/demo/monstera.webp",
    ]),
    ("alex.martinez@example.com", "Weekend project: rebuilding an old bike.", []),
    ("jamie.lee@example.com", "Rainy day playlist suggestions?", []),
    ("sara.kim@example.com", "Homemade sourdough, attempt number four.", [
        "https://images.example.com/demo/sourdough.png",
    ]),
    ("alex.martinez@example.com", "Museum night was great.", []),
    ("jamie.lee@example.com", "Moving to a new apartment next month.", []),
    ("sara.kim@example.com", "Sketching in the park.", []),
]

# (post index, commenter email, text)
COMMENT_FIXTURES: list[tuple[int, str, str]] = [
    (0, "jamie.lee@example.com", "Welcome!"),
    (0, "sara.kim@example.com", "Glad you made it."),
    (1, "alex.martinez@example.com", "Beautiful colours."),
    (3, "sara.kim@example.com", "Is it worth the queue?"),
    (8, "jamie.lee@example.com", "Looks perfect to me."),
]

# (post index, liker email)
LIKE_FIXTURES: list[tuple[int, str]] = [
    (0, "jamie.lee@example.com"),
    (0, "sara.kim@example.com"),
    (1, "alex.martinez@example.com"),
    (4, "sara.kim@example.com"),
    (8, "alex.martinez@example.com"),
]


class SeedSummary:
    """Per-table ``created``/``existing`` counters."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, int]] = {}

    def record(self, table: str, created: bool) -> None:
        counters = self._tables.setdefault(table, {"created": 0, "existing": 0})
        counters["created" if created else "existing"] += 1

    def merge(self, other: dict[str, dict[str, int]]) -> None:
        for table, counters in other.items():
            for key in ("created", "existing"):
                self._tables.setdefault(table, {"created": 0, "existing": 0})[key] += counters.get(key, 0)

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {table: dict(counters) for table, counters in self._tables.items()}


def _find_or_add(session: Session, model: type[T], values: dict[str, Any], **lookup: Any) -> tuple[T, bool]:
    """Return the row matching ``lookup``; insert it with ``values`` when absent."""
    found = session.scalars(select(model).filter_by(**lookup)).first()
    if found is not None:
        return found, False
    row = model(**{**values, **lookup})
    session.add(row)
    session.flush()
    return row, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo accounts that do not exist yet."""
    session = database.session
    summary = SeedSummary()
    for fixture in USER_FIXTURES:
        email = fixture["email"].strip().lower()
        user = session.scalars(select(User).where(User.email == email)).first()
        summary.record("users", created=user is None)
        if user is not None:
            continue
        user = User(name=fixture["name"], email=email, username=fixture["username"])
        user.password = fixture["password"]
        session.add(user)
        session.flush()
        if verbose:
            LOGGER.info("seed.user_created", extra={"user_id": user.id})
    return summary.as_dict()


def seed_posts(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo posts, then their comments and likes."""
    session = database.session
    summary = SeedSummary()
    users = {u.email: u for u in session.scalars(select(User))}

    posts: list[Post] = []
    for minute, (email, content, images) in enumerate(POST_FIXTURES):
        post, created = _find_or_add(
            session,
            Post,
            {"images": images, "created_at": SEED_EPOCH + timedelta(minutes=minute)},
            user_id=users[email].id,
            content=content,
        )
        posts.append(post)
        summary.record("posts", created)
        if created and verbose:
            LOGGER.info("seed.post_created", extra={"post_id": post.id})

    for index, email, text in COMMENT_FIXTURES:
        author = users[email]
        _, created = _find_or_add(
            session, Comment, {"name": author.name}, post_id=posts[index].id, user_id=author.id, text=text
        )
        summary.record("post_comments", created)

    for index, email in LIKE_FIXTURES:
        _, created = _find_or_add(session, PostLike, {}, post_id=posts[index].id, user_id=users[email].id)
        summary.record("post_likes", created)

    return summary.as_dict()


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed users, then posts. The caller owns the commit."""
    total = SeedSummary()
    for step in (seed_users, seed_posts):
        if verbose:
            LOGGER.info("seed.%s", step.__name__)
        total.merge(step(database, verbose=verbose))
    return total.as_dict()


__all__ = ["SeedSummary", "run_all", "seed_posts", "seed_users"]
