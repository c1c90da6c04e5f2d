"""Tests for :class:`UserRepository`."""

from __future__ import annotations

from socialapp.repositories.user import UserRepository

from tests.factories.user import UserFactory


class TestUserRepository:
    def test_get_by_email_is_case_insensitive(self, session):
        user = UserFactory(email="mixed@example.com")
        repo = UserRepository(session)

        assert repo.get_by_email("  MIXED@example.COM ") is user
        assert repo.get_by_email("nobody@example.com") is None

    def test_exists_helpers(self, session):
        UserFactory(email="taken@example.com", username="taken")
        repo = UserRepository(session)

        assert repo.exists_by_email("taken@example.com") is True
        assert repo.exists_by_email("free@example.com") is False
        assert repo.exists_by_username("taken") is True
        assert repo.exists_by_username("free") is False

    def test_authenticate(self, session):
        user = UserFactory(email="login@example.com", password="correct-horse")
        repo = UserRepository(session)

        assert repo.authenticate("login@example.com", "correct-horse") is user
        assert repo.authenticate("login@example.com", "wrong-horse") is None
        assert repo.authenticate("missing@example.com", "correct-horse") is None

    def test_get_and_exists_by_id(self, session):
        user = UserFactory()
        repo = UserRepository(session)

        assert repo.get(user.id) is user
        assert repo.exists(user.id) is True
        assert repo.get(user.id + 1000) is None
        assert repo.exists(user.id + 1000) is False
