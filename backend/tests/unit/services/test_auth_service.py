"""Tests for :class:`AuthService`."""

from __future__ import annotations

from itertools import count

import pytest
from socialapp.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    ValidationFailedError,
)
from socialapp.services.auth import AuthService, LoginIn, RegisterIn
from socialapp.services.auth.service import DUPLICATE_EMAIL_MESSAGE, INVALID_CREDENTIALS_MESSAGE
from socialapp.services.auth.session import USER_GONE_MESSAGE

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import FrozenClock, make_token_service


@pytest.fixture()
def clock():
    return FrozenClock()


@pytest.fixture()
def tokens(clock):
    return make_token_service(clock)


@pytest.fixture()
def service(tokens):
    return AuthService(tokens=tokens, suffix=lambda: 4242)


class TestRegister:
    def test_creates_user_and_issues_pair(self, session, service, tokens):
        result = service.register(
            RegisterIn(name="Alex", email="Alex.Martinez@Example.com", password="devPass123!")
        )

        assert result.user.email == "alex.martinez@example.com"
        assert result.user.username == "alex.martinez4242"
        assert tokens.verify_access(result.access_token).user_id == result.user.id
        assert tokens.verify_refresh(result.refresh_token).user_id == result.user.id

    def test_explicit_username_kept(self, session, service):
        result = service.register(
            RegisterIn(name="Sam", email="sam@example.com", password="password1", username="sammy")
        )
        assert result.user.username == "sammy"

    def test_duplicate_email_conflict(self, session, service):
        UserFactory(email="dup@example.com")

        with pytest.raises(ConflictError) as err:
            service.register(RegisterIn(name="Dup", email="DUP@example.com", password="password1"))
        assert str(err.value) == DUPLICATE_EMAIL_MESSAGE

    def test_taken_username_conflict(self, session, service):
        UserFactory(username="sammy")

        with pytest.raises(ConflictError, match="Username already taken"):
            service.register(
                RegisterIn(name="Sam", email="sam2@example.com", password="password1", username="sammy")
            )

    def test_generated_username_retries_on_collision(self, session, tokens):
        UserFactory(username="kim1000")
        suffixes = count(1000)
        service = AuthService(tokens=tokens, suffix=lambda: next(suffixes))

        result = service.register(RegisterIn(name="Kim", email="kim@example.com", password="password1"))

        assert result.user.username == "kim1001"

    def test_generated_username_gives_up(self, session, tokens):
        UserFactory(username="lee1111")
        service = AuthService(tokens=tokens, suffix=lambda: 1111)

        with pytest.raises(ConflictError, match="unique username"):
            service.register(RegisterIn(name="Lee", email="lee@example.com", password="password1"))

    def test_unsafe_characters_stripped_from_username(self, session, service):
        result = service.register(RegisterIn(name="Q", email="q+tag@example.com", password="password1"))
        assert result.user.username == "qtag4242"

    def test_model_validation_surfaces(self, session, service):
        with pytest.raises(ValidationFailedError):
            service.register(RegisterIn(name="Short", email="short@example.com", password="abc"))


class TestLogin:
    def test_valid_credentials(self, session, service, tokens):
        user = UserFactory(email="login@example.com")

        result = service.login(LoginIn(email="login@example.com", password=DEFAULT_PASSWORD))

        assert result.user.id == user.id
        assert tokens.verify_access(result.access_token).user_id == user.id

    @pytest.mark.parametrize(
        "email,password",
        [("login@example.com", "wrong-password"), ("nobody@example.com", DEFAULT_PASSWORD)],
    )
    def test_bad_credentials_share_one_message(self, session, service, email, password):
        UserFactory(email="login@example.com")

        with pytest.raises(AuthenticationError) as err:
            service.login(LoginIn(email=email, password=password))
        assert str(err.value) == INVALID_CREDENTIALS_MESSAGE


class TestRefresh:
    def test_issues_new_pair(self, session, service, tokens, clock):
        user = UserFactory()
        refresh_token = tokens.issue_refresh_token(user.id)
        clock.advance(hours=1)

        result = service.refresh(refresh_token)

        assert tokens.verify_access(result.access_token).user_id == user.id
        assert tokens.verify_refresh(result.refresh_token).user_id == user.id

    def test_rejects_access_token(self, session, service, tokens):
        user = UserFactory()
        with pytest.raises(InvalidTokenError):
            service.refresh(tokens.issue_access_token(user.id))

    def test_rejects_missing_token(self, session, service):
        with pytest.raises(InvalidTokenError):
            service.refresh(None)

    def test_rejects_expired_token(self, session, service, tokens, clock):
        user = UserFactory()
        refresh_token = tokens.issue_refresh_token(user.id)
        clock.advance(days=8)

        with pytest.raises(InvalidTokenError, match="expired"):
            service.refresh(refresh_token)

    def test_rejects_deleted_user(self, session, service, tokens):
        with pytest.raises(AuthenticationError) as err:
            service.refresh(tokens.issue_refresh_token(987654))
        assert str(err.value) == USER_GONE_MESSAGE


class TestProfile:
    def test_me(self, session, service):
        user = UserFactory(name="Profile")
        assert service.me(user.id).name == "Profile"

    def test_me_missing(self, session, service):
        with pytest.raises(NotFoundError):
            service.me(123456)

    def test_find_user_returns_none(self, session, service):
        assert service.find_user(123456) is None
