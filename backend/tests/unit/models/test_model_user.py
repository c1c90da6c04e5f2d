"""Tests for the User model."""

from __future__ import annotations

import pytest
from socialapp.models.user import User
from sqlalchemy.exc import IntegrityError


class TestUser:
    def test_password_hashing(self, session, faker):
        raw = faker.password(length=12)
        u = User(name=faker.name(), email="Test@Example.com", username="tester")
        u.password = raw
        session.add(u)
        session.commit()
        assert u.password_hash != raw
        assert u.verify_password(raw) is True
        assert u.verify_password("wrong-password") is False

    def test_password_is_write_only(self):
        u = User(name="A", email="a@example.com", username="u1")
        u.password = "long-enough"
        with pytest.raises(AttributeError):
            _ = u.password

    def test_short_password_rejected(self):
        u = User(name="A", email="a@example.com", username="u1")
        with pytest.raises(ValueError, match="at least 8"):
            u.password = "short"

    def test_email_normalized_and_unique(self, session):
        u1 = User(name="Alice", email="  Alice@Example.com ", username="alice")
        u1.password = "password1"
        session.add(u1)
        session.commit()
        assert u1.email == "alice@example.com"

        u2 = User(name="Alice", email="alice@example.com", username="alice2")
        u2.password = "password1"
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_username_unique(self, session):
        u1 = User(name="Bob", email="b1@example.com", username="bob")
        u1.password = "password1"
        session.add(u1)
        session.commit()

        u2 = User(name="Bob", email="b2@example.com", username="bob")
        u2.password = "password1"
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "spaces in@example.com"])
    def test_malformed_email_rejected(self, email):
        with pytest.raises(ValueError):
            User(name="X", email=email, username="x")

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="Name is required"):
            User(name="   ", email="x@example.com", username="x")

    def test_verify_password_without_hash(self):
        u = User(name="X", email="x@example.com", username="x")
        assert u.verify_password("anything") is False
