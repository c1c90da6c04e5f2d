"""Request and response shapes for the /auth endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from socialapp.models.user import MIN_PASSWORD_LENGTH


class RegisterSchema(Schema):
    """Body of ``POST /auth/register``."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, validate=validate.Length(min=MIN_PASSWORD_LENGTH, max=128)
    )
    username = fields.String(load_default=None, validate=validate.Length(min=3, max=64))


class LoginSchema(Schema):
    """Body of ``POST /auth/login``."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class UserSchema(Schema):
    """Public representation of a user. The password hash is never dumped."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)


class AuthResultSchema(Schema):
    """Register/login response body. The refresh token travels in the cookie."""

    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(required=True)


class AccessTokenSchema(Schema):
    """Refresh response body."""

    access_token = fields.String(required=True)
