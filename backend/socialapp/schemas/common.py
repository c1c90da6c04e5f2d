"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class PageQuerySchema(Schema):
    """Validate ``page``/``limit`` query parameters.

    ``limit`` is optional; the feed service applies its configured default
    and upper bound.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=None, validate=validate.Range(min=1))
