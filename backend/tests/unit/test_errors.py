"""Tests for the JSON failure envelope."""

from __future__ import annotations

import pytest
from socialapp.core.errors import Conflict, NotFound, code_for_status, failure


@pytest.mark.parametrize(
    "status,expected",
    [(401, "unauthorized"), (404, "not_found"), (405, "method_not_allowed"), (413, "payload_too_large"),
     (429, "too_many_requests"), (500, "internal_server_error"), (599, "error")],
)
def test_code_for_status(status, expected):
    assert code_for_status(status) == expected


def test_failure_envelope(app):
    with app.app_context(), app.test_request_context(headers={"X-Request-ID": "r-1"}):
        resp, status = failure(409, "Taken", details={"field": "email"})
        body = resp.get_json()

    assert status == 409
    assert body == {
        "success": False,
        "message": "Taken",
        "code": "conflict",
        "request_id": "r-1",
        "details": {"field": "email"},
    }


def test_subclasses_carry_defaults(app):
    with app.app_context(), app.test_request_context():
        _, status = NotFound().render()
        assert status == 404
        assert str(Conflict("User already exists with this email")) == "User already exists with this email"
