"""Common plumbing for the application services."""

from __future__ import annotations

from dataclasses import dataclass

from socialapp.core import errors as api_errors
from socialapp.repositories.base import Pagination
from socialapp.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationFailedError,
)
from socialapp.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """Who is acting and under which request id."""

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Parent of :class:`AuthService` and :class:`PostService`.

    Services reach the database only through a unit of work obtained from
    :meth:`rw_uow` or :meth:`ro_uow`, and raise
    :class:`~socialapp.services._shared.errors.ServiceError` subclasses that
    the HTTP layer converts with :meth:`translate_exceptions`.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    def ensure_pagination(self, *, page: int, limit: int, max_limit: int | None = None) -> Pagination:
        """
        Validate paging input.

        :param page: 1-based page number.
        :param limit: Page size, at most ``max_limit`` when given.
        :raises ValidationFailedError: Listing every offending field.
        """
        page, limit = int(page), int(limit)
        problems: dict[str, list[str]] = {}
        if page < 1:
            problems["page"] = ["Must be greater than or equal to 1."]
        if limit < 1:
            problems["limit"] = ["Must be greater than or equal to 1."]
        elif max_limit is not None and limit > max_limit:
            problems["limit"] = [f"Must be less than or equal to {max_limit}."]
        if problems:
            raise ValidationFailedError("Invalid pagination parameters", problems)
        return Pagination(page=page, limit=limit)

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Return the HTTP error matching a service error.

        Exceptions that are not :class:`ServiceError` come back unchanged and
        end up in the generic 500 handler.
        """
        if isinstance(exc, ValidationFailedError):
            return api_errors.BadRequest(exc.message, details=exc.details or None)
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(str(exc))
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))
        return exc
