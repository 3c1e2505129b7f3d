"""Domain-level exceptions.

Every failure the order workflow surfaces is a subclass of DomainException,
so the CLI (or any other transport) can catch them uniformly.  Each class
carries the HTTP status a transport layer should answer with.
"""

from http import HTTPStatus


class DomainException(Exception):
    """Base class for all domain errors."""

    status: HTTPStatus = HTTPStatus.BAD_REQUEST


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class DependencyError(DomainException):
    """The product catalog could not be reached or answered badly."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    status = HTTPStatus.NOT_FOUND


class InternalError(DomainException):
    """The order store failed while reading or writing."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
