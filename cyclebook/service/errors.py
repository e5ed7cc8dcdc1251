"""
Errors
------

The errors raised by the service layer. Each carries the HTTP status it
is reported with, so that the API can translate them in one place
(see :func:`~cyclebook.middleware.error_middleware`).
"""

from http import HTTPStatus


class ServiceError(Exception):
    """The base class for expected failures in the service layer."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **data):
        super().__init__(message)
        self.message = message
        self.data = data


class InvalidRequestError(ServiceError):
    """The request was malformed or missing data."""
    status = HTTPStatus.BAD_REQUEST


class AuthenticationError(ServiceError):
    """The supplied credentials are wrong."""
    status = HTTPStatus.UNAUTHORIZED


class AuthorizationError(ServiceError):
    """The caller is not allowed to perform this action."""
    status = HTTPStatus.FORBIDDEN


class NotFoundError(ServiceError):
    """The requested account or booking does not exist."""
    status = HTTPStatus.NOT_FOUND


class ConflictError(ServiceError):
    """The request conflicts with the current state, such as a cycle already in use."""
    status = HTTPStatus.BAD_REQUEST
