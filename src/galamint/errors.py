"""Service-level exceptions mapped to HTTP status codes at the API boundary."""

from typing import Optional


class ServiceError(Exception):
    """Base error raised by domain services."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(ServiceError):
    """Validation, ownership or duplicate-claim failure."""

    status_code = 400


class NotFoundError(ServiceError):
    """Requested record does not exist."""

    status_code = 404


class ConflictError(ServiceError):
    """A natural-key uniqueness constraint was violated at insert time."""

    status_code = 409


class GatewayError(ServiceError):
    """The chain gateway rejected a call or could not be reached.

    ``upstream_status`` is None for transport failures and malformed bodies.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body
