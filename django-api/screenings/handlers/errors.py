"""Map domain errors to HTTP responses.

Only the error code and the user-safe message leave the process.
"""

from rest_framework import status
from rest_framework.response import Response

from screenings.domain.errors import (
    ConflictError,
    DomainError,
    InvalidRequestError,
    NotFoundError,
)

_STATUS_BY_KIND = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(error: DomainError) -> int:
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(error, kind):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def domain_error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=status_for(error),
    )


def validation_error_response(fields: dict) -> Response:
    return Response(
        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request",
                "fields": fields,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )
