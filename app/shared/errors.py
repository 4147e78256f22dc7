"""
Directory Error Taxonomy

Typed failures raised by the store, the matching engine and the
aggregation reporter. The API layer maps them to HTTP responses through
a single exception handler; nothing below the router substitutes
default data for a failure.
"""


class DirectoryError(Exception):
    """Base class for all directory failures."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.code,
            "message": self.message,
        }


class InvalidArgument(DirectoryError):
    """Limit out of range, unknown grouping column, bad enumerated value."""

    status_code = 400
    code = "INVALID_ARGUMENT"


class Unauthorized(DirectoryError):
    status_code = 401
    code = "UNAUTHORIZED"


class Forbidden(DirectoryError):
    status_code = 403
    code = "FORBIDDEN"


class NotFound(DirectoryError):
    """Referenced Opportunity, Business or User does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class Conflict(DirectoryError):
    status_code = 409
    code = "CONFLICT"


class ServiceUnavailable(DirectoryError):
    """The directory store cannot be reached."""

    status_code = 503
    code = "SERVICE_UNAVAILABLE"
