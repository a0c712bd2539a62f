"""
Exception types raised inside the database console.
"""


class QueryExecutionError(RuntimeError):
    """Raised by an executor when a query cannot be interpreted or run."""


class RequestShapeError(ValueError):
    """
    Raised before any engine interaction when a request is malformed.

    Covers missing parameters and unsupported engine types. The HTTP layer
    reports these with a 4xx status, unlike execution errors.
    """


MISSING_PARAMETERS = "missing required parameters"
UNSUPPORTED_TYPE = "unsupported database type"
UNKNOWN_ERROR = "unknown error"


def error_message(exc: BaseException) -> str:
    """Return the message carried by an exception, or a generic fallback."""
    message = str(exc).strip()
    return message or UNKNOWN_ERROR
