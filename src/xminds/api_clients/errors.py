"""Typed errors returned by the Crossing Minds API.

The platform reports failures with a JSON envelope::

    {"error_code": 42, "error_name": "DuplicatedError",
     "message": "The {type} {key} is duplicated",
     "error_data": {"type": "item", "key": 11111, "name": "DUPLICATED_ITEM_ID"}}

``classify`` turns such an envelope into one of a closed set of ``ApiError``
subclasses. Every instance carries an ``ErrorKind`` discriminant so callers can
match on ``error.kind`` instead of walking the class hierarchy.
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type

logger = logging.getLogger(__name__)

PLACEHOLDER_FIELDS = ("error", "type", "key", "method")


class ErrorKind(str, Enum):
    """Discriminant of an ``ApiError``."""

    AUTH = "AuthError"
    DUPLICATED = "DuplicatedError"
    FORBIDDEN = "ForbiddenError"
    TOKEN_EXPIRED = "TokenExpiredError"
    METHOD_NOT_ALLOWED = "MethodNotAllowedError"
    NOT_FOUND = "NotFoundError"
    REFRESH_TOKEN_EXPIRED = "RefreshTokenExpiredError"
    SERVER_UNAVAILABLE = "ServerUnavailableError"
    TOO_MANY_REQUESTS = "TooManyRequestsError"
    WRONG_DATA = "WrongDataError"
    SERVER = "ServerError"


class ApiError(Exception):
    """Base exception for errors reported by the API server."""

    kind: ErrorKind = ErrorKind.SERVER

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[Any] = None,
        error_name: Optional[str] = None,
        error_data: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.error_name = error_name
        self.error_data = error_data
        self.status_code = status_code
        # Bearer of the rejected request, set by the transport
        self.sent_access_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class AuthError(ApiError):
    """Authentication could not be performed."""

    kind = ErrorKind.AUTH


class DuplicatedError(ApiError):
    """A resource with the same identifier already exists."""

    kind = ErrorKind.DUPLICATED


class ForbiddenError(ApiError):
    """The authenticated account lacks permission for the resource."""

    kind = ErrorKind.FORBIDDEN


class TokenExpiredError(ApiError):
    """The access token has expired."""

    kind = ErrorKind.TOKEN_EXPIRED


class MethodNotAllowedError(ApiError):
    """The HTTP method is not allowed on the endpoint."""

    kind = ErrorKind.METHOD_NOT_ALLOWED


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND


class RefreshTokenExpiredError(ApiError):
    """The refresh token has expired; a full login is required."""

    kind = ErrorKind.REFRESH_TOKEN_EXPIRED


class ServerUnavailableError(ApiError):
    """The server is temporarily unavailable."""

    kind = ErrorKind.SERVER_UNAVAILABLE


class TooManyRequestsError(ApiError):
    """The request rate exceeds the subscription limit."""

    kind = ErrorKind.TOO_MANY_REQUESTS


class WrongDataError(ApiError):
    """The submitted data is invalid."""

    kind = ErrorKind.WRONG_DATA


class ServerError(ApiError):
    """The server hit an internal error, or reported an unknown error name."""

    kind = ErrorKind.SERVER


ERROR_CLASSES: Dict[ErrorKind, Type[ApiError]] = {
    cls.kind: cls
    for cls in (
        AuthError,
        DuplicatedError,
        ForbiddenError,
        TokenExpiredError,
        MethodNotAllowedError,
        NotFoundError,
        RefreshTokenExpiredError,
        ServerUnavailableError,
        TooManyRequestsError,
        WrongDataError,
        ServerError,
    )
}

# Names used on the wire by the platform, in addition to the kind names.
WIRE_NAMES: Dict[str, ErrorKind] = {
    "AuthError": ErrorKind.AUTH,
    "DuplicatedError": ErrorKind.DUPLICATED,
    "ForbiddenError": ErrorKind.FORBIDDEN,
    "JwtTokenExpired": ErrorKind.TOKEN_EXPIRED,
    "MethodNotAllowed": ErrorKind.METHOD_NOT_ALLOWED,
    "NotFoundError": ErrorKind.NOT_FOUND,
    "RefreshTokenExpired": ErrorKind.REFRESH_TOKEN_EXPIRED,
    "ServerUnavailable": ErrorKind.SERVER_UNAVAILABLE,
    "TooManyRequests": ErrorKind.TOO_MANY_REQUESTS,
    "WrongData": ErrorKind.WRONG_DATA,
    "ServerError": ErrorKind.SERVER,
}
WIRE_NAMES.update({kind.value: kind for kind in ErrorKind})


def resolve_kind(error_name: Optional[str]) -> ErrorKind:
    """Map a wire ``error_name`` to its kind, defaulting to ``SERVER``."""
    if not isinstance(error_name, str):
        return ErrorKind.SERVER
    return WIRE_NAMES.get(error_name, ErrorKind.SERVER)


def format_message(template: str, error_data: Optional[Mapping[str, Any]]) -> str:
    """Substitute ``{error}``, ``{type}``, ``{key}`` and ``{method}``.

    Placeholders whose field is missing from ``error_data`` stay literal.
    """
    if not error_data:
        return template

    message = template
    for field in PLACEHOLDER_FIELDS:
        if field in error_data and error_data[field] is not None:
            message = message.replace("{" + field + "}", str(error_data[field]))
    return message


def build_error(
    kind: ErrorKind, envelope: Any, status_code: Optional[int] = None
) -> ApiError:
    """Construct the error class for ``kind`` from a (possibly malformed) envelope."""
    error_class = ERROR_CLASSES[kind]

    if not isinstance(envelope, Mapping):
        return error_class(
            f"Unexpected error response (HTTP {status_code})",
            status_code=status_code,
        )

    error_data = envelope.get("error_data")
    if not isinstance(error_data, Mapping):
        error_data = None

    template = envelope.get("message")
    if not isinstance(template, str) or not template:
        template = f"Unexpected error response (HTTP {status_code})"

    return error_class(
        format_message(template, error_data),
        error_code=envelope.get("error_code"),
        error_name=envelope.get("error_name"),
        error_data=dict(error_data) if error_data is not None else None,
        status_code=status_code,
    )


def classify(envelope: Any, status_code: Optional[int] = None) -> ApiError:
    """Build the typed ``ApiError`` for a server error envelope.

    Never raises: unknown or missing names produce a ``ServerError``, and so do
    envelopes that are not JSON objects. The caller decides whether to raise.
    """
    error_name = envelope.get("error_name") if isinstance(envelope, Mapping) else None
    kind = resolve_kind(error_name)
    if kind is ErrorKind.SERVER and error_name not in (None, "ServerError"):
        logger.debug(f"Unknown error name {error_name!r}, treating as ServerError")
    return build_error(kind, envelope, status_code)
