"""API clients for the Crossing Minds recommendation platform.

All HTTP functionality is contained in ``XMindsBaseClient``; resource clients
only map their arguments onto endpoint descriptors.
"""

from .auth_state import AuthState, Credentials
from .base_client import RequestDescriptor, RequestOptions, XMindsBaseClient
from .client import XMindsClient
from .errors import (
    ApiError,
    AuthError,
    DuplicatedError,
    ErrorKind,
    ForbiddenError,
    MethodNotAllowedError,
    NotFoundError,
    RefreshTokenExpiredError,
    ServerError,
    ServerUnavailableError,
    TokenExpiredError,
    TooManyRequestsError,
    WrongDataError,
    classify,
)
from .network_error_handler import (
    DNSResolutionError,
    MalformedResponseError,
    NetworkConnectionError,
    NetworkTimeoutError,
    RetryPolicy,
    SSLCertificateError,
    TransportError,
)

__all__ = [
    # Clients
    "XMindsClient",
    "XMindsBaseClient",
    "RequestOptions",
    "RequestDescriptor",
    # Token state
    "AuthState",
    "Credentials",
    # Server errors
    "ApiError",
    "ErrorKind",
    "classify",
    "AuthError",
    "DuplicatedError",
    "ForbiddenError",
    "TokenExpiredError",
    "MethodNotAllowedError",
    "NotFoundError",
    "RefreshTokenExpiredError",
    "ServerUnavailableError",
    "TooManyRequestsError",
    "WrongDataError",
    "ServerError",
    # Transport
    "RetryPolicy",
    "TransportError",
    "NetworkConnectionError",
    "NetworkTimeoutError",
    "DNSResolutionError",
    "SSLCertificateError",
    "MalformedResponseError",
]
