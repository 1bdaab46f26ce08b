"""Network error handling and retry policy for the Crossing Minds API client.

Translates httpx failures (no HTTP response received) into ``TransportError``
subclasses, and defines the exponential backoff policy applied to transient
failures.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import httpx

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


class TransportError(Exception):
    """Base exception for failures where no usable server response exists."""

    is_retryable: bool = False

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.url = url


class NetworkConnectionError(TransportError):
    """Exception raised for connection-related network failures."""

    is_retryable = True


class NetworkTimeoutError(TransportError):
    """Exception raised when the request exceeds its timeout."""

    is_retryable = True


class DNSResolutionError(TransportError):
    """Exception raised for DNS resolution failures."""

    is_retryable = True


class SSLCertificateError(TransportError):
    """Exception raised for SSL certificate verification failures."""

    is_retryable = False


class MalformedResponseError(TransportError):
    """Exception raised when the response body is not valid JSON."""

    is_retryable = False

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message, method=method, url=url)
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff policy for transient failures.

    The delay before retry ``n`` (1-based) is ``multiplier ** n * base_delay_ms``
    milliseconds. ``max_retries=0`` disables retrying.
    """

    max_retries: int = 3
    base_delay_ms: int = 100
    multiplier: float = 5
    retryable_status_codes: FrozenSet[int] = field(default_factory=lambda: frozenset({429}))
    idempotent_status_codes: FrozenSet[int] = field(
        default_factory=lambda: frozenset({500, 503})
    )

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay_ms <= 0:
            raise ValueError(f"base_delay_ms must be > 0, got {self.base_delay_ms}")
        if self.multiplier <= 1:
            raise ValueError(f"multiplier must be > 1, got {self.multiplier}")

    @staticmethod
    def is_idempotent(method: str) -> bool:
        return method.upper() in IDEMPOTENT_METHODS

    def status_codes_for(self, method: str) -> FrozenSet[int]:
        """Status codes that may be retried for the given HTTP verb."""
        if self.is_idempotent(method):
            return self.retryable_status_codes | self.idempotent_status_codes
        return self.retryable_status_codes

    def should_retry_status(self, method: str, status_code: int, attempt: int) -> bool:
        """Whether a response with ``status_code`` may be retried.

        Args:
            method: HTTP verb of the request
            status_code: Status of the response just received
            attempt: Number of retries already performed
        """
        return attempt < self.max_retries and status_code in self.status_codes_for(method)

    def should_retry_error(self, method: str, error: TransportError, attempt: int) -> bool:
        """Whether a network failure may be retried (idempotent verbs only)."""
        return (
            attempt < self.max_retries
            and error.is_retryable
            and self.is_idempotent(method)
        )

    def delay_seconds(self, attempt: int) -> float:
        """Backoff before retry number ``attempt`` (starting at 1), in seconds."""
        return (self.multiplier**attempt) * self.base_delay_ms / 1000.0


class NetworkErrorHandler:
    """Classifies httpx exceptions into ``TransportError`` subclasses."""

    def __init__(self):
        self._dns_error_patterns = [
            r"name.*resolution.*failed",
            r"name.*or.*service.*not.*known",
            r"nodename.*nor.*servname.*provided",
            r"temporary.*failure.*in.*name.*resolution",
        ]
        self._ssl_error_patterns = [
            r"ssl.*certificate.*verification.*failed",
            r"certificate.*verify.*failed",
            r"ssl.*handshake.*failed",
            r"bad.*certificate",
        ]

    def classify_network_error(
        self,
        error: Exception,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> TransportError:
        """Return the ``TransportError`` describing an httpx failure.

        Args:
            error: The original httpx exception
            method: HTTP verb of the failed request
            url: Target URL of the failed request
        """
        error_message = str(error).lower()

        if isinstance(error, httpx.TimeoutException):
            if isinstance(error, httpx.ConnectTimeout):
                return NetworkTimeoutError(
                    f"Connection timed out: {error}", method=method, url=url
                )
            return NetworkTimeoutError(f"Request timed out: {error}", method=method, url=url)

        if isinstance(error, httpx.ConnectError):
            if any(re.search(p, error_message) for p in self._dns_error_patterns):
                return DNSResolutionError(
                    f"Cannot resolve server address: {error}", method=method, url=url
                )
            if any(re.search(p, error_message) for p in self._ssl_error_patterns):
                return SSLCertificateError(
                    f"SSL certificate verification failed: {error}",
                    method=method,
                    url=url,
                )
            return NetworkConnectionError(f"Connection failed: {error}", method=method, url=url)

        if isinstance(error, httpx.TransportError):
            return NetworkConnectionError(f"Network error: {error}", method=method, url=url)

        return NetworkConnectionError(
            f"Unknown network error: {error}", method=method, url=url
        )
