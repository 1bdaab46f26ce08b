"""Tests for RetryPolicy and NetworkErrorHandler."""

import httpx
import pytest

from xminds.api_clients.network_error_handler import (
    DNSResolutionError,
    NetworkConnectionError,
    NetworkErrorHandler,
    NetworkTimeoutError,
    RetryPolicy,
    SSLCertificateError,
)


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.base_delay_ms == 100
        assert policy.multiplier == 5

    def test_backoff_delays_grow_exponentially(self):
        policy = RetryPolicy()

        assert [policy.delay_seconds(n) for n in (1, 2, 3)] == [0.5, 2.5, 12.5]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"base_delay_ms": 0},
            {"multiplier": 1},
            {"multiplier": 0.5},
        ],
    )
    def test_invalid_values_are_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)

    def test_idempotent_verbs_retry_server_errors(self):
        policy = RetryPolicy()

        for method in ("GET", "PUT", "DELETE", "get"):
            assert policy.status_codes_for(method) == {429, 500, 503}

    def test_non_idempotent_verbs_only_retry_rate_limits(self):
        policy = RetryPolicy()

        assert policy.status_codes_for("POST") == {429}
        assert policy.status_codes_for("PATCH") == {429}
        assert not policy.should_retry_status("POST", 500, 0)
        assert policy.should_retry_status("POST", 429, 0)

    def test_retries_stop_at_max_retries(self):
        policy = RetryPolicy(max_retries=2)

        assert policy.should_retry_status("GET", 503, 0)
        assert policy.should_retry_status("GET", 503, 1)
        assert not policy.should_retry_status("GET", 503, 2)

    def test_zero_retries_disables_retrying(self):
        policy = RetryPolicy(max_retries=0)

        assert not policy.should_retry_status("GET", 429, 0)
        assert not policy.should_retry_error("GET", NetworkConnectionError("down"), 0)

    def test_network_errors_retry_only_idempotent_verbs(self):
        policy = RetryPolicy()
        error = NetworkConnectionError("Connection refused")

        assert policy.should_retry_error("GET", error, 0)
        assert not policy.should_retry_error("POST", error, 0)

    def test_non_retryable_errors_are_not_retried(self):
        policy = RetryPolicy()

        assert not policy.should_retry_error("GET", SSLCertificateError("bad cert"), 0)


class TestNetworkErrorHandler:
    @pytest.fixture
    def handler(self):
        return NetworkErrorHandler()

    def test_timeouts(self, handler):
        error = handler.classify_network_error(
            httpx.ReadTimeout("timed out"), method="GET", url="http://x/"
        )

        assert isinstance(error, NetworkTimeoutError)
        assert error.is_retryable
        assert error.method == "GET"
        assert error.url == "http://x/"

    def test_connect_timeout_is_a_timeout(self, handler):
        error = handler.classify_network_error(httpx.ConnectTimeout("connect timed out"))

        assert isinstance(error, NetworkTimeoutError)
        assert "Connection timed out" in str(error)

    def test_dns_failure(self, handler):
        error = handler.classify_network_error(
            httpx.ConnectError("[Errno -2] Name or service not known")
        )

        assert isinstance(error, DNSResolutionError)

    def test_ssl_failure(self, handler):
        error = handler.classify_network_error(
            httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")
        )

        assert isinstance(error, SSLCertificateError)
        assert not error.is_retryable

    def test_connection_refused(self, handler):
        error = handler.classify_network_error(httpx.ConnectError("Connection refused"))

        assert type(error) is NetworkConnectionError
        assert "Connection failed" in str(error)

    def test_other_transport_errors(self, handler):
        error = handler.classify_network_error(httpx.RemoteProtocolError("peer closed"))

        assert type(error) is NetworkConnectionError
        assert "Network error" in str(error)
