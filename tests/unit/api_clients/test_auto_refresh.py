"""Tests for automatic access token refresh and the login flows."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from tests.infrastructure.mock_api_server import (
    REFRESH_RESPONSE,
    TOKEN_EXPIRED,
    error_envelope,
)
from xminds.api_clients import (
    AuthError,
    Credentials,
    NotFoundError,
    RefreshTokenExpiredError,
    TokenExpiredError,
    XMindsClient,
)

DB_PATH = "/databases/current/"
REFRESH_PATH = "/login/refresh-token/"


def expired_unless_refreshed(request: httpx.Request) -> httpx.Response:
    if request.headers["Authorization"] == "Bearer access-0":
        return httpx.Response(401, json=TOKEN_EXPIRED)
    return httpx.Response(200, json={"id": "db"})


class TestAutoRefresh:
    @pytest.mark.asyncio
    async def test_expired_token_is_refreshed_and_call_retried(self, client, server):
        server.add("GET", DB_PATH, TOKEN_EXPIRED, status=401)
        server.add("GET", DB_PATH, {"id": "db"})
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)

        result = await client.get_current_database()

        assert result == {"id": "db"}
        assert server.paths() == [
            "GET /v1/databases/current/",
            "POST /v1/login/refresh-token/",
            "GET /v1/databases/current/",
        ]
        assert server.body(1) == {"refresh_token": "refresh-0"}
        assert server.requests[2].headers["Authorization"] == "Bearer access-1"
        assert client.credentials == Credentials("access-1", "refresh-1")

    @pytest.mark.asyncio
    async def test_missing_token_refreshes_before_the_call(self, make_client, server):
        client = make_client(access_token="")
        server.add("GET", DB_PATH, {"id": "db"})
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)

        assert await client.get_current_database() == {"id": "db"}
        assert server.paths() == [
            "POST /v1/login/refresh-token/",
            "GET /v1/databases/current/",
        ]

    @pytest.mark.asyncio
    async def test_second_expiry_propagates(self, client, server):
        server.add("GET", DB_PATH, TOKEN_EXPIRED, status=401)
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)

        with pytest.raises(TokenExpiredError):
            await client.get_current_database()

        assert len(server.requests) == 3

    @pytest.mark.asyncio
    async def test_expired_refresh_token_propagates(self, client, server):
        server.add("GET", DB_PATH, TOKEN_EXPIRED, status=401)
        server.add(
            "POST",
            REFRESH_PATH,
            error_envelope("RefreshTokenExpired", "The refresh token has expired"),
            status=401,
        )

        with pytest.raises(RefreshTokenExpiredError):
            await client.get_current_database()

        assert len(server.requests) == 2
        assert client.credentials == Credentials("access-0", "refresh-0")

    @pytest.mark.asyncio
    async def test_other_errors_do_not_refresh(self, client, server):
        server.add("GET", DB_PATH, error_envelope("NotFoundError", "No database"), status=404)

        with pytest.raises(NotFoundError):
            await client.get_current_database()

        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_refresh_without_token_in_response(self, make_client, server):
        client = make_client(access_token="")
        server.add("POST", REFRESH_PATH, {"refresh_token": "refresh-1"})

        with pytest.raises(AuthError):
            await client.get_current_database()

        assert server.paths() == ["POST /v1/login/refresh-token/"]

    @pytest.mark.asyncio
    async def test_concurrent_expiries_share_one_refresh(self, make_client, server):
        client = make_client(yielding=True)
        server.add_handler("GET", DB_PATH, expired_unless_refreshed)
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)

        results = await asyncio.gather(
            client.get_current_database(),
            client.get_current_database(),
            client.get_current_database(),
        )

        assert results == [{"id": "db"}] * 3
        assert server.paths().count("POST /v1/login/refresh-token/") == 1

    @pytest.mark.asyncio
    async def test_token_replaced_during_backoff_is_still_refreshed(self, make_client, server):
        """A token stored while a call backs off, then rejected, gets its own refresh."""

        async def refresh_during_backoff(seconds):
            await client.login_refresh_token()

        client = make_client(sleep=refresh_during_backoff)
        responses = {
            "Bearer access-0": httpx.Response(429, json=error_envelope("TooManyRequests", "Slow down")),
            "Bearer access-1": httpx.Response(401, json=TOKEN_EXPIRED),
            "Bearer access-2": httpx.Response(200, json={"id": "db"}),
        }
        server.add_handler("GET", DB_PATH, lambda r: responses[r.headers["Authorization"]])
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)
        server.add("POST", REFRESH_PATH, {"token": "access-2", "refresh_token": "refresh-2"})

        result = await client.get_current_database()

        assert result == {"id": "db"}
        assert server.paths() == [
            "GET /v1/databases/current/",
            "POST /v1/login/refresh-token/",
            "GET /v1/databases/current/",
            "POST /v1/login/refresh-token/",
            "GET /v1/databases/current/",
        ]
        assert server.body(3) == {"refresh_token": "refresh-1"}
        assert client.credentials == Credentials("access-2", "refresh-2")

    @pytest.mark.asyncio
    async def test_rejected_token_is_recorded_on_the_error(self, client, server):
        server.add("POST", "/login/individual/", TOKEN_EXPIRED, status=401)

        with pytest.raises(TokenExpiredError) as exc_info:
            await client.login_individual("ada@example.com", "pw", "db-1")

        assert exc_info.value.sent_access_token == "access-0"

    @pytest.mark.asyncio
    async def test_wrapper_on_arbitrary_operation(self, client, server):
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)
        operation = AsyncMock(side_effect=[TokenExpiredError("expired"), "done"])

        result = await client.with_auto_refresh(operation)("a", key="b")

        assert result == "done"
        assert operation.await_count == 2
        operation.assert_awaited_with("a", key="b")
        assert server.paths() == ["POST /v1/login/refresh-token/"]


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_individual_stores_both_tokens(self, make_client, server):
        client = make_client(access_token="", refresh_token="")
        server.add("POST", "/login/individual/", REFRESH_RESPONSE)

        result = await client.login_individual("ada@example.com", "pw", "db-1")

        assert result["database"]["id"] == "wSSZQbPxKvBrk_n2B_m6ZA"
        assert server.body(0) == {"email": "ada@example.com", "password": "pw", "db_id": "db-1"}
        assert client.credentials == Credentials("access-1", "refresh-1")

    @pytest.mark.asyncio
    async def test_login_service_sends_frontend_user_id(self, make_client, server):
        client = make_client(access_token="", refresh_token="")
        server.add("POST", "/login/service/", REFRESH_RESPONSE)

        await client.login_service("svc", "pw", "db-1", frontend_user_id="u-9")

        assert server.body(0) == {
            "name": "svc",
            "password": "pw",
            "db_id": "db-1",
            "frontend_user_id": "u-9",
        }
        assert client.credentials.is_authenticated

    @pytest.mark.asyncio
    async def test_login_root_keeps_refresh_token(self, client, server):
        server.add("POST", "/login/root/", {"token": "root-token"})

        await client.login_root("root@example.com", "pw")

        assert client.credentials == Credentials("root-token", "refresh-0")

    @pytest.mark.asyncio
    async def test_login_never_refreshes(self, client, server):
        server.add("POST", "/login/individual/", TOKEN_EXPIRED, status=401)

        with pytest.raises(TokenExpiredError):
            await client.login_individual("ada@example.com", "pw", "db-1")

        assert server.paths() == ["POST /v1/login/individual/"]

    @pytest.mark.asyncio
    async def test_login_refresh_token_with_explicit_token(self, make_client, server):
        client = make_client(access_token="", refresh_token="")
        server.add("POST", REFRESH_PATH, REFRESH_RESPONSE)

        await client.login_refresh_token("given-refresh")

        assert server.body(0) == {"refresh_token": "given-refresh"}
        assert client.credentials == Credentials("access-1", "refresh-1")

    @pytest.mark.asyncio
    async def test_login_sends_bare_bearer_without_token(self, make_client, server):
        client = make_client(access_token="", refresh_token="")
        server.add("POST", "/login/individual/", REFRESH_RESPONSE)

        await client.login_individual("ada@example.com", "pw", "db-1")

        assert server.requests[0].headers["Authorization"] == "Bearer"

    def test_logout_clears_tokens(self):
        client = XMindsClient("http://localhost", access_token="a", refresh_token="r")

        client.logout()

        assert client.credentials == Credentials("", "")
