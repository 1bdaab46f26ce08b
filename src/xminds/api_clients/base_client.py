"""Base Crossing Minds API Client.

Provides the HTTP transport, token management with automatic refresh, and the
generic endpoint dispatcher shared by every resource client.
"""

import asyncio
import functools
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx

from .. import __version__
from ..utils.chunking import chunk
from . import endpoints
from .auth_state import AuthState, Credentials
from .endpoints import Endpoint
from .errors import AuthError, ServerError, TokenExpiredError, classify
from .network_error_handler import (
    MalformedResponseError,
    NetworkErrorHandler,
    RetryPolicy,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://api.crossingminds.com"
DEFAULT_API_PREFIX = "/v1"
DEFAULT_TIMEOUT_SECONDS = 6.0
USER_AGENT_PRODUCT = f"CrossingMinds/{__version__} (python)"

Operation = Callable[..., Awaitable[Any]]
SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides accepted by every endpoint method."""

    timeout_seconds: Optional[float] = None
    retry_policy: Optional[RetryPolicy] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """A single HTTP request, relative to the API prefix."""

    method: str
    path: str
    body: Optional[Any] = None
    query: Optional[Dict[str, Any]] = None
    timeout_seconds: Optional[float] = None
    retry_policy: Optional[RetryPolicy] = None


class XMindsBaseClient:
    """Base API client with token management and common HTTP functionality."""

    def __init__(
        self,
        host: Optional[str] = None,
        *,
        api_prefix: str = DEFAULT_API_PREFIX,
        user_agent: Optional[str] = None,
        refresh_token: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initialize the client.

        Args:
            host: Server root, defaults to the public Crossing Minds API
            api_prefix: Path prefix prepended to every endpoint
            user_agent: Extra agent string appended to the User-Agent header
            refresh_token: Refresh token used to obtain access tokens on demand
            access_token: Access token to start with, if already known
            timeout_seconds: Default per-request timeout
            retry_policy: Default backoff policy for transient failures
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
            sleep: Coroutine used to wait between retries
        """
        self.server_url = (host or DEFAULT_HOST).rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.user_agent = (
            f"{USER_AGENT_PRODUCT} {user_agent}" if user_agent else USER_AGENT_PRODUCT
        )
        self.timeout_seconds = timeout_seconds
        self.retry_policy = retry_policy or RetryPolicy()

        self._auth = AuthState(access_token or "", refresh_token or "")
        self._refresh_lock = asyncio.Lock()
        self._transport = transport
        self._sleep = sleep
        self._session: Optional[httpx.AsyncClient] = None
        self._network_error_handler = NetworkErrorHandler()

    @property
    def base_url(self) -> str:
        return f"{self.server_url}{self.api_prefix}"

    @property
    def auth(self) -> AuthState:
        """Token state of this client."""
        return self._auth

    @property
    def credentials(self) -> Credentials:
        return self._auth.snapshot()

    @property
    def session(self) -> httpx.AsyncClient:
        """Get or create the HTTP session."""
        if self._session is None or self._session.is_closed:
            self._session = httpx.AsyncClient(
                transport=self._transport,
                timeout=httpx.Timeout(self.timeout_seconds),
                follow_redirects=True,
            )
        return self._session

    def _build_headers(self, access_token: str) -> Dict[str, str]:
        # h11 rejects trailing whitespace, so an empty bearer is sent as "Bearer"
        authorization = f"Bearer {access_token}".rstrip()
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "Authorization": authorization,
        }

    @staticmethod
    def _parse_body(text: str) -> Any:
        if not text or not text.strip():
            return {}
        return json.loads(text)

    async def _execute(self, request: RequestDescriptor) -> Any:
        """Send a request, retrying transient failures, and decode the outcome.

        Returns:
            The decoded JSON body of a successful (< 400) response

        Raises:
            ApiError: The typed error reported by the server
            TransportError: No usable response could be obtained
        """
        policy = request.retry_policy or self.retry_policy
        timeout = (
            request.timeout_seconds
            if request.timeout_seconds is not None
            else self.timeout_seconds
        )
        method = request.method.upper()
        url = f"{self.base_url}{request.path}"
        content = (
            json.dumps(request.body)
            if request.body is not None and method != "GET"
            else None
        )
        attempt = 0

        while True:
            access_token = self._auth.get_access_token()
            try:
                response = await self.session.request(
                    method,
                    url,
                    content=content,
                    params=request.query or None,
                    headers=self._build_headers(access_token),
                    timeout=timeout,
                )
            except httpx.TransportError as e:
                transport_error = self._network_error_handler.classify_network_error(
                    e, method=method, url=url
                )
                if policy.should_retry_error(method, transport_error, attempt):
                    attempt += 1
                    delay = policy.delay_seconds(attempt)
                    logger.warning(
                        f"{method} {request.path} failed ({transport_error}), "
                        f"retry {attempt}/{policy.max_retries} in {delay:.3f}s"
                    )
                    await self._sleep(delay)
                    continue
                raise transport_error from e

            status_code = response.status_code
            logger.debug(f"{method} {request.path} -> HTTP {status_code}")

            if policy.should_retry_status(method, status_code, attempt):
                attempt += 1
                delay = policy.delay_seconds(attempt)
                logger.warning(
                    f"{method} {request.path} returned HTTP {status_code}, "
                    f"retry {attempt}/{policy.max_retries} in {delay:.3f}s"
                )
                await self._sleep(delay)
                continue

            text = response.text
            try:
                body = self._parse_body(text)
            except json.JSONDecodeError as e:
                if status_code >= 500:
                    raise ServerError(
                        f"Server error (HTTP {status_code})", status_code=status_code
                    ) from e
                raise MalformedResponseError(
                    f"Response body is not valid JSON (HTTP {status_code})",
                    method=method,
                    url=url,
                    status_code=status_code,
                    body=text,
                ) from e

            if status_code < 400:
                return body
            if status_code >= 500:
                error = classify(body, status_code)
                raise ServerError(
                    error.message,
                    error_code=error.error_code,
                    error_name=error.error_name,
                    error_data=error.error_data,
                    status_code=status_code,
                )
            error = classify(body, status_code)
            error.sent_access_token = access_token
            raise error

    def _store_auth_data(self, auth_data: Any, with_refresh_token: bool = True) -> None:
        token = auth_data.get("token") if isinstance(auth_data, Mapping) else None
        if not token or not isinstance(token, str):
            raise AuthError("No valid access token in login response")
        if with_refresh_token:
            self._auth.update(token, auth_data.get("refresh_token") or "")
        else:
            self._auth.set_access_token(token)

    async def _refresh_access_token(
        self,
        refresh_token: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """Exchange the refresh token for a new access token and store both."""
        body = {"refresh_token": refresh_token or self._auth.get_refresh_token()}
        auth_data = await self._invoke(endpoints.LOGIN_REFRESH_TOKEN, body=body, options=options)
        self._store_auth_data(auth_data)
        logger.info("Access token refreshed")
        return auth_data

    async def _refresh_if_stale(self, stale_token: str) -> None:
        async with self._refresh_lock:
            if self._auth.get_access_token() != stale_token:
                logger.debug("Access token already refreshed by a concurrent call")
                return
            await self._refresh_access_token()

    def with_auto_refresh(self, operation: Operation) -> Operation:
        """Wrap ``operation`` so an expired access token is refreshed once.

        Without an access token the refresh happens before the first call. A
        ``TokenExpiredError`` from the first call triggers one refresh and one
        retry; errors from the refresh itself and from the retry propagate.
        """

        @functools.wraps(operation)
        async def call(*args: Any, **kwargs: Any) -> Any:
            stale_token = self._auth.get_access_token()
            if not stale_token:
                logger.debug("No access token, refreshing before the call")
                await self._refresh_if_stale(stale_token)
                return await operation(*args, **kwargs)

            try:
                return await operation(*args, **kwargs)
            except TokenExpiredError as e:
                logger.info("Access token expired, refreshing and retrying once")
                rejected = e.sent_access_token
                await self._refresh_if_stale(rejected if rejected is not None else stale_token)
                return await operation(*args, **kwargs)

        return call

    @staticmethod
    def _render_path(endpoint: Endpoint, path_params: Optional[Mapping[str, Any]]) -> str:
        params = path_params or {}
        missing = [name for name in endpoint.path_params if name not in params]
        if missing:
            raise ValueError(f"Missing path parameters for {endpoint.name}: {missing}")
        return endpoint.path.format(
            **{name: quote(str(params[name]), safe="") for name in endpoint.path_params}
        )

    @staticmethod
    def _clean_query(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        if not query:
            return None
        cleaned = {key: value for key, value in query.items() if value is not None}
        return cleaned or None

    async def _invoke(
        self,
        endpoint: Endpoint,
        *,
        path_params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        query: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Call ``endpoint``, through token refresh when it is authenticated."""
        request = RequestDescriptor(
            method=endpoint.method,
            path=self._render_path(endpoint, path_params),
            body=body,
            query=self._clean_query(query),
            timeout_seconds=options.timeout_seconds if options else None,
            retry_policy=options.retry_policy if options else None,
        )
        if endpoint.authenticated:
            return await self.with_auto_refresh(self._execute)(request)
        return await self._execute(request)

    async def _invoke_chunked(
        self,
        endpoint: Endpoint,
        key: str,
        values: Sequence[Any],
        chunk_size: int,
        *,
        path_params: Optional[Mapping[str, Any]] = None,
        extra_body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        """Send ``values`` in chunks of ``chunk_size``, one request per chunk.

        Chunks are sent concurrently and all of them are awaited; the first
        failing chunk (in chunk order) is raised.
        """
        chunks = chunk(values, chunk_size)
        logger.debug(f"{endpoint.name}: {len(values)} values in {len(chunks)} chunks")
        results = await asyncio.gather(
            *(
                self._invoke(
                    endpoint,
                    path_params=path_params,
                    body={key: values_chunk, **(extra_body or {})},
                    options=options,
                )
                for values_chunk in chunks
            ),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.is_closed:
            await self._session.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __del__(self):
        session = getattr(self, "_session", None)
        if session is not None and not session.is_closed:
            logger.warning(f"{type(self).__name__} was not properly closed")
