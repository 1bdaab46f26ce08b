"""Login endpoints of the Crossing Minds API.

Login calls go straight to the transport: they never trigger a token refresh,
and a successful login stores the returned tokens on the client.
"""

import logging
from typing import Any, Dict, Optional

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

logger = logging.getLogger(__name__)


class AuthAPIClient(XMindsBaseClient):
    """API client for login and logout."""

    async def login_individual(
        self,
        email: str,
        password: str,
        db_id: str,
        frontend_user_id: Optional[Any] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """Login on a database with an individual account (email and password).

        Returns:
            The token, refresh token and database information
        """
        body: Dict[str, Any] = {"email": email, "password": password, "db_id": db_id}
        if frontend_user_id is not None:
            body["frontend_user_id"] = frontend_user_id
        auth_data = await self._invoke(endpoints.LOGIN_INDIVIDUAL, body=body, options=options)
        self._store_auth_data(auth_data)
        logger.info(f"Logged in as individual account on database {db_id}")
        return auth_data

    async def login_service(
        self,
        name: str,
        password: str,
        db_id: str,
        frontend_user_id: Optional[Any] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """Login on a database with a service account (name and password)."""
        body: Dict[str, Any] = {"name": name, "password": password, "db_id": db_id}
        if frontend_user_id is not None:
            body["frontend_user_id"] = frontend_user_id
        auth_data = await self._invoke(endpoints.LOGIN_SERVICE, body=body, options=options)
        self._store_auth_data(auth_data)
        logger.info(f"Logged in as service account {name} on database {db_id}")
        return auth_data

    async def login_root(
        self, email: str, password: str, *, options: Optional[RequestOptions] = None
    ) -> Dict[str, Any]:
        """Login with the root account, without selecting a database.

        Only the access token is stored; root logins carry no refresh token.
        """
        body = {"email": email, "password": password}
        auth_data = await self._invoke(endpoints.LOGIN_ROOT, body=body, options=options)
        self._store_auth_data(auth_data, with_refresh_token=False)
        logger.info("Logged in with the root account")
        return auth_data

    async def login_refresh_token(
        self,
        refresh_token: Optional[str] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """Login with a refresh token, the stored one when ``refresh_token`` is omitted."""
        return await self._refresh_access_token(refresh_token, options=options)

    def logout(self) -> None:
        """Forget both tokens held by this client."""
        self._auth.clear()
        logger.info("Logged out, tokens cleared")
