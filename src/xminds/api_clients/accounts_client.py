"""Account endpoints of the Crossing Minds API."""

import logging
from typing import Any, Optional

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

logger = logging.getLogger(__name__)


class AccountsAPIClient(XMindsBaseClient):
    """API client for individual and service accounts."""

    async def create_individual_account(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str = "backend",
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create an account for an individual, identified by an email.

        Returns:
            The ID of the created account
        """
        body = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password": password,
            "role": role,
        }
        return await self._invoke(endpoints.CREATE_INDIVIDUAL_ACCOUNT, body=body, options=options)

    async def create_service_account(
        self,
        name: str,
        password: str,
        role: str = "frontend",
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create a service account, identified by a service name."""
        body = {"name": name, "password": password, "role": role}
        return await self._invoke(endpoints.CREATE_SERVICE_ACCOUNT, body=body, options=options)

    async def resend_verification_code(
        self, email: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.RESEND_VERIFICATION_CODE, body={"email": email}, options=options
        )

    async def verify_account(
        self, code: str, email: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        """Verify the email of an individual account."""
        return await self._invoke(
            endpoints.VERIFY_ACCOUNT, query={"code": code, "email": email}, options=options
        )

    async def list_all_accounts(self, *, options: Optional[RequestOptions] = None) -> Any:
        """List the accounts of the organization of the current token."""
        return await self._invoke(endpoints.LIST_ALL_ACCOUNTS, options=options)

    async def delete_individual_account(
        self, email: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_INDIVIDUAL_ACCOUNT, body={"email": email}, options=options
        )

    async def delete_service_account(
        self, name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_SERVICE_ACCOUNT, body={"name": name}, options=options
        )

    async def delete_current_account(self, *, options: Optional[RequestOptions] = None) -> Any:
        """Delete the account of the current token, then forget both tokens."""
        result = await self._invoke(endpoints.DELETE_CURRENT_ACCOUNT, options=options)
        self._auth.clear()
        logger.info("Current account deleted, tokens cleared")
        return result
