"""User data endpoints of the Crossing Minds API: user properties and users."""

from typing import Any, Dict, List, Optional, Sequence

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

USERS_CHUNK_SIZE = 1 << 10


class UsersAPIClient(XMindsBaseClient):
    """API client for user properties and users."""

    async def get_user_property(
        self, property_name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.GET_USER_PROPERTY,
            path_params={"property_name": property_name},
            options=options,
        )

    async def list_all_user_properties(self, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(endpoints.LIST_ALL_USER_PROPERTIES, options=options)

    async def create_user_property(
        self,
        property_name: str,
        value_type: str,
        repeated: bool = False,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create a user property, identified by ``property_name`` (case-insensitive)."""
        body = {"property_name": property_name, "value_type": value_type, "repeated": repeated}
        return await self._invoke(endpoints.CREATE_USER_PROPERTY, body=body, options=options)

    async def delete_user_property(
        self, property_name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_USER_PROPERTY,
            path_params={"property_name": property_name},
            options=options,
        )

    async def get_user(self, user_id: Any, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(
            endpoints.GET_USER, path_params={"user_id": user_id}, options=options
        )

    async def create_or_update_user(
        self, user_id: Any, user: Dict[str, Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        """Create a user, or replace it if ``user_id`` already exists."""
        return await self._invoke(
            endpoints.CREATE_OR_UPDATE_USER,
            path_params={"user_id": user_id},
            body={"user": user},
            options=options,
        )

    async def partial_update_user(
        self,
        user_id: Any,
        user: Dict[str, Any],
        create_if_missing: bool = False,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Update the given properties of a user, leaving the others untouched."""
        return await self._invoke(
            endpoints.PARTIAL_UPDATE_USER,
            path_params={"user_id": user_id},
            body={"user": user, "create_if_missing": create_if_missing},
            options=options,
        )

    async def create_or_update_users_bulk(
        self,
        users: Sequence[Dict[str, Any]],
        chunk_size: int = USERS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        """Create or replace many users, one request per ``chunk_size`` users."""
        return await self._invoke_chunked(
            endpoints.CREATE_OR_UPDATE_USERS_BULK, "users", users, chunk_size, options=options
        )

    async def partial_update_users_bulk(
        self,
        users: Sequence[Dict[str, Any]],
        create_if_missing: bool = False,
        chunk_size: int = USERS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        return await self._invoke_chunked(
            endpoints.PARTIAL_UPDATE_USERS_BULK,
            "users",
            users,
            chunk_size,
            extra_body={"create_if_missing": create_if_missing},
            options=options,
        )

    async def list_users_paginated(
        self,
        amt: int = 300,
        cursor: Optional[str] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """List users by page; pass the previous ``next_cursor`` as ``cursor``."""
        return await self._invoke(
            endpoints.LIST_USERS_PAGINATED, query={"amt": amt, "cursor": cursor}, options=options
        )

    async def list_users(
        self, users_id: Sequence[Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.LIST_USERS, body={"users_id": list(users_id)}, options=options
        )

    async def delete_user(self, user_id: Any, *, options: Optional[RequestOptions] = None) -> Any:
        """Delete a user. Its ratings and interactions are kept."""
        return await self._invoke(
            endpoints.DELETE_USER, path_params={"user_id": user_id}, options=options
        )

    async def delete_users_bulk(
        self, users_id: Sequence[Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_USERS_BULK, body={"users_id": list(users_id)}, options=options
        )
