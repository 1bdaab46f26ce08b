"""Database endpoints of the Crossing Minds API."""

from typing import Any, Optional

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient


class DatabasesAPIClient(XMindsBaseClient):
    """API client for databases of the current organization."""

    async def create_database(
        self,
        name: str,
        description: str,
        item_id_type: str,
        user_id_type: str,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create a new database.

        Args:
            name: Database name
            description: Longer description
            item_id_type: Type of item IDs (e.g. ``uuid``, ``uint32``)
            user_id_type: Type of user IDs
        """
        body = {
            "name": name,
            "description": description,
            "item_id_type": item_id_type,
            "user_id_type": user_id_type,
        }
        return await self._invoke(endpoints.CREATE_DATABASE, body=body, options=options)

    async def list_all_databases(
        self, amt: int = 64, page: int = 1, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.LIST_ALL_DATABASES, query={"amt": amt, "page": page}, options=options
        )

    async def get_current_database(self, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(endpoints.GET_CURRENT_DATABASE, options=options)

    async def delete_current_database(self, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(endpoints.DELETE_CURRENT_DATABASE, options=options)

    async def get_current_database_status(
        self, *, options: Optional[RequestOptions] = None
    ) -> Any:
        """Status of the current database; ``pending`` until it becomes ``ready``."""
        return await self._invoke(endpoints.GET_CURRENT_DATABASE_STATUS, options=options)
