"""Item data endpoints of the Crossing Minds API: item properties and items."""

from typing import Any, Dict, List, Optional, Sequence

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

ITEMS_CHUNK_SIZE = 1 << 10


class ItemsAPIClient(XMindsBaseClient):
    """API client for item properties and items."""

    async def get_item_property(
        self, property_name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.GET_ITEM_PROPERTY,
            path_params={"property_name": property_name},
            options=options,
        )

    async def list_all_item_properties(self, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(endpoints.LIST_ALL_ITEM_PROPERTIES, options=options)

    async def create_item_property(
        self,
        property_name: str,
        value_type: str,
        repeated: bool = False,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create an item property, identified by ``property_name`` (case-insensitive)."""
        body = {"property_name": property_name, "value_type": value_type, "repeated": repeated}
        return await self._invoke(endpoints.CREATE_ITEM_PROPERTY, body=body, options=options)

    async def delete_item_property(
        self, property_name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_ITEM_PROPERTY,
            path_params={"property_name": property_name},
            options=options,
        )

    async def get_item(self, item_id: Any, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(
            endpoints.GET_ITEM, path_params={"item_id": item_id}, options=options
        )

    async def create_or_update_item(
        self, item_id: Any, item: Dict[str, Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        """Create an item, or replace it if ``item_id`` already exists."""
        return await self._invoke(
            endpoints.CREATE_OR_UPDATE_ITEM,
            path_params={"item_id": item_id},
            body={"item": item},
            options=options,
        )

    async def partial_update_item(
        self,
        item_id: Any,
        item: Dict[str, Any],
        create_if_missing: bool = False,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Update the given properties of an item, leaving the others untouched."""
        return await self._invoke(
            endpoints.PARTIAL_UPDATE_ITEM,
            path_params={"item_id": item_id},
            body={"item": item, "create_if_missing": create_if_missing},
            options=options,
        )

    async def create_or_update_items_bulk(
        self,
        items: Sequence[Dict[str, Any]],
        chunk_size: int = ITEMS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        """Create or replace many items, one request per ``chunk_size`` items."""
        return await self._invoke_chunked(
            endpoints.CREATE_OR_UPDATE_ITEMS_BULK, "items", items, chunk_size, options=options
        )

    async def partial_update_items_bulk(
        self,
        items: Sequence[Dict[str, Any]],
        create_if_missing: bool = False,
        chunk_size: int = ITEMS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        return await self._invoke_chunked(
            endpoints.PARTIAL_UPDATE_ITEMS_BULK,
            "items",
            items,
            chunk_size,
            extra_body={"create_if_missing": create_if_missing},
            options=options,
        )

    async def list_items_paginated(
        self,
        amt: int = 300,
        cursor: Optional[str] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """List items by page; pass the previous ``next_cursor`` as ``cursor``."""
        return await self._invoke(
            endpoints.LIST_ITEMS_PAGINATED, query={"amt": amt, "cursor": cursor}, options=options
        )

    async def list_items(
        self, items_id: Sequence[Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.LIST_ITEMS, body={"items_id": list(items_id)}, options=options
        )

    async def delete_item(self, item_id: Any, *, options: Optional[RequestOptions] = None) -> Any:
        """Delete an item. Its ratings and interactions are kept."""
        return await self._invoke(
            endpoints.DELETE_ITEM, path_params={"item_id": item_id}, options=options
        )

    async def delete_items_bulk(
        self, items_id: Sequence[Any], *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_ITEMS_BULK, body={"items_id": list(items_id)}, options=options
        )
