"""Interaction endpoints of the Crossing Minds API.

Interactions (views, purchases, ...) create or update inferred ratings and
update the user's taste profile online.
"""

from typing import Any, Dict, List, Optional, Sequence

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

INTERACTIONS_CHUNK_SIZE = 1 << 14


class InteractionsAPIClient(XMindsBaseClient):
    """API client for user interactions."""

    async def create_interaction(
        self,
        user_id: Any,
        item_id: Any,
        interaction_type: str,
        timestamp: Optional[float] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        body: Dict[str, Any] = {"interaction_type": interaction_type}
        if timestamp is not None:
            body["timestamp"] = timestamp
        return await self._invoke(
            endpoints.CREATE_INTERACTION,
            path_params={"user_id": user_id, "item_id": item_id},
            body=body,
            options=options,
        )

    async def create_or_update_user_interactions_bulk(
        self,
        user_id: Any,
        interactions: Sequence[Dict[str, Any]],
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return await self._invoke(
            endpoints.CREATE_OR_UPDATE_USER_INTERACTIONS_BULK,
            path_params={"user_id": user_id},
            body={"interactions": list(interactions)},
            options=options,
        )

    async def create_or_update_interactions_bulk(
        self,
        interactions: Sequence[Dict[str, Any]],
        chunk_size: int = INTERACTIONS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        """Log interactions of many users for many items, in chunks."""
        return await self._invoke_chunked(
            endpoints.CREATE_OR_UPDATE_INTERACTIONS_BULK,
            "interactions",
            interactions,
            chunk_size,
            options=options,
        )
