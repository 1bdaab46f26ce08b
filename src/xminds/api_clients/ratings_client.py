"""Rating endpoints of the Crossing Minds API."""

from typing import Any, Dict, List, Optional, Sequence

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient

RATINGS_CHUNK_SIZE = 1 << 14


class RatingsAPIClient(XMindsBaseClient):
    """API client for explicit user ratings."""

    async def create_or_update_rating(
        self,
        user_id: Any,
        item_id: Any,
        rating: float,
        timestamp: Optional[float] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create the rating of ``user_id`` for ``item_id``, or update the existing one."""
        body: Dict[str, Any] = {"rating": rating}
        if timestamp is not None:
            body["timestamp"] = timestamp
        return await self._invoke(
            endpoints.CREATE_OR_UPDATE_RATING,
            path_params={"user_id": user_id, "item_id": item_id},
            body=body,
            options=options,
        )

    async def delete_rating(
        self, user_id: Any, item_id: Any, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_RATING,
            path_params={"user_id": user_id, "item_id": item_id},
            options=options,
        )

    async def list_user_ratings(
        self,
        user_id: Any,
        page: int = 1,
        amt: int = 64,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return await self._invoke(
            endpoints.LIST_USER_RATINGS,
            path_params={"user_id": user_id},
            query={"page": page, "amt": amt},
            options=options,
        )

    async def create_or_update_user_ratings_bulk(
        self,
        user_id: Any,
        ratings: Sequence[Dict[str, Any]],
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Create or update the ratings of one user for many items."""
        return await self._invoke(
            endpoints.CREATE_OR_UPDATE_USER_RATINGS_BULK,
            path_params={"user_id": user_id},
            body={"ratings": list(ratings)},
            options=options,
        )

    async def delete_user_ratings(
        self, user_id: Any, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_USER_RATINGS, path_params={"user_id": user_id}, options=options
        )

    async def create_or_update_ratings_bulk(
        self,
        ratings: Sequence[Dict[str, Any]],
        chunk_size: int = RATINGS_CHUNK_SIZE,
        *,
        options: Optional[RequestOptions] = None,
    ) -> List[Any]:
        """Create or update ratings of many users for many items, in chunks."""
        return await self._invoke_chunked(
            endpoints.CREATE_OR_UPDATE_RATINGS_BULK, "ratings", ratings, chunk_size, options=options
        )

    async def list_ratings(
        self,
        amt: Optional[int] = None,
        cursor: Optional[str] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """List the ratings of the current database by cursor."""
        return await self._invoke(
            endpoints.LIST_RATINGS, query={"amt": amt, "cursor": cursor}, options=options
        )
