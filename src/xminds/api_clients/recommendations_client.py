"""Recommendation endpoints of the Crossing Minds API."""

from typing import Any, Dict, List, Optional, Sequence

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient


class RecommendationsAPIClient(XMindsBaseClient):
    """API client for item-to-items, session-to-items and user-to-items recommendations.

    Optional arguments left to ``None`` are not sent, so the server defaults
    (or the default scenario) apply.
    """

    async def get_recommendations_item_to_items(
        self,
        item_id: Any,
        amt: Optional[int] = None,
        cursor: Optional[str] = None,
        filters: Optional[Sequence[str]] = None,
        reranking: Optional[Sequence[str]] = None,
        scenario: Optional[str] = None,
        skip_default_scenario: Optional[bool] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Get items similar to ``item_id``."""
        query = {
            "amt": amt,
            "cursor": cursor,
            "filters": _as_list(filters),
            "reranking": _as_list(reranking),
            "scenario": scenario,
            "skip_default_scenario": skip_default_scenario,
        }
        return await self._invoke(
            endpoints.RECOMMENDATIONS_ITEM_TO_ITEMS,
            path_params={"item_id": item_id},
            query=query,
            options=options,
        )

    async def get_recommendations_session_to_items(
        self,
        ratings: Optional[Sequence[Dict[str, Any]]] = None,
        user_properties: Optional[Dict[str, Any]] = None,
        amt: Optional[int] = None,
        cursor: Optional[str] = None,
        filters: Optional[Sequence[Any]] = None,
        reranking: Optional[Sequence[Any]] = None,
        exclude_rated_items: Optional[bool] = None,
        scenario: Optional[str] = None,
        skip_default_scenario: Optional[bool] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Get items recommendations for the ratings of an anonymous session."""
        body = {
            "ratings": _as_list(ratings),
            "user_properties": user_properties,
            "amt": amt,
            "cursor": cursor,
            "filters": _as_list(filters),
            "reranking": _as_list(reranking),
            "exclude_rated_items": exclude_rated_items,
            "scenario": scenario,
            "skip_default_scenario": skip_default_scenario,
        }
        return await self._invoke(
            endpoints.RECOMMENDATIONS_SESSION_TO_ITEMS,
            body={key: value for key, value in body.items() if value is not None},
            options=options,
        )

    async def get_recommendations_user_to_items(
        self,
        user_id: Any,
        amt: Optional[int] = None,
        cursor: Optional[str] = None,
        filters: Optional[Sequence[str]] = None,
        reranking: Optional[Sequence[str]] = None,
        exclude_rated_items: Optional[bool] = None,
        scenario: Optional[str] = None,
        skip_default_scenario: Optional[bool] = None,
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Get items recommendations for a known user."""
        query = {
            "amt": amt,
            "cursor": cursor,
            "filters": _as_list(filters),
            "reranking": _as_list(reranking),
            "exclude_rated_items": exclude_rated_items,
            "scenario": scenario,
            "skip_default_scenario": skip_default_scenario,
        }
        return await self._invoke(
            endpoints.RECOMMENDATIONS_USER_TO_ITEMS,
            path_params={"user_id": user_id},
            query=query,
            options=options,
        )


def _as_list(values: Optional[Sequence[Any]]) -> Optional[List[Any]]:
    return list(values) if values is not None else None
