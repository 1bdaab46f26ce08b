"""Scenario endpoints of the Crossing Minds API.

A scenario is a named recommendation configuration stored on the server
(filters, reranking, algorithms); its payload is passed through untouched.
``reco_type`` is one of ``item-to-item``, ``session-to-item`` or
``user-to-item``.
"""

from typing import Any, Dict, Optional

from . import endpoints
from .base_client import RequestOptions, XMindsBaseClient


class ScenariosAPIClient(XMindsBaseClient):
    """API client for scenarios and default scenarios."""

    async def get_scenario(
        self, reco_type: str, name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.GET_SCENARIO,
            path_params={"reco_type": reco_type, "name": name},
            options=options,
        )

    async def create_or_replace_scenario(
        self,
        reco_type: str,
        name: str,
        scenario: Dict[str, Any],
        *,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Store ``scenario`` under ``name``; returns server warnings, if any."""
        return await self._invoke(
            endpoints.CREATE_OR_REPLACE_SCENARIO,
            path_params={"reco_type": reco_type, "name": name},
            body={"scenario": scenario},
            options=options,
        )

    async def delete_scenario(
        self, reco_type: str, name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.DELETE_SCENARIO,
            path_params={"reco_type": reco_type, "name": name},
            options=options,
        )

    async def list_all_scenarios(self, *, options: Optional[RequestOptions] = None) -> Any:
        return await self._invoke(endpoints.LIST_ALL_SCENARIOS, options=options)

    async def get_default_scenario(
        self, reco_type: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.GET_DEFAULT_SCENARIO, path_params={"reco_type": reco_type}, options=options
        )

    async def set_default_scenario(
        self, reco_type: str, scenario_name: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.SET_DEFAULT_SCENARIO,
            path_params={"reco_type": reco_type},
            body={"scenario_name": scenario_name},
            options=options,
        )

    async def unset_default_scenario(
        self, reco_type: str, *, options: Optional[RequestOptions] = None
    ) -> Any:
        return await self._invoke(
            endpoints.UNSET_DEFAULT_SCENARIO, path_params={"reco_type": reco_type}, options=options
        )
