"""
Shared pytest fixtures for xminds client tests.

Provides a scripted API server and client factories wired to it.
"""

from typing import Any, Dict, List

import pytest
import pytest_asyncio

from tests.infrastructure.mock_api_server import MockAPIServer, SleepRecorder
from xminds.api_clients import XMindsClient

HOST = "http://localhost"


@pytest.fixture
def server() -> MockAPIServer:
    return MockAPIServer()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest_asyncio.fixture
async def make_client(server: MockAPIServer, sleeper: SleepRecorder):
    """Factory building clients bound to ``server``; closed at teardown."""
    created: List[XMindsClient] = []

    def _make(yielding: bool = False, **kwargs: Any) -> XMindsClient:
        settings: Dict[str, Any] = {
            "access_token": "access-0",
            "refresh_token": "refresh-0",
            "transport": server.transport(yielding),
            "sleep": sleeper,
        }
        settings.update(kwargs)
        client = XMindsClient(HOST, **settings)
        created.append(client)
        return client

    yield _make

    for client in created:
        await client.close()


@pytest_asyncio.fixture
async def client(make_client) -> XMindsClient:
    """Authenticated client holding access-0 / refresh-0."""
    return make_client()
