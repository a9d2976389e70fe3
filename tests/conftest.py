"""Global test configuration and fixtures for the API key client."""

from collections.abc import Generator
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from apikeys_client.modules.keys.client import APIKeyClient
from tests.factories import APIKeyFactory
from tests.utils.constants import BASE_URL
from tests.utils.fake_service import FakeAPIKeyService

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def api_key_factory():
    return APIKeyFactory


@pytest.fixture
def captured_requests() -> list[httpx.Request]:
    """Requests seen by clients built with ``mock_client_factory``."""
    return []


@pytest.fixture
def mock_client_factory(
    captured_requests: list[httpx.Request],
) -> Generator[Callable[..., APIKeyClient], None, None]:
    """Build clients whose transport answers with the given handler."""
    http_clients: list[httpx.Client] = []

    def build(handler: Handler, **kwargs) -> APIKeyClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        http_clients.append(http_client)
        return APIKeyClient(BASE_URL, http_client, **kwargs)

    yield build

    for http_client in http_clients:
        http_client.close()


@pytest.fixture
def fake_service() -> FakeAPIKeyService:
    return FakeAPIKeyService()


@pytest.fixture
def service_client(
    fake_service: FakeAPIKeyService,
) -> Generator[APIKeyClient, None, None]:
    """Client talking to the in-memory service through a TestClient."""
    with TestClient(fake_service.app) as test_client:
        yield APIKeyClient(str(test_client.base_url), test_client)
