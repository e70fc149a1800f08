from __future__ import annotations

from collections.abc import Iterator

import pytest
import respx
from fastapi.testclient import TestClient

from ccard_activation.app import create_app
from ccard_activation.config import AppConfig

IDENTITY_URI = "https://identity.example.test"
API_KEY = "test-api-key"
API_TOKEN = "test-api-token"


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig.model_validate(
        {
            "identity_server": {"uri": IDENTITY_URI, "api_key": API_KEY},
            "auth": {"api_token": API_TOKEN},
        }
    )


@pytest.fixture
def api_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_TOKEN}"}


@pytest.fixture
def identity_mock() -> Iterator[respx.MockRouter]:
    with respx.mock(base_url=IDENTITY_URI, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(app_config: AppConfig, identity_mock: respx.MockRouter) -> Iterator[TestClient]:
    with TestClient(create_app(app_config)) as c:
        yield c
