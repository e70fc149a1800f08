from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
import respx

from ccard_activation.config import AppConfig, IdentityServerConfig
from ccard_activation.identity import (
    IdentityClient,
    TransportFailure,
    UpstreamRejection,
)


@pytest_asyncio.fixture
async def identity_client(app_config: AppConfig) -> AsyncIterator[IdentityClient]:
    client = IdentityClient(app_config.identity_server)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_change_password_returns_message(
    identity_mock: respx.MockRouter, identity_client: IdentityClient
) -> None:
    identity_mock.post("/api/citizens/change-password").mock(
        return_value=httpx.Response(200, json={"message": "password changed", "id": 7})
    )

    result = await identity_client.change_password(
        activation_code="ABCDE12345", old_password="OldPass1", new_password="NewPass1"
    )
    assert result.message == "password changed"


@pytest.mark.asyncio
async def test_change_password_raises_upstream_rejection(
    identity_mock: respx.MockRouter, identity_client: IdentityClient
) -> None:
    identity_mock.post("/api/citizens/change-password").mock(
        return_value=httpx.Response(409, json={"message": "code expired"})
    )

    with pytest.raises(UpstreamRejection) as excinfo:
        await identity_client.change_password(
            activation_code="ABCDE12345", old_password="OldPass1", new_password="NewPass1"
        )
    assert excinfo.value.status_code == 409
    assert excinfo.value.message == "code expired"


@pytest.mark.asyncio
async def test_change_password_raises_transport_failure(
    identity_mock: respx.MockRouter, identity_client: IdentityClient
) -> None:
    identity_mock.post("/api/citizens/change-password").mock(
        side_effect=httpx.ConnectTimeout("timed out")
    )

    with pytest.raises(TransportFailure) as excinfo:
        await identity_client.change_password(
            activation_code="ABCDE12345", old_password="OldPass1", new_password="NewPass1"
        )
    assert excinfo.value.detail == "timed out"


@pytest.mark.asyncio
async def test_base_uri_trailing_slash_is_tolerated() -> None:
    client = IdentityClient(
        IdentityServerConfig(uri="https://idp.example.test/", api_key="k")
    )
    try:
        with respx.mock(base_url="https://idp.example.test") as mock:
            route = mock.post("/api/citizens/login").mock(
                return_value=httpx.Response(200, json={"message": "authorized"})
            )
            response = await client.login({"username": "jane"})
        assert response.status_code == 200
        assert route.called
        assert route.calls.last.request.url == "https://idp.example.test/api/citizens/login"
    finally:
        await client.aclose()
