from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from ccard_activation.api.models import ApiResponse, LoginResult, ok
from ccard_activation.dependencies import get_identity_client
from ccard_activation.identity import IdentityClient
from ccard_activation.login import authenticate

router = APIRouter(prefix="/api", tags=["api"])


@router.post("/login")
async def api_login(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    client: IdentityClient = Depends(get_identity_client),  # noqa: B008
) -> ApiResponse[LoginResult]:
    authorized = await authenticate(client, payload)
    return ok(LoginResult(authorized=authorized))
