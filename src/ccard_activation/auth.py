from __future__ import annotations

import secrets
from typing import Final

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

AUTHORIZATION_HEADER: Final[str] = "Authorization"
BEARER_PREFIX: Final[str] = "Bearer "

_bearer_scheme = HTTPBearer(auto_error=False)


def bearer_headers(api_key: str) -> dict[str, str]:
    """Headers for server-to-server calls to the identity server.

    The key is sent as-is; an empty key still produces the header so the
    identity server answers with its own rejection message.
    """

    return {
        AUTHORIZATION_HEADER: f"{BEARER_PREFIX}{api_key.strip()}",
        "Content-Type": "application/json",
    }


async def require_api_token(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Security(_bearer_scheme),  # noqa: B008
) -> None:
    """Require the configured API token for the /api routes.

    Accepts: Authorization: Bearer <token>
    """

    expected = getattr(getattr(request.app.state, "app_config", None), "auth", None)
    expected_token = (getattr(expected, "api_token", None) or "").strip()

    # No token configured: fail closed.
    if not expected_token:
        raise HTTPException(status_code=503, detail="API access is not configured")

    provided = bearer.credentials if bearer is not None else None
    if not provided:
        raise HTTPException(status_code=401, detail="Missing token")

    if not secrets.compare_digest(provided.encode(), expected_token.encode()):
        raise HTTPException(status_code=401, detail="Invalid token")
